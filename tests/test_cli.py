from click.testing import CliRunner
import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from project_generator.cli import cli
from project_generator.errors import ConfigurationError
from project_generator.model_client import ModelClient


class FakeRegistry:
    def list_models(self):
        return {
            "modelA": {"provider": "anthropic", "model_id": "idA"},
            "modelB": {"provider": "openai", "model_id": "idB"},
        }


@pytest.fixture
def fake_registry(monkeypatch):
    monkeypatch.setattr("project_generator.cli.ModelRegistry", lambda config_path=None: FakeRegistry())


@pytest.fixture
def fake_model_response(monkeypatch, fake_registry):
    """Make the CLI talk to a fake model answering with the given text."""
    calls = {}

    def _set(response: str):
        def from_registry(registry, model_name, timeout=None):
            calls["model"] = model_name
            calls["timeout"] = timeout
            return ModelClient(FakeListChatModel(responses=[response]), model_name=model_name, timeout=timeout)

        monkeypatch.setattr("project_generator.cli.ModelClient.from_registry", from_registry)
        return calls

    return _set


def test_model_list_cli(fake_registry):
    runner = CliRunner()
    result = runner.invoke(cli, ["model", "list"])
    assert result.exit_code == 0
    assert "modelA" in result.output
    assert "idB" in result.output


def test_missing_config_cli(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(tmp_path / "missing.yaml"), "model", "list"])
    assert result.exit_code == 1
    assert "Model config file not found" in result.output


def test_project_types_cli(fake_registry):
    runner = CliRunner()
    result = runner.invoke(cli, ["project", "types"])
    assert result.exit_code == 0
    assert "Chrome Extension" in result.output
    assert "React Native application" in result.output


def test_generate_success(fake_model_response, tmp_path):
    calls = fake_model_response('```json\n{"a.txt":"hello"}\n```')

    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["project", "generate", "Todo app with auth", "--type", "website", "--workspace", str(tmp_path), "--model", "modelA", "--timeout", "30"],
    )

    assert result.exit_code == 0, result.output
    assert "created successfully" in result.output
    assert (tmp_path / "todo-app-with" / "a.txt").read_text() == "hello"
    assert calls == {"model": "modelA", "timeout": 30.0}


def test_generate_fallback_warning(fake_model_response, tmp_path):
    fake_model_response("Sorry, I cannot help with that.")

    runner = CliRunner()
    result = runner.invoke(cli, ["project", "generate", "Landing page", "--type", "Website", "--workspace", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "Could not parse AI response" in result.output
    assert (tmp_path / "landing-page" / "package.json").exists()
    assert (tmp_path / "landing-page" / "app" / "page.tsx").exists()


def test_generate_collision_exits_nonzero(fake_model_response, tmp_path):
    fake_model_response('{"a.txt": "hello"}')
    (tmp_path / "landing-page").mkdir()

    runner = CliRunner()
    result = runner.invoke(cli, ["project", "generate", "Landing page", "--type", "Website", "--workspace", str(tmp_path)])

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_generate_with_suffix_policy(fake_model_response, tmp_path):
    fake_model_response('{"a.txt": "hello"}')
    (tmp_path / "landing-page").mkdir()

    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["project", "generate", "Landing page", "--type", "Website", "--workspace", str(tmp_path), "--on-collision", "suffix"],
    )

    assert result.exit_code == 0, result.output
    assert (tmp_path / "landing-page-2" / "a.txt").exists()


def test_generate_invalid_project_type(fake_registry, tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["project", "generate", "Landing page", "--type", "Spaceship", "--workspace", str(tmp_path)])

    assert result.exit_code != 0
    assert "Invalid project type 'Spaceship'" in result.output


def test_generate_empty_description(fake_registry, tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["project", "generate", "   ", "--type", "API", "--workspace", str(tmp_path)])

    assert result.exit_code == 1
    assert "Please describe your project" in result.output


def test_generate_configuration_error(fake_registry, monkeypatch, tmp_path):
    def from_registry(registry, model_name, timeout=None):
        raise ConfigurationError("Missing API credential: set the ANTHROPIC_API_KEY environment variable")

    monkeypatch.setattr("project_generator.cli.ModelClient.from_registry", from_registry)

    runner = CliRunner()
    result = runner.invoke(cli, ["project", "generate", "Landing page", "--type", "Website", "--workspace", str(tmp_path)])

    assert result.exit_code == 1
    assert "ANTHROPIC_API_KEY" in result.output
    assert list(tmp_path.iterdir()) == []
