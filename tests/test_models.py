from textwrap import dedent

import pytest
from click.testing import CliRunner
from langchain_anthropic import ChatAnthropic
from langchain_ollama import ChatOllama

from project_generator.cli import cli
from project_generator.components.models import DEFAULT_CONFIG_PATH, ModelCapability, ModelRegistry
from project_generator.constants import CONFIG_PATH_ENV, DEFAULT_MODEL
from project_generator.errors import ConfigurationError


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "models.yaml"
    path.write_text(
        dedent(
            """
            models:
              claude:
                provider: anthropic
                model_id: claude-test
                capabilities: [project_generation]
                max_tokens: 8000
                temperature: 0.2
              local:
                provider: ollama
                model_id: llama3.1
                capabilities: [project_generation]
                max_tokens: 4000
                repeat_penalty: 1.1
                supports_system_prompt: false
              unknown:
                provider: nowhere
                model_id: x
                capabilities: []
                max_tokens: 10
            provider_configs:
              anthropic:
                api_key_env: TEST_ANTHROPIC_KEY
              ollama:
                default_base_url: http://localhost:11434
            """
        )
    )
    return path


def test_load_config(config_file):
    registry = ModelRegistry(config_file)

    models = registry.list_models()
    assert set(models) == {"claude", "local", "unknown"}
    assert models["claude"]["model_id"] == "claude-test"
    assert models["claude"]["temperature"] == 0.2
    assert registry.models["local"].ollama.repeat_penalty == 1.1
    assert registry.models["local"].supports_system_prompt is False


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError) as exc:
        ModelRegistry(tmp_path / "missing.yaml")
    assert "not found" in str(exc.value)


def test_invalid_config_file(tmp_path):
    path = tmp_path / "models.yaml"
    path.write_text("models:\n  broken:\n    provider: openai\n")
    with pytest.raises(ConfigurationError):
        ModelRegistry(path)


@pytest.mark.parametrize(
    "content",
    [
        "models: [unclosed",
        "- just\n- a list\n",
        "models:\n  - not a mapping\n",
        "models:\n  broken: just a string\n",
    ],
)
def test_malformed_config_file(tmp_path, content):
    path = tmp_path / "models.yaml"
    path.write_text(content)
    with pytest.raises(ConfigurationError) as exc:
        ModelRegistry(path)
    assert str(path) in str(exc.value)


def test_malformed_config_cli(tmp_path):
    path = tmp_path / "models.yaml"
    path.write_text("models: [unclosed")
    result = CliRunner().invoke(cli, ["--config", str(path), "model", "list"])
    assert result.exit_code == 1
    assert "Error: Invalid YAML in model config" in result.output


def test_config_path_from_environment(config_file, monkeypatch):
    monkeypatch.setenv(CONFIG_PATH_ENV, str(config_file))
    assert ModelRegistry().config_path == config_file


def test_default_config_ships_default_model(monkeypatch):
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    registry = ModelRegistry()
    assert registry.config_path == DEFAULT_CONFIG_PATH
    assert registry.validate_model_capability(DEFAULT_MODEL, ModelCapability.PROJECT_GENERATION)


def test_get_model_requires_credential(config_file, monkeypatch):
    monkeypatch.delenv("TEST_ANTHROPIC_KEY", raising=False)
    registry = ModelRegistry(config_file)

    with pytest.raises(ConfigurationError) as exc:
        registry.get_model("claude")
    assert "TEST_ANTHROPIC_KEY" in str(exc.value)


def test_get_model_with_credential(config_file, monkeypatch):
    monkeypatch.setenv("TEST_ANTHROPIC_KEY", "sk-test")
    model = ModelRegistry(config_file).get_model("claude")

    assert isinstance(model, ChatAnthropic)
    assert model.model == "claude-test"
    assert model.max_tokens == 8000


def test_get_model_without_api_key(config_file):
    model = ModelRegistry(config_file).get_model("local")
    assert isinstance(model, ChatOllama)
    assert model.base_url == "http://localhost:11434"


def test_get_model_unknown(config_file):
    registry = ModelRegistry(config_file)
    with pytest.raises(ConfigurationError):
        registry.get_model("missing")
    with pytest.raises(ConfigurationError) as exc:
        registry.get_model("unknown")
    assert "Unsupported provider" in str(exc.value)


def test_validate_model_capability(config_file):
    registry = ModelRegistry(config_file)
    assert registry.validate_model_capability("claude", ModelCapability.PROJECT_GENERATION)
    assert not registry.validate_model_capability("unknown", ModelCapability.PROJECT_GENERATION)
