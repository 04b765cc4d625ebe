import sys
from pathlib import Path

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

# Add src directory to Python path
src_path = str(Path(__file__).parent.parent / "src")
if src_path not in sys.path:
    sys.path.append(src_path)

from project_generator.components.types import GenerationRequest
from project_generator.model_client import ModelClient


class RecordingNotifier:
    """Collects reported outcomes instead of printing them."""

    def __init__(self):
        self.outcomes = []

    def report(self, outcome):
        self.outcomes.append(outcome)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def workspace(tmp_path):
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest.fixture
def request_():
    return GenerationRequest(project_type="Website", description="Todo app with auth")


@pytest.fixture
def make_client():
    """Build a model client answering with the given responses in turn."""

    def _make(*responses: str, timeout: float = 5.0) -> ModelClient:
        return ModelClient(FakeListChatModel(responses=list(responses)), model_name="fake", timeout=timeout)

    return _make
