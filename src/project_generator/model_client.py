"""Client for the hosted model API."""

import asyncio
import logging
from typing import Any, Optional

from langchain_core.language_models import BaseChatModel

from project_generator.components.models import ModelCapability, ModelRegistry
from project_generator.components.types import GenerationRequest
from project_generator.constants import DEFAULT_REQUEST_TIMEOUT
from project_generator.errors import ConfigurationError, ModelRequestError, RequestTimeoutError
from project_generator.prompts import format_messages

logger = logging.getLogger(__name__)


def response_text(response: Any) -> str:
    """Extract the text payload from a chat model response."""
    content = response.content if hasattr(response, "content") else response
    if isinstance(content, list):
        # Content blocks; keep the text ones
        return "".join(block if isinstance(block, str) else block.get("text", "") for block in content if isinstance(block, (str, dict)))
    return str(content)


class ModelClient:
    """Sends a single generation prompt to a chat model."""

    def __init__(
        self,
        model: BaseChatModel,
        model_name: str = "model",
        supports_system_prompt: bool = True,
        timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT,
    ):
        self.model = model
        self.model_name = model_name
        self.supports_system_prompt = supports_system_prompt
        self.timeout = timeout

    @classmethod
    def from_registry(cls, registry: ModelRegistry, model_name: str, timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT) -> "ModelClient":
        """Build a client for a configured model.

        Raises:
            ConfigurationError: The model is unknown, cannot generate projects or lacks a credential
        """
        if not registry.validate_model_capability(model_name, ModelCapability.PROJECT_GENERATION):
            raise ConfigurationError(f"Model '{model_name}' does not support project generation")

        model_config = registry.get_model_config(model_name)
        return cls(
            model=registry.get_model(model_name),
            model_name=model_name,
            supports_system_prompt=model_config.supports_system_prompt,
            timeout=timeout,
        )

    async def generate(self, request: GenerationRequest) -> str:
        """Ask the model for a project and return its raw text answer.

        Raises:
            RequestTimeoutError: No answer within ``timeout`` seconds
            ModelRequestError: The provider call failed
        """
        messages = format_messages(request, supports_system_prompt=self.supports_system_prompt)
        logger.info("Requesting %s project from %s", request.project_type, self.model_name)

        try:
            response = await asyncio.wait_for(self.model.ainvoke(messages), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(self.timeout) from e
        except Exception as e:
            raise ModelRequestError(f"Model request to {self.model_name} failed: {e}") from e

        text = response_text(response)
        logger.debug("Model returned %d characters", len(text))
        return text
