"""Model registry for the project generator."""

import os
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml
from langchain_anthropic import ChatAnthropic
from langchain_aws import ChatBedrock
from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_ollama import ChatOllama
from langchain_openai import ChatOpenAI
from pydantic import BaseModel, SecretStr, ValidationError

from project_generator.constants import CONFIG_PATH_ENV
from project_generator.errors import ConfigurationError

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "models.yaml"


class ModelCapability(Enum):
    PROJECT_GENERATION = "project_generation"


class CommonModelParams(BaseModel):
    """Common parameters for all models."""

    model_id: str
    capabilities: list[ModelCapability]
    max_tokens: int
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    stop: Optional[list[str]] = None


class OpenAIParams(BaseModel):
    """OpenAI-specific parameters."""

    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    response_format: Optional[dict[str, Any]] = None


class OllamaParams(BaseModel):
    """Ollama-specific parameters."""

    repeat_penalty: Optional[float] = None


class GoogleParams(BaseModel):
    """Google-specific parameters."""

    response_mime_type: Optional[str] = None


class ModelConfig(BaseModel):
    """Model configuration."""

    provider: str
    common: CommonModelParams
    openai: Optional[OpenAIParams] = None
    ollama: Optional[OllamaParams] = None
    google: Optional[GoogleParams] = None
    supports_system_prompt: bool = True


class ProviderConfig(BaseModel):
    """Provider configuration."""

    api_key_env: Optional[str] = None
    organization_env: Optional[str] = None
    base_url_env: Optional[str] = None
    default_base_url: Optional[str] = None
    region_env: Optional[str] = None
    profile_env: Optional[str] = None
    default_region: Optional[str] = None


class ProviderStrategy(ABC):
    """Abstract base class for provider-specific strategies."""

    @abstractmethod
    def create_model(
        self,
        model_config: ModelConfig,
        provider_config: ProviderConfig,
    ) -> BaseChatModel:
        """Create a model instance for this provider."""
        pass

    def _get_common_params(self, common: CommonModelParams) -> dict[str, Any]:
        """Get common parameters supported by all LangChain chat models."""
        params: dict[str, Any] = {
            "model": common.model_id,
            "max_tokens": common.max_tokens,
        }
        if common.temperature is not None:
            params["temperature"] = common.temperature
        if common.top_p is not None:
            params["top_p"] = common.top_p
        if common.top_k is not None:
            params["top_k"] = common.top_k
        if common.stop is not None:
            params["stop"] = common.stop
        return params

    def _require_api_key(self, provider_config: ProviderConfig) -> SecretStr:
        """Read the provider's API key from the environment."""
        env_name = provider_config.api_key_env
        api_key = os.getenv(env_name) if env_name else None
        if not api_key:
            raise ConfigurationError(f"Missing API credential: set the {env_name or 'provider API key'} environment variable")
        return SecretStr(api_key)


class OpenAIStrategy(ProviderStrategy):
    def create_model(
        self,
        model_config: ModelConfig,
        provider_config: ProviderConfig,
    ) -> ChatOpenAI:
        params = self._get_common_params(model_config.common)
        params.pop("top_k", None)
        model_kwargs: dict[str, Any] = {}

        if model_config.openai and model_config.openai.response_format:
            model_kwargs["response_format"] = model_config.openai.response_format

        return ChatOpenAI(
            api_key=self._require_api_key(provider_config),
            organization=os.getenv(provider_config.organization_env or ""),
            frequency_penalty=(model_config.openai.frequency_penalty if model_config.openai else None),
            presence_penalty=(model_config.openai.presence_penalty if model_config.openai else None),
            model_kwargs=model_kwargs,
            **params,
        )


class AnthropicStrategy(ProviderStrategy):
    def create_model(
        self,
        model_config: ModelConfig,
        provider_config: ProviderConfig,
    ) -> ChatAnthropic:
        params = self._get_common_params(model_config.common)
        return ChatAnthropic(
            api_key=self._require_api_key(provider_config),
            **params,
        )


class GoogleStrategy(ProviderStrategy):
    def create_model(
        self,
        model_config: ModelConfig,
        provider_config: ProviderConfig,
    ) -> ChatGoogleGenerativeAI:
        params = self._get_common_params(model_config.common)
        params["max_output_tokens"] = params.pop("max_tokens")
        if model_config.google and model_config.google.response_mime_type:
            params["response_mime_type"] = model_config.google.response_mime_type

        return ChatGoogleGenerativeAI(google_api_key=self._require_api_key(provider_config), **params)


class OllamaStrategy(ProviderStrategy):
    def create_model(
        self,
        model_config: ModelConfig,
        provider_config: ProviderConfig,
    ) -> ChatOllama:
        params = self._get_common_params(model_config.common)
        params["num_predict"] = params.pop("max_tokens")
        if model_config.ollama and model_config.ollama.repeat_penalty is not None:
            params["repeat_penalty"] = model_config.ollama.repeat_penalty

        base_url = os.getenv(provider_config.base_url_env or "", provider_config.default_base_url)
        return ChatOllama(base_url=base_url, **params)


class BedrockStrategy(ProviderStrategy):
    def create_model(
        self,
        model_config: ModelConfig,
        provider_config: ProviderConfig,
    ) -> ChatBedrock:
        params = self._get_common_params(model_config.common)
        params.pop("model")
        return ChatBedrock(
            region=os.getenv(provider_config.region_env or "", provider_config.default_region),
            credentials_profile_name=os.getenv(provider_config.profile_env or ""),
            model=model_config.common.model_id,
            model_kwargs=params,
            beta_use_converse_api=True,
        )


class ModelRegistry:
    """Registry for managing LLM models."""

    _PROVIDER_STRATEGIES: dict[str, ProviderStrategy] = {
        "openai": OpenAIStrategy(),
        "anthropic": AnthropicStrategy(),
        "google": GoogleStrategy(),
        "ollama": OllamaStrategy(),
        "bedrock": BedrockStrategy(),
    }

    def __init__(self, config_path: Optional[Path] = None):
        env_path = os.getenv(CONFIG_PATH_ENV)
        self.config_path = config_path or (Path(env_path) if env_path else DEFAULT_CONFIG_PATH)
        self.models: dict[str, ModelConfig] = {}
        self.provider_configs: dict[str, ProviderConfig] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load model configurations from file."""
        if not self.config_path.exists():
            raise ConfigurationError(f"Model config file not found: {self.config_path}")

        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in model config {self.config_path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigurationError(f"Invalid model config {self.config_path}: expected a mapping, got {type(config).__name__}")

        try:
            for name, model_data in (config.get("models") or {}).items():
                self.models[name] = self._parse_model(model_data)

            for provider, provider_data in (config.get("provider_configs") or {}).items():
                self.provider_configs[provider] = ProviderConfig(**provider_data)
        except (AttributeError, KeyError, TypeError, ValidationError) as e:
            raise ConfigurationError(f"Invalid model config {self.config_path}: {e}") from e

    def _parse_model(self, model_data: dict[str, Any]) -> ModelConfig:
        # Convert flat config structure to nested
        common_params = {
            "model_id": model_data["model_id"],
            "capabilities": model_data["capabilities"],
            "max_tokens": model_data["max_tokens"],
        }
        for optional in ("temperature", "top_p", "top_k", "stop"):
            if optional in model_data:
                common_params[optional] = model_data[optional]

        provider = model_data["provider"]
        openai_params = None
        ollama_params = None
        google_params = None
        if provider == "openai":
            openai_params = OpenAIParams(
                frequency_penalty=model_data.get("frequency_penalty"),
                presence_penalty=model_data.get("presence_penalty"),
                response_format=model_data.get("response_format"),
            )
        elif provider == "ollama":
            ollama_params = OllamaParams(repeat_penalty=model_data.get("repeat_penalty"))
        elif provider == "google":
            google_params = GoogleParams(response_mime_type=model_data.get("response_mime_type"))

        return ModelConfig(
            provider=provider,
            common=CommonModelParams(**common_params),
            openai=openai_params,
            ollama=ollama_params,
            google=google_params,
            supports_system_prompt=model_data.get("supports_system_prompt", True),
        )

    def get_model_config(self, name: str) -> ModelConfig:
        """Get the configuration of a model by name."""
        if name not in self.models:
            raise ConfigurationError(f"Model '{name}' not found in configuration")
        return self.models[name]

    def get_model(self, name: str) -> BaseChatModel:
        """Get a model instance by name."""
        model_config = self.get_model_config(name)

        strategy = self._PROVIDER_STRATEGIES.get(model_config.provider)
        if not strategy:
            raise ConfigurationError(f"Unsupported provider: {model_config.provider}")

        provider_config = self.provider_configs.get(model_config.provider, ProviderConfig())
        return strategy.create_model(model_config, provider_config)

    def list_models(self) -> dict[str, dict[str, Any]]:
        """list all available models with their configurations."""
        return {
            name: {
                "provider": model.provider,
                "model_id": model.common.model_id,
                "max_tokens": model.common.max_tokens,
                "temperature": model.common.temperature,
                "top_p": model.common.top_p,
            }
            for name, model in self.models.items()
        }

    def validate_model_capability(self, model_name: str, required_capability: ModelCapability) -> bool:
        """Check if a model has a specific capability."""
        return required_capability in self.get_model_config(model_name).common.capabilities
