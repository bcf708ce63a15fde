import json
from abc import ABC, abstractmethod
from typing import Any
from urllib import error, request

from clinic_ai.config.logger import get_logger
from clinic_ai.config.settings import settings
from clinic_ai.errors import OracleConfigurationError

_logger = get_logger(__name__)


class BaseModelProvider(ABC):
    """Abstract provider contract for chat model creation."""

    name: str = "base"

    @abstractmethod
    def is_available(self, model: str) -> bool:
        """Whether this provider can serve the given model."""

    @abstractmethod
    def create(self, model: str, temperature: float) -> Any:
        """Create provider-specific langchain chat model instance."""


class OpenAIProvider(BaseModelProvider):
    name = "openai"

    def is_available(self, model: str) -> bool:
        return settings.has_openai_like_creds()

    def create(self, model: str, temperature: float) -> Any:
        from langchain_openai import ChatOpenAI

        api_key = settings.get_api_key()
        if not api_key:
            raise OracleConfigurationError(
                "OPENAI_API_KEY (or DASHSCOPE_API_KEY) is missing, empty, or still a "
                "placeholder; the openai provider cannot be used."
            )
        return ChatOpenAI(
            model=model,
            api_key=api_key,
            base_url=settings.get_base_url(provider_hint=self.name),
            temperature=temperature,
            max_retries=0,
        )


class OllamaProvider(BaseModelProvider):
    name = "ollama"

    def _model_exists(self, base_url: str, model: str) -> bool:
        tags_url = f"{base_url.rstrip('/')}/api/tags"
        try:
            with request.urlopen(tags_url, timeout=1.5) as resp:
                payload = json.loads(resp.read().decode("utf-8"))
        except (error.URLError, error.HTTPError, TimeoutError, ValueError):
            return False

        names = {
            (item.get("name", "") or "").strip().lower()
            for item in payload.get("models", [])
        }
        wanted = (model or "").strip().lower()
        if wanted in names:
            return True
        return ":" not in wanted and f"{wanted}:latest" in names

    def is_available(self, model: str) -> bool:
        return self._model_exists(settings.get_base_url(provider_hint=self.name), model)

    def create(self, model: str, temperature: float) -> Any:
        from langchain_ollama import ChatOllama

        return ChatOllama(
            model=model,
            base_url=settings.get_base_url(provider_hint=self.name),
            temperature=temperature,
        )


class ModelFactory:
    """Provider registry + resolution strategy."""

    def __init__(self) -> None:
        self.providers: dict[str, BaseModelProvider] = {
            OpenAIProvider.name: OpenAIProvider(),
            OllamaProvider.name: OllamaProvider(),
        }

    def _resolve_provider(self, model: str, explicit_provider: str) -> BaseModelProvider:
        provider_name = (explicit_provider or "").strip().lower()
        if provider_name and provider_name != "auto":
            provider = self.providers.get(provider_name)
            if provider is None:
                raise OracleConfigurationError(f"Unknown provider: {provider_name}")
            return provider

        # Auto strategy: prefer local Ollama if model exists, else OpenAI-compatible.
        ollama = self.providers["ollama"]
        if ollama.is_available(model):
            return ollama
        if self.providers["openai"].is_available(model):
            return self.providers["openai"]
        raise OracleConfigurationError(
            f"No provider can serve model '{model}': Ollama does not have it "
            "and no OpenAI-compatible API key is configured."
        )

    def create_chat_model(self, flow_key: str, default_model: str = "") -> Any:
        model = settings.get_flow_model(flow_key, default_model)
        provider = self._resolve_provider(
            model=model,
            explicit_provider=settings.get_flow_provider(flow_key),
        )
        _logger.info(
            "[model_factory] flow=%s provider=%s model=%s",
            flow_key,
            provider.name,
            model,
        )
        return provider.create(model=model, temperature=settings.ORACLE_TEMPERATURE)


_FACTORY = ModelFactory()


def get_chat_model(flow_key: str, default_model: str = "") -> Any:
    """Build the chat model configured for a flow; raises on bad configuration."""
    return _FACTORY.create_chat_model(flow_key=flow_key, default_model=default_model)
