from functools import lru_cache

from pydantic_ai.models.anthropic import AnthropicModel
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.models.openai import Model, OpenAIChatModel
from pydantic_ai.providers.anthropic import AnthropicProvider
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.providers.ollama import OllamaProvider
from pydantic_ai.providers.openai import OpenAIProvider

from learnloop.config import get_settings


def _get_model() -> Model:
    """
    Build the pydantic-ai model for the configured provider.
    """
    settings = get_settings()
    # Presence of the name and key for the chosen provider is guaranteed by the settings validator
    model_name = settings.AI_MODEL_NAME
    assert model_name is not None

    if settings.AI_PROVIDER == "ollama":
        assert settings.OPENAI_BASE_URL is not None
        return OpenAIChatModel(
            model_name=model_name,
            provider=OllamaProvider(base_url=settings.OPENAI_BASE_URL),
        )

    if settings.AI_PROVIDER == "openai":
        assert settings.OPENAI_API_KEY is not None
        return OpenAIChatModel(
            model_name=model_name,
            provider=OpenAIProvider(api_key=settings.OPENAI_API_KEY),
        )

    if settings.AI_PROVIDER == "anthropic":
        assert settings.ANTHROPIC_API_KEY is not None
        return AnthropicModel(
            model_name=model_name,
            provider=AnthropicProvider(api_key=settings.ANTHROPIC_API_KEY),
        )

    if settings.AI_PROVIDER == "google":
        assert settings.GEMINI_API_KEY is not None
        return GoogleModel(
            model_name=model_name,
            provider=GoogleProvider(api_key=settings.GEMINI_API_KEY),
        )
    raise RuntimeError(f"No such AI model provider available: {settings.AI_PROVIDER}")


@lru_cache
def get_ai_model() -> Model:
    """
    Get cached AI model. Built lazily so the provider SDKs are only touched
    when AI features are enabled and actually used.
    """
    return _get_model()
