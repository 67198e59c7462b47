"""LLM client construction."""

from typing import Optional, Union

from deck_assistant.config import Settings, get_api_key
from deck_assistant.errors import LLMError
from deck_assistant.llm.anthropic_client import AnthropicClient
from deck_assistant.llm.gemini_client import GeminiClient
from deck_assistant.llm.ollama_client import OllamaClient
from deck_assistant.llm.openai_client import OpenAIClient
from deck_assistant.llm.result import LLMProvider

LLMClient = Union[GeminiClient, AnthropicClient, OpenAIClient, OllamaClient]


def create_llm_client(
    provider: LLMProvider,
    settings: Optional[Settings] = None,
    model: Optional[str] = None,
    require_key: bool = True,
) -> LLMClient:
    """
    Build an LLM client for a provider.

    Args:
        provider: Which provider to use
        settings: Settings supplying model names and token limits
        model: Model override
        require_key: Raise instead of returning a disabled client

    Raises:
        LLMError: No API key and require_key is set
    """
    settings = settings or Settings()

    # Ollama needs no key; its host comes from settings or OLLAMA_HOST
    if provider == LLMProvider.OLLAMA:
        return OllamaClient(
            host=settings.ollama_host,
            model=model or settings.ollama_model,
        )

    api_key = get_api_key(provider.env_var)
    if api_key is None and require_key:
        raise LLMError.missing_api_key(provider.env_var)

    if provider == LLMProvider.ANTHROPIC:
        return AnthropicClient(
            api_key=api_key,
            model=model or settings.anthropic_model,
            max_tokens=settings.llm_max_tokens,
        )
    if provider == LLMProvider.OPENAI:
        return OpenAIClient(
            api_key=api_key,
            model=model or settings.openai_model,
            max_tokens=settings.llm_max_tokens,
        )
    return GeminiClient(
        api_key=api_key,
        model=model or settings.gemini_model,
        max_tokens=settings.llm_max_tokens,
    )
