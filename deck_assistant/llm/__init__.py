"""LLM integration for MTG Deck Assistant."""

from deck_assistant.llm.anthropic_client import AnthropicClient
from deck_assistant.llm.factory import create_llm_client
from deck_assistant.llm.gemini_client import GeminiClient
from deck_assistant.llm.ollama_client import OllamaClient
from deck_assistant.llm.openai_client import OpenAIClient
from deck_assistant.llm.prompt_builder import (
    DeckFormat,
    PromptBuilder,
    build_synergy_prompt,
    detect_format,
)
from deck_assistant.llm.result import LLMAnalysisResult, LLMProvider

__all__ = [
    "AnthropicClient",
    "GeminiClient",
    "OllamaClient",
    "OpenAIClient",
    "create_llm_client",
    "DeckFormat",
    "PromptBuilder",
    "build_synergy_prompt",
    "detect_format",
    "LLMAnalysisResult",
    "LLMProvider",
]
