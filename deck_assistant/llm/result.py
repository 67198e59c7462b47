"""LLM analysis result and provider selection."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class LLMProvider(Enum):
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    OLLAMA = "ollama"

    @property
    def env_var(self) -> str:
        if self == LLMProvider.OLLAMA:
            return "OLLAMA_HOST"
        return f"{self.name}_API_KEY"

    @property
    def requires_api_key(self) -> bool:
        """Local providers run without a key."""
        return self != LLMProvider.OLLAMA

    @classmethod
    def from_string(cls, value: str) -> "LLMProvider":
        mapping = {
            "gemini": cls.GEMINI,
            "google": cls.GEMINI,
            "anthropic": cls.ANTHROPIC,
            "claude": cls.ANTHROPIC,
            "openai": cls.OPENAI,
            "gpt": cls.OPENAI,
            "ollama": cls.OLLAMA,
            "local": cls.OLLAMA,
        }
        key = value.strip().lower()
        if key not in mapping:
            raise ValueError(f"Unknown LLM provider: {value}")
        return mapping[key]


@dataclass
class LLMAnalysisResult:
    """LLM response text with token usage."""

    full_response: str
    provider: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def to_dict(self) -> dict[str, Any]:
        return {
            "provider": self.provider,
            "model": self.model,
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "analysis": self.full_response,
        }
