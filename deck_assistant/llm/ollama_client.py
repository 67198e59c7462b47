"""Ollama client for synergy analysis with a locally hosted model."""

import logging
import os
from typing import Optional

import requests
from dotenv import load_dotenv

from deck_assistant.llm.prompt_builder import PromptBuilder
from deck_assistant.llm.result import LLMAnalysisResult, LLMProvider
from deck_assistant.models.decklist import DeckList
from deck_assistant.models.synergy import SynergyMatrix

logger = logging.getLogger(__name__)

DEFAULT_OLLAMA_HOST = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "llama3.2"


class OllamaClient:
    """Client for a local Ollama server's generate endpoint."""

    provider = LLMProvider.OLLAMA

    def __init__(
        self,
        host: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = 300.0,
    ):
        """
        Initialize Ollama client.

        No key is needed, so the client is always enabled; an unreachable
        server surfaces when a request is made.

        Args:
            host: Server URL (defaults to OLLAMA_HOST, then localhost:11434)
            model: Model to use (defaults to OLLAMA_MODEL, then llama3.2)
            timeout: Request timeout in seconds; local models can be slow
        """
        load_dotenv()
        self.host = (host or os.getenv(self.provider.env_var) or DEFAULT_OLLAMA_HOST).rstrip("/")
        self.model_name = model or os.getenv("OLLAMA_MODEL") or DEFAULT_OLLAMA_MODEL
        self.timeout = timeout
        self.prompt_builder = PromptBuilder()
        self.enabled = True
        self.session = requests.Session()

    def _generate(self, prompt: str) -> Optional[LLMAnalysisResult]:
        payload = {
            "model": self.model_name,
            "prompt": prompt,
            "system": self.prompt_builder.system_prompt,
            "stream": False,
        }
        try:
            response = self.session.post(
                f"{self.host}/api/generate", json=payload, timeout=self.timeout
            )
        except requests.ConnectionError as e:
            logger.error(f"Failed to connect to Ollama at {self.host}. Is Ollama running? ({e})")
            return None
        except requests.RequestException as e:
            logger.error(f"Ollama request failed: {e}")
            return None

        if not response.ok:
            logger.error(f"Ollama API error ({response.status_code}): {response.text}")
            return None

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Failed to parse Ollama response: {e}")
            return None

        text = data.get("response")
        if not text:
            logger.warning("Empty response from Ollama")
            return None

        return LLMAnalysisResult(
            full_response=text,
            provider=self.provider.value,
            model=self.model_name,
            input_tokens=data.get("prompt_eval_count", 0),
            output_tokens=data.get("eval_count", 0),
        )

    def analyze_synergies(
        self,
        deck_list: DeckList,
        matrix: SynergyMatrix,
        report: str,
    ) -> Optional[LLMAnalysisResult]:
        """Ask the local model to review a deck's synergy analysis."""
        prompt = self.prompt_builder.build_synergy_prompt(deck_list, matrix, report)
        logger.info(f"Generating Ollama synergy analysis for {deck_list.name} ({self.model_name})")
        return self._generate(prompt)
