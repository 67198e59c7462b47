"""Gemini API client for LLM synergy analysis."""

import logging
from typing import Optional

from google import genai
from google.genai import types

from deck_assistant.config import get_api_key
from deck_assistant.llm.prompt_builder import PromptBuilder
from deck_assistant.llm.result import LLMAnalysisResult, LLMProvider
from deck_assistant.models.decklist import DeckList
from deck_assistant.models.synergy import SynergyMatrix

logger = logging.getLogger(__name__)


class GeminiClient:
    """Client for Google Gemini API."""

    provider = LLMProvider.GEMINI

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-2.5-flash",
        max_tokens: int = 4096,
        temperature: float = 1.0,
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Gemini API key (defaults to GEMINI_API_KEY env var)
            model: Model to use
            max_tokens: Maximum response tokens
            temperature: Sampling temperature
        """
        self.api_key = api_key or get_api_key(self.provider.env_var)
        self.model_name = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.prompt_builder = PromptBuilder()

        if not self.api_key:
            logger.warning("No Gemini API key found. LLM analysis will be disabled.")
            self.enabled = False
            return

        self.enabled = True
        self.client = genai.Client(api_key=self.api_key)

    def _generate(self, prompt: str) -> Optional[LLMAnalysisResult]:
        """
        Generate a response from Gemini.

        Returns:
            Result or None on failure
        """
        if not self.enabled:
            logger.warning("Gemini client is disabled (no API key)")
            return None

        try:
            config = types.GenerateContentConfig(
                system_instruction=self.prompt_builder.system_prompt,
                max_output_tokens=self.max_tokens,
                temperature=self.temperature,
            )
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            return None

        if not response or not response.text:
            logger.warning("Empty response from Gemini")
            return None

        usage = response.usage_metadata
        return LLMAnalysisResult(
            full_response=response.text,
            provider=self.provider.value,
            model=self.model_name,
            input_tokens=(usage.prompt_token_count or 0) if usage else 0,
            output_tokens=(usage.candidates_token_count or 0) if usage else 0,
        )

    def analyze_synergies(
        self,
        deck_list: DeckList,
        matrix: SynergyMatrix,
        report: str,
    ) -> Optional[LLMAnalysisResult]:
        """
        Ask Gemini to review a deck's synergy analysis.

        Args:
            deck_list: Hydrated decklist
            matrix: Synergy analysis result
            report: Rendered synergy report

        Returns:
            Analysis result or None
        """
        prompt = self.prompt_builder.build_synergy_prompt(deck_list, matrix, report)
        logger.info(f"Generating Gemini synergy analysis for {deck_list.name}")
        return self._generate(prompt)
