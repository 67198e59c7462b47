"""Anthropic API client for LLM synergy analysis."""

import logging
from typing import Optional

import anthropic

from deck_assistant.config import get_api_key
from deck_assistant.llm.prompt_builder import PromptBuilder
from deck_assistant.llm.result import LLMAnalysisResult, LLMProvider
from deck_assistant.models.decklist import DeckList
from deck_assistant.models.synergy import SynergyMatrix

logger = logging.getLogger(__name__)


class AnthropicClient:
    """Client for the Anthropic Messages API."""

    provider = LLMProvider.ANTHROPIC

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "claude-sonnet-4-20250514",
        max_tokens: int = 4096,
    ):
        """
        Initialize Anthropic client.

        Args:
            api_key: API key (defaults to ANTHROPIC_API_KEY env var)
            model: Model to use
            max_tokens: Maximum response tokens
        """
        self.api_key = api_key or get_api_key(self.provider.env_var)
        self.model_name = model
        self.max_tokens = max_tokens
        self.prompt_builder = PromptBuilder()

        if not self.api_key:
            logger.warning("No Anthropic API key found. LLM analysis will be disabled.")
            self.enabled = False
            return

        self.enabled = True
        self.client = anthropic.Anthropic(api_key=self.api_key)

    def _generate(self, prompt: str) -> Optional[LLMAnalysisResult]:
        if not self.enabled:
            logger.warning("Anthropic client is disabled (no API key)")
            return None

        try:
            response = self.client.messages.create(
                model=self.model_name,
                max_tokens=self.max_tokens,
                system=self.prompt_builder.system_prompt,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            logger.error(f"Anthropic API error: {e}")
            return None

        text = "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
        if not text:
            logger.warning("Empty response from Anthropic")
            return None

        return LLMAnalysisResult(
            full_response=text,
            provider=self.provider.value,
            model=self.model_name,
            input_tokens=response.usage.input_tokens if response.usage else 0,
            output_tokens=response.usage.output_tokens if response.usage else 0,
        )

    def analyze_synergies(
        self,
        deck_list: DeckList,
        matrix: SynergyMatrix,
        report: str,
    ) -> Optional[LLMAnalysisResult]:
        """Ask Claude to review a deck's synergy analysis."""
        prompt = self.prompt_builder.build_synergy_prompt(deck_list, matrix, report)
        logger.info(f"Generating Anthropic synergy analysis for {deck_list.name}")
        return self._generate(prompt)
