"""OpenAI API client for LLM synergy analysis."""

import logging
from typing import Optional

import openai

from deck_assistant.config import get_api_key
from deck_assistant.llm.prompt_builder import PromptBuilder
from deck_assistant.llm.result import LLMAnalysisResult, LLMProvider
from deck_assistant.models.decklist import DeckList
from deck_assistant.models.synergy import SynergyMatrix

logger = logging.getLogger(__name__)


class OpenAIClient:
    """Client for the OpenAI Chat Completions API."""

    provider = LLMProvider.OPENAI

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o",
        max_tokens: int = 4096,
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: API key (defaults to OPENAI_API_KEY env var)
            model: Model to use
            max_tokens: Maximum response tokens
        """
        self.api_key = api_key or get_api_key(self.provider.env_var)
        self.model_name = model
        self.max_tokens = max_tokens
        self.prompt_builder = PromptBuilder()

        if not self.api_key:
            logger.warning("No OpenAI API key found. LLM analysis will be disabled.")
            self.enabled = False
            return

        self.enabled = True
        self.client = openai.OpenAI(api_key=self.api_key)

    def _generate(self, prompt: str) -> Optional[LLMAnalysisResult]:
        if not self.enabled:
            logger.warning("OpenAI client is disabled (no API key)")
            return None

        try:
            response = self.client.chat.completions.create(
                model=self.model_name,
                max_tokens=self.max_tokens,
                messages=[
                    {"role": "system", "content": self.prompt_builder.system_prompt},
                    {"role": "user", "content": prompt},
                ],
            )
        except openai.OpenAIError as e:
            logger.error(f"OpenAI API error: {e}")
            return None

        text = response.choices[0].message.content if response.choices else None
        if not text:
            logger.warning("Empty response from OpenAI")
            return None

        usage = response.usage
        return LLMAnalysisResult(
            full_response=text,
            provider=self.provider.value,
            model=self.model_name,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )

    def analyze_synergies(
        self,
        deck_list: DeckList,
        matrix: SynergyMatrix,
        report: str,
    ) -> Optional[LLMAnalysisResult]:
        """Ask GPT to review a deck's synergy analysis."""
        prompt = self.prompt_builder.build_synergy_prompt(deck_list, matrix, report)
        logger.info(f"Generating OpenAI synergy analysis for {deck_list.name}")
        return self._generate(prompt)
