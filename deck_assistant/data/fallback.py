"""Provider chaining and client construction."""

import logging
from enum import Enum
from typing import Callable, Optional

from deck_assistant.config import Settings
from deck_assistant.contracts import CardProvider
from deck_assistant.data.cache import CacheManager
from deck_assistant.data.mtgio import MtgIoClient
from deck_assistant.data.scryfall import ScryfallClient
from deck_assistant.errors import ApiError
from deck_assistant.models.card import Card

logger = logging.getLogger(__name__)


class ApiProvider(Enum):
    SCRYFALL = "scryfall"
    MTGIO = "mtgio"

    @classmethod
    def from_string(cls, value: str) -> "ApiProvider":
        mapping = {
            "scryfall": cls.SCRYFALL,
            "mtgio": cls.MTGIO,
            "mtg.io": cls.MTGIO,
            "magicthegathering.io": cls.MTGIO,
        }
        key = value.strip().lower()
        if key not in mapping:
            raise ValueError(f"Unknown provider: {value}")
        return mapping[key]


class FallbackClient:
    """Tries providers in order; later providers only see what earlier ones missed."""

    def __init__(self, providers: list[CardProvider]):
        if not providers:
            raise ValueError("FallbackClient needs at least one provider")
        self.providers = providers

    @property
    def name(self) -> str:
        return " -> ".join(p.name for p in self.providers)

    def get_card_by_name(self, name: str, fuzzy: bool = False) -> Card:
        """
        Look up one card, falling through providers on any ApiError.

        Raises:
            ApiError: The last provider's error when none found the card
        """
        last_error: Optional[ApiError] = None
        for provider in self.providers:
            try:
                return provider.get_card_by_name(name, fuzzy=fuzzy)
            except ApiError as e:
                logger.warning(f"{provider.name} lookup failed for {name}: {e.message}")
                last_error = e
        raise last_error

    def batch_fetch_cards(
        self,
        names: list[str],
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> dict[str, Card]:
        """
        Fetch many cards across providers.

        Raises:
            ApiError: Every provider failed outright
        """
        remaining = list(dict.fromkeys(names))
        results: dict[str, Card] = {}
        errors: list[ApiError] = []

        for provider in self.providers:
            if not remaining:
                break
            try:
                found = provider.batch_fetch_cards(remaining, progress_callback)
            except ApiError as e:
                logger.warning(f"{provider.name} batch fetch failed: {e.message}")
                errors.append(e)
                continue

            results.update(found)
            remaining = [n for n in remaining if n not in found]
            if remaining:
                logger.info(f"{len(remaining)} cards missing after {provider.name}")

        if errors and len(errors) == len(self.providers):
            raise errors[-1]
        return results


def create_provider(
    provider: ApiProvider,
    cache: CacheManager,
    settings: Optional[Settings] = None,
) -> CardProvider:
    settings = settings or Settings()
    if provider == ApiProvider.MTGIO:
        return MtgIoClient(cache=cache, rate_limit=settings.mtgio_delay)
    return ScryfallClient(
        cache=cache,
        rate_limit=settings.scryfall_delay,
        batch_size=settings.batch_size,
    )


def create_client(
    provider: ApiProvider = ApiProvider.SCRYFALL,
    enable_fallback: bool = True,
    cache: Optional[CacheManager] = None,
    settings: Optional[Settings] = None,
) -> CardProvider:
    """
    Build a card client.

    Args:
        provider: Primary provider
        enable_fallback: Chain the other provider after the primary
        cache: Shared cache manager
        settings: Request delays and batch size

    Returns:
        A single client, or a FallbackClient
    """
    cache = cache or CacheManager()
    settings = settings or Settings()
    primary = create_provider(provider, cache, settings)
    if not enable_fallback:
        return primary

    # Fallback order comes from settings; providers missing there are appended
    order = [ApiProvider.from_string(p) for p in settings.providers]
    order += [p for p in ApiProvider if p not in order]
    others = [p for p in dict.fromkeys(order) if p != provider]
    return FallbackClient([primary] + [create_provider(p, cache, settings) for p in others])
