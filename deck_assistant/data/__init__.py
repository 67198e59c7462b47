"""Card data providers, caching and decklist hydration."""

from deck_assistant.data.cache import CacheManager
from deck_assistant.data.fallback import ApiProvider, FallbackClient, create_client
from deck_assistant.data.hydrate import hydrate_decklist
from deck_assistant.data.mtgio import MtgIoClient
from deck_assistant.data.scryfall import ScryfallClient

__all__ = [
    "CacheManager",
    "ApiProvider",
    "FallbackClient",
    "create_client",
    "hydrate_decklist",
    "MtgIoClient",
    "ScryfallClient",
]
