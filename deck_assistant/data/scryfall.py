"""Scryfall API client for card lookups."""

import logging
import time
from typing import Callable, Optional

import requests

from deck_assistant import __version__
from deck_assistant.data.cache import CacheManager
from deck_assistant.errors import ApiError
from deck_assistant.models.card import Card

logger = logging.getLogger(__name__)

CACHE_NAMESPACE = "scryfall_card"


def index_by_names(cards: list[Card]) -> dict[str, Card]:
    """Lowercased full names and front-face names mapped to their cards."""
    index: dict[str, Card] = {}
    for card in cards:
        index.setdefault(card.name.lower(), card)
        if " // " in card.name:
            index.setdefault(card.name.split(" // ")[0].lower(), card)
        for face in card.card_faces[:1]:
            index.setdefault(face.name.lower(), card)
    return index


class ScryfallClient:
    """Client for the Scryfall API."""

    name = "Scryfall"
    BASE_URL = "https://api.scryfall.com"
    RATE_LIMIT = 0.1  # Scryfall asks for 50-100ms between requests
    BATCH_SIZE = 75  # /cards/collection accepts at most 75 identifiers

    def __init__(
        self,
        cache: Optional[CacheManager] = None,
        timeout: int = 15,
        rate_limit: Optional[float] = None,
        batch_size: Optional[int] = None,
    ):
        """
        Initialize Scryfall client.

        Args:
            cache: Optional cache manager
            timeout: Request timeout in seconds
            rate_limit: Seconds between requests
            batch_size: Identifiers per collection request
        """
        self.cache = cache or CacheManager()
        self.timeout = timeout
        self.rate_limit = self.RATE_LIMIT if rate_limit is None else rate_limit
        self.batch_size = min(batch_size or self.BATCH_SIZE, self.BATCH_SIZE)
        self.last_request_time = 0.0
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": f"MTG-Deck-Assistant/{__version__}",
            "Accept": "application/json",
        })

    def _rate_limit(self) -> None:
        """Ensure rate limiting between requests."""
        elapsed = time.time() - self.last_request_time
        if elapsed < self.rate_limit:
            time.sleep(self.rate_limit - elapsed)
        self.last_request_time = time.time()

    def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
        payload: Optional[dict] = None,
    ) -> dict:
        """Make an API request, translating failures into ApiError."""
        self._rate_limit()
        url = f"{self.BASE_URL}{endpoint}"

        try:
            response = self.session.request(
                method, url, params=params, json=payload, timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code
            context = str(params or endpoint)
            if status == 404:
                logger.warning(f"Card not found on Scryfall: {context}")
            else:
                logger.error(f"HTTP error {status} for {url}")
            raise ApiError.from_status(status, context) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {url}: {e}")
            raise ApiError(f"Scryfall request failed: {e}", retryable=True) from e

    def get_card_by_name(self, name: str, fuzzy: bool = False, use_cache: bool = True) -> Card:
        """
        Look up a single card by name.

        Args:
            name: Card name
            fuzzy: Use fuzzy matching instead of exact
            use_cache: Whether to use cache

        Returns:
            Card

        Raises:
            ApiError: Card not found or request failed
        """
        if use_cache:
            cached = self.cache.get(CACHE_NAMESPACE, name)
            if cached:
                logger.debug(f"Cache hit: {name}")
                return Card.from_scryfall(cached)

        params = {"fuzzy" if fuzzy else "exact": name}
        data = self._make_request("GET", "/cards/named", params=params)

        if use_cache:
            self.cache.set(data, CACHE_NAMESPACE, name)
        return Card.from_scryfall(data)

    def get_card_by_id(self, card_id: str) -> Card:
        """Look up a card by Scryfall id."""
        cached = self.cache.get("scryfall_id", card_id)
        if cached:
            return Card.from_scryfall(cached)

        data = self._make_request("GET", f"/cards/{card_id}")
        self.cache.set(data, "scryfall_id", card_id)
        return Card.from_scryfall(data)

    def batch_fetch_cards(
        self,
        names: list[str],
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> dict[str, Card]:
        """
        Fetch many cards, cache first, then through /cards/collection.

        Args:
            names: Card names
            progress_callback: Optional callback(done, total)

        Returns:
            Dict mapping each requested name that was found to its Card
        """
        results: dict[str, Card] = {}
        uncached: list[str] = []

        for name in dict.fromkeys(names):
            cached = self.cache.get(CACHE_NAMESPACE, name)
            if cached:
                results[name] = Card.from_scryfall(cached)
            else:
                uncached.append(name)

        logger.info(f"Scryfall: {len(results)} cached, {len(uncached)} to fetch")
        total = len(results) + len(uncached)
        if progress_callback:
            progress_callback(len(results), total)

        for start in range(0, len(uncached), self.batch_size):
            chunk = uncached[start:start + self.batch_size]
            payload = {"identifiers": [{"name": n} for n in chunk]}
            data = self._make_request("POST", "/cards/collection", payload=payload)

            found = [Card.from_scryfall(d) for d in data.get("data", [])]
            raw_by_id = {d.get("id"): d for d in data.get("data", [])}
            index = index_by_names(found)

            for name in chunk:
                card = index.get(name.lower())
                if card is None:
                    continue
                results[name] = card
                self.cache.set(raw_by_id.get(card.id, card.to_dict()), CACHE_NAMESPACE, name)

            not_found = [nf.get("name", "?") for nf in data.get("not_found", [])]
            if not_found:
                logger.warning(f"Scryfall could not find: {', '.join(not_found)}")

            if progress_callback:
                progress_callback(min(len(results) + len(not_found), total), total)

        return results
