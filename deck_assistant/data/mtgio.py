"""magicthegathering.io API client, used as a fallback provider."""

import logging
import time
from typing import Callable, Optional

import requests

from deck_assistant import __version__
from deck_assistant.data.cache import CacheManager
from deck_assistant.errors import ApiError
from deck_assistant.models.card import Card

logger = logging.getLogger(__name__)

CACHE_NAMESPACE = "mtgio_card"


class MtgIoClient:
    """Client for the magicthegathering.io API. No batch endpoint."""

    name = "MTG.io"
    BASE_URL = "https://api.magicthegathering.io/v1"
    RATE_LIMIT = 0.5

    def __init__(
        self,
        cache: Optional[CacheManager] = None,
        timeout: int = 20,
        rate_limit: Optional[float] = None,
    ):
        self.cache = cache or CacheManager()
        self.timeout = timeout
        self.rate_limit = self.RATE_LIMIT if rate_limit is None else rate_limit
        self.last_request_time = 0.0
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": f"MTG-Deck-Assistant/{__version__}",
            "Accept": "application/json",
        })

    def _rate_limit(self) -> None:
        elapsed = time.time() - self.last_request_time
        if elapsed < self.rate_limit:
            time.sleep(self.rate_limit - elapsed)
        self.last_request_time = time.time()

    def _make_request(self, endpoint: str, params: Optional[dict] = None) -> dict:
        self._rate_limit()
        url = f"{self.BASE_URL}{endpoint}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code
            logger.error(f"HTTP error {status} for {url}")
            raise ApiError.from_status(status, str(params)) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {url}: {e}")
            raise ApiError(f"MTG.io request failed: {e}", retryable=True) from e

    def get_card_by_name(self, name: str, fuzzy: bool = False, use_cache: bool = True) -> Card:
        """
        Look up a card by name.

        Exact lookups quote the name; the first printing with rules text
        is preferred.

        Raises:
            ApiError: Card not found or request failed
        """
        if use_cache:
            cached = self.cache.get(CACHE_NAMESPACE, name)
            if cached:
                return Card.from_scryfall(cached)

        query = name if fuzzy else f'"{name}"'
        data = self._make_request("/cards", params={"name": query})
        printings = data.get("cards", [])
        if not printings:
            raise ApiError(f"Not found: {name}", status_code=404, retryable=False)

        exact = [p for p in printings if p.get("name", "").lower() == name.lower()]
        candidates = exact or printings
        best = next((p for p in candidates if p.get("text")), candidates[0])
        card = Card.from_mtgio(best)

        if use_cache:
            self.cache.set(card.to_dict(), CACHE_NAMESPACE, name)
        return card

    def batch_fetch_cards(
        self,
        names: list[str],
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> dict[str, Card]:
        """Fetch cards one at a time; names that are not found are skipped."""
        unique = list(dict.fromkeys(names))
        results: dict[str, Card] = {}

        for i, name in enumerate(unique, 1):
            try:
                results[name] = self.get_card_by_name(name)
            except ApiError as e:
                if e.retryable:
                    raise
                logger.warning(f"MTG.io could not find: {name}")
            if progress_callback:
                progress_callback(i, len(unique))

        return results
