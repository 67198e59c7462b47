"""Moxfield deck import."""

import logging
import re
from typing import Optional

import requests

from deck_assistant import __version__
from deck_assistant.errors import ApiError, DeckParseError
from deck_assistant.models.decklist import DeckList, DeckSource, Section, SourceKind

logger = logging.getLogger(__name__)

DECK_ID_ONLY = re.compile(r"^[a-zA-Z0-9_-]+$")
DECK_URL = re.compile(r"moxfield\.com/decks/([a-zA-Z0-9_-]+)")

# Moxfield board name -> section, in output order
BOARDS = (
    ("commanders", Section.COMMANDER),
    ("companions", Section.COMMANDER),
    ("mainboard", Section.MAINBOARD),
    ("sideboard", Section.SIDEBOARD),
    ("maybeboard", Section.MAYBEBOARD),
)


def extract_deck_id(source: str) -> Optional[str]:
    """Deck id from a moxfield.com URL, or the source itself if it is a bare id."""
    source = source.strip()
    if DECK_ID_ONLY.match(source):
        return source
    match = DECK_URL.search(source)
    return match.group(1) if match else None


def is_moxfield_source(source: str) -> bool:
    return "moxfield.com" in source


class MoxfieldClient:
    """Fetches public decks from the Moxfield API."""

    BASE_URL = "https://api2.moxfield.com/v2"

    def __init__(self, timeout: int = 20):
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": f"MTG-Deck-Assistant/{__version__}",
            "Accept": "application/json",
        })

    def parse(self, source: str) -> DeckList:
        """
        Fetch a deck by URL or id.

        Raises:
            DeckParseError: Source is not a Moxfield URL or id
            ApiError: Moxfield request failed
        """
        deck_id = extract_deck_id(source)
        if deck_id is None:
            raise DeckParseError(f"Invalid Moxfield URL or deck ID: {source}")
        return self.fetch_deck(deck_id)

    def fetch_deck(self, deck_id: str) -> DeckList:
        url = f"{self.BASE_URL}/decks/all/{deck_id}"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code
            logger.error(f"Moxfield returned {status} for deck {deck_id}")
            raise ApiError.from_status(status, f"Moxfield deck {deck_id}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Moxfield request failed: {e}")
            raise ApiError(f"Failed to fetch from Moxfield: {e}", retryable=True) from e
        except ValueError as e:
            raise ApiError(f"Failed to parse Moxfield response: {e}") from e

        return convert_to_decklist(data, deck_id)


def convert_to_decklist(data: dict, deck_id: str) -> DeckList:
    """Convert a Moxfield deck response into a DeckList."""
    deck_list = DeckList(
        name=data.get("name") or deck_id,
        format=data.get("format"),
        source=DeckSource(SourceKind.MOXFIELD, deck_id),
    )

    for board, section in BOARDS:
        for entry in (data.get(board) or {}).values():
            name = (entry.get("card") or {}).get("name")
            if not name:
                continue
            deck_list.add_entry(int(entry.get("quantity", 1)), name, section)

    if not deck_list.entries:
        raise DeckParseError(f"Moxfield deck {deck_id} has no cards")

    logger.info(f"Fetched {len(deck_list.entries)} entries from Moxfield deck {deck_id}")
    return deck_list
