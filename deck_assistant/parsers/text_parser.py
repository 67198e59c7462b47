"""Plain-text decklist parser."""

import logging
import re
from pathlib import Path
from typing import Optional

from deck_assistant.errors import DeckParseError
from deck_assistant.models.decklist import DeckList, DeckSource, Section, SourceKind

logger = logging.getLogger(__name__)

PREFIX_QUANTITY = re.compile(r"^(\d+)x?\s+(.+)$", re.IGNORECASE)
SUFFIX_QUANTITY = re.compile(r"^(.+?)\s+x(\d+)$", re.IGNORECASE)
# Arena/Moxfield exports append "(SET) 123" and foil markers
SET_SUFFIX = re.compile(r"\s+\([A-Za-z0-9]{2,6}\)(\s+[\w-]+)?(\s+\*[A-Z]\*)?$")

SECTION_PREFIXES = (
    ("commander", Section.COMMANDER),
    ("companion", Section.COMMANDER),
    ("main", Section.MAINBOARD),
    ("deck", Section.MAINBOARD),
    ("side", Section.SIDEBOARD),
    ("maybe", Section.MAYBEBOARD),
)


def parse_section_header(line: str) -> Optional[Section]:
    """Section named by a "// Commander" or "Sideboard:" style header."""
    text = line.lower().lstrip("/").rstrip(":").strip()
    for prefix, section in SECTION_PREFIXES:
        if text.startswith(prefix):
            return section
    return None


def parse_card_line(line: str) -> Optional[tuple[int, str]]:
    """
    Parse "4 Name", "4x Name", "Name x4" or a bare "Name".

    Returns:
        (quantity, name), or None for blank and comment lines
    """
    text = line.strip()
    if not text or text.startswith(("//", "#")):
        return None

    match = PREFIX_QUANTITY.match(text)
    if match:
        quantity, name = int(match.group(1)), match.group(2)
    else:
        match = SUFFIX_QUANTITY.match(text)
        if match:
            name, quantity = match.group(1), int(match.group(2))
        else:
            quantity, name = 1, text

    name = SET_SUFFIX.sub("", name).strip()
    if not name or quantity <= 0:
        return None
    return quantity, name


class TextDecklistParser:
    """Parses decklists in the common "quantity name" text format."""

    def parse(self, source: str) -> DeckList:
        """
        Parse a decklist file.

        Args:
            source: Path to a text file

        Returns:
            DeckList named after the file

        Raises:
            DeckParseError: File unreadable or contains no cards
        """
        path = Path(source)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise DeckParseError(f"Failed to read {source}: {e}") from e

        deck_list = self.parse_text(content, name=path.stem)
        deck_list.source = DeckSource(SourceKind.TEXT_FILE, str(path))
        return deck_list

    def parse_text(self, content: str, name: str = "Untitled Deck") -> DeckList:
        """Parse decklist text already in memory."""
        deck_list = DeckList(name=name)
        section = Section.MAINBOARD

        for line in content.splitlines():
            text = line.strip()
            if not text or text.startswith("#"):
                continue

            if text.startswith("//") or text.endswith(":"):
                header = parse_section_header(text)
                if header is not None:
                    section = header
                continue

            # MTGO sideboard lines
            if text.upper().startswith("SB:"):
                parsed = parse_card_line(text[3:])
                if parsed:
                    deck_list.add_entry(parsed[0], parsed[1], Section.SIDEBOARD)
                continue

            parsed = parse_card_line(text)
            if parsed:
                deck_list.add_entry(parsed[0], parsed[1], section)

        if not deck_list.entries:
            raise DeckParseError(f"No cards found in {name}")

        logger.info(f"Parsed {len(deck_list.entries)} entries from {name}")
        return deck_list
