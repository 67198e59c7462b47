"""Decklist models produced by parsers and hydrated by the card fetch step."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional

from deck_assistant.models.card import Card


class Section(Enum):
    """Decklist section an entry belongs to."""

    COMMANDER = "commander"
    MAINBOARD = "mainboard"
    SIDEBOARD = "sideboard"
    MAYBEBOARD = "maybeboard"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class SourceKind(Enum):
    TEXT_FILE = "text_file"
    MOXFIELD = "moxfield"
    MANUAL = "manual"


@dataclass
class DeckSource:
    """Where a decklist came from."""

    kind: SourceKind = SourceKind.MANUAL
    location: Optional[str] = None

    def describe(self) -> str:
        if self.kind == SourceKind.TEXT_FILE:
            return f"file {self.location}"
        if self.kind == SourceKind.MOXFIELD:
            return f"Moxfield deck {self.location}"
        return "manual entry"


@dataclass
class DeckEntry:
    """A quantity of one card; card is None until hydrated."""

    quantity: int
    name: str
    section: Section = Section.MAINBOARD
    card: Optional[Card] = None

    @property
    def is_hydrated(self) -> bool:
        return self.card is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "quantity": self.quantity,
            "name": self.name,
            "section": self.section.value,
            "hydrated": self.is_hydrated,
        }


@dataclass
class DeckList:
    """A named, sectioned list of deck entries."""

    name: str = "Untitled Deck"
    format: Optional[str] = None
    entries: list[DeckEntry] = field(default_factory=list)
    source: DeckSource = field(default_factory=DeckSource)
    excludes_lands: bool = False

    def add_entry(
        self,
        quantity: int,
        name: str,
        section: Section = Section.MAINBOARD,
    ) -> DeckEntry:
        entry = DeckEntry(quantity=quantity, name=name, section=section)
        self.entries.append(entry)
        return entry

    def in_section(self, *sections: Section) -> list[DeckEntry]:
        return [e for e in self.entries if e.section in sections]

    def mainboard(self) -> list[DeckEntry]:
        return self.in_section(Section.MAINBOARD)

    def sideboard(self) -> list[DeckEntry]:
        return self.in_section(Section.SIDEBOARD)

    def commanders(self) -> list[DeckEntry]:
        return self.in_section(Section.COMMANDER)

    def playable_cards(self) -> Iterator[tuple[DeckEntry, Card]]:
        """Hydrated commander and mainboard entries with their cards."""
        for entry in self.entries:
            if entry.section in (Section.COMMANDER, Section.MAINBOARD) and entry.card:
                yield entry, entry.card

    def total_cards(self) -> int:
        return sum(e.quantity for e in self.entries)

    def unique_cards(self) -> int:
        """Number of distinct card names across all sections."""
        return len(self.card_names())

    def card_names(self) -> list[str]:
        """Distinct card names, in first-seen order."""
        return list(dict.fromkeys(e.name for e in self.entries))

    def count_lands(self) -> int:
        """Quantity of hydrated land cards in the mainboard."""
        return sum(
            e.quantity for e in self.mainboard() if e.card and e.card.is_land()
        )

    def missing_cards(self) -> list[str]:
        return [e.name for e in self.entries if e.card is None]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "format": self.format,
            "source": self.source.describe(),
            "excludes_lands": self.excludes_lands,
            "total_cards": self.total_cards(),
            "entries": [e.to_dict() for e in self.entries],
        }
