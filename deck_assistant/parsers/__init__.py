"""Decklist parsers for text files and Moxfield."""

from pathlib import Path

from deck_assistant.models.decklist import DeckList
from deck_assistant.parsers.moxfield import (
    MoxfieldClient,
    extract_deck_id,
    is_moxfield_source,
)
from deck_assistant.parsers.text_parser import TextDecklistParser


def load_decklist(source: str) -> DeckList:
    """Load a decklist from a file path or a Moxfield URL."""
    if is_moxfield_source(source) and not Path(source).exists():
        return MoxfieldClient().parse(source)
    return TextDecklistParser().parse(source)


__all__ = [
    "MoxfieldClient",
    "TextDecklistParser",
    "extract_deck_id",
    "is_moxfield_source",
    "load_decklist",
]
