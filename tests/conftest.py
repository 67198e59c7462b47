"""Shared test fixtures."""

import pytest

from deck_assistant.models.card import Card
from deck_assistant.models.decklist import DeckList, Section


def _make_card(
    name: str,
    type_line: str = "Creature — Human",
    mana_cost: str | None = None,
    cmc: float = 0.0,
    oracle_text: str | None = None,
    **kwargs,
) -> Card:
    return Card(
        id=name.lower().replace(" ", "-"),
        name=name,
        mana_cost=mana_cost,
        cmc=cmc,
        type_line=type_line,
        oracle_text=oracle_text,
        **kwargs,
    )


def _build_deck_list(cards, name: str = "Test Deck", fmt: str | None = None) -> DeckList:
    """cards: iterable of (quantity, Card) or (quantity, Card, Section)."""
    deck_list = DeckList(name=name, format=fmt)
    for item in cards:
        quantity, card = item[0], item[1]
        section = item[2] if len(item) > 2 else Section.MAINBOARD
        entry = deck_list.add_entry(quantity, card.name, section)
        entry.card = card
    return deck_list


@pytest.fixture
def make_card():
    return _make_card


@pytest.fixture
def build_deck_list():
    return _build_deck_list
