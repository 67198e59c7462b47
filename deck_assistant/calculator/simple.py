"""Simple mana base: basics proportional to raw pip counts."""

from deck_assistant.calculator.allocation import allocate_basics
from deck_assistant.models.deck import Deck, ManaBase


def calculate_simple(deck: Deck) -> ManaBase:
    """Weight each color by its pip count and allocate basics."""
    weights = {color: deck.mana_symbols.get(color, 0.0) for color in deck.colors}
    return allocate_basics(deck, weights)
