"""CMC-weighted mana base: extra weight for colors with heavy pip costs."""

from deck_assistant.calculator.allocation import allocate_basics
from deck_assistant.models.deck import Deck, ManaBase

INTENSITY_WEIGHT = 0.5
HIGH_INTENSITY = 3
VERY_HIGH_INTENSITY = 5


def calculate_cmc_weighted(deck: Deck) -> ManaBase:
    """
    Weight each color by pips plus half its double-pip card count.

    Cards like {W}{W} need more white sources than their raw pip share
    suggests, so the intensity count tilts the allocation toward them.

    Args:
        deck: Deck to build a mana base for

    Returns:
        ManaBase with intensity recommendations appended
    """
    weights = {
        color: deck.mana_symbols.get(color, 0.0)
        + INTENSITY_WEIGHT * deck.pip_intensity.get(color, 0)
        for color in deck.colors
    }
    mana_base = allocate_basics(deck, weights)
    if mana_base.is_empty():
        return mana_base

    for color in deck.colors:
        intensity = deck.pip_intensity.get(color, 0)
        if intensity >= VERY_HIGH_INTENSITY:
            mana_base.recommendations.append(
                f"{color.display_name} has {intensity} cards with double pips or "
                f"more. Run extra {color.display_name.lower()} sources beyond "
                f"basics: fetch lands, fixing duals or mana rocks."
            )
        elif intensity >= HIGH_INTENSITY:
            mana_base.recommendations.append(
                f"{color.display_name} has {intensity} cards with double pips. "
                f"Consider a few additional {color.display_name.lower()} sources."
            )

    return mana_base
