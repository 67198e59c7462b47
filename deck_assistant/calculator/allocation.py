"""Proportional basic-land allocation shared by the mana base algorithms."""

import logging
import math

from deck_assistant.models.deck import Color, Deck, ManaBase

logger = logging.getLogger(__name__)


def dual_land_sources(deck: Deck) -> dict[Color, float]:
    """Number of dual-land sources per color."""
    sources: dict[Color, float] = {}
    for dual in deck.dual_lands:
        for color in dual.colors:
            sources[color] = sources.get(color, 0) + dual.count
    return sources


def largest_remainder_round(targets: dict[Color, float], total: int) -> dict[Color, int]:
    """
    Round fractional land counts to integers summing to total.

    Every count is floored, then the shortfall is handed out one land at a
    time by descending fractional part. Equal fractions go to the color
    that sorts first (WUBRGC).

    Args:
        targets: Fractional count per color
        total: Integer total the result must sum to

    Returns:
        Integer count per color (zero counts included)
    """
    floored = {color: math.floor(value) for color, value in targets.items()}
    shortfall = total - sum(floored.values())

    by_remainder = sorted(
        targets,
        key=lambda color: (-(targets[color] - floored[color]), color.sort_order),
    )
    for color in by_remainder[: max(0, shortfall)]:
        floored[color] += 1

    return floored


def allocate_basics(deck: Deck, weights: dict[Color, float]) -> ManaBase:
    """
    Fit per-color demand into the deck's basic land slots.

    Args:
        deck: Deck being built
        weights: Demand weight per deck color

    Returns:
        ManaBase with basics summing to deck.basic_land_slots(), or an
        empty ManaBase when there is no demand at all
    """
    total_weight = sum(weights.values())
    if deck.total_mana_symbols() == 0 or not deck.colors or total_weight <= 0:
        return ManaBase()

    percentages = {color: weight / total_weight for color, weight in weights.items()}
    sources = dual_land_sources(deck)

    remaining = {
        color: max(0.0, pct * deck.target_lands - sources.get(color, 0))
        for color, pct in percentages.items()
    }
    total_remaining = sum(remaining.values())
    basic_slots = deck.basic_land_slots()

    if total_remaining >= basic_slots:
        # Not enough slots: shrink every color's need proportionally
        scale = basic_slots / total_remaining if total_remaining > 0 else 0.0
        targets = {color: need * scale for color, need in remaining.items()}
    else:
        # Spare slots follow the deck's overall color balance
        extras = basic_slots - total_remaining
        targets = {
            color: need + extras * percentages[color]
            for color, need in remaining.items()
        }

    counts = largest_remainder_round(targets, basic_slots)
    logger.debug(f"Basic land targets {targets} rounded to {counts}")

    return ManaBase(
        basics={color: n for color, n in counts.items() if n > 0},
        dual_lands=list(deck.dual_lands),
        color_percentages=percentages,
    )
