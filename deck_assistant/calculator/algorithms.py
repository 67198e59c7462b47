"""Mana base algorithm dispatch."""

import logging
from typing import Callable

from deck_assistant.calculator.cmc_weighted import calculate_cmc_weighted
from deck_assistant.calculator.simple import calculate_simple
from deck_assistant.models.deck import Algorithm, Deck, ManaBase

logger = logging.getLogger(__name__)

ManaCalculator = Callable[[Deck], ManaBase]

_CALCULATORS: dict[Algorithm, ManaCalculator] = {
    Algorithm.SIMPLE: calculate_simple,
    Algorithm.CMC_WEIGHTED: calculate_cmc_weighted,
}

_NAMES = {
    Algorithm.SIMPLE: "Simple (pip ratio)",
    Algorithm.CMC_WEIGHTED: "CMC-Weighted (pip intensity)",
    Algorithm.HYPERGEOMETRIC: "Hypergeometric",
}


def get_calculator(algorithm: Algorithm) -> ManaCalculator:
    """
    Get the calculation function for an algorithm.

    Hypergeometric is not available yet and uses the simple calculator.
    """
    if algorithm == Algorithm.HYPERGEOMETRIC:
        logger.info("Hypergeometric calculator not available, using simple")
        return calculate_simple
    return _CALCULATORS[algorithm]


def calculator_name(algorithm: Algorithm) -> str:
    return _NAMES[algorithm]


def calculate_mana_base(deck: Deck, algorithm: Algorithm = Algorithm.CMC_WEIGHTED) -> ManaBase:
    """Calculate a mana base with the chosen algorithm."""
    return get_calculator(algorithm)(deck)
