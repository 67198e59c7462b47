"""Mana base calculation algorithms and pip analysis."""

from deck_assistant.calculator.algorithms import (
    calculate_mana_base,
    calculator_name,
    get_calculator,
)
from deck_assistant.calculator.allocation import allocate_basics, largest_remainder_round
from deck_assistant.calculator.cmc_weighted import calculate_cmc_weighted
from deck_assistant.calculator.pip_analyzer import (
    PipIntensity,
    analyze_pip_intensity,
    get_intensity_warnings,
)
from deck_assistant.calculator.simple import calculate_simple

__all__ = [
    "allocate_basics",
    "largest_remainder_round",
    "calculate_simple",
    "calculate_cmc_weighted",
    "calculate_mana_base",
    "calculator_name",
    "get_calculator",
    "PipIntensity",
    "analyze_pip_intensity",
    "get_intensity_warnings",
]
