"""Pip intensity analysis: flags colors with many double-pip cards."""

from dataclasses import dataclass
from typing import Optional

from deck_assistant.models.deck import Color, Deck

HIGH_INTENSITY = 3
VERY_HIGH_INTENSITY = 5


@dataclass
class PipIntensity:
    """Double-pip card count for one color, with an optional warning."""

    color: Color
    intensity: int
    warning: Optional[str] = None


def _warning_for(color: Color, intensity: int) -> Optional[str]:
    name = color.display_name
    if intensity >= VERY_HIGH_INTENSITY:
        return (
            f"{name} has very high pip density ({intensity} cards with double+ "
            f"pips). Strongly consider additional {name.lower()} sources, fetch "
            f"lands, or mana rocks."
        )
    if intensity >= HIGH_INTENSITY:
        return (
            f"{name} has high pip density ({intensity} cards with "
            f"{{{color.symbol}}}{{{color.symbol}}} or more). Consider additional "
            f"{name.lower()} sources or mana rocks."
        )
    return None


def analyze_pip_intensity(deck: Deck) -> list[PipIntensity]:
    """
    Score the pip intensity of each deck color.

    Args:
        deck: Deck with pip_intensity filled in

    Returns:
        One PipIntensity per entry in deck.colors (missing intensity counts
        as 0), highest intensity first
    """
    results = []
    for color in deck.colors:
        intensity = deck.pip_intensity.get(color, 0)
        results.append(PipIntensity(color, intensity, _warning_for(color, intensity)))
    results.sort(key=lambda r: r.intensity, reverse=True)
    return results


def get_intensity_warnings(deck: Deck) -> list[str]:
    """Just the warning strings, highest intensity first."""
    return [r.warning for r in analyze_pip_intensity(deck) if r.warning]
