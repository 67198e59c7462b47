"""Deck, color and mana base models used by the mana calculator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Color(Enum):
    """Mana colors, in WUBRG display order followed by colorless."""

    WHITE = "W"
    BLUE = "U"
    BLACK = "B"
    RED = "R"
    GREEN = "G"
    COLORLESS = "C"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @property
    def basic_land(self) -> str:
        return _BASIC_LANDS[self]

    @property
    def sort_order(self) -> int:
        return _SORT_ORDER.index(self)

    @classmethod
    def from_string(cls, value: str) -> "Color":
        """Parse color from a letter or a name (case-insensitive)."""
        mapping = {
            "w": cls.WHITE,
            "white": cls.WHITE,
            "u": cls.BLUE,
            "blue": cls.BLUE,
            "b": cls.BLACK,
            "black": cls.BLACK,
            "r": cls.RED,
            "red": cls.RED,
            "g": cls.GREEN,
            "green": cls.GREEN,
            "c": cls.COLORLESS,
            "colorless": cls.COLORLESS,
        }
        key = value.strip().lower()
        if key not in mapping:
            raise ValueError(f"Unknown color: {value}")
        return mapping[key]

    @classmethod
    def all_colors(cls) -> list["Color"]:
        """The five colors, without colorless."""
        return [cls.WHITE, cls.BLUE, cls.BLACK, cls.RED, cls.GREEN]

    def __lt__(self, other: "Color") -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self.sort_order < other.sort_order


_SORT_ORDER = [
    Color.WHITE,
    Color.BLUE,
    Color.BLACK,
    Color.RED,
    Color.GREEN,
    Color.COLORLESS,
]

_BASIC_LANDS = {
    Color.WHITE: "Plains",
    Color.BLUE: "Island",
    Color.BLACK: "Swamp",
    Color.RED: "Mountain",
    Color.GREEN: "Forest",
    Color.COLORLESS: "Wastes",
}

# Guild names keyed by WUBRG-ordered color pair
GUILD_NAMES = {
    (Color.WHITE, Color.BLUE): "Azorius",
    (Color.WHITE, Color.BLACK): "Orzhov",
    (Color.WHITE, Color.RED): "Boros",
    (Color.WHITE, Color.GREEN): "Selesnya",
    (Color.BLUE, Color.BLACK): "Dimir",
    (Color.BLUE, Color.RED): "Izzet",
    (Color.BLUE, Color.GREEN): "Simic",
    (Color.BLACK, Color.RED): "Rakdos",
    (Color.BLACK, Color.GREEN): "Golgari",
    (Color.RED, Color.GREEN): "Gruul",
}


def guild_name(colors: list[Color]) -> Optional[str]:
    """Guild name for a two-color pair, None otherwise."""
    if len(colors) != 2:
        return None
    return GUILD_NAMES.get(tuple(sorted(colors)))


class Format(Enum):
    """Deck formats with their default deck and land sizes."""

    COMMANDER = "commander"
    STANDARD = "standard"
    MODERN = "modern"
    LIMITED = "limited"
    CUSTOM = "custom"

    @property
    def default_total_cards(self) -> int:
        return _FORMAT_PRESETS[self][0]

    @property
    def default_lands(self) -> int:
        return _FORMAT_PRESETS[self][1]

    @property
    def recommended_land_range(self) -> tuple[int, int]:
        return _FORMAT_PRESETS[self][2]

    @property
    def description(self) -> str:
        return _FORMAT_PRESETS[self][3]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_string(cls, value: str) -> "Format":
        """Parse format from string (case-insensitive)."""
        mapping = {
            "commander": cls.COMMANDER,
            "edh": cls.COMMANDER,
            "standard": cls.STANDARD,
            "modern": cls.MODERN,
            "limited": cls.LIMITED,
            "draft": cls.LIMITED,
            "sealed": cls.LIMITED,
            "custom": cls.CUSTOM,
        }
        key = value.strip().lower()
        if key not in mapping:
            raise ValueError(f"Unknown format: {value}")
        return mapping[key]


# total cards, default lands, recommended land range, description
_FORMAT_PRESETS = {
    Format.COMMANDER: (100, 38, (36, 40), "100-card singleton with a commander"),
    Format.STANDARD: (60, 24, (20, 26), "60-card constructed, rotating card pool"),
    Format.MODERN: (60, 24, (20, 26), "60-card constructed, non-rotating card pool"),
    Format.LIMITED: (40, 17, (16, 18), "40-card draft or sealed deck"),
    Format.CUSTOM: (60, 24, (20, 30), "Custom deck size and land count"),
}


@dataclass
class DualLand:
    """A group of lands producing a fixed set of colors."""

    name: str
    colors: list[Color]
    count: int

    def produces(self, color: Color) -> bool:
        return color in self.colors

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "colors": [c.symbol for c in self.colors],
            "count": self.count,
        }


@dataclass
class Deck:
    """
    Mana calculator input.

    mana_symbols holds total pips per color (hybrid counts 0.5 per color);
    pip_intensity holds the number of cards with two or more pips of a color.
    """

    format: Format
    total_cards: int
    target_lands: int
    colors: list[Color] = field(default_factory=list)
    mana_symbols: dict[Color, float] = field(default_factory=dict)
    pip_intensity: dict[Color, int] = field(default_factory=dict)
    dual_lands: list[DualLand] = field(default_factory=list)

    @classmethod
    def for_format(cls, fmt: Format) -> "Deck":
        """Empty deck sized to a format's defaults."""
        return cls(
            format=fmt,
            total_cards=fmt.default_total_cards,
            target_lands=fmt.default_lands,
        )

    def total_mana_symbols(self) -> float:
        return sum(self.mana_symbols.values())

    def dual_land_count(self) -> int:
        return sum(d.count for d in self.dual_lands)

    def basic_land_slots(self) -> int:
        """Land slots left for basics; never negative."""
        return max(0, self.target_lands - self.dual_land_count())


@dataclass
class ManaBase:
    """Recommended basic lands plus the data used to derive them."""

    basics: dict[Color, int] = field(default_factory=dict)
    dual_lands: list[DualLand] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    color_percentages: dict[Color, float] = field(default_factory=dict)

    def total_basics(self) -> int:
        return sum(self.basics.values())

    def total_lands(self) -> int:
        return self.total_basics() + sum(d.count for d in self.dual_lands)

    def is_empty(self) -> bool:
        return not self.basics and not self.color_percentages

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            "basics": {
                c.basic_land: n for c, n in sorted(self.basics.items())
            },
            "basics_by_color": {c.symbol: n for c, n in sorted(self.basics.items())},
            "dual_lands": [d.to_dict() for d in self.dual_lands],
            "color_percentages": {
                c.symbol: round(p, 4)
                for c, p in sorted(self.color_percentages.items())
            },
            "recommendations": self.recommendations,
            "total_basics": self.total_basics(),
            "total_lands": self.total_lands(),
        }


class Algorithm(Enum):
    """Mana base calculation algorithms."""

    SIMPLE = "simple"
    CMC_WEIGHTED = "cmc"
    HYPERGEOMETRIC = "hypergeo"

    @classmethod
    def from_string(cls, value: str) -> "Algorithm":
        """Parse algorithm from string (case-insensitive)."""
        mapping = {
            "simple": cls.SIMPLE,
            "cmc": cls.CMC_WEIGHTED,
            "cmc-weighted": cls.CMC_WEIGHTED,
            "cmc_weighted": cls.CMC_WEIGHTED,
            "weighted": cls.CMC_WEIGHTED,
            "hypergeo": cls.HYPERGEOMETRIC,
            "hypergeometric": cls.HYPERGEOMETRIC,
        }
        key = value.strip().lower()
        if key not in mapping:
            raise ValueError(f"Unknown algorithm: {value}")
        return mapping[key]
