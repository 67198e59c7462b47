"""Mana curve analysis models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from deck_assistant.models.deck import Color, ManaBase


@dataclass
class ColorPipBreakdown:
    """Colored pip totals across a deck; hybrid symbols count 0.5 per side."""

    white: float = 0.0
    blue: float = 0.0
    black: float = 0.0
    red: float = 0.0
    green: float = 0.0
    colorless: float = 0.0

    def get(self, color: Color) -> float:
        return getattr(self, color.display_name.lower())

    def add(self, color: Color, amount: float) -> None:
        attr = color.display_name.lower()
        setattr(self, attr, getattr(self, attr) + amount)

    def total(self) -> float:
        return self.white + self.blue + self.black + self.red + self.green + self.colorless

    def colors(self) -> list[Color]:
        """Colors with a non-zero pip count, excluding colorless."""
        return [c for c in Color.all_colors() if self.get(c) > 0]

    def to_mana_symbols(self) -> dict[Color, float]:
        return {c: self.get(c) for c in self.colors()}

    def to_dict(self) -> dict[str, float]:
        return {c.symbol: self.get(c) for c in Color if self.get(c) > 0}


@dataclass
class CmcBucket:
    """Non-land cards sharing one (rounded) mana value."""

    cmc: int
    total_count: int = 0
    creature_count: int = 0
    non_creature_count: int = 0
    creatures: list[str] = field(default_factory=list)
    non_creatures: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "cmc": self.cmc,
            "total": self.total_count,
            "creatures": self.creature_count,
            "non_creatures": self.non_creature_count,
            "creature_names": self.creatures,
            "non_creature_names": self.non_creatures,
        }


@dataclass
class CurveStats:
    """Descriptive statistics over the non-land mana curve."""

    total_non_land: int = 0
    total_creatures: int = 0
    total_non_creatures: int = 0
    mean_cmc: float = 0.0
    median_cmc: float = 0.0
    mode_cmc: int = 0
    max_cmc: int = 0
    max_bucket_count: int = 0
    cmc_distribution: dict[int, float] = field(default_factory=dict)
    creature_distribution: dict[int, float] = field(default_factory=dict)
    non_creature_distribution: dict[int, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_non_land": self.total_non_land,
            "total_creatures": self.total_creatures,
            "total_non_creatures": self.total_non_creatures,
            "mean_cmc": round(self.mean_cmc, 3),
            "median_cmc": self.median_cmc,
            "mode_cmc": self.mode_cmc,
            "max_cmc": self.max_cmc,
            "cmc_distribution": {str(k): round(v, 4) for k, v in self.cmc_distribution.items()},
            "creature_distribution": {
                str(k): round(v, 4) for k, v in self.creature_distribution.items()
            },
            "non_creature_distribution": {
                str(k): round(v, 4) for k, v in self.non_creature_distribution.items()
            },
        }


class LandSourceKind(Enum):
    USER_PROVIDED = "user"
    DETECTED_FROM_DECK = "detected"
    FORMAT_DEFAULT = "default"


@dataclass
class LandCountSource:
    """Where the target land count came from."""

    kind: LandSourceKind
    detected_count: Optional[int] = None
    format_name: Optional[str] = None

    @classmethod
    def user_provided(cls) -> "LandCountSource":
        return cls(LandSourceKind.USER_PROVIDED)

    @classmethod
    def detected(cls, count: int) -> "LandCountSource":
        return cls(LandSourceKind.DETECTED_FROM_DECK, detected_count=count)

    @classmethod
    def format_default(cls, format_name: str) -> "LandCountSource":
        return cls(LandSourceKind.FORMAT_DEFAULT, format_name=format_name)

    def describe(self) -> str:
        if self.kind == LandSourceKind.USER_PROVIDED:
            return "user-specified"
        if self.kind == LandSourceKind.DETECTED_FROM_DECK:
            return f"detected {self.detected_count} lands in deck"
        return f"{self.format_name} default"


@dataclass
class CurveAnalysis:
    """Result of analyzing a decklist's mana curve."""

    deck_name: str
    buckets: list[CmcBucket] = field(default_factory=list)
    stats: CurveStats = field(default_factory=CurveStats)
    pip_breakdown: ColorPipBreakdown = field(default_factory=ColorPipBreakdown)
    mana_base: Optional[ManaBase] = None
    target_lands: Optional[int] = None
    land_source: Optional[LandCountSource] = None

    def bucket(self, cmc: int) -> Optional[CmcBucket]:
        return next((b for b in self.buckets if b.cmc == cmc), None)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON export."""
        data: dict[str, Any] = {
            "deck_name": self.deck_name,
            "buckets": [b.to_dict() for b in self.buckets],
            "stats": self.stats.to_dict(),
            "pips": self.pip_breakdown.to_dict(),
        }
        if self.mana_base is not None:
            data["mana_base"] = self.mana_base.to_dict()
            data["target_lands"] = self.target_lands
            data["land_source"] = self.land_source.describe() if self.land_source else None
        return data
