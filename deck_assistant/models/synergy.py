"""Synergy analysis models: themes, keywords, roles, edges and the matrix."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class CounterType(Enum):
    """Well-known counter kinds; other counters are stored by name."""

    PLUS_ONE = "+1/+1"
    MINUS_ONE = "-1/-1"
    LOYALTY = "loyalty"


class ThemeKind(Enum):
    """Theme variants. Counters, Tribal and Custom carry a detail string."""

    # Mechanical
    TOKENS = "tokens"
    COUNTERS = "counters"
    GRAVEYARD = "graveyard"
    SACRIFICE = "sacrifice"
    BLINK = "blink"
    RAMP = "ramp"
    DRAW = "draw"
    REMOVAL = "removal"
    LIFEGAIN = "lifegain"
    DISCARD = "discard"
    MILL = "mill"
    EQUIPMENT = "equipment"
    AURAS = "auras"
    ARTIFACTS = "artifacts"
    ENCHANTMENTS = "enchantments"
    LANDS = "lands"

    TRIBAL = "tribal"

    # Strategic
    AGGRO = "aggro"
    CONTROL = "control"
    COMBO = "combo"
    MIDRANGE = "midrange"
    STAX = "stax"
    VOLTRON = "voltron"
    SPELLSLINGER = "spellslinger"
    ARISTOCRATS = "aristocrats"
    REANIMATOR = "reanimator"
    STORM = "storm"

    CUSTOM = "custom"


_THEME_NAMES = {
    ThemeKind.TOKENS: "Tokens",
    ThemeKind.GRAVEYARD: "Graveyard",
    ThemeKind.SACRIFICE: "Sacrifice",
    ThemeKind.BLINK: "Blink/Flicker",
    ThemeKind.RAMP: "Ramp",
    ThemeKind.DRAW: "Card Draw",
    ThemeKind.REMOVAL: "Removal",
    ThemeKind.LIFEGAIN: "Lifegain",
    ThemeKind.DISCARD: "Discard",
    ThemeKind.MILL: "Mill",
    ThemeKind.EQUIPMENT: "Equipment",
    ThemeKind.AURAS: "Auras",
    ThemeKind.ARTIFACTS: "Artifacts Matter",
    ThemeKind.ENCHANTMENTS: "Enchantments Matter",
    ThemeKind.LANDS: "Lands Matter",
    ThemeKind.AGGRO: "Aggro",
    ThemeKind.CONTROL: "Control",
    ThemeKind.COMBO: "Combo",
    ThemeKind.MIDRANGE: "Midrange",
    ThemeKind.STAX: "Stax",
    ThemeKind.VOLTRON: "Voltron",
    ThemeKind.SPELLSLINGER: "Spellslinger",
    ThemeKind.ARISTOCRATS: "Aristocrats",
    ThemeKind.REANIMATOR: "Reanimator",
    ThemeKind.STORM: "Storm",
}

_COUNTER_NAMES = {
    CounterType.PLUS_ONE.value: "+1/+1 Counters",
    CounterType.MINUS_ONE.value: "-1/-1 Counters",
    CounterType.LOYALTY.value: "Loyalty Counters",
}


@dataclass(frozen=True)
class Theme:
    """
    A deck theme. Equality and hashing cover kind and detail, so
    Theme.tribal("Elf") == Theme.tribal("Elf") != Theme.tribal("Goblin").
    """

    kind: ThemeKind
    detail: Optional[str] = None

    @classmethod
    def counters(cls, counter: CounterType | str) -> "Theme":
        value = counter.value if isinstance(counter, CounterType) else counter
        return cls(ThemeKind.COUNTERS, value)

    @classmethod
    def tribal(cls, creature_type: str) -> "Theme":
        return cls(ThemeKind.TRIBAL, creature_type)

    @classmethod
    def custom(cls, name: str) -> "Theme":
        return cls(ThemeKind.CUSTOM, name)

    @property
    def is_tribal(self) -> bool:
        return self.kind == ThemeKind.TRIBAL

    @property
    def display_name(self) -> str:
        if self.kind == ThemeKind.COUNTERS:
            return _COUNTER_NAMES.get(self.detail or "", f"{self.detail} Counters")
        if self.kind == ThemeKind.TRIBAL:
            return f"{self.detail} Tribal"
        if self.kind == ThemeKind.CUSTOM:
            return self.detail or ""
        return _THEME_NAMES[self.kind]

    def __str__(self) -> str:
        return self.display_name


class KeywordKind(Enum):
    """Keyword abilities recognized in rules text."""

    FLYING = "Flying"
    TRAMPLE = "Trample"
    HASTE = "Haste"
    VIGILANCE = "Vigilance"
    DEATHTOUCH = "Deathtouch"
    LIFELINK = "Lifelink"
    FIRST_STRIKE = "First Strike"
    DOUBLE_STRIKE = "Double Strike"
    MENACE = "Menace"
    REACH = "Reach"
    FLASH = "Flash"
    HEXPROOF = "Hexproof"
    INDESTRUCTIBLE = "Indestructible"
    DEFENDER = "Defender"
    WARD = "Ward"

    # Set and ability keywords
    FLASHBACK = "Flashback"
    UNEARTH = "Unearth"
    ESCAPE = "Escape"
    DELVE = "Delve"
    CONVOKE = "Convoke"
    CASCADE = "Cascade"
    STORM = "Storm"
    PROLIFERATE = "Proliferate"
    LANDFALL = "Landfall"
    CONSTELLATION = "Constellation"
    DEVOTION = "Devotion"
    ANNIHILATOR = "Annihilator"
    INFECT = "Infect"
    WITHER = "Wither"
    AFFINITY = "Affinity"
    MADNESS = "Madness"
    OVERLOAD = "Overload"
    CREW = "Crew"
    EQUIP = "Equip"
    OTHER = "Other"


@dataclass(frozen=True)
class Keyword:
    """A keyword ability; OTHER carries its text."""

    kind: KeywordKind
    text: Optional[str] = None

    @classmethod
    def other(cls, text: str) -> "Keyword":
        return cls(KeywordKind.OTHER, text)

    @property
    def display_name(self) -> str:
        if self.kind == KeywordKind.OTHER:
            return self.text or ""
        return self.kind.value

    def __str__(self) -> str:
        return self.display_name


class SynergyRole(Enum):
    """A card's function within a theme."""

    ENABLER = "enabler"
    PAYOFF = "payoff"
    SUPPORT = "support"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class SynergyRelation(Enum):
    ENABLES = "enables"
    PAYOFF_FOR = "payoff_for"
    SUPPORTS = "supports"
    COMBOS = "combos"


@dataclass
class CardSynergyProfile:
    """Themes, keywords and dominant role detected for a single card."""

    name: str
    themes: list[Theme] = field(default_factory=list)
    keywords: list[Keyword] = field(default_factory=list)
    role: Optional[SynergyRole] = None
    synergy_score: float = 0.0
    synergies: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "themes": [t.display_name for t in self.themes],
            "keywords": [k.display_name for k in self.keywords],
            "role": self.role.value if self.role else None,
        }


@dataclass
class ThemeAnalysis:
    """A significant theme and the cards supporting it."""

    theme: Theme
    card_count: int
    percentage: float
    enablers: list[str] = field(default_factory=list)
    payoffs: list[str] = field(default_factory=list)
    support: list[str] = field(default_factory=list)

    def all_cards(self) -> list[str]:
        """Enablers, payoffs and support without duplicates."""
        return list(dict.fromkeys(self.enablers + self.payoffs + self.support))

    def to_dict(self) -> dict[str, Any]:
        return {
            "theme": self.theme.display_name,
            "card_count": self.card_count,
            "percentage": round(self.percentage, 4),
            "enablers": self.enablers,
            "payoffs": self.payoffs,
            "support": self.support,
        }


@dataclass
class SynergyEdge:
    """Two cards that share a significant theme."""

    card_a: str
    card_b: str
    relation: SynergyRelation
    themes: list[Theme] = field(default_factory=list)
    strength: float = 0.5
    reason: str = ""

    def key(self) -> tuple[str, str]:
        """Order-independent identity of the card pair."""
        return (self.card_a, self.card_b) if self.card_a < self.card_b else (
            self.card_b,
            self.card_a,
        )

    def touches(self, name: str) -> bool:
        return name in (self.card_a, self.card_b)

    def to_dict(self) -> dict[str, Any]:
        return {
            "card_a": self.card_a,
            "card_b": self.card_b,
            "relation": self.relation.value,
            "themes": [t.display_name for t in self.themes],
            "strength": self.strength,
            "reason": self.reason,
        }


@dataclass
class SynergyStats:
    """Deck-level synergy statistics."""

    total_synergies: int = 0
    synergy_density: float = 0.0
    theme_coverage: float = 0.0
    orphan_cards: list[str] = field(default_factory=list)
    hub_cards: list[str] = field(default_factory=list)
    keyword_distribution: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_synergies": self.total_synergies,
            "synergy_density": round(self.synergy_density, 4),
            "theme_coverage": round(self.theme_coverage, 4),
            "orphan_cards": self.orphan_cards,
            "hub_cards": self.hub_cards,
            "keyword_distribution": self.keyword_distribution,
        }


@dataclass
class SynergyMatrix:
    """Full synergy analysis result for a deck."""

    deck_name: str
    deck_format: Optional[str] = None
    total_cards: int = 0
    detected_themes: list[ThemeAnalysis] = field(default_factory=list)
    primary_theme: Optional[Theme] = None
    card_profiles: dict[str, CardSynergyProfile] = field(default_factory=dict)
    synergies: list[SynergyEdge] = field(default_factory=list)
    stats: SynergyStats = field(default_factory=SynergyStats)
    observations: list[str] = field(default_factory=list)

    def secondary_themes(self) -> list[ThemeAnalysis]:
        return self.detected_themes[1:3]

    def edges_for(self, name: str) -> list[SynergyEdge]:
        return [e for e in self.synergies if e.touches(name)]

    def hub_edge_counts(self) -> list[tuple[str, int]]:
        """Hub card names paired with how many synergies touch each."""
        return [(name, len(self.edges_for(name))) for name in self.stats.hub_cards]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            "deck_name": self.deck_name,
            "format": self.deck_format,
            "total_cards": self.total_cards,
            "primary_theme": self.primary_theme.display_name if self.primary_theme else None,
            "themes": [t.to_dict() for t in self.detected_themes],
            "card_profiles": {n: p.to_dict() for n, p in self.card_profiles.items()},
            "synergies": [e.to_dict() for e in self.synergies],
            "stats": self.stats.to_dict(),
            "observations": self.observations,
        }
