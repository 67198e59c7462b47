"""Theme detection rules applied to card text."""

import re
from dataclasses import dataclass
from typing import Optional

from deck_assistant.models.card import Card
from deck_assistant.models.synergy import CounterType, SynergyRole, Theme, ThemeKind

TRIBAL_MIN_COUNT = 8
TRIBAL_MIN_PERCENTAGE = 0.30


@dataclass(frozen=True)
class ThemeRule:
    """Regex patterns whose match ratio decides whether a card has a theme."""

    theme: Theme
    oracle_patterns: tuple[re.Pattern, ...]
    type_patterns: tuple[re.Pattern, ...] = ()
    min_confidence: float = 0.1
    role_hint: Optional[SynergyRole] = None

    @property
    def pattern_count(self) -> int:
        return len(self.oracle_patterns) + len(self.type_patterns)

    def confidence(self, oracle_text: str, type_text: str) -> float:
        """Fraction of this rule's patterns that match."""
        if self.pattern_count == 0:
            return 0.0
        matches = sum(1 for p in self.oracle_patterns if p.search(oracle_text))
        matches += sum(1 for p in self.type_patterns if p.search(type_text))
        return matches / self.pattern_count


@dataclass(frozen=True)
class ThemeMatch:
    theme: Theme
    confidence: float
    role_hint: Optional[SynergyRole] = None


def _compile(*patterns: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


THEME_RULES: tuple[ThemeRule, ...] = (
    ThemeRule(
        Theme(ThemeKind.TOKENS),
        _compile(
            r"create.*token",
            r"token.*enters",
            r"for each.*token",
            r"tokens you control",
            r"creature tokens",
            r"put.*token",
            r"tokens get",
        ),
    ),
    ThemeRule(
        Theme.counters(CounterType.PLUS_ONE),
        _compile(
            r"\+1/\+1 counter",
            r"proliferate",
            r"with.*counters on",
            r"counter on it",
            r"distribute.*counters",
            r"move.*counter",
        ),
    ),
    ThemeRule(
        Theme(ThemeKind.GRAVEYARD),
        _compile(
            r"from your graveyard",
            r"in your graveyard",
            r"return.*from.*graveyard",
            r"cards in your graveyard",
            r"\bflashback\b",
            r"\bunearth\b",
            r"\bescape\b",
            r"\bdelve\b",
            r"exile.*from your graveyard",
        ),
    ),
    ThemeRule(
        Theme(ThemeKind.SACRIFICE),
        _compile(
            r"sacrifice a",
            r"sacrifice another",
            r"when.*dies",
            r"whenever.*dies",
            r"sacrifice.*:",
            r"you may sacrifice",
        ),
    ),
    ThemeRule(
        Theme(ThemeKind.BLINK),
        _compile(
            r"exile.*return.*to the battlefield",
            r"flicker",
            r"exile.*then return",
            r"when.*enters the battlefield",
            r"whenever.*enters the battlefield",
        ),
        min_confidence=0.15,
    ),
    ThemeRule(
        Theme(ThemeKind.RAMP),
        _compile(
            r"search your library for.*land",
            r"add.*mana",
            r"put.*land.*onto the battlefield",
            r"additional land",
        ),
    ),
    ThemeRule(
        Theme(ThemeKind.DRAW),
        _compile(
            r"draw.*card",
            r"draws.*card",
            r"whenever you draw",
            r"for each card you",
        ),
    ),
    ThemeRule(
        Theme(ThemeKind.REMOVAL),
        _compile(
            r"destroy target",
            r"exile target",
            r"deals.*damage to",
            r"target creature gets -",
            r"return target.*to.*owner",
        ),
    ),
    ThemeRule(
        Theme(ThemeKind.LIFEGAIN),
        _compile(
            r"you gain.*life",
            r"gain.*life",
            r"whenever you gain life",
            r"\blifelink\b",
        ),
    ),
    ThemeRule(
        Theme(ThemeKind.DISCARD),
        _compile(
            r"target.*discard",
            r"opponent.*discard",
            r"whenever.*discard",
            r"discard a card",
            r"\bmadness\b",
        ),
    ),
    ThemeRule(
        Theme(ThemeKind.MILL),
        _compile(
            r"mill",
            r"put.*cards from.*library into.*graveyard",
            r"cards in your library",
        ),
    ),
    ThemeRule(
        Theme(ThemeKind.REANIMATOR),
        _compile(
            r"return.*creature.*from.*graveyard.*to the battlefield",
            r"put.*creature.*from.*graveyard onto the battlefield",
            r"reanimate",
        ),
    ),
    ThemeRule(
        Theme(ThemeKind.SPELLSLINGER),
        _compile(
            r"whenever you cast an instant or sorcery",
            r"instant and sorcery",
            r"noncreature spell",
            r"\bstorm\b",
            r"copy.*instant",
            r"copy.*sorcery",
        ),
    ),
    ThemeRule(
        Theme(ThemeKind.ARISTOCRATS),
        _compile(
            r"whenever.*creature.*dies",
            r"whenever another.*dies",
            r"sacrifice.*creature",
        ),
        min_confidence=0.15,
    ),
    ThemeRule(
        Theme(ThemeKind.VOLTRON),
        _compile(
            r"equipped creature",
            r"enchanted creature",
            r"commander deals combat damage",
        ),
        type_patterns=_compile(r"Equipment", r"Aura"),
    ),
)

_EQUIPMENT = re.compile(r"\bEquipment\b", re.IGNORECASE)
_AURA = re.compile(r"\bAura\b", re.IGNORECASE)
_ARTIFACT = re.compile(r"\bArtifact\b", re.IGNORECASE)
_ENCHANTMENT = re.compile(r"\bEnchantment\b", re.IGNORECASE)
_LAND = re.compile(r"\bLand\b", re.IGNORECASE)


def _type_themes(type_text: str, oracle_lower: str) -> list[ThemeMatch]:
    """Themes implied by the card's types rather than the rule table."""
    matches = []
    is_equipment = bool(_EQUIPMENT.search(type_text))
    is_aura = bool(_AURA.search(type_text))

    if is_equipment:
        matches.append(ThemeMatch(Theme(ThemeKind.EQUIPMENT), 1.0, SynergyRole.SUPPORT))
    if is_aura:
        matches.append(ThemeMatch(Theme(ThemeKind.AURAS), 1.0, SynergyRole.SUPPORT))

    # Permanent types only count when the rules text cares about them too
    if _ARTIFACT.search(type_text) and not is_equipment and "artifact" in oracle_lower:
        matches.append(ThemeMatch(Theme(ThemeKind.ARTIFACTS), 0.5))
    if _ENCHANTMENT.search(type_text) and not is_aura and "enchantment" in oracle_lower:
        matches.append(ThemeMatch(Theme(ThemeKind.ENCHANTMENTS), 0.5))
    if _LAND.search(type_text) and "land" in oracle_lower:
        matches.append(ThemeMatch(Theme(ThemeKind.LANDS), 0.5))

    return matches


def detect_card_themes(card: Card) -> list[ThemeMatch]:
    """
    Detect every theme a card supports.

    Rule-table themes are emitted in table order, followed by type-based
    themes. A card may match any number of themes.

    Args:
        card: Card to classify

    Returns:
        ThemeMatch per detected theme
    """
    oracle_text = card.all_oracle_text()
    type_text = card.all_type_lines()

    matches = []
    for rule in THEME_RULES:
        confidence = rule.confidence(oracle_text, type_text)
        if confidence > 0 and confidence >= rule.min_confidence:
            matches.append(ThemeMatch(rule.theme, confidence, rule.role_hint))

    matches.extend(_type_themes(type_text, oracle_text.lower()))
    return matches


def detect_tribal_themes(
    creature_type_counts: dict[str, int],
    total_creatures: int,
) -> list[tuple[Theme, int, float]]:
    """
    Creature types common enough to count as a tribal theme.

    A type qualifies with at least 8 creatures or at least 30% of all
    creatures.

    Returns:
        (theme, count, percentage) tuples, highest count first
    """
    tribal = []
    for creature_type, count in creature_type_counts.items():
        percentage = count / total_creatures if total_creatures > 0 else 0.0
        if count >= TRIBAL_MIN_COUNT or percentage >= TRIBAL_MIN_PERCENTAGE:
            tribal.append((Theme.tribal(creature_type), count, percentage))

    tribal.sort(key=lambda t: t[1], reverse=True)
    return tribal
