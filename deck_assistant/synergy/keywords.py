"""Keyword and creature type extraction from card text."""

import re

from deck_assistant.models.card import Card
from deck_assistant.models.synergy import Keyword, KeywordKind


def _keyword(pattern: str, kind: KeywordKind) -> tuple[re.Pattern, Keyword]:
    return re.compile(rf"\b{pattern}\b", re.IGNORECASE), Keyword(kind)


KEYWORD_PATTERNS: tuple[tuple[re.Pattern, Keyword], ...] = (
    _keyword("flying", KeywordKind.FLYING),
    _keyword("trample", KeywordKind.TRAMPLE),
    _keyword("haste", KeywordKind.HASTE),
    _keyword("vigilance", KeywordKind.VIGILANCE),
    _keyword("deathtouch", KeywordKind.DEATHTOUCH),
    _keyword("lifelink", KeywordKind.LIFELINK),
    _keyword("first strike", KeywordKind.FIRST_STRIKE),
    _keyword("double strike", KeywordKind.DOUBLE_STRIKE),
    _keyword("menace", KeywordKind.MENACE),
    _keyword("reach", KeywordKind.REACH),
    _keyword("flash", KeywordKind.FLASH),
    _keyword("hexproof", KeywordKind.HEXPROOF),
    _keyword("indestructible", KeywordKind.INDESTRUCTIBLE),
    _keyword("defender", KeywordKind.DEFENDER),
    _keyword("ward", KeywordKind.WARD),
    # Set mechanics
    _keyword("flashback", KeywordKind.FLASHBACK),
    _keyword("unearth", KeywordKind.UNEARTH),
    _keyword("escape", KeywordKind.ESCAPE),
    _keyword("delve", KeywordKind.DELVE),
    _keyword("convoke", KeywordKind.CONVOKE),
    _keyword("cascade", KeywordKind.CASCADE),
    _keyword("storm", KeywordKind.STORM),
    _keyword("proliferate", KeywordKind.PROLIFERATE),
    _keyword("landfall", KeywordKind.LANDFALL),
    _keyword("constellation", KeywordKind.CONSTELLATION),
    _keyword("devotion", KeywordKind.DEVOTION),
    _keyword("annihilator", KeywordKind.ANNIHILATOR),
    _keyword("infect", KeywordKind.INFECT),
    _keyword("wither", KeywordKind.WITHER),
    _keyword("affinity", KeywordKind.AFFINITY),
    _keyword("madness", KeywordKind.MADNESS),
    _keyword("overload", KeywordKind.OVERLOAD),
    _keyword("crew", KeywordKind.CREW),
    _keyword("equip", KeywordKind.EQUIP),
)

COMMON_CREATURE_TYPES: tuple[str, ...] = (
    "Human", "Elf", "Goblin", "Zombie", "Vampire", "Wizard", "Soldier",
    "Knight", "Dragon", "Angel", "Demon", "Beast", "Elemental", "Spirit",
    "Warrior", "Cleric", "Rogue", "Shaman", "Merfolk", "Bird", "Cat",
    "Dinosaur", "Sliver", "Ally", "Eldrazi", "Faerie", "Giant", "Horror",
    "Hydra", "Insect", "Ninja", "Pirate", "Rat", "Samurai", "Serpent",
    "Skeleton", "Spider", "Treefolk", "Werewolf", "Wolf", "Artifact",
)

_CREATURE_TYPE_LOOKUP = {t.lower(): t for t in COMMON_CREATURE_TYPES}
_TYPE_SEPARATOR = re.compile(r"\s+[—–-]\s+")


def extract_keywords(card: Card) -> list[Keyword]:
    """Keywords present anywhere in the card's rules text, each once."""
    text = card.all_oracle_text()
    if not text:
        return []
    return [keyword for pattern, keyword in KEYWORD_PATTERNS if pattern.search(text)]


def extract_creature_types(card: Card) -> list[str]:
    """
    Whitelisted creature types from every creature type line.

    Returns:
        Sorted, de-duplicated type names
    """
    found: set[str] = set()
    lines = [card.type_line] + [f.type_line for f in card.card_faces if f.type_line]
    for type_line in lines:
        if not type_line or "creature" not in type_line.lower():
            continue
        parts = _TYPE_SEPARATOR.split(type_line, maxsplit=1)
        if len(parts) < 2:
            continue
        for word in parts[1].split():
            match = _CREATURE_TYPE_LOOKUP.get(word.lower())
            if match:
                found.add(match)
    return sorted(found)
