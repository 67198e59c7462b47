"""Synergy detection for MTG Deck Assistant."""

from deck_assistant.synergy.detector import SynergyDetector, analyze_synergies
from deck_assistant.synergy.keywords import (
    COMMON_CREATURE_TYPES,
    KEYWORD_PATTERNS,
    extract_creature_types,
    extract_keywords,
)
from deck_assistant.synergy.roles import ROLE_RULES, RoleRule, classify_card_role
from deck_assistant.synergy.themes import (
    THEME_RULES,
    ThemeMatch,
    ThemeRule,
    detect_card_themes,
    detect_tribal_themes,
)

__all__ = [
    "SynergyDetector",
    "analyze_synergies",
    "COMMON_CREATURE_TYPES",
    "KEYWORD_PATTERNS",
    "extract_creature_types",
    "extract_keywords",
    "ROLE_RULES",
    "RoleRule",
    "classify_card_role",
    "THEME_RULES",
    "ThemeMatch",
    "ThemeRule",
    "detect_card_themes",
    "detect_tribal_themes",
]
