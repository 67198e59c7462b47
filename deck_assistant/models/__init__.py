"""Data models for MTG Deck Assistant."""

from deck_assistant.models.card import Card, CardFace
from deck_assistant.models.curve import (
    CmcBucket,
    ColorPipBreakdown,
    CurveAnalysis,
    CurveStats,
    LandCountSource,
    LandSourceKind,
)
from deck_assistant.models.deck import (
    Algorithm,
    Color,
    Deck,
    DualLand,
    Format,
    ManaBase,
    guild_name,
)
from deck_assistant.models.decklist import (
    DeckEntry,
    DeckList,
    DeckSource,
    Section,
    SourceKind,
)
from deck_assistant.models.synergy import (
    CardSynergyProfile,
    CounterType,
    Keyword,
    KeywordKind,
    SynergyEdge,
    SynergyMatrix,
    SynergyRelation,
    SynergyRole,
    SynergyStats,
    Theme,
    ThemeAnalysis,
    ThemeKind,
)

__all__ = [
    "Card",
    "CardFace",
    "Algorithm",
    "Color",
    "Deck",
    "DualLand",
    "Format",
    "ManaBase",
    "guild_name",
    "DeckEntry",
    "DeckList",
    "DeckSource",
    "Section",
    "SourceKind",
    "CmcBucket",
    "ColorPipBreakdown",
    "CurveAnalysis",
    "CurveStats",
    "LandCountSource",
    "LandSourceKind",
    "CardSynergyProfile",
    "CounterType",
    "Keyword",
    "KeywordKind",
    "SynergyEdge",
    "SynergyMatrix",
    "SynergyRelation",
    "SynergyRole",
    "SynergyStats",
    "Theme",
    "ThemeAnalysis",
    "ThemeKind",
]
