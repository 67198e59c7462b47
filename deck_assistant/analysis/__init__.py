"""Analysis modules for MTG Deck Assistant."""

from deck_assistant.analysis.curve_analyzer import (
    CurveAnalyzer,
    analyze_curve,
    parse_mana_cost,
)
from deck_assistant.analysis.mana_bridge import (
    attach_mana_base,
    build_deck_from_analysis,
    compute_pip_intensity,
    detect_dual_lands,
    detect_format_from_deck,
    determine_land_count,
)

__all__ = [
    "CurveAnalyzer",
    "analyze_curve",
    "parse_mana_cost",
    "attach_mana_base",
    "build_deck_from_analysis",
    "compute_pip_intensity",
    "detect_dual_lands",
    "detect_format_from_deck",
    "determine_land_count",
]
