"""Build mana calculator input from a hydrated decklist."""

import logging
from typing import Optional

from deck_assistant.analysis.curve_analyzer import parse_mana_cost
from deck_assistant.calculator.algorithms import calculate_mana_base
from deck_assistant.models.curve import ColorPipBreakdown, CurveAnalysis, LandCountSource
from deck_assistant.models.deck import Algorithm, Color, Deck, DualLand, Format, guild_name
from deck_assistant.models.decklist import DeckList

logger = logging.getLogger(__name__)

_LAND_COLOR_SYMBOLS = {"W", "U", "B", "R", "G"}


def determine_land_count(
    deck_list: DeckList,
    user_lands: Optional[int],
    fmt: Format,
) -> tuple[int, LandCountSource]:
    """
    Pick the target land count.

    Priority: explicit user value, lands already in the deck (unless the
    list omits lands on purpose), then the format default.
    """
    if user_lands is not None:
        return user_lands, LandCountSource.user_provided()

    if not deck_list.excludes_lands:
        detected = deck_list.count_lands()
        if detected > 0:
            return detected, LandCountSource.detected(detected)

    return fmt.default_lands, LandCountSource.format_default(fmt.display_name)


def detect_format_from_deck(deck_list: DeckList) -> Format:
    """Guess the format from the declared format string, then deck size."""
    if deck_list.format:
        declared = deck_list.format.lower()
        if "commander" in declared or "edh" in declared:
            return Format.COMMANDER
        if "standard" in declared:
            return Format.STANDARD
        if "modern" in declared:
            return Format.MODERN
        if any(word in declared for word in ("limited", "draft", "sealed")):
            return Format.LIMITED

    total = deck_list.total_cards()
    if deck_list.commanders() or total >= 99:
        return Format.COMMANDER
    if total <= 45:
        return Format.LIMITED
    return Format.STANDARD


def _dual_group_name(colors: list[Color]) -> str:
    guild = guild_name(colors)
    if guild:
        return f"{guild} lands"
    symbols = "/".join(c.symbol for c in colors)
    if len(colors) == 2:
        return f"{symbols} lands"
    return f"{symbols}-color lands"


def detect_dual_lands(deck_list: DeckList) -> list[DualLand]:
    """
    Group mainboard multicolor lands by the colors they produce.

    Color identity stands in for produced colors.
    """
    groups: dict[tuple[Color, ...], int] = {}
    for entry in deck_list.mainboard():
        card = entry.card
        if card is None or not card.is_land():
            continue
        colors = sorted(
            Color.from_string(c)
            for c in card.color_identity
            if c.upper() in _LAND_COLOR_SYMBOLS
        )
        if len(colors) < 2:
            continue
        key = tuple(colors)
        groups[key] = groups.get(key, 0) + entry.quantity

    return [
        DualLand(name=_dual_group_name(list(colors)), colors=list(colors), count=count)
        for colors, count in sorted(groups.items())
    ]


def compute_pip_intensity(deck_list: DeckList) -> dict[Color, int]:
    """Quantity-weighted count of non-land cards with 2+ pips of each color."""
    intensity: dict[Color, int] = {}
    for entry, card in deck_list.playable_cards():
        if card.is_land():
            continue
        for color, pips in parse_mana_cost(card.mana_cost).items():
            if color != Color.COLORLESS and pips >= 2:
                intensity[color] = intensity.get(color, 0) + entry.quantity
    return intensity


def build_deck_from_analysis(
    deck_list: DeckList,
    pip_breakdown: ColorPipBreakdown,
    fmt: Format,
    target_lands: int,
) -> Deck:
    """Assemble a calculator Deck from curve analysis results."""
    colors = pip_breakdown.colors()
    return Deck(
        format=fmt,
        total_cards=deck_list.total_cards(),
        target_lands=target_lands,
        colors=colors,
        mana_symbols=pip_breakdown.to_mana_symbols(),
        pip_intensity=compute_pip_intensity(deck_list),
        dual_lands=detect_dual_lands(deck_list),
    )


def attach_mana_base(
    analysis: CurveAnalysis,
    deck_list: DeckList,
    user_lands: Optional[int] = None,
    algorithm: Algorithm = Algorithm.CMC_WEIGHTED,
    fmt: Optional[Format] = None,
) -> Deck:
    """
    Calculate a mana base for an analyzed decklist and store it on the analysis.

    Args:
        analysis: Curve analysis of deck_list
        deck_list: The hydrated decklist
        user_lands: Explicit target land count, if given
        algorithm: Mana base algorithm
        fmt: Format override; detected from the deck when omitted

    Returns:
        The Deck fed to the calculator
    """
    fmt = fmt or detect_format_from_deck(deck_list)
    target_lands, source = determine_land_count(deck_list, user_lands, fmt)
    deck = build_deck_from_analysis(deck_list, analysis.pip_breakdown, fmt, target_lands)

    logger.info(
        f"Calculating mana base for {deck_list.name}: {target_lands} lands "
        f"({source.describe()}), {len(deck.dual_lands)} dual land groups"
    )
    analysis.mana_base = calculate_mana_base(deck, algorithm)
    analysis.target_lands = target_lands
    analysis.land_source = source
    return deck
