"""Mana curve analysis over a hydrated decklist."""

import logging
import math
import re
import statistics

from deck_assistant.models.curve import (
    CmcBucket,
    ColorPipBreakdown,
    CurveAnalysis,
    CurveStats,
)
from deck_assistant.models.deck import Color
from deck_assistant.models.decklist import DeckList

logger = logging.getLogger(__name__)

MANA_SYMBOL_PATTERN = re.compile(r"\{([^}]*)\}")
PIP_COLORS = {c.symbol: c for c in Color}


def parse_mana_cost(mana_cost: str | None) -> dict[Color, float]:
    """
    Count colored pips in a mana cost string.

    Plain color symbols count 1.0. Hybrid symbols ({W/U}, {2/W}) count 0.5
    for each color side. Generic, X and other symbols are ignored.

    Args:
        mana_cost: Cost such as "{2}{W}{W}"

    Returns:
        Pip count per color
    """
    pips: dict[Color, float] = {}
    if not mana_cost:
        return pips

    for token in MANA_SYMBOL_PATTERN.findall(mana_cost):
        token = token.upper()
        if "/" in token:
            for part in token.split("/"):
                color = PIP_COLORS.get(part)
                if color:
                    pips[color] = pips.get(color, 0.0) + 0.5
        elif token in PIP_COLORS:
            color = PIP_COLORS[token]
            pips[color] = pips.get(color, 0.0) + 1.0

    return pips


def round_cmc(cmc: float) -> int:
    """Round half up, so 2.5 goes to 3."""
    return int(math.floor(cmc + 0.5))


def _distribution(buckets: list[CmcBucket], attr: str, total: int) -> dict[int, float]:
    if total == 0:
        return {b.cmc: 0.0 for b in buckets}
    return {b.cmc: getattr(b, attr) / total for b in buckets}


class CurveAnalyzer:
    """Buckets non-land cards by mana value and tallies colored pips."""

    def analyze(self, deck_list: DeckList) -> CurveAnalysis:
        """
        Analyze the commander and mainboard curve.

        Unhydrated entries and lands are skipped.

        Args:
            deck_list: Hydrated decklist

        Returns:
            CurveAnalysis with buckets, stats and pip breakdown
        """
        buckets: dict[int, CmcBucket] = {}
        pips = ColorPipBreakdown()
        cmc_values: list[float] = []

        for entry, card in deck_list.playable_cards():
            if card.is_land():
                continue

            qty = entry.quantity
            cmc = round_cmc(card.cmc)
            bucket = buckets.setdefault(cmc, CmcBucket(cmc=cmc))
            bucket.total_count += qty
            if card.is_creature():
                bucket.creature_count += qty
                bucket.creatures.append(card.name)
            else:
                bucket.non_creature_count += qty
                bucket.non_creatures.append(card.name)

            for color, amount in parse_mana_cost(card.mana_cost).items():
                pips.add(color, amount * qty)

            cmc_values.extend([card.cmc] * qty)

        ordered = [buckets[k] for k in sorted(buckets)]
        stats = self._compute_stats(ordered, cmc_values)
        logger.debug(
            f"Curve for {deck_list.name}: {stats.total_non_land} non-land cards, "
            f"mean {stats.mean_cmc:.2f}"
        )

        return CurveAnalysis(
            deck_name=deck_list.name,
            buckets=ordered,
            stats=stats,
            pip_breakdown=pips,
        )

    def _compute_stats(self, buckets: list[CmcBucket], cmc_values: list[float]) -> CurveStats:
        total = sum(b.total_count for b in buckets)
        creatures = sum(b.creature_count for b in buckets)
        non_creatures = sum(b.non_creature_count for b in buckets)

        stats = CurveStats(
            total_non_land=total,
            total_creatures=creatures,
            total_non_creatures=non_creatures,
        )
        if not cmc_values:
            return stats

        stats.mean_cmc = statistics.fmean(cmc_values)
        stats.median_cmc = statistics.median(cmc_values)

        # Lowest mana value wins ties
        stats.mode_cmc = max(buckets, key=lambda b: b.total_count).cmc

        stats.max_cmc = buckets[-1].cmc
        stats.max_bucket_count = max(b.total_count for b in buckets)
        stats.cmc_distribution = _distribution(buckets, "total_count", total)
        stats.creature_distribution = _distribution(buckets, "creature_count", creatures)
        stats.non_creature_distribution = _distribution(
            buckets, "non_creature_count", non_creatures
        )
        return stats


def analyze_curve(deck_list: DeckList) -> CurveAnalysis:
    """Convenience function to analyze a decklist's curve."""
    return CurveAnalyzer().analyze(deck_list)
