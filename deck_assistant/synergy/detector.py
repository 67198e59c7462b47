"""Deck-level synergy detection: themes, edges, statistics and observations."""

import logging
from collections import Counter

from deck_assistant.models.card import Card
from deck_assistant.models.decklist import DeckList
from deck_assistant.models.synergy import (
    CardSynergyProfile,
    SynergyEdge,
    SynergyMatrix,
    SynergyRelation,
    SynergyRole,
    SynergyStats,
    Theme,
    ThemeAnalysis,
)
from deck_assistant.synergy.keywords import extract_creature_types, extract_keywords
from deck_assistant.synergy.roles import classify_card_role
from deck_assistant.synergy.themes import detect_card_themes, detect_tribal_themes

logger = logging.getLogger(__name__)

DEFAULT_MIN_THEME_CARDS = 5
EDGE_STRENGTH = 0.5
HUB_LIMIT = 5
LOW_DENSITY = 0.1
HIGH_DENSITY = 0.3
LOW_COVERAGE = 0.5
ORPHAN_LIST_LIMIT = 5


class SynergyDetector:
    """Detects themes and card-to-card synergies in a decklist."""

    def __init__(self, min_theme_cards: int = DEFAULT_MIN_THEME_CARDS):
        """
        Initialize detector.

        Args:
            min_theme_cards: Themes with fewer distinct cards are dropped
        """
        self.min_theme_cards = min_theme_cards

    def analyze(self, deck_list: DeckList) -> SynergyMatrix:
        """
        Analyze synergies across the commander and mainboard.

        Unhydrated entries are skipped.

        Args:
            deck_list: Hydrated decklist

        Returns:
            SynergyMatrix with themes sorted by card count
        """
        cards = self._card_lookup(deck_list)
        profiles = self._build_profiles(cards)
        themes = self._aggregate_themes(deck_list, cards, profiles)
        edges = self._build_edges(themes)
        stats = self._calculate_stats(deck_list, profiles, edges)

        matrix = SynergyMatrix(
            deck_name=deck_list.name,
            deck_format=deck_list.format,
            total_cards=deck_list.total_cards(),
            detected_themes=themes,
            primary_theme=themes[0].theme if themes else None,
            card_profiles=profiles,
            synergies=edges,
            stats=stats,
        )
        matrix.observations = self._generate_observations(matrix)

        logger.info(
            f"Synergy analysis of {deck_list.name}: {len(themes)} themes, "
            f"{len(edges)} synergies"
        )
        return matrix

    def _card_lookup(self, deck_list: DeckList) -> dict[str, Card]:
        """First hydrated card for each name, in deck order."""
        cards: dict[str, Card] = {}
        for entry, card in deck_list.playable_cards():
            cards.setdefault(entry.name, card)
        return cards

    def _build_profiles(self, cards: dict[str, Card]) -> dict[str, CardSynergyProfile]:
        profiles = {}
        for name, card in cards.items():
            matches = detect_card_themes(card)
            role = next((m.role_hint for m in matches if m.role_hint), None)
            profiles[name] = CardSynergyProfile(
                name=name,
                themes=[m.theme for m in matches],
                keywords=extract_keywords(card),
                role=role,
            )
        return profiles

    def _aggregate_themes(
        self,
        deck_list: DeckList,
        cards: dict[str, Card],
        profiles: dict[str, CardSynergyProfile],
    ) -> list[ThemeAnalysis]:
        theme_cards: dict[Theme, list[str]] = {}
        for profile in profiles.values():
            for theme in profile.themes:
                theme_cards.setdefault(theme, []).append(profile.name)

        for theme, members in self._tribal_members(deck_list).items():
            theme_cards[theme] = members

        total_cards = deck_list.total_cards()
        analyses = []
        for theme, names in theme_cards.items():
            if len(names) < self.min_theme_cards:
                continue

            analysis = ThemeAnalysis(
                theme=theme,
                card_count=len(names),
                percentage=len(names) / total_cards if total_cards else 0.0,
            )
            for name in names:
                role = classify_card_role(cards[name], theme)
                if role == SynergyRole.ENABLER:
                    analysis.enablers.append(name)
                elif role == SynergyRole.PAYOFF:
                    analysis.payoffs.append(name)
                else:
                    analysis.support.append(name)
            analyses.append(analysis)

        analyses.sort(key=lambda a: a.card_count, reverse=True)
        return analyses

    def _tribal_members(self, deck_list: DeckList) -> dict[Theme, list[str]]:
        """Tribal themes mapped to the creature names carrying that type."""
        type_counts: Counter = Counter()
        total_creatures = 0
        creature_types: dict[str, list[str]] = {}

        for entry, card in deck_list.playable_cards():
            if not card.is_creature():
                continue
            total_creatures += entry.quantity
            types = extract_creature_types(card)
            creature_types.setdefault(entry.name, types)
            for creature_type in types:
                type_counts[creature_type] += entry.quantity

        members = {}
        for theme, count, pct in detect_tribal_themes(dict(type_counts), total_creatures):
            members[theme] = [
                name for name, types in creature_types.items() if theme.detail in types
            ]
            logger.debug(f"Tribal theme {theme.display_name}: {count} creatures ({pct:.0%})")
        return members

    def _build_edges(self, themes: list[ThemeAnalysis]) -> list[SynergyEdge]:
        """One edge per card pair sharing a theme; first theme wins."""
        edges = []
        seen: set[tuple[str, str]] = set()

        for analysis in themes:
            enablers = set(analysis.enablers)
            payoffs = set(analysis.payoffs)
            names = analysis.all_cards()

            for i, card_a in enumerate(names):
                for card_b in names[i + 1:]:
                    edge = SynergyEdge(
                        card_a=card_a,
                        card_b=card_b,
                        relation=SynergyRelation.SUPPORTS,
                        themes=[analysis.theme],
                        strength=EDGE_STRENGTH,
                        reason=f"Both support {analysis.theme.display_name} theme",
                    )
                    if edge.key() in seen:
                        continue
                    seen.add(edge.key())

                    if card_a in enablers and card_b in payoffs:
                        edge.relation = SynergyRelation.ENABLES
                    elif card_a in payoffs and card_b in enablers:
                        edge.relation = SynergyRelation.PAYOFF_FOR
                    edges.append(edge)

        return edges

    def _calculate_stats(
        self,
        deck_list: DeckList,
        profiles: dict[str, CardSynergyProfile],
        edges: list[SynergyEdge],
    ) -> SynergyStats:
        unique = deck_list.unique_cards()
        possible_pairs = unique * (unique - 1) / 2
        themed = sum(1 for p in profiles.values() if p.themes)

        incidence: Counter = Counter()
        for edge in edges:
            incidence[edge.card_a] += 1
            incidence[edge.card_b] += 1

        keyword_counts: Counter = Counter()
        for profile in profiles.values():
            for keyword in profile.keywords:
                keyword_counts[keyword.display_name] += 1

        return SynergyStats(
            total_synergies=len(edges),
            synergy_density=len(edges) / possible_pairs if possible_pairs > 0 else 0.0,
            theme_coverage=themed / unique if unique > 0 else 0.0,
            orphan_cards=[name for name in profiles if name not in incidence],
            hub_cards=[name for name, _ in incidence.most_common(HUB_LIMIT)],
            keyword_distribution=dict(keyword_counts),
        )

    def _generate_observations(self, matrix: SynergyMatrix) -> list[str]:
        observations = []
        themes = matrix.detected_themes
        stats = matrix.stats

        if themes:
            primary = themes[0]
            observations.append(
                f"Primary theme: {primary.theme.display_name} "
                f"({primary.card_count} cards, {primary.percentage * 100:.0f}% of deck)"
            )
            secondary = [t.theme.display_name for t in matrix.secondary_themes()]
            if secondary:
                observations.append(f"Secondary themes: {', '.join(secondary)}")

        if stats.synergy_density < LOW_DENSITY:
            observations.append(
                "Low synergy density. Consider adding more cards that work together."
            )
        elif stats.synergy_density > HIGH_DENSITY:
            observations.append("High synergy density! Cards work well together.")

        if stats.theme_coverage < LOW_COVERAGE:
            observations.append(
                f"{(1 - stats.theme_coverage) * 100:.0f}% of cards don't contribute "
                f"to any detected theme."
            )

        orphans = stats.orphan_cards
        if orphans and len(orphans) <= ORPHAN_LIST_LIMIT:
            observations.append(f"Cards with no detected synergies: {', '.join(orphans)}")
        elif len(orphans) > ORPHAN_LIST_LIMIT:
            observations.append(f"{len(orphans)} cards have no detected synergies.")

        return observations


def analyze_synergies(
    deck_list: DeckList,
    min_theme_cards: int = DEFAULT_MIN_THEME_CARDS,
) -> SynergyMatrix:
    """Convenience function to run synergy detection."""
    return SynergyDetector(min_theme_cards).analyze(deck_list)
