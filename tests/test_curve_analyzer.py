"""Tests for mana curve analysis."""

import pytest

from deck_assistant.analysis.curve_analyzer import (
    CurveAnalyzer,
    analyze_curve,
    parse_mana_cost,
    round_cmc,
)
from deck_assistant.models.deck import Color
from deck_assistant.models.decklist import Section


class TestParseManaCost:
    """Test colored pip counting."""

    def test_plain_pips(self):
        assert parse_mana_cost("{1}{W}{W}") == {Color.WHITE: 2.0}

    def test_hybrid_pips_split(self):
        assert parse_mana_cost("{W/U}") == {Color.WHITE: 0.5, Color.BLUE: 0.5}

    def test_two_generic_hybrid(self):
        assert parse_mana_cost("{2/R}{G}") == {Color.RED: 0.5, Color.GREEN: 1.0}

    def test_colorless_pip(self):
        assert parse_mana_cost("{C}{C}") == {Color.COLORLESS: 2.0}

    def test_generic_and_x_ignored(self):
        assert parse_mana_cost("{X}{X}{3}") == {}

    @pytest.mark.parametrize("cost", [None, ""])
    def test_missing_cost(self, cost):
        assert parse_mana_cost(cost) == {}


class TestRoundCmc:
    """Test mana value rounding."""

    @pytest.mark.parametrize("cmc,expected", [
        (0.0, 0),
        (0.5, 1),
        (2.5, 3),
        (3.49, 3),
        (7.0, 7),
    ])
    def test_rounds_half_up(self, cmc, expected):
        assert round_cmc(cmc) == expected


class TestCurveAnalyzer:
    """Test bucketing, statistics and pip totals."""

    def test_lands_are_excluded(self, make_card, build_deck_list):
        deck_list = build_deck_list([
            (4, make_card("Grizzly Bears", "Creature — Bear", "{1}{G}", 2.0)),
            (10, make_card("Forest", "Basic Land — Forest")),
            (1, make_card("Dryad Arbor", "Land Creature — Forest Dryad", None, 0.0)),
            (4, make_card("Urza's Saga", "Enchantment Land — Urza's Saga")),
        ])

        analysis = CurveAnalyzer().analyze(deck_list)

        assert [b.cmc for b in analysis.buckets] == [2]
        assert analysis.stats.total_non_land == 4
        assert analysis.stats.mean_cmc == pytest.approx(2.0)

    def test_buckets_split_creatures(self, make_card, build_deck_list):
        deck_list = build_deck_list([
            (4, make_card("Llanowar Elves", "Creature — Elf Druid", "{G}", 1.0)),
            (2, make_card("Giant Growth", "Instant", "{G}", 1.0)),
            (3, make_card("Troll", "Creature — Troll", "{3}{G}", 4.0)),
        ])

        analysis = CurveAnalyzer().analyze(deck_list)
        one = analysis.bucket(1)

        assert one.total_count == 6
        assert one.creature_count == 4
        assert one.non_creature_count == 2
        assert one.creatures == ["Llanowar Elves"]
        assert one.non_creatures == ["Giant Growth"]
        assert analysis.bucket(2) is None
        assert analysis.stats.total_creatures == 7
        assert analysis.stats.max_cmc == 4

    def test_pips_weighted_by_quantity(self, make_card, build_deck_list):
        deck_list = build_deck_list([
            (2, make_card("Benalish Marshal", "Creature — Human Knight", "{1}{W}{W}", 3.0)),
            (1, make_card("Azorius Charm", "Instant", "{W/U}", 1.0)),
        ])

        pips = CurveAnalyzer().analyze(deck_list).pip_breakdown

        assert pips.white == pytest.approx(4.5)
        assert pips.blue == pytest.approx(0.5)
        assert pips.colors() == [Color.WHITE, Color.BLUE]

    def test_median_even_count(self, make_card, build_deck_list):
        deck_list = build_deck_list([
            (1, make_card(f"Spell {n}", "Sorcery", None, float(n))) for n in (1, 2, 3, 4)
        ])

        stats = analyze_curve(deck_list).stats

        assert stats.median_cmc == 2.5
        assert stats.mean_cmc == pytest.approx(2.5)

    def test_median_odd_count(self, make_card, build_deck_list):
        deck_list = build_deck_list([
            (1, make_card(f"Spell {n}", "Sorcery", None, float(n))) for n in (1, 2, 3)
        ])

        assert analyze_curve(deck_list).stats.median_cmc == 2

    def test_mode_prefers_lowest_on_tie(self, make_card, build_deck_list):
        deck_list = build_deck_list([
            (3, make_card("Two Drop", "Creature — Bear", None, 2.0)),
            (3, make_card("One Drop", "Creature — Elf", None, 1.0)),
            (1, make_card("Five Drop", "Creature — Dragon", None, 5.0)),
        ])

        assert analyze_curve(deck_list).stats.mode_cmc == 1

    def test_distributions_guard_zero_denominators(self, make_card, build_deck_list):
        deck_list = build_deck_list([
            (4, make_card("Shock", "Instant", "{R}", 1.0)),
        ])

        stats = analyze_curve(deck_list).stats

        assert stats.cmc_distribution == {1: 1.0}
        assert stats.non_creature_distribution == {1: 1.0}
        assert stats.creature_distribution == {1: 0.0}

    def test_empty_deck(self, build_deck_list):
        analysis = analyze_curve(build_deck_list([]))

        assert analysis.buckets == []
        assert analysis.stats.mean_cmc == 0.0
        assert analysis.stats.median_cmc == 0.0
        assert analysis.pip_breakdown.total() == 0.0

    def test_unhydrated_and_sideboard_entries_skipped(self, make_card, build_deck_list):
        deck_list = build_deck_list([
            (4, make_card("Lightning Bolt", "Instant", "{R}", 1.0)),
            (2, make_card("Duress", "Sorcery", "{B}", 1.0), Section.SIDEBOARD),
        ])
        deck_list.add_entry(4, "Unknown Card")

        analysis = analyze_curve(deck_list)

        assert analysis.stats.total_non_land == 4
        assert analysis.pip_breakdown.black == 0.0

    def test_commander_is_counted(self, make_card, build_deck_list):
        deck_list = build_deck_list([
            (1, make_card("Atraxa", "Legendary Creature — Phyrexian Angel Horror",
                          "{G}{W}{U}{B}", 4.0), Section.COMMANDER),
        ])

        analysis = analyze_curve(deck_list)

        assert analysis.bucket(4).creature_count == 1
        assert analysis.pip_breakdown.total() == 4.0

    def test_fractional_cmc_rounds_into_bucket(self, make_card, build_deck_list):
        deck_list = build_deck_list([
            (1, make_card("Little Girl", "Creature — Human", "{HW}", 0.5)),
        ])

        analysis = analyze_curve(deck_list)

        assert [b.cmc for b in analysis.buckets] == [1]
        assert analysis.stats.mean_cmc == pytest.approx(0.5)
