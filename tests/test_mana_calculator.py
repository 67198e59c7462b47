"""Tests for the mana base calculators."""

import pytest

from deck_assistant.calculator.algorithms import (
    calculate_mana_base,
    calculator_name,
    get_calculator,
)
from deck_assistant.calculator.allocation import dual_land_sources, largest_remainder_round
from deck_assistant.calculator.cmc_weighted import calculate_cmc_weighted
from deck_assistant.calculator.simple import calculate_simple
from deck_assistant.contracts import ManaBaseContract
from deck_assistant.models.deck import Algorithm, Color, Deck, DualLand, Format

W, U, B, R, G = Color.WHITE, Color.BLUE, Color.BLACK, Color.RED, Color.GREEN


def make_deck(symbols, target_lands=24, intensity=None, duals=None, fmt=Format.STANDARD):
    return Deck(
        format=fmt,
        total_cards=fmt.default_total_cards,
        target_lands=target_lands,
        colors=sorted(symbols),
        mana_symbols=dict(symbols),
        pip_intensity=dict(intensity or {}),
        dual_lands=list(duals or []),
    )


class TestSimpleCalculator:
    """Test pip-proportional allocation."""

    def test_mono_color_gets_every_land(self):
        deck = make_deck({R: 18}, target_lands=20)

        mana_base = calculate_simple(deck)

        assert mana_base.basics == {R: 20}
        assert mana_base.color_percentages == {R: 1.0}

    def test_two_color_even_split_with_duals(self):
        deck = make_deck(
            {U: 10, B: 10},
            duals=[DualLand("Watery Grave", [U, B], 4)],
        )

        mana_base = calculate_simple(deck)

        assert mana_base.total_basics() == 20
        assert mana_base.basics[U] == mana_base.basics[B]
        assert mana_base.total_lands() == 24

    def test_dual_saturated_colors_keep_fair_share(self):
        """Spare slots follow overall color balance, not remaining need."""
        deck = make_deck(
            {U: 40, B: 35, R: 25},
            duals=[DualLand("Dimir lands", [U, B], 8)],
        )

        mana_base = calculate_simple(deck)

        assert mana_base.total_basics() == 16
        assert mana_base.basics[R] <= 10
        assert mana_base.basics[U] >= mana_base.basics[B]
        assert mana_base.basics == {U: 5, B: 3, R: 8}

    def test_five_colors_favor_uncovered_colors(self):
        deck = make_deck(
            {W: 10, U: 10, B: 10, R: 10, G: 10},
            duals=[DualLand("Azorius lands", [W, U], 2)],
        )

        mana_base = calculate_simple(deck)

        assert mana_base.total_basics() == 22
        covered = [mana_base.basics.get(c, 0) for c in (W, U)]
        uncovered = [mana_base.basics.get(c, 0) for c in (B, R, G)]
        assert min(uncovered) > max(covered)

    def test_fully_covered_color_keeps_percentage(self):
        deck = make_deck(
            {W: 2, G: 18},
            target_lands=17,
            duals=[DualLand("Selesnya lands", [W, G], 4)],
        )

        mana_base = calculate_simple(deck)

        assert W not in mana_base.basics
        assert mana_base.color_percentages[W] == pytest.approx(0.1)
        assert mana_base.basics[G] == 13

    def test_zero_symbols_gives_empty_mana_base(self):
        deck = make_deck({}, target_lands=17)

        mana_base = calculate_simple(deck)

        assert mana_base.is_empty()
        assert mana_base.basics == {}
        assert mana_base.recommendations == []

    def test_colors_without_symbols_gives_empty_mana_base(self):
        deck = make_deck({U: 0, R: 0})

        assert calculate_simple(deck).is_empty()

    def test_duals_exceeding_target_leave_no_basics(self):
        deck = make_deck(
            {U: 5, R: 5},
            target_lands=4,
            duals=[DualLand("Izzet lands", [U, R], 6)],
        )

        mana_base = calculate_simple(deck)

        assert mana_base.total_basics() == 0
        assert mana_base.basics == {}

    @pytest.mark.parametrize("symbols,target,duals", [
        ({W: 7, U: 3}, 17, []),
        ({B: 11, R: 9, G: 4}, 24, [DualLand("Rakdos lands", [B, R], 3)]),
        ({W: 1, U: 1, B: 1, R: 1, G: 1}, 38, []),
        ({U: 13.5, G: 6.5}, 36, [DualLand("Simic lands", [U, G], 5)]),
        ({W: 3, R: 30}, 23, [DualLand("Boros lands", [W, R], 1)]),
    ])
    def test_basics_fill_every_basic_slot(self, symbols, target, duals):
        """Basics always sum to target lands minus dual lands."""
        deck = make_deck(symbols, target_lands=target, duals=duals)

        mana_base = calculate_simple(deck)

        is_valid, error = ManaBaseContract().validate_output(deck, mana_base)
        assert is_valid, error
        assert mana_base.total_basics() == deck.basic_land_slots()


class TestCmcWeightedCalculator:
    """Test allocation weighted by pip intensity."""

    def test_intensity_tilts_allocation(self):
        deck = make_deck({W: 10, U: 10}, target_lands=17, intensity={W: 6})

        simple = calculate_simple(deck)
        weighted = calculate_cmc_weighted(deck)

        assert weighted.basics[W] > simple.basics[W]
        assert weighted.total_basics() == 17
        assert weighted.color_percentages[W] == pytest.approx(13 / 23)

    def test_recommendations_at_thresholds(self):
        deck = make_deck(
            {W: 10, U: 10, B: 10},
            intensity={W: 5, U: 3, B: 2},
        )

        mana_base = calculate_cmc_weighted(deck)

        assert len(mana_base.recommendations) == 2
        assert "White" in mana_base.recommendations[0]
        assert "5" in mana_base.recommendations[0]
        assert "Blue" in mana_base.recommendations[1]
        assert "3" in mana_base.recommendations[1]

    def test_no_recommendations_for_empty_deck(self):
        deck = make_deck({}, intensity={W: 7})

        mana_base = calculate_cmc_weighted(deck)

        assert mana_base.is_empty()
        assert mana_base.recommendations == []

    def test_matches_simple_without_intensity(self):
        deck = make_deck({B: 12, G: 7}, duals=[DualLand("Golgari lands", [B, G], 2)])

        assert calculate_cmc_weighted(deck).basics == calculate_simple(deck).basics


class TestLargestRemainderRound:
    """Test integer rounding of fractional land counts."""

    def test_sum_is_exact(self):
        targets = {W: 10 / 3, U: 10 / 3, B: 10 / 3}

        counts = largest_remainder_round(targets, 10)

        assert sum(counts.values()) == 10

    def test_equal_remainders_go_to_first_color(self):
        counts = largest_remainder_round({G: 2.5, W: 2.5}, 5)

        assert counts == {G: 2, W: 3}

    def test_largest_remainder_wins(self):
        counts = largest_remainder_round({W: 1.2, U: 2.7, B: 3.1}, 7)

        assert counts == {W: 1, U: 3, B: 3}

    def test_zero_counts_are_kept(self):
        counts = largest_remainder_round({W: 0.0, U: 4.0}, 4)

        assert counts == {W: 0, U: 4}

    @pytest.mark.parametrize("values", [
        [0.1, 0.2, 0.7],
        [5.55, 4.45, 3.0, 2.0],
        [12.333, 7.667],
        [1.125, 1.125, 1.125, 1.125, 11.5],
    ])
    def test_exact_for_various_splits(self, values):
        targets = dict(zip([W, U, B, R, G], values))
        total = round(sum(values))

        counts = largest_remainder_round(targets, total)

        assert sum(counts.values()) == total
        for color, value in targets.items():
            assert counts[color] - value < 1
            assert value - counts[color] < 1


class TestAlgorithmDispatch:
    """Test algorithm selection."""

    def test_hypergeometric_uses_simple(self):
        deck = make_deck({W: 10, B: 10}, intensity={W: 6})

        assert get_calculator(Algorithm.HYPERGEOMETRIC) is calculate_simple
        assert (
            calculate_mana_base(deck, Algorithm.HYPERGEOMETRIC).basics
            == calculate_simple(deck).basics
        )

    def test_default_is_cmc_weighted(self):
        deck = make_deck({W: 10, U: 10}, target_lands=17, intensity={W: 6})

        assert calculate_mana_base(deck).basics == calculate_cmc_weighted(deck).basics

    def test_algorithm_from_string(self):
        assert Algorithm.from_string("Simple") == Algorithm.SIMPLE
        assert Algorithm.from_string("cmc-weighted") == Algorithm.CMC_WEIGHTED
        assert Algorithm.from_string("hypergeometric") == Algorithm.HYPERGEOMETRIC
        with pytest.raises(ValueError):
            Algorithm.from_string("karsten")

    def test_calculator_names(self):
        for algorithm in Algorithm:
            assert calculator_name(algorithm)


class TestDualLandSources:
    """Test dual land source counting."""

    def test_counts_every_produced_color(self):
        deck = make_deck(
            {W: 1, U: 1, B: 1},
            duals=[
                DualLand("Azorius lands", [W, U], 4),
                DualLand("Dimir lands", [U, B], 2),
            ],
        )

        assert dual_land_sources(deck) == {W: 4, U: 6, B: 2}

    def test_basic_slots_never_negative(self):
        deck = make_deck({W: 1}, target_lands=2, duals=[DualLand("x", [W, U], 5)])

        assert deck.basic_land_slots() == 0
