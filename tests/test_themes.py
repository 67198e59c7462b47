"""Tests for per-card theme detection and tribal thresholds."""

import pytest

from deck_assistant.models.card import CardFace
from deck_assistant.models.synergy import CounterType, SynergyRole, Theme, ThemeKind
from deck_assistant.synergy.themes import (
    THEME_RULES,
    detect_card_themes,
    detect_tribal_themes,
)


def themes_of(card):
    return {m.theme: m for m in detect_card_themes(card)}


class TestThemeIdentity:
    """Test theme equality and naming."""

    def test_tribal_equality_includes_type(self):
        assert Theme.tribal("Elf") == Theme.tribal("Elf")
        assert Theme.tribal("Elf") != Theme.tribal("Goblin")
        assert len({Theme.tribal("Elf"), Theme.tribal("Elf")}) == 1

    def test_display_names(self):
        assert Theme.counters(CounterType.PLUS_ONE).display_name == "+1/+1 Counters"
        assert Theme.tribal("Elf").display_name == "Elf Tribal"
        assert Theme.custom("Lands Storm").display_name == "Lands Storm"
        assert Theme(ThemeKind.BLINK).display_name == "Blink/Flicker"


class TestDetectCardThemes:
    """Test rule-table and type-line theme detection."""

    def test_token_maker(self, make_card):
        card = make_card(
            "Raise the Alarm", "Instant", "{1}{W}", 2.0,
            "Create two 1/1 white Soldier creature tokens.",
        )

        found = themes_of(card)

        assert Theme(ThemeKind.TOKENS) in found
        assert found[Theme(ThemeKind.TOKENS)].confidence == pytest.approx(2 / 7)

    def test_counters_theme(self, make_card):
        card = make_card(
            "Hardened Scales", "Enchantment", "{G}", 1.0,
            "If one or more +1/+1 counters would be put on a creature you control, "
            "that many plus one +1/+1 counters are put on it instead.",
        )

        assert Theme.counters(CounterType.PLUS_ONE) in themes_of(card)

    def test_vanilla_card_has_no_themes(self, make_card):
        card = make_card("Grizzly Bears", "Creature — Bear", "{1}{G}", 2.0)

        assert detect_card_themes(card) == []

    def test_card_can_match_many_themes(self, make_card):
        card = make_card(
            "Blood Artist", "Creature — Vampire", "{1}{B}", 2.0,
            "Whenever Blood Artist or another creature dies, target player loses "
            "1 life and you gain 1 life.",
        )

        found = themes_of(card)

        assert Theme(ThemeKind.SACRIFICE) in found
        assert Theme(ThemeKind.ARISTOCRATS) in found
        assert Theme(ThemeKind.LIFEGAIN) in found

    def test_equipment_is_support(self, make_card):
        card = make_card(
            "Bonesplitter", "Artifact — Equipment", "{1}", 1.0,
            "Equipped creature gets +2/+0.\nEquip {1}",
        )

        found = themes_of(card)

        assert found[Theme(ThemeKind.EQUIPMENT)].confidence == 1.0
        assert found[Theme(ThemeKind.EQUIPMENT)].role_hint == SynergyRole.SUPPORT
        assert Theme(ThemeKind.VOLTRON) in found
        assert Theme(ThemeKind.ARTIFACTS) not in found

    def test_aura_is_not_enchantment_theme(self, make_card):
        card = make_card(
            "Ethereal Armor", "Enchantment — Aura", "{W}", 1.0,
            "Enchant creature\nEnchanted creature gets +1/+1 for each enchantment you control.",
        )

        found = themes_of(card)

        assert found[Theme(ThemeKind.AURAS)].role_hint == SynergyRole.SUPPORT
        assert Theme(ThemeKind.ENCHANTMENTS) not in found

    def test_artifact_theme_needs_text(self, make_card):
        plain = make_card("Ornithopter", "Artifact Creature — Thopter", "{0}", 0.0, "Flying")
        caring = make_card(
            "Cranial Plating", "Artifact", "{2}", 2.0,
            "Equipped creature gets +1/+0 for each artifact you control.",
        )

        assert Theme(ThemeKind.ARTIFACTS) not in themes_of(plain)
        assert themes_of(caring)[Theme(ThemeKind.ARTIFACTS)].confidence == 0.5

    def test_lands_theme(self, make_card):
        card = make_card(
            "Fabled Passage", "Land", None, 0.0,
            "{T}, Sacrifice Fabled Passage: Search your library for a basic land card, "
            "put it onto the battlefield tapped, then shuffle.",
        )

        found = themes_of(card)

        assert found[Theme(ThemeKind.LANDS)].role_hint is None
        assert Theme(ThemeKind.RAMP) in found

    def test_faces_are_searched(self, make_card):
        card = make_card(
            "Fable of the Mirror-Breaker // Reflection of Kiki-Jiki",
            "Enchantment — Saga // Enchantment Creature — Goblin Shaman",
            card_faces=[
                CardFace("Fable of the Mirror-Breaker", "{2}{R}", "Enchantment — Saga",
                         "I — Create a 2/2 red Goblin Shaman creature token."),
                CardFace("Reflection of Kiki-Jiki", None, "Enchantment Creature — Goblin Shaman",
                         "{1}, {T}: Create a token that's a copy of another target "
                         "nonlegendary creature you control."),
            ],
        )

        assert Theme(ThemeKind.TOKENS) in themes_of(card)

    def test_rules_have_patterns(self):
        for rule in THEME_RULES:
            assert rule.pattern_count > 0
            assert 0.1 <= rule.min_confidence <= 0.15


class TestTribalThemes:
    """Test tribal thresholds."""

    def test_absolute_threshold(self):
        result = detect_tribal_themes({"Elf": 8}, 50)

        assert result == [(Theme.tribal("Elf"), 8, 0.16)]

    def test_below_both_thresholds(self):
        assert detect_tribal_themes({"Goblin": 5}, 40) == []

    def test_relative_threshold(self):
        result = detect_tribal_themes({"Wizard": 3, "Human": 2}, 10)

        assert [t for t, _, _ in result] == [Theme.tribal("Wizard")]

    def test_sorted_by_count(self):
        result = detect_tribal_themes({"Zombie": 9, "Vampire": 12, "Rat": 1}, 30)

        assert [count for _, count, _ in result] == [12, 9]

    def test_no_creatures(self):
        assert detect_tribal_themes({}, 0) == []
