"""Tests for enabler/payoff classification."""

import pytest

from deck_assistant.models.synergy import CounterType, SynergyRole, Theme, ThemeKind
from deck_assistant.synergy.roles import RoleRule, classify_card_role, classify_text_role

TOKENS = Theme(ThemeKind.TOKENS)
COUNTERS = Theme.counters(CounterType.PLUS_ONE)


class TestClassifyRole:
    """Test role rules per theme."""

    @pytest.mark.parametrize("text,theme,role", [
        ("create a 1/1 white soldier creature token.", TOKENS, SynergyRole.ENABLER),
        ("creature tokens you control get +1/+1.", TOKENS, SynergyRole.PAYOFF),
        ("put a +1/+1 counter on target creature.", COUNTERS, SynergyRole.ENABLER),
        ("creatures you control with +1/+1 counters have trample.", COUNTERS, SynergyRole.PAYOFF),
        ("mill three cards.", Theme(ThemeKind.GRAVEYARD), SynergyRole.ENABLER),
        ("cast this card from your graveyard.", Theme(ThemeKind.GRAVEYARD), SynergyRole.PAYOFF),
        ("when this creature dies, draw a card.", Theme(ThemeKind.SACRIFICE), SynergyRole.PAYOFF),
        ("you gain 3 life.", Theme(ThemeKind.LIFEGAIN), SynergyRole.ENABLER),
        ("whenever you gain life, scry 1.", Theme(ThemeKind.LIFEGAIN), SynergyRole.ENABLER),
    ])
    def test_rules(self, text, theme, role):
        assert classify_text_role(text, theme) == role

    def test_enabler_checked_before_payoff(self):
        text = "create a 1/1 token for each creature tokens you control."

        assert classify_text_role(text, TOKENS) == SynergyRole.ENABLER

    def test_themes_without_rules_are_support(self):
        assert classify_text_role("destroy target creature.", Theme(ThemeKind.REMOVAL)) == (
            SynergyRole.SUPPORT
        )
        assert classify_text_role("flying", Theme.tribal("Bird")) == SynergyRole.SUPPORT

    def test_unmatched_text_is_support(self):
        assert classify_text_role("draw a card.", TOKENS) == SynergyRole.SUPPORT

    def test_card_text_is_lowercased(self, make_card):
        card = make_card(
            "Dragonmaster Outcast", "Creature — Human Shaman", "{B}", 1.0,
            "At the beginning of your upkeep, if you control six or more lands, "
            "Create a 5/5 red Dragon creature token with flying.",
        )

        assert classify_card_role(card, TOKENS) == SynergyRole.ENABLER


class TestRoleRule:
    """Test rule matching."""

    def test_all_of_and_any_of(self):
        rule = RoleRule(SynergyRole.PAYOFF, all_of=("whenever",), any_of=("dies", "leaves"))

        assert rule.matches("whenever a creature dies")
        assert not rule.matches("whenever a creature attacks")
        assert not rule.matches("when a creature dies")
