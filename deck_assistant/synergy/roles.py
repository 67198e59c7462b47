"""Enabler / payoff classification of a card within a theme."""

from dataclasses import dataclass

from deck_assistant.models.card import Card
from deck_assistant.models.synergy import SynergyRole, Theme, ThemeKind


@dataclass(frozen=True)
class RoleRule:
    """
    Matches when the text contains every phrase in all_of and, if any_of
    is non-empty, at least one phrase from it.
    """

    role: SynergyRole
    all_of: tuple[str, ...] = ()
    any_of: tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        if not all(phrase in text for phrase in self.all_of):
            return False
        return not self.any_of or any(phrase in text for phrase in self.any_of)


# Checked in order; first match wins. Enablers come before payoffs.
ROLE_RULES: dict[ThemeKind, tuple[RoleRule, ...]] = {
    ThemeKind.TOKENS: (
        RoleRule(SynergyRole.ENABLER, all_of=("create", "token")),
        RoleRule(
            SynergyRole.PAYOFF,
            any_of=("tokens you control", "for each", "tokens get"),
        ),
    ),
    ThemeKind.COUNTERS: (
        RoleRule(SynergyRole.ENABLER, all_of=("put", "counter")),
        RoleRule(SynergyRole.PAYOFF, all_of=("with", "counter")),
    ),
    ThemeKind.GRAVEYARD: (
        RoleRule(SynergyRole.ENABLER, any_of=("mill", "discard")),
        RoleRule(
            SynergyRole.PAYOFF,
            any_of=("from your graveyard", "flashback", "escape"),
        ),
    ),
    ThemeKind.SACRIFICE: (
        RoleRule(SynergyRole.ENABLER, all_of=("create", "token")),
        RoleRule(SynergyRole.PAYOFF, all_of=("when", "dies")),
    ),
    ThemeKind.LIFEGAIN: (
        RoleRule(SynergyRole.ENABLER, all_of=("gain", "life")),
        RoleRule(SynergyRole.PAYOFF, any_of=("whenever you gain life",)),
    ),
}


def classify_text_role(text: str, theme: Theme) -> SynergyRole:
    """Role for already-lowercased rules text."""
    for rule in ROLE_RULES.get(theme.kind, ()):
        if rule.matches(text):
            return rule.role
    return SynergyRole.SUPPORT


def classify_card_role(card: Card, theme: Theme) -> SynergyRole:
    """Classify a card as enabler, payoff or support for a theme."""
    return classify_text_role(card.all_oracle_text().lower(), theme)
