"""Interface contracts between the I/O collaborators and the analysis core.

Protocols describe what a provider, parser, report generator or LLM client
must offer. Contract dataclasses check instances and outputs in tests.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, runtime_checkable

from deck_assistant.models.card import Card
from deck_assistant.models.deck import Deck, ManaBase
from deck_assistant.models.decklist import DeckList
from deck_assistant.models.synergy import SynergyMatrix


# ============================================================================
# Protocol Definitions
# ============================================================================


@runtime_checkable
class CardProvider(Protocol):
    """A source of card data (Scryfall, MTG.io, or a fallback chain)."""

    name: str

    def get_card_by_name(self, name: str, fuzzy: bool = False) -> Card:
        """Look up one card; raises ApiError when not found."""
        ...

    def batch_fetch_cards(
        self,
        names: list[str],
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> dict[str, Card]:
        """Look up many cards; missing names are absent from the result."""
        ...


@runtime_checkable
class DeckListParserProtocol(Protocol):
    """Turns some external representation into a DeckList."""

    def parse(self, source: str) -> DeckList:
        ...


@runtime_checkable
class ReportGeneratorProtocol(Protocol):
    def generate_mana_report(self, deck: Deck, mana_base: ManaBase, algorithm: str = "") -> str:
        ...

    def generate_curve_report(self, analysis) -> str:
        ...

    def generate_synergy_report(self, matrix: SynergyMatrix, llm_analysis=None) -> str:
        ...


@runtime_checkable
class LLMClientProtocol(Protocol):
    enabled: bool

    def analyze_synergies(self, deck_list: DeckList, matrix: SynergyMatrix, report: str):
        """Return an LLMAnalysisResult, or None when disabled or failed."""
        ...


# ============================================================================
# Contract Dataclasses (For Testing & Validation)
# ============================================================================


def _missing_methods(instance: object, methods: list[str]) -> list[str]:
    errors = []
    for method in methods:
        if not hasattr(instance, method):
            errors.append(f"Missing required method: {method}")
        elif not callable(getattr(instance, method)):
            errors.append(f"Method {method} is not callable")
    return errors


@dataclass
class ProviderContract:
    """Contract specification for card providers."""

    required_methods: list[str] = field(
        default_factory=lambda: ["get_card_by_name", "batch_fetch_cards"]
    )

    def validate(self, instance: object) -> tuple[bool, list[str]]:
        """Validate that instance fulfills the contract."""
        errors = _missing_methods(instance, self.required_methods)
        if not isinstance(getattr(instance, "name", None), str):
            errors.append("Provider must expose a display name")
        return len(errors) == 0, errors


@dataclass
class ManaBaseContract:
    """Output contract for mana base calculators."""

    def validate_output(self, deck: Deck, mana_base: ManaBase) -> tuple[bool, str]:
        """Basics must fill exactly the basic land slots, unless there is no demand."""
        if mana_base.is_empty():
            return True, ""
        if any(n <= 0 for n in mana_base.basics.values()):
            return False, f"Non-positive basic count in {mana_base.basics}"
        expected = deck.basic_land_slots()
        actual = mana_base.total_basics()
        if actual != expected:
            return False, f"Basics sum to {actual}, expected {expected}"
        return True, ""


@dataclass
class SynergyContract:
    """Output contract for synergy detection."""

    min_theme_cards: int = 5

    def validate_output(self, matrix: SynergyMatrix) -> tuple[bool, list[str]]:
        """Check theme filtering, edge uniqueness and the orphan/hub partition."""
        errors = []

        for analysis in matrix.detected_themes:
            if analysis.card_count < self.min_theme_cards:
                errors.append(f"Theme below minimum: {analysis.theme.display_name}")

        counts = [a.card_count for a in matrix.detected_themes]
        if counts != sorted(counts, reverse=True):
            errors.append("Themes not sorted by card count")

        keys = [e.key() for e in matrix.synergies]
        if len(keys) != len(set(keys)):
            errors.append("Duplicate synergy edges")

        connected = {name for key in keys for name in key}
        orphans = set(matrix.stats.orphan_cards)
        for name in matrix.card_profiles:
            if (name in orphans) == (name in connected):
                errors.append(f"{name} must be either orphan or connected")

        return len(errors) == 0, errors


@dataclass
class ReportContract:
    """Contract specification for report generation."""

    output_type: type = str
    required_methods: list[str] = field(
        default_factory=lambda: [
            "generate_mana_report",
            "generate_curve_report",
            "generate_synergy_report",
            "save_report",
        ]
    )

    def validate(self, instance: object) -> tuple[bool, list[str]]:
        errors = _missing_methods(instance, self.required_methods)
        return len(errors) == 0, errors


@dataclass
class LLMContract:
    """Contract specification for LLM client implementations."""

    required_methods: list[str] = field(
        default_factory=lambda: ["analyze_synergies"]
    )

    def validate(self, instance: object) -> tuple[bool, list[str]]:
        errors = _missing_methods(instance, self.required_methods)
        if not hasattr(instance, "enabled"):
            errors.append("Missing enabled flag")
        return len(errors) == 0, errors


# ============================================================================
# Contract Registry
# ============================================================================


CONTRACTS = {
    "provider": ProviderContract(),
    "report": ReportContract(),
    "llm": LLMContract(),
}


def validate_all_contracts(modules: dict[str, object]) -> dict[str, tuple[bool, list[str]]]:
    """
    Validate modules against their contracts.

    Args:
        modules: Dict mapping contract name to module instance

    Returns:
        Dict mapping contract name to (is_valid, errors) tuple
    """
    results = {}
    for name, instance in modules.items():
        if name in CONTRACTS:
            results[name] = CONTRACTS[name].validate(instance)
        else:
            results[name] = (False, [f"Unknown contract: {name}"])
    return results
