"""Prompt building for LLM synergy analysis."""

from enum import Enum
from typing import Optional

from deck_assistant.models.decklist import DeckEntry, DeckList, Section
from deck_assistant.models.synergy import SynergyMatrix


SYSTEM_PROMPT = """You are an experienced Magic: The Gathering deck builder.
You review decklists together with an automated synergy analysis and give
concrete, card-specific advice. Only recommend real cards. Be direct and
prioritize the changes with the largest impact. Answer in plain Markdown."""


SYNERGY_ANALYSIS_PROMPT = '''Review this {format_name} deck and its automated synergy analysis.

## Deck

**Name**: {deck_name}
**Card Count**: {total_cards} cards
**Primary Theme**: {primary_theme}

{format_guidance}

## Strongest Detected Synergies
{synergy_edges}

## Automated Report
{report}

## Decklist
{deck_list}

---

Please provide:

1. **Game Plan**: How does this deck want to win? Is the detected primary theme the real plan?

2. **Key Synergies**: Which card interactions matter most, including any the regex-based detector missed?

3. **Weak Links**: Which cards contribute least to the plan? List up to 5 with a reason each.

4. **Suggested Additions**: Up to 5 cards that would strengthen the main theme, with a one-line reason each.

5. **Mana and Curve**: Anything about the curve or color requirements that needs attention?
'''


COMMANDER_GUIDANCE = """This is a COMMANDER deck (100-card singleton). Judge it as a
multiplayer deck: value the commander's interactions, card advantage, ramp,
and interaction that scales across several opponents. {commander_note}"""

CONSTRUCTED_GUIDANCE = """This is a 60-card CONSTRUCTED deck. Judge it on consistency
and speed: redundancy of key effects via 4-ofs, an efficient curve, and a
plan for the format's common threats."""

LIMITED_GUIDANCE = """This is a LIMITED deck (draft or sealed). Judge it on curve,
creature count, removal and playable synergies available at common and
uncommon. Do not suggest cards outside a typical draft pool."""

UNKNOWN_GUIDANCE = """The format is unclear. Give general advice on consistency,
synergy and mana, and say which format the list appears to target."""

EXCLUDED_LANDS_NOTE = (
    "NOTE: This decklist intentionally excludes basic lands. Do NOT suggest "
    "adding basic lands or flag the deck as incomplete."
)


class DeckFormat(Enum):
    """Coarse format buckets used to tailor the prompt."""

    COMMANDER = "Commander"
    CONSTRUCTED_60 = "Constructed (60-card)"
    LIMITED = "Limited"
    UNKNOWN = "Unknown Format"


def detect_format(deck_list: DeckList) -> DeckFormat:
    """Format from the declared format string, else from deck structure."""
    if deck_list.format:
        declared = deck_list.format.lower()
        if "commander" in declared or "edh" in declared:
            return DeckFormat.COMMANDER
        if any(w in declared for w in ("limited", "draft", "sealed")):
            return DeckFormat.LIMITED
        if any(
            w in declared
            for w in ("standard", "modern", "pioneer", "legacy", "vintage", "pauper")
        ):
            return DeckFormat.CONSTRUCTED_60

    total = deck_list.total_cards()
    if deck_list.commanders():
        return DeckFormat.COMMANDER
    if total >= 95 and deck_list.unique_cards() >= 90:
        return DeckFormat.COMMANDER
    if total <= 45:
        return DeckFormat.LIMITED
    if 55 <= total <= 80:
        return DeckFormat.CONSTRUCTED_60
    return DeckFormat.UNKNOWN


def format_card_condensed(entry: DeckEntry) -> str:
    """One line per entry: quantity, name, cost, type and rules text."""
    prefix = f"- {entry.name}" if entry.section == Section.COMMANDER else (
        f"{entry.quantity}x {entry.name}"
    )
    card = entry.card
    if card is None:
        return prefix

    cost = card.mana_cost or "Land"
    pt = f" | {card.power}/{card.toughness}" if card.power is not None else ""
    oracle = card.all_oracle_text().replace("\n", " ")

    line = f"{prefix} {{{cost}}} | {card.type_line}{pt}"
    return f"{line} | {oracle}" if oracle else line


class PromptBuilder:
    """Builds prompts for LLM synergy analysis."""

    def __init__(
        self,
        synergy_template: Optional[str] = None,
        system_prompt: Optional[str] = None,
        edge_limit: int = 15,
    ):
        """
        Initialize prompt builder.

        Args:
            synergy_template: Custom synergy analysis template
            system_prompt: Custom system prompt
            edge_limit: Number of synergy edges to include
        """
        self.synergy_template = synergy_template or SYNERGY_ANALYSIS_PROMPT
        self.system_prompt = system_prompt or SYSTEM_PROMPT
        self.edge_limit = edge_limit

    def format_guidance(self, fmt: DeckFormat, deck_list: DeckList) -> str:
        if fmt == DeckFormat.COMMANDER:
            commanders = ", ".join(e.name for e in deck_list.commanders())
            note = f"The commander is {commanders}." if commanders else ""
            return COMMANDER_GUIDANCE.format(commander_note=note)
        if fmt == DeckFormat.CONSTRUCTED_60:
            return CONSTRUCTED_GUIDANCE
        if fmt == DeckFormat.LIMITED:
            return LIMITED_GUIDANCE
        return UNKNOWN_GUIDANCE

    def format_synergy_edges(self, matrix: SynergyMatrix) -> str:
        edges = matrix.synergies[: self.edge_limit]
        if not edges:
            return "No synergies detected."
        return "\n".join(
            f"- {e.card_a} + {e.card_b} ({e.relation.value}): {e.reason}"
            for e in edges
        )

    def format_deck_list(self, deck_list: DeckList) -> str:
        lines = []
        if deck_list.excludes_lands:
            lines.extend([EXCLUDED_LANDS_NOTE, ""])

        commanders = deck_list.commanders()
        if commanders:
            lines.append("COMMANDER:")
            lines.extend(format_card_condensed(e) for e in commanders)
            lines.append("")

        lines.append("MAINBOARD:")
        lines.extend(format_card_condensed(e) for e in deck_list.mainboard())

        sideboard = deck_list.sideboard()
        if sideboard:
            lines.extend(["", "SIDEBOARD:"])
            lines.extend(format_card_condensed(e) for e in sideboard)

        return "\n".join(lines)

    def build_synergy_prompt(
        self,
        deck_list: DeckList,
        matrix: SynergyMatrix,
        report: str,
    ) -> str:
        """Build the synergy analysis prompt."""
        fmt = detect_format(deck_list)
        primary = matrix.primary_theme.display_name if matrix.primary_theme else "None detected"

        return self.synergy_template.format(
            format_name=fmt.value,
            deck_name=deck_list.name,
            total_cards=deck_list.total_cards(),
            primary_theme=primary,
            format_guidance=self.format_guidance(fmt, deck_list),
            synergy_edges=self.format_synergy_edges(matrix),
            report=report,
            deck_list=self.format_deck_list(deck_list),
        )


def build_synergy_prompt(deck_list: DeckList, matrix: SynergyMatrix, report: str) -> str:
    """Convenience function to build the synergy prompt."""
    return PromptBuilder().build_synergy_prompt(deck_list, matrix, report)
