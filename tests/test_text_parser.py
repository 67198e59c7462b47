"""Tests for the plain-text decklist parser."""

import pytest

from deck_assistant.errors import DeckParseError
from deck_assistant.models.decklist import Section, SourceKind
from deck_assistant.parsers import load_decklist
from deck_assistant.parsers.text_parser import (
    TextDecklistParser,
    parse_card_line,
    parse_section_header,
)

DECKLIST = """// Commander
1 Atraxa, Praetors' Voice

// Mainboard
4x Lightning Bolt
Counterspell x2
1 Sol Ring (C21) 263
Island
# a comment

Sideboard:
2 Negate
SB: 1 Duress
"""


class TestParseCardLine:
    """Test single line parsing."""

    @pytest.mark.parametrize("line,expected", [
        ("4 Lightning Bolt", (4, "Lightning Bolt")),
        ("4x Lightning Bolt", (4, "Lightning Bolt")),
        ("Lightning Bolt x3", (3, "Lightning Bolt")),
        ("Lightning Bolt", (1, "Lightning Bolt")),
        ("1 Sol Ring (C21) 263", (1, "Sol Ring")),
        ("1 Fable of the Mirror-Breaker (NEO) 141 *F*", (1, "Fable of the Mirror-Breaker")),
        ("  2  Negate  ", (2, "Negate")),
    ])
    def test_formats(self, line, expected):
        assert parse_card_line(line) == expected

    @pytest.mark.parametrize("line", ["", "   ", "// Sideboard", "# notes", "0 Negate"])
    def test_ignored_lines(self, line):
        assert parse_card_line(line) is None


class TestParseSectionHeader:
    """Test section header recognition."""

    @pytest.mark.parametrize("line,section", [
        ("// Commander", Section.COMMANDER),
        ("Companion:", Section.COMMANDER),
        ("Deck", Section.MAINBOARD),
        ("// Mainboard", Section.MAINBOARD),
        ("Sideboard:", Section.SIDEBOARD),
        ("// Maybeboard", Section.MAYBEBOARD),
    ])
    def test_headers(self, line, section):
        assert parse_section_header(line) == section

    def test_unknown_header(self):
        assert parse_section_header("// Creatures") is None


class TestTextDecklistParser:
    """Test whole decklist parsing."""

    def test_sections(self):
        deck_list = TextDecklistParser().parse_text(DECKLIST, name="Sample")

        assert [e.name for e in deck_list.commanders()] == ["Atraxa, Praetors' Voice"]
        assert [(e.quantity, e.name) for e in deck_list.mainboard()] == [
            (4, "Lightning Bolt"),
            (2, "Counterspell"),
            (1, "Sol Ring"),
            (1, "Island"),
        ]
        assert [(e.quantity, e.name) for e in deck_list.sideboard()] == [
            (2, "Negate"),
            (1, "Duress"),
        ]
        assert deck_list.total_cards() == 12
        assert deck_list.unique_cards() == 7

    def test_empty_list_raises(self):
        with pytest.raises(DeckParseError):
            TextDecklistParser().parse_text("// nothing here\n\n")

    def test_parse_file(self, tmp_path):
        path = tmp_path / "burn.txt"
        path.write_text("20 Lightning Bolt\n20 Mountain\n", encoding="utf-8")

        deck_list = TextDecklistParser().parse(str(path))

        assert deck_list.name == "burn"
        assert deck_list.source.kind == SourceKind.TEXT_FILE
        assert deck_list.total_cards() == 40

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(DeckParseError) as exc_info:
            TextDecklistParser().parse(str(tmp_path / "missing.txt"))

        assert "missing.txt" in exc_info.value.message

    def test_load_decklist_uses_text_parser_for_files(self, tmp_path):
        path = tmp_path / "elves.txt"
        path.write_text("4 Llanowar Elves\n", encoding="utf-8")

        assert load_decklist(str(path)).mainboard()[0].name == "Llanowar Elves"
