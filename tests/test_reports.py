"""Tests for Markdown and JSON report output."""

import json

from deck_assistant.analysis.curve_analyzer import CurveAnalyzer
from deck_assistant.analysis.mana_bridge import attach_mana_base
from deck_assistant.calculator.algorithms import calculate_mana_base
from deck_assistant.contracts import ReportContract, ReportGeneratorProtocol
from deck_assistant.llm.result import LLMAnalysisResult
from deck_assistant.models.deck import Algorithm, Color, Deck, DualLand, Format
from deck_assistant.report.json_export import build_export, export_json
from deck_assistant.report.markdown_gen import MarkdownReportGenerator
from deck_assistant.synergy.detector import SynergyDetector


def izzet_deck():
    return Deck(
        format=Format.STANDARD,
        total_cards=60,
        target_lands=24,
        colors=[Color.BLUE, Color.RED],
        mana_symbols={Color.BLUE: 14, Color.RED: 10},
        pip_intensity={Color.BLUE: 5},
        dual_lands=[DualLand("Steam Vents", [Color.BLUE, Color.RED], 4)],
    )


def token_deck(make_card, build_deck_list):
    text = "Create a 1/1 white Soldier creature token."
    return build_deck_list(
        [(4, make_card(f"Maker {i}", "Sorcery", "{1}{W}", 2.0, text)) for i in range(5)]
        + [(20, make_card("Plains", "Basic Land — Plains", color_identity=["W"]))],
        name="Soldiers",
    )


class TestMarkdownReportGenerator:
    """Test rendered Markdown."""

    def test_mana_report(self, tmp_path):
        deck = izzet_deck()
        mana_base = calculate_mana_base(deck, Algorithm.CMC_WEIGHTED)
        generator = MarkdownReportGenerator(template_dir=str(tmp_path / "none"))

        report = generator.generate_mana_report(deck, mana_base, "CMC-Weighted")

        assert "# Mana Base Recommendation" in report
        assert "**Algorithm**: CMC-Weighted" in report
        assert "x Island" in report
        assert "x Mountain" in report
        assert "4x Steam Vents (U/R)" in report
        assert "**Total Lands**: 24" in report
        assert "very high pip density" in report

    def test_curve_report(self, make_card, build_deck_list, tmp_path):
        deck_list = token_deck(make_card, build_deck_list)
        analysis = CurveAnalyzer().analyze(deck_list)
        attach_mana_base(analysis, deck_list)

        report = MarkdownReportGenerator(str(tmp_path)).generate_curve_report(analysis)

        assert "# Mana Curve: Soldiers" in report
        assert "| 2 | 20 | 0 | 20 | 100.0% |" in report
        assert "**Median CMC**: 2.0" in report
        assert "- White: 20.0" in report
        assert "20x Plains" in report
        assert "detected 20 lands in deck" in report

    def test_synergy_report_with_llm(self, make_card, build_deck_list, tmp_path):
        matrix = SynergyDetector().analyze(token_deck(make_card, build_deck_list))
        llm = LLMAnalysisResult("Add anthems.", "gemini", "gemini-2.5-flash", 100, 20)

        report = MarkdownReportGenerator(str(tmp_path)).generate_synergy_report(matrix, llm)

        assert "**Primary Theme**: Tokens" in report
        assert "### Tokens (5 cards" in report
        assert "- **Enablers**: Maker 0, Maker 1" in report
        assert "| Synergies | 10 |" in report
        assert "## AI Analysis" in report
        assert "Add anthems." in report

    def test_synergy_report_without_themes(self, build_deck_list, tmp_path):
        matrix = SynergyDetector().analyze(build_deck_list([]))

        report = MarkdownReportGenerator(str(tmp_path)).generate_synergy_report(matrix)

        assert "No significant themes detected." in report
        assert "## AI Analysis" not in report

    def test_custom_template_dir(self, tmp_path):
        (tmp_path / "mana_report.md.j2").write_text(
            "Lands: {{ mana_base.total_lands() }}", encoding="utf-8"
        )
        deck = izzet_deck()

        report = MarkdownReportGenerator(str(tmp_path)).generate_mana_report(
            deck, calculate_mana_base(deck)
        )

        assert report == "Lands: 24"

    def test_save_report(self, tmp_path):
        path = tmp_path / "out" / "report.md"

        saved = MarkdownReportGenerator(str(tmp_path)).save_report("# Hi", str(path))

        assert saved == str(path)
        assert path.read_text(encoding="utf-8") == "# Hi"

    def test_report_contract(self, tmp_path):
        generator = MarkdownReportGenerator(str(tmp_path))

        is_valid, errors = ReportContract().validate(generator)

        assert is_valid, errors
        assert isinstance(generator, ReportGeneratorProtocol)


class TestJsonExport:
    """Test JSON export."""

    def test_mana_base_export(self, tmp_path):
        mana_base = calculate_mana_base(izzet_deck())
        path = tmp_path / "mana.json"

        export_json(mana_base, str(path))
        data = json.loads(path.read_text(encoding="utf-8"))

        assert data["kind"] == "mana_base"
        assert data["mana_base"]["total_lands"] == 24
        assert set(data["mana_base"]["basics_by_color"]) == {"U", "R"}

    def test_synergy_export_with_extra(self, make_card, build_deck_list, tmp_path):
        matrix = SynergyDetector().analyze(token_deck(make_card, build_deck_list))
        path = tmp_path / "nested" / "synergy.json"

        export_json(matrix, str(path), extra={"llm_analysis": {"analysis": "ok"}})
        data = json.loads(path.read_text(encoding="utf-8"))

        assert data["kind"] == "synergy_matrix"
        assert data["synergy_matrix"]["stats"]["total_synergies"] == 10
        assert data["llm_analysis"] == {"analysis": "ok"}

    def test_build_export_kind(self):
        data = build_export("curve_analysis", {"deck_name": "x"})

        assert data["curve_analysis"] == {"deck_name": "x"}
        assert "generated_at" in data
