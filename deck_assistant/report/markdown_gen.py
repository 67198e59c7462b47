"""Markdown report generation."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from deck_assistant.calculator.pip_analyzer import analyze_pip_intensity
from deck_assistant.llm.result import LLMAnalysisResult
from deck_assistant.models.curve import CurveAnalysis
from deck_assistant.models.deck import Deck, ManaBase
from deck_assistant.models.synergy import SynergyMatrix

logger = logging.getLogger(__name__)

MANA_TEMPLATE = '''# Mana Base Recommendation

**Generated**: {{ timestamp }}
**Format**: {{ deck.format.display_name }} ({{ deck.total_cards }} cards)
**Target Lands**: {{ deck.target_lands }}
**Algorithm**: {{ algorithm }}

## Color Requirements

| Color | Pips | Double-Pip Cards | Share |
|-------|------|------------------|-------|
{% for color in colors %}
| {{ color.display_name }} | {{ deck.mana_symbols.get(color, 0) | round(1) }} | {{ deck.pip_intensity.get(color, 0) }} | {{ mana_base.color_percentages.get(color, 0) | pct }} |
{% endfor %}

## Basic Lands

{% for color, count in basics %}
- {{ count }}x {{ color.basic_land }}
{% else %}
- No basic lands needed
{% endfor %}
{% if mana_base.dual_lands %}

## Dual Lands

{% for dual in mana_base.dual_lands %}
- {{ dual.count }}x {{ dual.name }} ({{ dual.colors | map(attribute="symbol") | join("/") }})
{% endfor %}
{% endif %}

**Total Lands**: {{ mana_base.total_lands() }}
{% if mana_base.recommendations or warnings %}

## Recommendations

{% for rec in mana_base.recommendations %}
- {{ rec }}
{% endfor %}
{% for warning in warnings %}
- {{ warning }}
{% endfor %}
{% endif %}

---

*Report generated by MTG Deck Assistant*
'''

CURVE_TEMPLATE = '''# Mana Curve: {{ analysis.deck_name }}

**Generated**: {{ timestamp }}
**Non-land Cards**: {{ stats.total_non_land }} ({{ stats.total_creatures }} creatures, {{ stats.total_non_creatures }} non-creatures)

## Curve

| CMC | Cards | Creatures | Non-creatures | Share | |
|-----|-------|-----------|---------------|-------|---|
{% for b in analysis.buckets %}
| {{ b.cmc }} | {{ b.total_count }} | {{ b.creature_count }} | {{ b.non_creature_count }} | {{ stats.cmc_distribution.get(b.cmc, 0) | pct }} | {{ b.total_count | bar(stats.max_bucket_count) }} |
{% endfor %}

## Statistics

- **Mean CMC**: {{ stats.mean_cmc | round(2) }}
- **Median CMC**: {{ stats.median_cmc }}
- **Mode CMC**: {{ stats.mode_cmc }}
- **Highest CMC**: {{ stats.max_cmc }}

## Colored Pips

{% for color, pips in pips %}
- {{ color.display_name }}: {{ pips | round(1) }}
{% else %}
- Colorless deck
{% endfor %}
{% if analysis.mana_base %}

## Suggested Mana Base

**Target Lands**: {{ analysis.target_lands }} ({{ analysis.land_source.describe() }})

{% for color, count in basics %}
- {{ count }}x {{ color.basic_land }}
{% endfor %}
{% for dual in analysis.mana_base.dual_lands %}
- {{ dual.count }}x {{ dual.name }}
{% endfor %}
{% for rec in analysis.mana_base.recommendations %}
- {{ rec }}
{% endfor %}
{% endif %}

---

*Report generated by MTG Deck Assistant*
'''

SYNERGY_TEMPLATE = '''# Synergy Analysis: {{ matrix.deck_name }}

**Generated**: {{ timestamp }}
{% if matrix.deck_format %}
**Format**: {{ matrix.deck_format }}
{% endif %}
**Total Cards**: {{ matrix.total_cards }}
**Primary Theme**: {{ matrix.primary_theme.display_name if matrix.primary_theme else "None detected" }}

## Themes

{% for t in matrix.detected_themes %}
### {{ t.theme.display_name }} ({{ t.card_count }} cards, {{ t.percentage | pct }})

{% if t.enablers %}
- **Enablers**: {{ t.enablers | join(", ") }}
{% endif %}
{% if t.payoffs %}
- **Payoffs**: {{ t.payoffs | join(", ") }}
{% endif %}
{% if t.support %}
- **Support**: {{ t.support | join(", ") }}
{% endif %}

{% else %}
No significant themes detected.

{% endfor %}
## Statistics

| Metric | Value |
|--------|-------|
| Synergies | {{ stats.total_synergies }} |
| Synergy Density | {{ stats.synergy_density | pct }} |
| Theme Coverage | {{ stats.theme_coverage | pct }} |
| Orphan Cards | {{ stats.orphan_cards | length }} |
{% if stats.hub_cards %}

## Hub Cards

{% for name, count in hubs %}
{{ loop.index }}. **{{ name }}** ({{ count }} synergies)
{% endfor %}
{% endif %}
{% if stats.keyword_distribution %}

## Keywords

{% for keyword, count in keywords %}
- {{ keyword }}: {{ count }}
{% endfor %}
{% endif %}
{% if matrix.observations %}

## Observations

{% for obs in matrix.observations %}
- {{ obs }}
{% endfor %}
{% endif %}
{% if llm_analysis %}

## AI Analysis

{{ llm_analysis.full_response }}

*{{ llm_analysis.provider }} / {{ llm_analysis.model }}, {{ llm_analysis.input_tokens }} input + {{ llm_analysis.output_tokens }} output tokens*
{% endif %}

---

*Report generated by MTG Deck Assistant*
'''

DEFAULT_TEMPLATES = {
    "mana_report.md.j2": MANA_TEMPLATE,
    "curve_report.md.j2": CURVE_TEMPLATE,
    "synergy_report.md.j2": SYNERGY_TEMPLATE,
}


def _pct(value: float) -> str:
    return f"{value * 100:.1f}%"


def _bar(value: int, maximum: int, width: int = 20) -> str:
    if maximum <= 0:
        return ""
    return "█" * max(1, round(value / maximum * width)) if value else ""


class MarkdownReportGenerator:
    """Generates Markdown reports for mana bases, curves and synergies."""

    def __init__(self, template_dir: str = "templates"):
        """
        Initialize report generator.

        Args:
            template_dir: Directory with Jinja2 templates overriding the defaults
        """
        self.template_dir = Path(template_dir)

        if self.template_dir.exists():
            self.env = Environment(
                loader=FileSystemLoader(str(self.template_dir)),
                autoescape=False,
                trim_blocks=True,
                lstrip_blocks=True,
            )
        else:
            self.env = Environment(autoescape=False, trim_blocks=True, lstrip_blocks=True)

        self.env.filters["pct"] = _pct
        self.env.filters["bar"] = _bar

    def _get_template(self, name: str) -> str:
        template_path = self.template_dir / name
        if template_path.exists():
            return template_path.read_text(encoding="utf-8")
        logger.debug(f"Template not found at {template_path}, using default")
        return DEFAULT_TEMPLATES[name]

    def _render(self, name: str, **context) -> str:
        template = self.env.from_string(self._get_template(name))
        context.setdefault("timestamp", datetime.now().strftime("%Y-%m-%d %H:%M"))
        return template.render(**context)

    def generate_mana_report(
        self,
        deck: Deck,
        mana_base: ManaBase,
        algorithm: str = "",
    ) -> str:
        """
        Generate a mana base report.

        Args:
            deck: Calculator input
            mana_base: Calculator output
            algorithm: Algorithm display name

        Returns:
            Markdown string
        """
        warnings = [r.warning for r in analyze_pip_intensity(deck) if r.warning]
        return self._render(
            "mana_report.md.j2",
            deck=deck,
            mana_base=mana_base,
            algorithm=algorithm,
            colors=sorted(deck.colors),
            basics=sorted(mana_base.basics.items()),
            warnings=warnings,
        )

    def generate_curve_report(self, analysis: CurveAnalysis) -> str:
        """Generate a mana curve report."""
        basics = sorted(analysis.mana_base.basics.items()) if analysis.mana_base else []
        return self._render(
            "curve_report.md.j2",
            analysis=analysis,
            stats=analysis.stats,
            pips=sorted(analysis.pip_breakdown.to_mana_symbols().items()),
            basics=basics,
        )

    def generate_synergy_report(
        self,
        matrix: SynergyMatrix,
        llm_analysis: Optional[LLMAnalysisResult] = None,
    ) -> str:
        """
        Generate a synergy report.

        Args:
            matrix: Synergy analysis result
            llm_analysis: Optional LLM review to append

        Returns:
            Markdown string
        """
        keywords = sorted(
            matrix.stats.keyword_distribution.items(), key=lambda kv: kv[1], reverse=True
        )
        return self._render(
            "synergy_report.md.j2",
            matrix=matrix,
            stats=matrix.stats,
            keywords=keywords,
            hubs=matrix.hub_edge_counts(),
            llm_analysis=llm_analysis,
        )

    def save_report(self, content: str, filepath: str) -> str:
        """
        Write a report to disk, creating parent directories.

        Returns:
            Path to saved file
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.info(f"Report saved to {path}")
        return str(path)
