"""Report generation modules."""

from deck_assistant.report.json_export import build_export, export_json
from deck_assistant.report.markdown_gen import MarkdownReportGenerator

__all__ = [
    "MarkdownReportGenerator",
    "build_export",
    "export_json",
]
