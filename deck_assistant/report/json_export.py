"""JSON export utilities."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


def build_export(kind: str, payload: dict[str, Any], extra: Optional[dict] = None) -> dict:
    """Wrap a to_dict() payload with export metadata."""
    data = {
        "kind": kind,
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        kind: payload,
    }
    if extra:
        data.update(extra)
    return data


def export_json(
    result: Any,
    filepath: str,
    kind: Optional[str] = None,
    extra: Optional[dict] = None,
) -> str:
    """
    Export an analysis result to a JSON file.

    Args:
        result: Any model with to_dict() (ManaBase, CurveAnalysis, SynergyMatrix)
        filepath: Output file path
        kind: Top-level key; defaults to the snake-cased class name
        extra: Additional top-level fields, e.g. LLM analysis

    Returns:
        Path to exported file
    """
    kind = kind or _snake_case(type(result).__name__)
    data = build_export(kind, result.to_dict(), extra)

    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False, default=str)

    logger.info(f"JSON exported to {path}")
    return str(path)


def _snake_case(name: str) -> str:
    out = []
    for i, ch in enumerate(name):
        if ch.isupper() and i > 0:
            out.append("_")
        out.append(ch.lower())
    return "".join(out)
