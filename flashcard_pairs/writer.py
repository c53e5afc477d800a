from __future__ import annotations

from pathlib import Path
from typing import Any

from .types import Pair, SegmentReport
from .utils import utc_now_iso, write_json


def build_result(
    pairs: list[Pair],
    *,
    name: str,
    description: str = "",
    report: SegmentReport | None = None,
) -> dict[str, Any]:
    """Shape pairs as the set payload the editing UI saves ({name, description, questions})."""
    metrics = report.to_metrics() if report is not None else {"pairs_total": len(pairs)}
    return {
        "name": name,
        "description": description,
        "created_at": utc_now_iso(),
        "format": metrics.get("format"),
        "questions": [p.to_dict() for p in pairs],
        "metrics": metrics,
    }


def write_result(
    path: str | Path,
    pairs: list[Pair],
    *,
    name: str,
    description: str = "",
    report: SegmentReport | None = None,
) -> dict[str, Any]:
    result = build_result(pairs, name=name, description=description, report=report)
    write_json(path, result)
    return result
