from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path

from .utils import load_json


@dataclass
class ExportStats:
    questions_seen: int = 0
    questions_exported: int = 0
    questions_invalid: int = 0


def export_csv(*, result_path: str | Path, out_path: str | Path) -> ExportStats:
    """Export a result file's questions to CSV.

    Columns: question, answer. Entries missing either side are skipped and
    counted as invalid. Raises when nothing is exportable.
    """
    out_path = Path(out_path)

    result = load_json(result_path)
    if not isinstance(result, dict):
        raise ValueError("result file must contain a JSON object")
    questions = result.get("questions", [])
    if not isinstance(questions, list):
        raise ValueError("result file field 'questions' must be a list")

    stats = ExportStats()
    rows: list[dict[str, str]] = []
    for q in questions:
        stats.questions_seen += 1
        if not isinstance(q, dict):
            stats.questions_invalid += 1
            continue
        question = str(q.get("question") or "").strip()
        answer = str(q.get("answer") or "").strip()
        if not question or not answer:
            stats.questions_invalid += 1
            continue
        rows.append({"question": question, "answer": answer})

    if not rows:
        raise RuntimeError("No exportable questions (all invalid or empty)")

    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=["question", "answer"])
        writer.writeheader()
        for r in rows:
            writer.writerow(r)
            stats.questions_exported += 1

    return stats
