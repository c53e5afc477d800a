from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any

from .types import Pair
from .utils import has_alnum, load_json

REJECT_LENGTH = "length"
REJECT_NO_ALNUM = "no_alnum"
REJECT_EQUAL = "equal"
REJECT_SUBSTRING = "substring"


def rejection_reason(pair: Pair, *, min_length: int = 1, max_length: int = 500) -> str | None:
    """Return why a candidate pair is unusable, or None if it is kept.

    Expects trimmed fields.
    """
    q, a = pair.question, pair.answer
    if not (min_length <= len(q) <= max_length) or not (min_length <= len(a) <= max_length):
        return REJECT_LENGTH
    if not has_alnum(q) or not has_alnum(a):
        return REJECT_NO_ALNUM

    ql, al = q.lower(), a.lower()
    if ql == al:
        return REJECT_EQUAL
    # OCR sometimes reads the same word into both columns.
    if ql in al or al in ql:
        return REJECT_SUBSTRING
    return None


def filter_pairs(
    candidates: list[Pair],
    *,
    min_length: int = 1,
    max_length: int = 500,
) -> tuple[list[Pair], dict[str, int]]:
    kept: list[Pair] = []
    rejected: Counter[str] = Counter()
    for c in candidates:
        pair = Pair(c.question.strip(), c.answer.strip())
        reason = rejection_reason(pair, min_length=min_length, max_length=max_length)
        if reason is None:
            kept.append(pair)
        else:
            rejected[reason] += 1
    return kept, dict(rejected)


def _validate_questions(obj: Any, errors: list[str], *, max_length: int) -> int:
    questions = obj.get("questions") if isinstance(obj, dict) else None
    if not isinstance(questions, list):
        errors.append("questions must be a list")
        return 1

    invalid = 0
    for idx, q in enumerate(questions):
        if not isinstance(q, dict):
            errors.append(f"invalid question[{idx}]: not an object")
            invalid += 1
            continue

        bad = False
        for k in ("question", "answer"):
            v = q.get(k)
            if not isinstance(v, str) or not v.strip():
                errors.append(f"invalid question[{idx}]: {k} must be non-empty str")
                bad = True
            elif len(v) > max_length:
                errors.append(f"invalid question[{idx}]: {k} longer than {max_length} chars")
                bad = True

        if not bad and q["question"].strip().lower() == q["answer"].strip().lower():
            errors.append(f"invalid question[{idx}]: question equals answer")
            bad = True

        if bad:
            invalid += 1
    return invalid


def validate_result_file(result_path: str | Path, *, max_length: int = 500) -> tuple[bool, dict[str, Any]]:
    """Check a result file written by the ``segment`` command."""
    errors: list[str] = []
    invalid_questions = 0
    questions_total = 0

    try:
        result = load_json(result_path)
    except Exception as e:
        errors.append(f"failed to read {Path(result_path).name}: {e}")
        result = None

    if result is not None:
        if not isinstance(result, dict):
            errors.append("result must be an object")
        else:
            name = result.get("name")
            if not isinstance(name, str) or not name.strip():
                errors.append("name must be non-empty str")
            if not isinstance(result.get("description", ""), str):
                errors.append("description must be str")
            invalid_questions = _validate_questions(result, errors, max_length=max_length)
            if isinstance(result.get("questions"), list):
                questions_total = len(result["questions"])

    summary: dict[str, Any] = {
        "questions_total": questions_total,
        "invalid_questions": invalid_questions,
        "errors": errors,
    }
    return not errors, summary
