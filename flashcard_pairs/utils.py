from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def write_json(path: str | Path, data: Any) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def load_json(path: str | Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def read_text(path: str | Path) -> str:
    # utf-8-sig: OCR exports from Windows tools often carry a BOM.
    with open(path, "r", encoding="utf-8-sig") as f:
        return f.read()


def compile_markers(markers: list[str] | tuple[str, ...]) -> re.Pattern[str] | None:
    """One case-insensitive alternation for a marker list, longest first."""
    words = sorted({m.strip() for m in markers if m and m.strip()}, key=len, reverse=True)
    if not words:
        return None
    return re.compile("|".join(re.escape(w) for w in words), re.IGNORECASE)


def has_alnum(text: str) -> bool:
    return any(ch.isalnum() for ch in text)
