from __future__ import annotations

import re
from dataclasses import dataclass

DECORATIVE_RE = re.compile(r"^[-_|=\s]+$")


def is_decorative(line: str) -> bool:
    """Table rules and underlines: only -, _, |, = or whitespace."""
    return bool(DECORATIVE_RE.match(line))


@dataclass(frozen=True)
class CleanedLines:
    lines: list[str]
    total: int
    decorative_dropped: int


def clean_lines(raw_text: str | None) -> CleanedLines:
    if not raw_text:
        return CleanedLines(lines=[], total=0, decorative_dropped=0)

    raw_lines = raw_text.splitlines()
    kept: list[str] = []
    decorative = 0
    for raw in raw_lines:
        line = raw.strip()
        if not line:
            continue
        if is_decorative(line):
            decorative += 1
            continue
        kept.append(line)

    return CleanedLines(lines=kept, total=len(raw_lines), decorative_dropped=decorative)
