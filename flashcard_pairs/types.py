from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Pair:
    question: str
    answer: str

    def to_dict(self) -> dict[str, str]:
        return {"question": self.question, "answer": self.answer}


class FormatClassification(str, Enum):
    """Which extraction strategy produced the result.

    Member order is the order strategies are tried in.
    """

    TABLE_WITH_SEPARATORS = "tableWithSeparators"
    EXPLICIT_SEPARATOR = "singleLineSeparator"
    LABELED_QUESTION_ANSWER = "labeledQuestionAnswer"
    NUMBERED_LIST = "numberedList"
    TWO_COLUMN_WHITESPACE = "twoColumnWhitespace"
    ALTERNATING_LINES = "alternatingLines"


@dataclass(frozen=True)
class OCRToken:
    text: str
    confidence: float
    bbox_xyxy: tuple[int, int, int, int]


@dataclass
class SegmentReport:
    pairs: list[Pair] = field(default_factory=list)
    format: FormatClassification | None = None
    lines_total: int = 0
    lines_kept: int = 0
    decorative_dropped: int = 0
    candidates: int = 0  # winning strategy, before filtering
    rejected: dict[str, int] = field(default_factory=dict)
    strategies_tried: list[str] = field(default_factory=list)

    def to_metrics(self) -> dict[str, Any]:
        return {
            "format": self.format.value if self.format else None,
            "pairs_total": len(self.pairs),
            "lines_total": self.lines_total,
            "lines_kept": self.lines_kept,
            "decorative_dropped": self.decorative_dropped,
            "candidates": self.candidates,
            "rejected": dict(self.rejected),
            "strategies_tried": list(self.strategies_tried),
        }
