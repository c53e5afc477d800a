"""Pair extraction strategies.

Each strategy is a pure function ``(lines, config) -> list[Pair]`` over cleaned
lines, paired with a cheap applicability test. ``STRATEGIES`` holds them in the
order the segmenter tries them; candidates are unvalidated.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from .config import SegmenterConfig
from .types import FormatClassification, Pair
from .utils import compile_markers

VERTICAL_SEPARATORS = ("|", "│", "┃", "╎", "╏")

WIDE_GAP_RE = re.compile(r"\s{3,}")
EXPLICIT_SEPARATOR_RE = re.compile(r"^(.+?)\s*[-:=→]\s*(.+)$")
NUMBERED_RE = re.compile(r"^\d+\.")
NUMBERED_PREFIX_RE = re.compile(r"^\d+\.\s*")

# Tried in order; the first that yields exactly two parts wins.
WHITESPACE_CASCADE = (
    re.compile(r" {4,}"),
    re.compile(r"\t+"),
    re.compile(r"\s{3}"),
    re.compile(r"\s{2}"),
)


def _two_parts(pieces: list[str]) -> tuple[str, str] | None:
    parts = [p.strip() for p in pieces if p.strip()]
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


# ---------------------------------------------------------------------------
# 1. table with vertical separators
# ---------------------------------------------------------------------------

def has_vertical_separator(line: str) -> bool:
    return any(sep in line for sep in VERTICAL_SEPARATORS)


def split_table_row(line: str) -> tuple[str, str] | None:
    for sep in VERTICAL_SEPARATORS:
        if sep in line:
            return _two_parts(line.split(sep))
    # OCR frequently loses the rule on some rows; wide gaps still mark the column.
    return _two_parts(WIDE_GAP_RE.split(line))


def table_applies(lines: list[str], config: SegmenterConfig) -> bool:
    return any(has_vertical_separator(line) for line in lines)


def table_pairs(lines: list[str], config: SegmenterConfig) -> list[Pair]:
    left: list[str] = []
    right: list[str] = []
    for line in lines:
        row = split_table_row(line)
        if row is None:
            continue
        left.append(row[0])
        right.append(row[1])
    # Columns are zipped positionally so a ragged column still pairs up.
    return [Pair(q, a) for q, a in zip(left, right)]


# ---------------------------------------------------------------------------
# 2. explicit single-line separator
# ---------------------------------------------------------------------------

def split_explicit(line: str) -> tuple[str, str] | None:
    m = EXPLICIT_SEPARATOR_RE.match(line)
    if not m:
        return None
    question, answer = m.group(1).strip(), m.group(2).strip()
    if not question or not answer:
        return None
    return question, answer


def explicit_applies(lines: list[str], config: SegmenterConfig) -> bool:
    if not any(EXPLICIT_SEPARATOR_RE.match(line) for line in lines):
        return False
    # "Vraag 1: ..." / "Antwoord: ..." worksheets belong to the labeled strategy.
    return not is_label_led(lines, config)


def explicit_pairs(lines: list[str], config: SegmenterConfig) -> list[Pair]:
    pairs: list[Pair] = []
    for line in lines:
        row = split_explicit(line)
        if row is not None:
            pairs.append(Pair(*row))
    return pairs


# ---------------------------------------------------------------------------
# 3. labeled question/answer
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _Labels:
    question: re.Pattern[str]
    answer: re.Pattern[str]
    question_prefix: re.Pattern[str]
    answer_prefix: re.Pattern[str]
    question_heading: re.Pattern[str]
    answer_heading: re.Pattern[str]
    inline_answer: re.Pattern[str]


# "Vraag 3:", "Antwoord -", "Question 2)" ...
_PREFIX = r"^\s*(?:{})(?![^\W\d_])\s*\d*\s*[:.)\-]?\s*"
# Stricter: the label must end in punctuation or the line, so "vraag - question"
# in a vocabulary list is not mistaken for a heading.
_HEADING = r"^\s*(?:{})(?![^\W\d_])\s*\d*\s*(?:[:.)]|$)"
_INLINE = r"\b(?:{})(?![^\W\d_])\s*\d*\s*[:\-]"


def _labels(config: SegmenterConfig) -> _Labels | None:
    q = compile_markers(config.question_markers)
    a = compile_markers(config.answer_markers)
    if q is None or a is None:
        return None
    return _Labels(
        question=q,
        answer=a,
        question_prefix=re.compile(_PREFIX.format(q.pattern), re.IGNORECASE),
        answer_prefix=re.compile(_PREFIX.format(a.pattern), re.IGNORECASE),
        question_heading=re.compile(_HEADING.format(q.pattern), re.IGNORECASE),
        answer_heading=re.compile(_HEADING.format(a.pattern), re.IGNORECASE),
        inline_answer=re.compile(_INLINE.format(a.pattern), re.IGNORECASE),
    )


def _strip_label(text: str, prefix: re.Pattern[str]) -> str:
    return prefix.sub("", text, count=1).strip()


def is_label_led(lines: list[str], config: SegmenterConfig) -> bool:
    """True when lines open with question labels and answers are labeled too.

    The answer label may start its own line or follow the question inline.
    Every line with a separator must open with a label; a single plain
    ``hond: dog`` line makes the text a vocabulary list.
    """
    labels = _labels(config)
    if labels is None:
        return False
    question_led = any(labels.question_heading.match(line) for line in lines)
    answer_led = any(
        labels.answer_heading.match(line) or labels.inline_answer.search(line) for line in lines
    )
    if not (question_led and answer_led):
        return False
    return all(
        labels.question_heading.match(line) or labels.answer_heading.match(line)
        for line in lines
        if EXPLICIT_SEPARATOR_RE.match(line)
    )


def labeled_applies(lines: list[str], config: SegmenterConfig) -> bool:
    labels = _labels(config)
    if labels is None:
        return False
    text = "\n".join(lines)
    return bool(labels.question.search(text)) and bool(labels.answer.search(text))


def labeled_pairs(lines: list[str], config: SegmenterConfig) -> list[Pair]:
    labels = _labels(config)
    if labels is None:
        return []

    pairs: list[Pair] = []
    question: str | None = None
    # Set when a bare label ("Vraag 2:") was seen; its text is on the next line.
    awaiting: str | None = None

    for line in lines:
        q_hit = labels.question.search(line)
        a_hit = labels.answer.search(line)

        if q_hit:
            inline = labels.inline_answer.search(line, q_hit.end())
            if inline:
                q_text = _strip_label(line[: inline.start()], labels.question_prefix)
                a_text = _strip_label(line[inline.start():], labels.answer_prefix)
                if q_text and a_text:
                    pairs.append(Pair(q_text, a_text))
                    question, awaiting = None, None
                    continue
            question = _strip_label(line, labels.question_prefix) or None
            awaiting = "question" if question is None else None
            continue

        if a_hit:
            a_text = _strip_label(line, labels.answer_prefix)
            if not a_text:
                awaiting = "answer" if question is not None else None
                continue
            # An answer with no pending question has nothing to attach to.
            if question is not None:
                pairs.append(Pair(question, a_text))
            question, awaiting = None, None
            continue

        if awaiting == "question":
            question, awaiting = line, None
            continue

        if awaiting == "answer" and question is not None:
            pairs.append(Pair(question, line))
            question, awaiting = None, None
            continue

        if "?" in line:
            question = line
            continue

        if question is not None:
            pairs.append(Pair(question, line))
            question = None

    return pairs


# ---------------------------------------------------------------------------
# 4. numbered list
# ---------------------------------------------------------------------------

def numbered_applies(lines: list[str], config: SegmenterConfig) -> bool:
    return bool(lines) and bool(NUMBERED_RE.match(lines[0]))


def numbered_pairs(lines: list[str], config: SegmenterConfig) -> list[Pair]:
    pairs: list[Pair] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        nxt = lines[i + 1] if i + 1 < len(lines) else None
        if NUMBERED_RE.match(line) and nxt is not None and not NUMBERED_RE.match(nxt):
            pairs.append(Pair(NUMBERED_PREFIX_RE.sub("", line, count=1).strip(), nxt))
            i += 2
        else:
            i += 1
    return pairs


# ---------------------------------------------------------------------------
# 5. two columns separated by whitespace
# ---------------------------------------------------------------------------

def split_whitespace_columns(line: str) -> tuple[str, str] | None:
    for sep in WHITESPACE_CASCADE:
        row = _two_parts(sep.split(line))
        if row is not None:
            return row
    return None


def split_tokens(line: str) -> tuple[str, str] | None:
    """Guess the column boundary of a line without a clear gap."""
    tokens = line.split()
    if len(tokens) < 2:
        return None

    mid = len(tokens) // 2
    left = " ".join(tokens[:mid])
    right = " ".join(tokens[mid:])
    if len(left) >= 2 and len(right) >= 2:
        return left, right

    if len(tokens[0]) >= 2:
        return tokens[0], " ".join(tokens[1:])
    return None


def two_column_applies(lines: list[str], config: SegmenterConfig) -> bool:
    return any(split_whitespace_columns(line) is not None for line in lines)


def two_column_pairs(lines: list[str], config: SegmenterConfig) -> list[Pair]:
    pairs: list[Pair] = []
    for line in lines:
        row = split_whitespace_columns(line) or split_tokens(line)
        if row is not None:
            pairs.append(Pair(*row))
    return pairs


# ---------------------------------------------------------------------------
# 6. alternating lines
# ---------------------------------------------------------------------------

def alternating_applies(lines: list[str], config: SegmenterConfig) -> bool:
    return len(lines) >= 2


def alternating_pairs(lines: list[str], config: SegmenterConfig) -> list[Pair]:
    return [Pair(q, a) for q, a in zip(lines[0::2], lines[1::2])]


@dataclass(frozen=True)
class Strategy:
    format: FormatClassification
    applies: Callable[[list[str], SegmenterConfig], bool]
    extract: Callable[[list[str], SegmenterConfig], list[Pair]]


STRATEGIES: tuple[Strategy, ...] = (
    Strategy(FormatClassification.TABLE_WITH_SEPARATORS, table_applies, table_pairs),
    Strategy(FormatClassification.EXPLICIT_SEPARATOR, explicit_applies, explicit_pairs),
    Strategy(FormatClassification.LABELED_QUESTION_ANSWER, labeled_applies, labeled_pairs),
    Strategy(FormatClassification.NUMBERED_LIST, numbered_applies, numbered_pairs),
    Strategy(FormatClassification.TWO_COLUMN_WHITESPACE, two_column_applies, two_column_pairs),
    Strategy(FormatClassification.ALTERNATING_LINES, alternating_applies, alternating_pairs),
)
