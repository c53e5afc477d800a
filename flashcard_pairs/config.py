from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .utils import load_json

# Words that label question/answer lines on worksheets, per OCR language code.
LOCALE_MARKERS: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "nld": (("vraag",), ("antwoord",)),
    "eng": (("question",), ("answer",)),
    "deu": (("frage",), ("antwort",)),
    "fra": (("question",), ("réponse", "reponse")),
    "spa": (("pregunta",), ("respuesta",)),
    "ita": (("domanda",), ("risposta",)),
}

DEFAULT_LOCALE = "nld"


@dataclass(frozen=True)
class SegmenterConfig:
    locale: str = DEFAULT_LOCALE
    question_markers: tuple[str, ...] = LOCALE_MARKERS[DEFAULT_LOCALE][0]
    answer_markers: tuple[str, ...] = LOCALE_MARKERS[DEFAULT_LOCALE][1]
    min_length: int = 1
    max_length: int = 500
    # Only used when rebuilding text from OCR tokens.
    min_confidence: float = 0.0
    column_gap_factor: float = 2.0

    @classmethod
    def for_locale(cls, locale: str, **overrides: Any) -> "SegmenterConfig":
        key = (locale or "").strip().lower()
        if key not in LOCALE_MARKERS:
            supported = ", ".join(sorted(LOCALE_MARKERS))
            raise ValueError(f"unsupported locale: {locale!r} (supported: {supported})")
        q, a = LOCALE_MARKERS[key]
        fields: dict[str, Any] = {"locale": key, "question_markers": q, "answer_markers": a}
        fields.update(overrides)
        return cls(**fields)


def config_from_dict(data: dict[str, Any]) -> SegmenterConfig:
    """Build a config from a parsed JSON object.

    Layout:
      {"locale": "nld",
       "markers": {"question": [...], "answer": [...]},
       "validation": {"min_length": 1, "max_length": 500},
       "layout": {"min_confidence": 0.0, "column_gap_factor": 2.0}}
    Missing sections fall back to the locale defaults.
    """
    if not isinstance(data, dict):
        raise ValueError("config must be a JSON object")

    markers = data.get("markers", {}) or {}
    validation = data.get("validation", {}) or {}
    layout = data.get("layout", {}) or {}

    overrides: dict[str, Any] = {}
    if markers.get("question"):
        overrides["question_markers"] = tuple(str(m) for m in markers["question"])
    if markers.get("answer"):
        overrides["answer_markers"] = tuple(str(m) for m in markers["answer"])

    min_len = int(validation.get("min_length", 1))
    max_len = int(validation.get("max_length", 500))
    if min_len < 1 or max_len < min_len:
        raise ValueError(f"invalid length bounds: min_length={min_len} max_length={max_len}")

    return SegmenterConfig.for_locale(
        str(data.get("locale", DEFAULT_LOCALE)),
        min_length=min_len,
        max_length=max_len,
        min_confidence=float(layout.get("min_confidence", 0.0)),
        column_gap_factor=float(layout.get("column_gap_factor", 2.0)),
        **overrides,
    )


def load_config(config_path: str | Path) -> SegmenterConfig:
    return config_from_dict(load_json(config_path))
