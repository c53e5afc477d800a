from __future__ import annotations

from typing import Any, Iterable

import numpy as np

from .types import OCRToken

COLUMN_BREAK = "    "


def _poly_to_xyxy(poly: list[list[float]] | list[tuple[float, float]]) -> tuple[int, int, int, int]:
    xs = [p[0] for p in poly]
    ys = [p[1] for p in poly]
    return int(min(xs)), int(min(ys)), int(max(xs)), int(max(ys))


def _as_token(obj: Any) -> OCRToken | None:
    """Accept OCRToken or the engines' dict shape ({text, confidence, bbox_xyxy})."""
    if isinstance(obj, OCRToken):
        return obj if obj.text.strip() else None
    if not isinstance(obj, dict):
        return None

    text = str(obj.get("text") or "").strip()
    if not text:
        return None

    bbox = obj.get("bbox_xyxy", obj.get("bbox"))
    try:
        if isinstance(bbox, (list, tuple)) and len(bbox) == 4 and isinstance(bbox[0], (list, tuple)):
            # EasyOCR/PaddleOCR quadrilateral: [[x, y], [x, y], [x, y], [x, y]]
            xyxy = _poly_to_xyxy(bbox)
        else:
            x0, y0, x1, y1 = bbox
            xyxy = (int(x0), int(y0), int(x1), int(y1))
        confidence = float(obj.get("confidence", 1.0))
    except (TypeError, ValueError):
        return None

    if xyxy[2] <= xyxy[0] or xyxy[3] <= xyxy[1]:
        return None
    return OCRToken(text=text, confidence=confidence, bbox_xyxy=xyxy)


def _center_y(t: OCRToken) -> float:
    return (t.bbox_xyxy[1] + t.bbox_xyxy[3]) / 2.0


def _group_rows(tokens: list[OCRToken]) -> list[list[OCRToken]]:
    heights = np.array([t.bbox_xyxy[3] - t.bbox_xyxy[1] for t in tokens], dtype=np.float32)
    tolerance = max(1.0, float(np.median(heights)) * 0.5)

    rows: list[list[OCRToken]] = []
    centers: list[list[float]] = []
    for t in sorted(tokens, key=lambda t: (_center_y(t), t.bbox_xyxy[0])):
        cy = _center_y(t)
        if rows and abs(cy - float(np.mean(centers[-1]))) <= tolerance:
            rows[-1].append(t)
            centers[-1].append(cy)
        else:
            rows.append([t])
            centers.append([cy])
    return rows


def tokens_to_lines(
    tokens: Iterable[Any],
    *,
    min_confidence: float = 0.0,
    column_gap_factor: float = 2.0,
) -> list[str]:
    """Rebuild text lines from positioned OCR tokens.

    Tokens on the same visual row are joined left to right. A horizontal gap of
    at least ``column_gap_factor`` median character widths is written as a
    column break (four spaces), anything narrower as one space.
    """
    usable: list[OCRToken] = []
    for obj in tokens:
        t = _as_token(obj)
        if t is None or t.confidence < min_confidence:
            continue
        usable.append(t)
    if not usable:
        return []

    char_widths = np.array(
        [(t.bbox_xyxy[2] - t.bbox_xyxy[0]) / max(1, len(t.text)) for t in usable],
        dtype=np.float32,
    )
    column_gap = float(np.median(char_widths)) * column_gap_factor

    lines: list[str] = []
    for row in _group_rows(usable):
        row.sort(key=lambda t: t.bbox_xyxy[0])
        parts = [row[0].text]
        for prev, cur in zip(row, row[1:]):
            gap = cur.bbox_xyxy[0] - prev.bbox_xyxy[2]
            parts.append(COLUMN_BREAK if gap >= column_gap else " ")
            parts.append(cur.text)
        lines.append("".join(parts))
    return lines


def tokens_to_text(
    tokens: Iterable[Any],
    *,
    min_confidence: float = 0.0,
    column_gap_factor: float = 2.0,
) -> str:
    return "\n".join(
        tokens_to_lines(tokens, min_confidence=min_confidence, column_gap_factor=column_gap_factor)
    )
