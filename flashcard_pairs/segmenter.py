"""Turn raw OCR text into question/answer pairs.

The text is cleaned into lines, then each strategy in ``STRATEGIES`` is tried
in order. The first one whose candidates survive validation with at least one
pair decides the format; later strategies are not consulted. No state outlives
a call, so the functions here are safe to call concurrently.
"""
from __future__ import annotations

import logging

from .cleaner import clean_lines
from .config import SegmenterConfig
from .strategies import STRATEGIES
from .types import Pair, SegmentReport
from .validator import filter_pairs

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = SegmenterConfig()


def segment_with_report(raw_text: str | None, config: SegmenterConfig | None = None) -> SegmentReport:
    cfg = config or DEFAULT_CONFIG
    cleaned = clean_lines(raw_text)
    lines = cleaned.lines

    report = SegmentReport(
        lines_total=cleaned.total,
        lines_kept=len(lines),
        decorative_dropped=cleaned.decorative_dropped,
    )
    logger.debug(
        "Cleaned %d raw lines into %d (decorative=%d)",
        cleaned.total,
        len(lines),
        cleaned.decorative_dropped,
    )
    if not lines:
        return report

    for strategy in STRATEGIES:
        try:
            if not strategy.applies(lines, cfg):
                continue
            report.strategies_tried.append(strategy.format.value)
            candidates = strategy.extract(lines, cfg)
        except Exception:
            # A failing strategy is skipped; the rest still run.
            logger.warning("Strategy %s failed; trying next", strategy.format.value, exc_info=True)
            continue

        pairs, rejected = filter_pairs(candidates, min_length=cfg.min_length, max_length=cfg.max_length)
        logger.debug(
            "Strategy %s: %d candidates, %d kept, rejected=%s",
            strategy.format.value,
            len(candidates),
            len(pairs),
            rejected,
        )
        if pairs:
            report.pairs = pairs
            report.format = strategy.format
            report.candidates = len(candidates)
            report.rejected = rejected
            return report

    logger.debug("No strategy produced a valid pair")
    return report


def segment(raw_text: str | None, config: SegmenterConfig | None = None) -> list[Pair]:
    return segment_with_report(raw_text, config).pairs
