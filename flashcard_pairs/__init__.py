"""Question/answer pair extraction from raw OCR text.

Feed the text an OCR engine read from a vocabulary list, worksheet or notes
page to ``segment`` and get ordered question/answer pairs back. Running OCR
and storing the resulting sets are left to the caller.
"""

from __future__ import annotations

from .config import SegmenterConfig, load_config
from .segmenter import segment, segment_with_report
from .types import FormatClassification, Pair, SegmentReport

__all__ = [
    "FormatClassification",
    "Pair",
    "SegmentReport",
    "SegmenterConfig",
    "__version__",
    "load_config",
    "segment",
    "segment_with_report",
]

__version__ = "0.1.0"
