from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

from .config import LOCALE_MARKERS, SegmenterConfig, load_config
from .exporter import export_csv
from .layout import tokens_to_text
from .segmenter import segment_with_report
from .utils import load_json, read_text
from .validator import validate_result_file
from .writer import build_result, write_result

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="flashcard_pairs")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="command", required=True)

    seg = sub.add_parser("segment", help="Extract question/answer pairs from OCR output")
    seg.add_argument("--input", required=True, help="OCR text file, or OCR token JSON with --type tokens")
    seg.add_argument("--type", default="text", choices=["text", "tokens"], help="Input type")
    seg.add_argument("--out", default=None, help="Result JSON path (default: print to stdout)")
    seg.add_argument("--name", default=None, help="Set name (default: input file stem)")
    seg.add_argument("--description", default="", help="Set description")
    seg.add_argument("--config", default=None, help="Config path (e.g. config/default.json)")
    seg.add_argument("--locale", default=None, choices=sorted(LOCALE_MARKERS), help="Question/answer label language")
    seg.add_argument("--min-confidence", type=float, default=None, help="Drop OCR tokens below this (tokens only)")

    validate = sub.add_parser("validate", help="Validate a result JSON file")
    validate.add_argument("--result", required=True, help="Result JSON path")

    export = sub.add_parser("export", help="Export the questions of a result JSON file")
    export.add_argument("--result", required=True, help="Result JSON path")
    export.add_argument("--format", required=True, choices=["csv"], help="Export format")
    export.add_argument("--out", required=True, help="Output file path")

    return p


def _resolve_config(args: argparse.Namespace) -> SegmenterConfig:
    cfg = load_config(args.config) if args.config else SegmenterConfig()
    if args.locale:
        localized = SegmenterConfig.for_locale(args.locale)
        cfg = replace(
            cfg,
            locale=localized.locale,
            question_markers=localized.question_markers,
            answer_markers=localized.answer_markers,
        )
    if args.min_confidence is not None:
        cfg = replace(cfg, min_confidence=float(args.min_confidence))
    return cfg


def _read_input(path: str, input_type: str, cfg: SegmenterConfig) -> str:
    if input_type == "text":
        return read_text(path)

    data: Any = load_json(path)
    tokens = data.get("tokens") if isinstance(data, dict) else data
    if not isinstance(tokens, list):
        raise ValueError("token input must be a list or an object with list field: tokens")
    return tokens_to_text(tokens, min_confidence=cfg.min_confidence, column_gap_factor=cfg.column_gap_factor)


def cmd_segment(args: argparse.Namespace) -> int:
    try:
        cfg = _resolve_config(args)
        text = _read_input(args.input, args.type, cfg)
    except (OSError, ValueError) as e:
        print(f"segment_failed: {e}")
        return 1

    report = segment_with_report(text, cfg)
    name = args.name or Path(args.input).stem
    fmt = report.format.value if report.format else "none"
    logger.info("Segmented %s: %d pairs (%s)", args.input, len(report.pairs), fmt)

    if args.out:
        try:
            write_result(args.out, report.pairs, name=name, description=args.description, report=report)
        except (OSError, ValueError) as e:
            print(f"segment_failed: {e}")
            return 1
        print(f"pairs={len(report.pairs)} format={fmt}")
        print(str(Path(args.out)))
    else:
        result = build_result(report.pairs, name=name, description=args.description, report=report)
        print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    ok, summary = validate_result_file(args.result)
    print(f"questions_total={summary['questions_total']}")
    print(f"invalid_questions={summary['invalid_questions']}")
    if not ok:
        for m in summary["errors"]:
            print(m)
        return 1

    print("OK")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    if args.format != "csv":
        raise SystemExit(2)
    try:
        stats = export_csv(result_path=args.result, out_path=args.out)
        print(f"exported={stats.questions_exported} skipped_invalid={stats.questions_invalid}")
        return 0
    except Exception as e:
        print(f"export_failed: {e}")
        return 1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "segment":
        return cmd_segment(args)

    if args.command == "validate":
        return cmd_validate(args)

    if args.command == "export":
        return cmd_export(args)

    raise SystemExit(2)


if __name__ == "__main__":
    raise SystemExit(main())
