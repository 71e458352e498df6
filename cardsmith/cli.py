"""
Name: Cardsmith CLI

Responsibilities:
  - `segment`: segment a text file into a deck (JSON on stdout)
  - `split-overflow`: split an overflowing card body
  - `toggle-bold`: toggle bold over a selection of raw markup

Notes:
  - Logs go to stderr (JSON); stdout only carries the command result.
  - `-` as FILE reads stdin.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from .application.usecases import SegmentTextInput
from .crosscutting.logger import configure_logging
from .domain.entities import deck_to_payload
from .infrastructure.text import split_overflow, toggle_bold_at_selection


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    try:
        with open(path, encoding="utf-8") as handle:
            return handle.read()
    except OSError as exc:
        raise SystemExit(f"Cannot read {path}: {exc.strerror}") from exc


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cardsmith", description="Turn raw text into editable cards."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug events to stderr"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    segment = commands.add_parser("segment", help="Segment a text file into cards")
    segment.add_argument("file", help="Text file to segment (- for stdin)")
    segment.add_argument("--title", help="Title for the leading cover card")
    segment.add_argument(
        "--offline",
        action="store_true",
        help="Skip the AI strategy and use paragraph segmentation only",
    )

    overflow = commands.add_parser(
        "split-overflow", help="Split an overflowing card body in two"
    )
    overflow.add_argument("file", help="File holding the card body (- for stdin)")

    toggle = commands.add_parser(
        "toggle-bold", help="Toggle **bold** over a selection of raw text"
    )
    toggle.add_argument("text", help="Raw text (may contain ** markers)")
    toggle.add_argument("start", type=int, help="Selection start (storage offset)")
    toggle.add_argument("end", type=int, help="Selection end (storage offset)")

    return parser


def _segment(args: argparse.Namespace) -> int:
    from .container import get_segment_text_use_case

    try:
        use_case = get_segment_text_use_case(offline=args.offline)
    except ValidationError as exc:
        raise SystemExit(f"Invalid configuration: {exc.errors()[0]['msg']}") from exc

    text = _read_source(args.file)
    result = asyncio.run(use_case.execute(SegmentTextInput(text=text, title=args.title)))
    if result.error is not None:
        print(result.error.message, file=sys.stderr)
        return 2

    _print_json(
        {
            "strategy": result.strategy,
            "fallback_reason": result.fallback_reason,
            "segments": deck_to_payload(result.segments),
        }
    )
    return 0


def _split_overflow(args: argparse.Namespace) -> int:
    split = split_overflow(_read_source(args.file))
    if split is None:
        print("Content cannot be split", file=sys.stderr)
        return 1
    _print_json({"kept": split.kept, "moved": split.moved})
    return 0


def _toggle_bold(args: argparse.Namespace) -> int:
    result = toggle_bold_at_selection(args.text, args.start, args.end)
    _print_json({"text": result.text, "start": result.start, "end": result.end})
    return 0


_HANDLERS = {
    "segment": _segment,
    "split-overflow": _split_overflow,
    "toggle-bold": _toggle_bold,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.verbose:
        configure_logging("DEBUG")
    return _HANDLERS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
