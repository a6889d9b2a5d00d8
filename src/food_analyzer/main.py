"""Command line previewer for saved model responses."""

import argparse
import json
import logging
import sys
from collections.abc import Sequence

from food_analyzer.app_logging import configure_logging
from food_analyzer.services.normalization import normalize_model_response
from food_analyzer.services.payloads import to_payload
from food_analyzer.services.preview import format_meal_summary


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the previewer."""
    parser = argparse.ArgumentParser(
        prog="food-analyzer",
        description="Normalize a saved model response and preview the meal.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        type=argparse.FileType("r", encoding="utf-8"),
        default=sys.stdin,
        help="model response to read (default: stdin)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="print the normalized payload as JSON instead of a summary",
    )
    parser.add_argument(
        "--style",
        choices=("server", "client"),
        default="server",
        help="payload layout used with --json",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log normalization stages"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the previewer and return the exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(logging.INFO if args.verbose else logging.WARNING)
    raw_text = args.file.read()
    if args.file is not sys.stdin:
        args.file.close()

    record = normalize_model_response(raw_text)
    if args.json:
        print(json.dumps(to_payload(record, args.style), indent=2))
    else:
        print(format_meal_summary(record))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
