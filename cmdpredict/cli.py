#!/usr/bin/env python3
import argparse
import json
import logging
import sys
import os

# Allow importing cmdpredict package when run as a script
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cmdpredict.catalog import load_catalog
from cmdpredict.engine import SuggestionEngine
from cmdpredict.errors import ModelLoadError
from cmdpredict.model import load_model
from cmdpredict.predictor import DEFAULT_MAX_COMMAND_DUPLICATES, DEFAULT_SUGGESTION_COUNT


def build_parser():
    parser = argparse.ArgumentParser(
        prog="cmdpredict",
        description="cmdpredict: suggest full command lines from a usage model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  cmdpredict --model model.yaml "Connect-AzAccount"
  cmdpredict --model model.yaml --catalog catalog.yaml "Get-AzStorageAccount rg"
  cmdpredict --model model.yaml --history Connect-AzAccount "Get-AzRes" --json""",
    )
    parser.add_argument("input", help="Partially typed command line")
    parser.add_argument("--model", required=True, help="Usage model artifact (.json, .yaml)")
    parser.add_argument("--catalog", default=None, help="Command metadata artifact (.json, .yaml)")
    parser.add_argument("--count", type=int, default=DEFAULT_SUGGESTION_COUNT,
                        help=f"Number of suggestions (default: {DEFAULT_SUGGESTION_COUNT})")
    parser.add_argument("--history", action="append", default=[], metavar="CMD",
                        help="Previously run command line, oldest first (repeatable)")
    parser.add_argument("--max-duplicates", type=int, default=DEFAULT_MAX_COMMAND_DUPLICATES,
                        help="Skip commands already shown this many times")
    parser.add_argument("--json", action="store_true", help="Output raw JSON instead of plain lines")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    return parser


def build_engine(args):
    model = load_model(args.model)
    catalog = load_catalog(args.catalog) if args.catalog else None
    engine = SuggestionEngine(model, catalog)
    for command in args.history:
        engine.record(command)
    return engine


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.count <= 0:
        parser.error("--count must be positive")
    if args.max_duplicates <= 0:
        parser.error("--max-duplicates must be positive")

    try:
        engine = build_engine(args)
    except ModelLoadError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    result = engine.suggest(args.input, count=args.count, min_context_matches=args.max_duplicates)

    if args.json:
        payload = {
            "input": args.input,
            "context": engine.tracker.snapshot(),
            "suggestions": [
                {"text": s.text, "description": s.description, "source": s.source_text}
                for s in result
            ],
        }
        print(json.dumps(payload, indent=2))
        return

    if not result:
        print("(no suggestions)")
        return
    for suggestion in result:
        print(suggestion.text)


if __name__ == "__main__":
    main()
