"""
Command-line interface for the document classifier.

Usage:
    python -m doc_classifier classify [OPTIONS] PATH [PATH ...]
    python -m doc_classifier classify - < document.txt
"""

import argparse
import json
import os
import sys
from typing import Optional, Sequence

from doc_classifier.services.document_classifier import classify_document


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="doc-classifier",
        description="Document Classifier CLI - Classify extracted text files locally"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    classify_parser = subparsers.add_parser(
        "classify",
        help="Classify one or more plain-text files"
    )
    classify_parser.add_argument(
        "paths",
        nargs="+",
        help="Text files to classify ('-' reads standard input)"
    )
    classify_parser.add_argument(
        "--name",
        "-n",
        type=str,
        default=None,
        help="Filename to classify with instead of the path's basename"
    )
    classify_parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent JSON output"
    )

    return parser


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def classify_command(args: argparse.Namespace) -> int:
    """
    Classify each path and print one JSON result per file.

    Returns:
        int: Exit code (0 if every file was read, 1 otherwise)
    """
    exit_code = 0
    indent = 2 if args.pretty else None

    for path in args.paths:
        if path != "-" and not os.path.isfile(path):
            print(f"Error: File not found: {path}", file=sys.stderr)
            exit_code = 1
            continue

        try:
            content = _read_source(path)
        except OSError as e:
            print(f"Error: Could not read {path}: {e}", file=sys.stderr)
            exit_code = 1
            continue

        file_name = args.name or ("stdin" if path == "-" else os.path.basename(path))
        result = classify_document(file_name, content)

        output = {"path": path, **result.model_dump(mode="json", by_alias=True)}
        print(json.dumps(output, indent=indent))

    return exit_code


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "classify":
        return classify_command(args)

    print(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
