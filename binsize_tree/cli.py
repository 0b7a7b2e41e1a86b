"""Command-line interface for the binary size tree.

WHY: Users need a simple way to turn an analyzer result into a readable
breakdown from the terminal or a CI job. The CLI wires input validation,
tree building and formatter output together behind a single command.

HOW: Uses argparse to accept the analyzer JSON file, output format
selection, output directory, and the two tree building policies. Status
messages go to stderr; rendered output goes to stdout unless --output-dir
is given, in which case files are saved as {stem}{suffix}.

RULES:
- Positional argument: analyzer result JSON file
- --formats: comma-separated formatter keys (default from config)
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-tree-2.txt)
- Status output goes to stderr (not stdout)
- Exit code 1 on any input, configuration, or reconciliation error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from binsize_tree.config import (
    DEFAULT_FORMATS,
    NEGATIVE_LEFTOVER_POLICIES,
    PACKAGE_ORDERS,
)
from binsize_tree.core.builder import build_tree
from binsize_tree.core.ids import IdAllocator
from binsize_tree.core.text import format_bytes
from binsize_tree.formatters import FORMATTERS
from binsize_tree.formatters.base import BaseFormatter, FormatterOutput
from binsize_tree.formatters.text_tree import TextTreeFormatter
from binsize_tree.records.loader import InvalidResultError, load_result


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed immediately."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Resolve the output file path, adding numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. server-tree.txt)
    - Conflict: split suffix at last dot, insert counter before extension
      (e.g. server-tree-2.txt)
    - Counter starts at 2 and increments

    Args:
        stem: Source filename stem (without extension).
        suffix: Formatter's suffix (e.g. "-tree.txt").
        output_dir: Directory to save the output file.

    Returns:
        A Path that does not yet exist.
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    # "-tree.txt" -> ("-tree", ".txt")
    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
) -> Path:
    """Save a single formatter output to disk and return where it went."""
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _parse_format_keys(value: str) -> List[str]:
    """Split and check a comma-separated format list; exit on unknown keys."""
    keys = [f.strip() for f in value.split(",") if f.strip()]
    if not keys:
        _fail("No output format given")
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            _fail("Unknown format '{}'. Available formats: {}".format(key, available))
    return keys


def _make_formatter(key: str, args: argparse.Namespace) -> BaseFormatter:
    if key == "text_tree":
        return TextTreeFormatter(max_depth=args.max_depth)
    return FORMATTERS[key]()


def _run(args: argparse.Namespace) -> None:
    """Execute load → build → format → save/print."""
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    input_path = Path(args.input_file).resolve()
    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))

    output_dir: Optional[Path] = None
    if args.output_dir:
        output_dir = Path(args.output_dir).resolve()
        if not output_dir.is_dir():
            _fail("Output directory does not exist: {}".format(output_dir))

    if args.max_depth is not None and args.max_depth < 0:
        _fail("--max-depth must be >= 0")

    format_keys = _parse_format_keys(args.formats)

    _status("Loading {}...".format(input_path.name))
    try:
        result = load_result(input_path)
    except InvalidResultError as e:
        _fail(str(e))

    _status("Building tree...")
    try:
        root = build_tree(
            result,
            allocator=IdAllocator(),
            package_order=args.order,
            negative_leftover=args.negative_leftover,
        )
    except ValueError as e:
        # Unknown policy names and leftover mismatches
        _fail(str(e))

    _status("  {} ({}), {} entries".format(
        root.name, format_bytes(root.size), sum(1 for _ in root.walk()),
    ))

    stem = input_path.stem
    saved_files: List[Path] = []
    for key in format_keys:
        formatter = _make_formatter(key, args)
        for output in formatter.format(root):
            if output_dir is None:
                sys.stdout.write(output.content)
                if not output.content.endswith("\n"):
                    sys.stdout.write("\n")
            else:
                saved_path = _save_output(output, stem, output_dir)
                saved_files.append(saved_path)
                _status("  Saved: {}".format(saved_path.name))

    if output_dir is not None:
        _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    RULES:
    - Positional: input_file (required)
    - Optional: --formats (comma-separated), --output-dir, --max-depth
    - Optional: --order, --negative-leftover, --verbose
    """
    parser = argparse.ArgumentParser(
        prog="binsize-tree",
        description="Build a size-accounting tree from a binary size analyzer "
                    "result and render it (text tree, JSON, CSV).",
    )

    parser.add_argument(
        "input_file",
        help="Path to the analyzer result JSON file.",
    )

    parser.add_argument(
        "--formats",
        default=DEFAULT_FORMATS,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: %(default)s.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: print to stdout).",
    )

    parser.add_argument(
        "--order",
        choices=PACKAGE_ORDERS,
        default=None,
        help="Package iteration order: by mapping key or document order "
             "(default: BINSIZE_TREE_PACKAGE_ORDER or 'name').",
    )

    parser.add_argument(
        "--negative-leftover",
        choices=NEGATIVE_LEFTOVER_POLICIES,
        default=None,
        help="What to do when children exceed their parent's declared size "
             "(default: BINSIZE_TREE_NEGATIVE_LEFTOVER or 'warn').",
    )

    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Limit the depth of the text tree (0 = root only).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _run(args)


if __name__ == "__main__":
    main()
