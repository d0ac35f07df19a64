#!/usr/bin/env python3
"""Decode SPLICE drum pattern files and print them."""

from __future__ import annotations

import argparse
import glob
import json
import logging
from pathlib import Path
import sys
from typing import Iterable, List

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from splice import DecodeError, decode_file  # noqa: E402

logger = logging.getLogger("print_splice")


def collect_paths(patterns: Iterable[str]) -> List[Path]:
    paths: List[Path] = []
    for pattern in patterns:
        matches = sorted(Path(p) for p in glob.glob(pattern, recursive=True))
        if matches:
            paths.extend(matches)
        else:
            # Literal path; a missing file is reported when it is decoded.
            paths.append(Path(pattern))
    seen: set[Path] = set()
    unique_paths: List[Path] = []
    for path in paths:
        resolved = path.resolve()
        if resolved not in seen:
            seen.add(resolved)
            unique_paths.append(path)
    return unique_paths


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "paths",
        nargs="+",
        help="File paths or glob patterns (quotes recommended for wildcards).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit a JSON list instead of the text rendering",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log decode progress to stderr (-vv for per-track detail)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    targets = collect_paths(args.paths)

    status = 0
    documents = []
    for path in targets:
        logger.info(f"decoding {path}")
        try:
            pattern = decode_file(path)
        except (DecodeError, OSError) as err:
            print(f"{path}: ERR {err}", file=sys.stderr)
            status = 1
            continue

        if args.json:
            documents.append({"path": str(path), **pattern.to_dict()})
            continue
        if len(targets) > 1:
            print(f"== {path}")
        sys.stdout.write(str(pattern))

    if args.json:
        print(json.dumps(documents, indent=2))
    return status


if __name__ == "__main__":
    raise SystemExit(main())
