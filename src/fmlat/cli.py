"""Command-line interface for fmlat."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from fmlat.config import load_config
from fmlat.errors import AccessTransformError
from fmlat.pipeline import run, summarize

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="fmlat",
        description="Read FML access transformer files and report the merged result.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="AT files to read (default: files listed in the project config)",
    )
    parser.add_argument(
        "--project-dir",
        type=Path,
        default=Path.cwd(),
        help="Directory holding .fmlat.toml or pyproject.toml (default: cwd)",
    )
    parser.add_argument(
        "--allow-final-only",
        action="store_true",
        default=None,
        help="Accept '+f' and '-f' specs without a visibility keyword",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logging.getLogger("fmlat").setLevel(logging.DEBUG)

    config = load_config(args.project_dir)
    if args.allow_final_only is not None:
        config.allow_final_only = args.allow_final_only

    files = args.files or config.files
    if not files:
        logger.error("No access transformer files given.")
        return 2

    try:
        transform_set = run(files, config=config)
    except (AccessTransformError, OSError, UnicodeDecodeError) as e:
        logger.error("%s", e)
        return 1

    counts = summarize(transform_set)
    print(
        f"{counts['classes']} classes, {counts['fields']} fields, "
        f"{counts['methods']} methods"
    )
    return 0
