"""Orchestrator: config → read files → merged set."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from fmlat.config import Config
from fmlat.model import AccessTransformSet
from fmlat.reader import read_file

logger = logging.getLogger(__name__)


def summarize(transform_set: AccessTransformSet) -> dict[str, int]:
    """Count classes and member transforms held by *transform_set*."""
    return {
        "classes": len(transform_set),
        "fields": sum(len(e.fields) for e in transform_set.classes.values()),
        "methods": sum(len(e.methods) for e in transform_set.classes.values()),
    }


def run(
    paths: Iterable[Path],
    *,
    config: Config | None = None,
    transform_set: AccessTransformSet | None = None,
) -> AccessTransformSet:
    """Read every AT file in *paths*, in order, into a single set."""
    config = config or Config()
    if transform_set is None:
        transform_set = AccessTransformSet()

    file_count = 0
    for path in paths:
        before = summarize(transform_set)
        read_file(path, transform_set, allow_final_only=config.allow_final_only)
        after = summarize(transform_set)
        file_count += 1
        logger.debug(
            "%s: +%d classes, +%d fields, +%d methods",
            path,
            after["classes"] - before["classes"],
            after["fields"] - before["fields"],
            after["methods"] - before["methods"],
        )

    counts = summarize(transform_set)
    logger.info(
        "Read %d files: %d classes, %d fields, %d methods",
        file_count,
        counts["classes"],
        counts["fields"],
        counts["methods"],
    )
    return transform_set
