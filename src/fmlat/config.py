"""Project configuration from .fmlat.toml or [tool.fmlat] in pyproject.toml."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Reader options shared by the pipeline and the command line."""

    allow_final_only: bool = False
    files: list[Path] = field(default_factory=list)


def load_config(project_dir: Path) -> Config:
    """Return the configuration for *project_dir* (defaults when none is found)."""
    table, base_dir = _read_config_table(project_dir)
    if table is None:
        return Config()

    config = Config()
    allow = table.get("allow_final_only", False)
    if isinstance(allow, bool):
        config.allow_final_only = allow
    else:
        logger.warning("Ignoring non-boolean allow_final_only: %r", allow)

    files = table.get("files", [])
    if isinstance(files, list):
        config.files = [base_dir / str(f) for f in files]
    else:
        logger.warning("Ignoring non-list files setting: %r", files)

    return config


def _read_config_table(project_dir: Path) -> tuple[dict | None, Path]:
    """Read the fmlat table from .fmlat.toml, falling back to pyproject.toml."""
    import tomllib

    # Try .fmlat.toml first
    fmlat_toml = project_dir / ".fmlat.toml"
    if fmlat_toml.exists():
        try:
            with open(fmlat_toml, "rb") as f:
                data = tomllib.load(f)
            table = data.get("fmlat")
            if isinstance(table, dict):
                logger.debug("Using config from %s", fmlat_toml)
                return table, project_dir
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.debug("Could not parse %s: %s", fmlat_toml, e)

    # Fall back to [tool.fmlat] in pyproject.toml
    pyproject = project_dir / "pyproject.toml"
    if pyproject.exists():
        try:
            with open(pyproject, "rb") as f:
                data = tomllib.load(f)
            table = data.get("tool", {}).get("fmlat")
            if isinstance(table, dict):
                logger.debug("Using config from %s", pyproject)
                return table, project_dir
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.debug("Could not parse %s: %s", pyproject, e)

    return None, project_dir
