"""Rust source discovery under a crate root."""

from __future__ import annotations

import os
from pathlib import Path

from ..config import DEFAULT_CONFIG, ReportConfig
from ..exceptions import InvalidPathError
from ..logging_config import get_logger

logger = get_logger(__name__)

RUST_EXTENSION = ".rs"


def relative_key(file_path: Path, root_dir: Path) -> str:
    """Stable join key for a file: root-relative, ``/`` separated."""
    return file_path.relative_to(root_dir).as_posix()


def discover_sources(root_dir: Path, config: ReportConfig = DEFAULT_CONFIG) -> list[Path]:
    """Return every ``.rs`` file under ``root_dir`` in lexicographic key order.

    Directories named in ``config.exclude_dirs`` are pruned at any depth.

    Raises:
        InvalidPathError: If ``root_dir`` is not a directory
    """
    if not root_dir.is_dir():
        raise InvalidPathError(root_dir, "not a directory")

    excluded = set(config.exclude_dirs)
    found: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root_dir, followlinks=config.follow_symlinks):
        dirnames[:] = [d for d in dirnames if d not in excluded]
        for name in filenames:
            if name.endswith(RUST_EXTENSION):
                found.append(Path(dirpath) / name)

    found.sort(key=lambda p: relative_key(p, root_dir))
    logger.debug(f"Discovered {len(found)} rust files under {root_dir}")
    return found


def has_cargo_manifest(root_dir: Path) -> bool:
    return (root_dir / "Cargo.toml").is_file()
