"""Directory scanner for discovering module descriptor files."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from modorder.errors import ConfigNotFoundError

logger = logging.getLogger(__name__)

__all__ = ["DiscoveredDescriptor", "scan_descriptors"]

_SKIP_DIR_NAMES = {"__pycache__", "node_modules"}


@dataclass
class DiscoveredDescriptor:
    """A descriptor file found on disk, not yet parsed."""

    file_path: Path
    source_label: str


def scan_descriptors(
    root: str | Path,
    extensions: Iterable[str] = (".json",),
    recursive: bool = False,
    max_depth: int = 8,
    follow_symlinks: bool = False,
) -> list[DiscoveredDescriptor]:
    """Find descriptor files under ``root``.

    Only the top level is scanned unless ``recursive`` is set. Hidden entries
    are skipped. Results are sorted by path so discovery order is stable.

    Raises:
        ConfigNotFoundError: If ``root`` does not exist or is not a directory.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise ConfigNotFoundError(config_path=str(root))

    wanted = {ext.lower() for ext in extensions}
    visited_real_paths: set[Path] = {root}
    results: list[DiscoveredDescriptor] = []

    def _scan_dir(dir_path: Path, depth: int) -> None:
        if depth > max_depth:
            logger.info("Max depth %d exceeded at %s, skipping", max_depth, dir_path)
            return

        try:
            entries = list(os.scandir(dir_path))
        except OSError as e:
            logger.error("OS error scanning %s: %s", dir_path, e)
            return

        for entry in entries:
            name = entry.name
            if name.startswith(".") or name in _SKIP_DIR_NAMES:
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=follow_symlinks)
                is_file = entry.is_file(follow_symlinks=True)
            except OSError as e:
                logger.error("OS error accessing %s: %s", entry.path, e)
                continue

            entry_path = Path(entry.path)

            if is_dir:
                if not recursive:
                    continue
                if entry.is_symlink():
                    real = entry_path.resolve()
                    if real in visited_real_paths:
                        logger.warning(
                            "Symlink cycle detected at %s -> %s, skipping",
                            entry_path,
                            real,
                        )
                        continue
                    visited_real_paths.add(real)
                _scan_dir(entry_path, depth + 1)
            elif is_file and entry_path.suffix.lower() in wanted:
                results.append(
                    DiscoveredDescriptor(file_path=entry_path, source_label=entry_path.stem)
                )

    _scan_dir(root, depth=1)
    results.sort(key=lambda d: d.file_path)
    logger.debug("Discovered %d descriptor files under %s", len(results), root)
    return results
