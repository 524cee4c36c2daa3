"""Depth-bounded discovery of GLB files below a root directory."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from glb_compress.errors import DiscoveryError
from glb_compress.utils import display_name
from glb_compress.utils.constants import GLB_EXTENSION
from glb_compress.utils.logging import log_debug


@dataclass(frozen=True)
class FileCandidate:
    """A discovered GLB file and its label for selection."""

    path: Path
    display_name: str


def is_glb(name: str) -> bool:
    """Case-insensitive check for the .glb extension."""
    return name.lower().endswith(GLB_EXTENSION)


def discover(root: str | Path, max_depth: int) -> list[Path]:
    """
    Recursively collect GLB files below root.

    Depth convention: root is depth 0, and so are the files directly in it.
    A file's depth is the number of directories between root and the file;
    directories deeper than max_depth are never read.

    Entries of each directory are visited sorted by name, depth first, so
    the result is deterministic. A directory that is its own ancestor on
    the current path (a symlink cycle) is skipped; the same directory
    reached along separate paths is scanned each time.

    Raises:
        ValueError: if max_depth is negative.
        DiscoveryError: if root or any subdirectory cannot be read.
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")

    found: list[Path] = []
    _walk(Path(root).absolute(), max_depth, 0, set(), found)
    return found


def _walk(
    folder: Path,
    max_depth: int,
    depth: int,
    ancestors: set[tuple[int, int]],
    found: list[Path],
) -> None:
    if depth > max_depth:
        return

    try:
        stat = folder.stat()
    except OSError as e:
        raise DiscoveryError(str(folder), e.strerror or str(e)) from e
    key = (stat.st_dev, stat.st_ino)
    if key in ancestors:
        log_debug(f"Skipping symlink cycle: {folder}")
        return

    ancestors.add(key)
    try:
        try:
            with os.scandir(folder) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise DiscoveryError(str(folder), e.strerror or str(e)) from e

        for entry in entries:
            entry_path = folder / entry.name
            try:
                if entry.is_dir():
                    _walk(entry_path, max_depth, depth + 1, ancestors, found)
                elif entry.is_file() and is_glb(entry.name):
                    found.append(entry_path)
            except OSError as e:
                raise DiscoveryError(str(entry_path), e.strerror or str(e)) from e
    finally:
        ancestors.discard(key)


def candidates(
    paths: list[Path], base: str | Path | None = None
) -> list[FileCandidate]:
    """Wrap discovered paths with display names relative to base."""
    return [FileCandidate(path=p, display_name=display_name(p, base)) for p in paths]
