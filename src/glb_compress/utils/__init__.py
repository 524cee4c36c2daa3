"""Path helpers shared by discovery and the pipeline."""

from __future__ import annotations

from pathlib import Path


def intermediate_path(input_path: str | Path, suffix: str = "-etc1s") -> Path:
    """
    Derive the intermediate (texture-compressed) path for an input file.

    The suffix is inserted between the stem and the extension, keeping the
    extension's original case: ``model.glb`` -> ``model-etc1s.glb``.
    """
    input_path = Path(input_path)
    return input_path.with_name(f"{input_path.stem}{suffix}{input_path.suffix}")


def display_name(path: str | Path, base: str | Path | None) -> str:
    """Path relative to base with POSIX separators, or the bare file name."""
    path = Path(path)
    if base is None:
        return path.name
    try:
        return path.resolve().relative_to(Path(base).resolve()).as_posix()
    except ValueError:
        return path.name
