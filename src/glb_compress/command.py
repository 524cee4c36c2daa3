"""Top-level compress command: probe, discover, select, compress."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from glb_compress.compressor import Compressor
from glb_compress.discovery import candidates, discover
from glb_compress.errors import CompressError, ToolUnavailableError
from glb_compress.pipeline import ProgressReporter, run_batch
from glb_compress.selection import Selector
from glb_compress.utils.constants import DEFAULT_CONFIG, CompressConfig
from glb_compress.utils.logging import format_count, log_debug

OutcomeStatus = Literal["ok", "info", "error"]


@dataclass(frozen=True)
class CommandOutcome:
    """The single user-visible result of a command run."""

    status: OutcomeStatus
    message: str

    @property
    def failed(self) -> bool:
        return self.status == "error"


def compress_glb_files(
    root: str | Path,
    *,
    compressor: Compressor,
    selector: Selector,
    reporter: ProgressReporter,
    config: CompressConfig = DEFAULT_CONFIG,
) -> CommandOutcome:
    """
    Compress the GLB files the user selects below root.

    Every failure is caught here and turned into a CommandOutcome; nothing
    is raised to the caller. When the compressor is unavailable no file is
    read or touched.
    """
    if not compressor.is_available():
        return CommandOutcome("error", str(ToolUnavailableError(config["executable"])))

    root = Path(root)
    if not root.is_dir():
        return CommandOutcome("info", f"No folder to scan: {root}")

    try:
        paths = discover(root, config["max_depth"])
        if not paths:
            return CommandOutcome("info", f"No GLB files found in {root}.")
        for path in paths:
            log_debug(f"Found {path}")

        selected = selector.select(candidates(paths, root))
        if not selected:
            return CommandOutcome("info", "No files selected.")
        for path in selected:
            log_debug(f"Selected {path}")

        result = run_batch(
            selected,
            compressor,
            reporter,
            base=root,
            suffix=config["intermediate_suffix"],
            continue_on_error=config["continue_on_error"],
        )
    except CompressError as e:
        return CommandOutcome("error", f"An error occurred: {e}")

    if not result.ok:
        details = "; ".join(str(f) for f in result.failures)
        return CommandOutcome(
            "error",
            f"{format_count(len(result.failures), 'file')} failed, "
            f"{len(result.completed)} compressed: {details}",
        )
    return CommandOutcome("ok", "Compression completed successfully!")
