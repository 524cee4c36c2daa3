"""Exceptions raised while discovering and compressing GLB files."""

from __future__ import annotations

from glb_compress.utils.constants import INSTALL_HINT


class CompressError(Exception):
    """Base class for all glb-compress failures."""


class ToolUnavailableError(CompressError):
    """The external compressor could not be invoked."""

    def __init__(self, executable: str) -> None:
        self.executable = executable
        super().__init__(f"{executable} CLI is not installed. {INSTALL_HINT}")


class DiscoveryError(CompressError):
    """Directory traversal could not complete."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read directory {path}: {reason}")


class StageFailure(CompressError):
    """A pipeline stage failed for one file."""

    def __init__(self, display_name: str, stage: str, diagnostic: str) -> None:
        self.display_name = display_name
        self.stage = stage
        self.diagnostic = diagnostic
        super().__init__(f"Failed to compress {display_name}: {diagnostic}")
