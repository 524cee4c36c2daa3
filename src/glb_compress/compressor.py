"""Wrapper for the gltf-transform texture/geometry compression CLI."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Protocol, TypeAlias

from glb_compress.utils.constants import DEFAULT_CONFIG
from glb_compress.utils.logging import log_debug, log_warn

# (success, message): message is stderr on failure, "Success" otherwise
StageResult: TypeAlias = tuple[bool, str]


class Compressor(Protocol):
    """Capability the pipeline needs from an external compressor."""

    def is_available(self) -> bool: ...

    def texture_compress(self, src: Path, dst: Path) -> StageResult: ...

    def geometry_compress(self, src: Path, dst: Path) -> StageResult: ...


def find_executable(name: str) -> str | None:
    """Find an executable in PATH (or accept an explicit path)."""
    return shutil.which(name)


class GltfTransform:
    """Runs ``gltf-transform etc1s`` and ``gltf-transform draco`` as subprocesses."""

    def __init__(
        self,
        executable: str = DEFAULT_CONFIG["executable"],
        timeout: int = DEFAULT_CONFIG["timeout"],
    ) -> None:
        self.executable = executable
        self.timeout = timeout

    def _command(self) -> str:
        return find_executable(self.executable) or self.executable

    def is_available(self) -> bool:
        """Probe the CLI with ``--version``."""
        if find_executable(self.executable) is None:
            log_debug(f"{self.executable} not found in PATH")
            return False
        try:
            result = subprocess.run(
                [self._command(), "--version"],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (subprocess.SubprocessError, OSError) as e:
            log_debug(f"{self.executable} --version failed: {e}")
            return False
        if result.returncode != 0:
            return False
        log_debug(f"{self.executable} version {result.stdout.strip()}")
        return True

    def texture_compress(self, src: Path, dst: Path) -> StageResult:
        """ETC1S texture compression of src into dst."""
        return self._run("etc1s", src, dst)

    def geometry_compress(self, src: Path, dst: Path) -> StageResult:
        """Draco geometry compression of src into dst."""
        return self._run("draco", src, dst)

    def _run(self, subcommand: str, src: Path, dst: Path) -> StageResult:
        """Execute one gltf-transform subcommand."""
        cmd = [self._command(), subcommand, str(src), str(dst)]
        log_debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            return (
                False,
                f"{self.executable} {subcommand} timed out after {self.timeout}s",
            )
        except subprocess.SubprocessError as e:
            return False, f"{self.executable} subprocess error: {e}"
        except OSError as e:
            return False, f"{self.executable} OS error (cmd={cmd}): {e}"

        stderr = result.stderr.strip()
        if result.returncode != 0:
            error_msg = (
                stderr
                or result.stdout.strip()
                or f"{self.executable} {subcommand} exited with code {result.returncode}"
            )
            return False, error_msg
        if stderr:
            log_warn(f"Warning: {stderr}")
        return True, "Success"
