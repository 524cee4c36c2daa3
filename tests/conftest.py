"""
Pytest fixtures for glb-compress tests.

No test runs the real gltf-transform CLI; FakeCompressor stands in for it.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from glb_compress.utils.constants import (
    ENV_EXECUTABLE,
    ENV_MAX_DEPTH,
    ENV_SUFFIX,
    ENV_TIMEOUT,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove glb-compress environment overrides."""
    for name in (ENV_MAX_DEPTH, ENV_SUFFIX, ENV_EXECUTABLE, ENV_TIMEOUT):
        monkeypatch.delenv(name, raising=False)


class FakeCompressor:
    """Copies src to dst with a stage marker; can fail at a chosen stage."""

    def __init__(
        self,
        available: bool = True,
        fail_on: str | None = None,
        fail_for: str | None = None,
        partial_output: bool = False,
    ) -> None:
        self.available = available
        self.fail_on = fail_on
        self.fail_for = fail_for
        self.partial_output = partial_output
        self.calls: list[tuple[str, Path, Path]] = []
        self.probes = 0

    def is_available(self) -> bool:
        self.probes += 1
        return self.available

    def _run(self, stage: str, src: Path, dst: Path) -> tuple[bool, str]:
        self.calls.append((stage, src, dst))
        failing = self.fail_on == stage and (
            self.fail_for is None or self.fail_for in src.name
        )
        if failing:
            if self.partial_output:
                dst.write_bytes(b"partial")
            return False, f"{stage} exploded"
        dst.write_bytes(src.read_bytes() + f"+{stage}".encode())
        return True, "Success"

    def texture_compress(self, src: Path, dst: Path) -> tuple[bool, str]:
        return self._run("etc1s", src, dst)

    def geometry_compress(self, src: Path, dst: Path) -> tuple[bool, str]:
        return self._run("draco", src, dst)


class RecordingReporter:
    """Collects progress messages."""

    def __init__(self) -> None:
        self.started: list[str] = []
        self.messages: list[str] = []

    def start(self, index: int, total: int, name: str) -> None:
        self.started.append(f"{index}/{total} {name}")

    def report(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def compressor() -> FakeCompressor:
    return FakeCompressor()


@pytest.fixture
def make_compressor() -> type[FakeCompressor]:
    """FakeCompressor class, for tests that need a failing or missing tool."""
    return FakeCompressor


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def glb_tree(tmp_path: Path) -> Path:
    """
    Folder layout used by discovery and command tests:

        x.glb, a/x.glb, a/b/y.GLB, a/b/c/d/w.glb (depth 4),
        a/b/c/d/e/z.glb (depth 5), notes.txt, a/model.gltf
    """
    root = tmp_path / "workspace"
    deep = root / "a" / "b" / "c" / "d" / "e"
    deep.mkdir(parents=True)
    (root / "x.glb").write_bytes(b"root")
    (root / "a" / "x.glb").write_bytes(b"ax")
    (root / "a" / "b" / "y.GLB").write_bytes(b"aby")
    (root / "a" / "b" / "c" / "d" / "w.glb").write_bytes(b"w")
    (deep / "z.glb").write_bytes(b"z")
    (root / "notes.txt").write_text("not a model")
    (root / "a" / "model.gltf").write_text("{}")
    return root
