"""Tests for CLI module."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import patch

from typer.testing import CliRunner

from glb_compress.cli import app

runner = CliRunner()


class TestCLIHelp:
    """Tests for CLI help and version."""

    def test_help_shows_options(self) -> None:
        """Help should show available options."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "--max-depth" in result.output
        assert "--yes" in result.output
        assert "--continue-on-error" in result.output

    def test_version_flag(self) -> None:
        """Version flag should show version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "glb-compress" in result.output


class TestCLIRun:
    """Tests for running the command with a fake compressor."""

    def test_tool_missing_exits_with_error(self, glb_tree: Path) -> None:
        """Unavailable tool should print the remediation and exit 1."""
        with patch("glb_compress.cli.GltfTransform.is_available", return_value=False):
            result = runner.invoke(app, [str(glb_tree), "--yes"])

        assert result.exit_code == 1
        assert "npm install -g @gltf-transform/cli" in result.output
        assert (glb_tree / "x.glb").read_bytes() == b"root"

    def test_compresses_all_with_yes(
        self, glb_tree: Path, compressor: Any
    ) -> None:
        """--yes should compress every discovered file without prompting."""
        with patch("glb_compress.cli.GltfTransform", return_value=compressor):
            result = runner.invoke(app, [str(glb_tree), "--yes"])

        assert result.exit_code == 0, result.output
        assert "Compression completed successfully!" in result.output
        assert len(compressor.calls) == 8
        assert (glb_tree / "a/b/c/d/e/z.glb").read_bytes() == b"z"

    def test_prompt_none_selects_nothing(
        self, glb_tree: Path, compressor: Any
    ) -> None:
        """Answering 'none' at the prompt should do nothing and exit 0."""
        with patch("glb_compress.cli.GltfTransform", return_value=compressor):
            result = runner.invoke(app, [str(glb_tree)], input="none\n")

        assert result.exit_code == 0, result.output
        assert "No files selected." in result.output
        assert compressor.calls == []

    def test_empty_folder_is_informational(
        self, tmp_path: Path, compressor: Any
    ) -> None:
        """No GLB files should not be an error."""
        with patch("glb_compress.cli.GltfTransform", return_value=compressor):
            result = runner.invoke(app, [str(tmp_path), "--yes"])

        assert result.exit_code == 0
        assert "No GLB files found" in result.output

    def test_failure_exits_with_error(
        self, glb_tree: Path, make_compressor: Any
    ) -> None:
        """A stage failure should exit 1 and name the file."""
        compressor = make_compressor(fail_on="etc1s")
        with patch("glb_compress.cli.GltfTransform", return_value=compressor):
            result = runner.invoke(app, [str(glb_tree), "--yes"])

        assert result.exit_code == 1
        assert "Failed to compress a/b/c/d/w.glb" in result.output

    def test_ignores_caller_environment(
        self, glb_tree: Path, compressor: Any
    ) -> None:
        """Shell overrides must not leak into runs that do not set them."""
        import os

        assert "GLB_COMPRESS_MAX_DEPTH" not in os.environ
        with patch("glb_compress.cli.GltfTransform", return_value=compressor):
            result = runner.invoke(app, [str(glb_tree), "--yes"])

        assert result.exit_code == 0, result.output
        assert len(compressor.calls) == 8

    def test_invalid_env_config_exits(self, tmp_path: Path) -> None:
        """A malformed environment override should be reported."""
        result = runner.invoke(
            app, [str(tmp_path)], env={"GLB_COMPRESS_MAX_DEPTH": "deep"}
        )

        assert result.exit_code == 1
        assert "GLB_COMPRESS_MAX_DEPTH" in result.output
