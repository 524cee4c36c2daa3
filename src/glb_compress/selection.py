"""Choosing which discovered files to compress."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from glb_compress.discovery import FileCandidate


class Selector(Protocol):
    """Narrows candidates to the user's chosen subset (None = cancelled)."""

    def select(self, candidates: list[FileCandidate]) -> list[Path] | None: ...


class AcceptAllSelector:
    """Non-interactive selection of every candidate."""

    def select(self, candidates: list[FileCandidate]) -> list[Path] | None:
        return [c.path for c in candidates]


def parse_selection(text: str, count: int) -> list[int]:
    """
    Parse a selection string into zero-based indices.

    Accepts "all" (or an empty string), "none", or comma separated 1-based
    indices and inclusive ranges such as "1,3-5". The result follows
    candidate order with duplicates removed.

    Raises:
        ValueError: on malformed input or out-of-range indices.
    """
    text = text.strip().lower()
    if text in ("", "all", "*"):
        return list(range(count))
    if text == "none":
        return []

    chosen: set[int] = set()
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start_str, _, end_str = part.partition("-")
            start, end = int(start_str), int(end_str)
            if start > end:
                raise ValueError(f"Invalid range: {part}")
        else:
            start = end = int(part)
        if start < 1 or end > count:
            raise ValueError(f"Index out of range 1-{count}: {part}")
        chosen.update(range(start - 1, end))
    return sorted(chosen)


class PromptSelector:
    """Interactive selection on the terminal; every file starts selected."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def _render(self, candidates: list[FileCandidate]) -> None:
        table = Table(title="Select GLB files to compress", show_edge=False)
        table.add_column("#", justify="right", style="cyan")
        table.add_column("File")
        for i, candidate in enumerate(candidates, start=1):
            table.add_row(str(i), candidate.display_name)
        self.console.print(table)

    def select(self, candidates: list[FileCandidate]) -> list[Path] | None:
        if not candidates:
            return None
        self._render(candidates)
        while True:
            answer = Prompt.ask(
                "Files to compress ([bold]all[/], [bold]none[/], or e.g. 1,3-5)",
                console=self.console,
                default="all",
            )
            try:
                indices = parse_selection(answer, len(candidates))
            except ValueError as e:
                self.console.print(f"[bold red][ERROR][/] {e}")
                continue
            return [candidates[i].path for i in indices]
