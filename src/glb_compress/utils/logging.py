"""Colored console logging and timing utilities for glb-compress."""

import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass


# ANSI color codes
class Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    DIM = "\033[2m"

    CYAN = "\033[36m"

    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"


def _supports_color() -> bool:
    """Check if terminal supports color output."""
    if not hasattr(sys.stdout, "isatty"):
        return False
    if not sys.stdout.isatty():
        return False
    return True


_USE_COLOR = _supports_color()
_VERBOSE = False


def set_verbose(enabled: bool) -> None:
    """Enable or disable DEBUG output."""
    global _VERBOSE
    _VERBOSE = enabled


def _c(color: str, text: str) -> str:
    """Apply color to text if supported."""
    if not _USE_COLOR:
        return text
    return f"{color}{text}{Colors.RESET}"


def dim(text: str) -> str:
    """Make text dim."""
    return _c(Colors.DIM, text)


def cyan(text: str) -> str:
    """Color text cyan."""
    return _c(Colors.CYAN, text)


def bright_green(text: str) -> str:
    """Color text bright green."""
    return _c(Colors.BRIGHT_GREEN, text)


def bright_yellow(text: str) -> str:
    """Color text bright yellow."""
    return _c(Colors.BRIGHT_YELLOW, text)


def bright_red(text: str) -> str:
    """Color text bright red."""
    return _c(Colors.BRIGHT_RED, text)


# Log level formatting
def log_info(msg: str) -> None:
    """Print info message."""
    print(f"  {cyan('INFO')}  {msg}")


def log_ok(msg: str) -> None:
    """Print success message."""
    print(f"    {bright_green('OK')}  {msg}")


def log_warn(msg: str) -> None:
    """Print warning message."""
    print(f"  {bright_yellow('WARN')}  {msg}")


def log_error(msg: str) -> None:
    """Print error message."""
    print(f" {bright_red('ERROR')}  {msg}")


def log_debug(msg: str) -> None:
    """Print debug message (dimmed), only when verbose."""
    if not _VERBOSE:
        return
    print(f" {dim('DEBUG')}  {dim(msg)}")


def log_step(current: int, total: int, msg: str) -> None:
    """Print step progress message."""
    step_str = f"[{current}/{total}]"
    print(f"\n{cyan(step_str)} {msg}")


def log_detail(msg: str, indent: int = 6) -> None:
    """Print indented detail message."""
    print(f"{' ' * indent}{msg}")


# Timing utilities
def format_duration(seconds: float) -> str:
    """Format seconds into human-readable duration."""
    if seconds < 0.001:
        return f"{seconds * 1000000:.0f}μs"
    elif seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


@dataclass
class TimingResult:
    """Result from a timed operation."""

    elapsed: float
    message: str


@contextmanager
def timed(description: str) -> Iterator[TimingResult]:
    """Context manager measuring the wall time of a block.

    Usage:
        with timed("Compressing model.glb") as t:
            do_work()
        log_ok(f"Took {format_duration(t.elapsed)}")
    """
    result = TimingResult(elapsed=0.0, message=description)
    start = time.perf_counter()
    try:
        yield result
    finally:
        result.elapsed = time.perf_counter() - start


# Result formatting
def format_count(count: int, singular: str, plural: str | None = None) -> str:
    """Format count with proper singular/plural form."""
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count:,} {word}"


def format_bytes(size: int) -> str:
    """Format byte size in human-readable form."""
    if size < 1024:
        return f"{size} B"
    elif size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    elif size < 1024 * 1024 * 1024:
        return f"{size / 1024 / 1024:.2f} MB"
    else:
        return f"{size / 1024 / 1024 / 1024:.2f} GB"
