"""Two-stage compression pipeline: ETC1S textures, then Draco geometry.

Each job runs strictly in order:

    1. texture_compress(input, intermediate), then delete input
    2. geometry_compress(intermediate, input), then delete intermediate

The final file ends up at the original input path. A failed stage deletes
no predecessor file, so exactly one of {input, intermediate} remains and
tells which stage last completed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol

from glb_compress.compressor import Compressor, StageResult
from glb_compress.errors import StageFailure
from glb_compress.utils import display_name, intermediate_path
from glb_compress.utils.constants import DEFAULT_CONFIG
from glb_compress.utils.logging import (
    format_bytes,
    format_duration,
    log_detail,
    log_error,
    log_ok,
    log_step,
    timed,
)


class JobStage(Enum):
    PENDING_TEXTURE_COMPRESSION = "etc1s"
    PENDING_GEOMETRY_COMPRESSION = "draco"
    DONE = "done"
    FAILED = "failed"


class ProgressReporter(Protocol):
    """Receives progress for one file at a time."""

    def start(self, index: int, total: int, name: str) -> None: ...

    def report(self, message: str) -> None: ...


class ConsoleReporter:
    """Progress on the terminal via the colored log helpers."""

    def start(self, index: int, total: int, name: str) -> None:
        log_step(index, total, f"Compressing {name}")

    def report(self, message: str) -> None:
        log_detail(message)


@dataclass
class CompressionJob:
    """One file's pipeline run."""

    input_path: Path
    intermediate_path: Path
    display_name: str
    stage: JobStage = JobStage.PENDING_TEXTURE_COMPRESSION

    @classmethod
    def for_file(
        cls,
        input_path: str | Path,
        *,
        base: str | Path | None = None,
        suffix: str = DEFAULT_CONFIG["intermediate_suffix"],
    ) -> CompressionJob:
        input_path = Path(input_path)
        return cls(
            input_path=input_path,
            intermediate_path=intermediate_path(input_path, suffix),
            display_name=display_name(input_path, base),
        )


@dataclass
class BatchResult:
    """Outcome of a batch run."""

    completed: list[Path] = field(default_factory=list)
    failures: list[StageFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def _discard(path: Path) -> None:
    """Remove a partial output left by a failed stage."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        log_error(f"Could not remove partial output {path}: {e}")


def _fail(job: CompressionJob, stage: JobStage, diagnostic: str) -> StageFailure:
    job.stage = JobStage.FAILED
    return StageFailure(job.display_name, stage.value, diagnostic)


def _run_stage(
    job: CompressionJob,
    stage: JobStage,
    run: Callable[[Path, Path], StageResult],
    src: Path,
    dst: Path,
    reporter: ProgressReporter,
    delete_message: str,
) -> None:
    """Run one stage, then delete the file it consumed.

    On failure only output this stage created is removed; a file already
    at dst before the stage ran is left alone.
    """
    dst_existed = dst.exists()
    success, message = run(src, dst)
    if not success:
        if not dst_existed:
            _discard(dst)
        raise _fail(job, stage, message)

    reporter.report(delete_message)
    try:
        src.unlink()
    except OSError as e:
        raise _fail(job, stage, f"Cannot delete {src}: {e}") from e


def run_pipeline(
    job: CompressionJob,
    compressor: Compressor,
    reporter: ProgressReporter,
) -> None:
    """
    Run both stages for one job.

    Raises:
        StageFailure: on the first failing stage or delete. The job is
            left in JobStage.FAILED.
    """
    if job.intermediate_path == job.input_path:
        raise _fail(
            job,
            JobStage.PENDING_TEXTURE_COMPRESSION,
            "intermediate path equals input path",
        )

    job.stage = JobStage.PENDING_TEXTURE_COMPRESSION
    reporter.report("Compressing with etc1s...")
    _run_stage(
        job,
        JobStage.PENDING_TEXTURE_COMPRESSION,
        compressor.texture_compress,
        src=job.input_path,
        dst=job.intermediate_path,
        reporter=reporter,
        delete_message="Deleting original file...",
    )

    job.stage = JobStage.PENDING_GEOMETRY_COMPRESSION
    reporter.report("Compressing with draco...")
    _run_stage(
        job,
        JobStage.PENDING_GEOMETRY_COMPRESSION,
        compressor.geometry_compress,
        src=job.intermediate_path,
        dst=job.input_path,
        reporter=reporter,
        delete_message="Deleting intermediate file...",
    )

    job.stage = JobStage.DONE


def run_batch(
    paths: list[Path],
    compressor: Compressor,
    reporter: ProgressReporter,
    *,
    base: str | Path | None = None,
    suffix: str = DEFAULT_CONFIG["intermediate_suffix"],
    continue_on_error: bool = DEFAULT_CONFIG["continue_on_error"],
) -> BatchResult:
    """
    Compress files one at a time, in list order.

    With continue_on_error=False the first StageFailure propagates and the
    remaining files are not touched. Otherwise failures are collected in
    the returned BatchResult and the batch continues.
    """
    result = BatchResult()
    total = len(paths)
    for index, path in enumerate(paths, start=1):
        job = CompressionJob.for_file(path, base=base, suffix=suffix)
        reporter.start(index, total, job.display_name)
        size_before = _file_size(job.input_path)
        try:
            with timed(job.display_name) as timing:
                run_pipeline(job, compressor, reporter)
        except StageFailure as failure:
            if not continue_on_error:
                raise
            log_error(str(failure))
            result.failures.append(failure)
            continue
        result.completed.append(job.input_path)
        log_ok(
            f"{job.display_name}: {format_bytes(size_before)} -> "
            f"{format_bytes(_file_size(job.input_path))} "
            f"in {format_duration(timing.elapsed)}"
        )
    return result


def _file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0
