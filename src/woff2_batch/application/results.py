"""Application-layer job and result objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ConversionJob:
    """One input font and the path its converted output is written to."""

    input_path: Path
    output_path: Path
    index: int = 0

    @property
    def name(self) -> str:
        """Input file name used in progress labels."""
        return self.input_path.name


@dataclass(frozen=True)
class ConversionSuccess:
    """Conversion finished and the output file was written."""

    input_size: int = 0
    output_size: int = 0


@dataclass(frozen=True)
class ConversionFailure:
    """Conversion failed; ``message`` is shown to the operator."""

    message: str


ConversionResult = ConversionSuccess | ConversionFailure


@dataclass(frozen=True)
class FailedJob:
    """Failed job paired with its diagnostic message."""

    job: ConversionJob
    message: str


@dataclass
class RunSummary:
    """Aggregate outcome of one batch run.

    Only the orchestrator mutates a summary, through :meth:`record`.
    """

    total_jobs: int = 0
    succeeded: int = 0
    failed_jobs: list[FailedJob] = field(default_factory=list)
    reporter_errors: int = 0

    def record(self, job: ConversionJob, result: ConversionResult) -> None:
        """Account for the single result produced for ``job``."""
        if isinstance(result, ConversionSuccess):
            self.succeeded += 1
            return
        self.failed_jobs.append(FailedJob(job=job, message=result.message))
        self.failed_jobs.sort(key=lambda failed: failed.job.index)

    @property
    def failed(self) -> int:
        """Number of failed jobs."""
        return len(self.failed_jobs)

    @property
    def complete(self) -> bool:
        """Whether every job has a recorded result."""
        return self.succeeded + self.failed == self.total_jobs
