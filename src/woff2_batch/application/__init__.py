"""Application-layer use-cases and option objects."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from woff2_batch.application.options import (
    BatchOptions,
    DispatchOptions,
    ReportOptions,
    ScanOptions,
)
from woff2_batch.application.ports import ExecutionUnit, JobScanner, ProgressSink
from woff2_batch.application.results import (
    ConversionFailure,
    ConversionJob,
    ConversionResult,
    ConversionSuccess,
    FailedJob,
    RunSummary,
)


def build_batch_options(
    *,
    extensions: Iterable[str] = (".ttf", ".otf"),
    target_extension: str = ".woff2",
    concurrency: int = 1,
    isolation: str = "process",
    codec: str = "woff2",
    start_method: str = "spawn",
    animate: bool | None = None,
    tick_interval: float = 0.08,
    dry_run: bool = False,
) -> BatchOptions:
    """Build typed batch options via lazy use-case import."""
    from woff2_batch.application.use_cases import build_batch_options as _impl

    return _impl(
        extensions=extensions,
        target_extension=target_extension,
        concurrency=concurrency,
        isolation=isolation,
        codec=codec,
        start_method=start_method,
        animate=animate,
        tick_interval=tick_interval,
        dry_run=dry_run,
    )


def convert_directory(
    *,
    input_dir: Path,
    output_dir: Path,
    options: BatchOptions | None = None,
    scanner: JobScanner | None = None,
    unit: ExecutionUnit | None = None,
    reporter: ProgressSink | None = None,
) -> RunSummary:
    """Convert a directory of fonts via lazy use-case import."""
    from woff2_batch.application.use_cases import convert_directory as _impl

    return _impl(
        input_dir=input_dir,
        output_dir=output_dir,
        options=options,
        scanner=scanner,
        unit=unit,
        reporter=reporter,
    )


__all__ = [
    "BatchOptions",
    "ConversionFailure",
    "ConversionJob",
    "ConversionResult",
    "ConversionSuccess",
    "DispatchOptions",
    "FailedJob",
    "ReportOptions",
    "RunSummary",
    "ScanOptions",
    "build_batch_options",
    "convert_directory",
]
