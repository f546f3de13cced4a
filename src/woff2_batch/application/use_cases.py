"""Application use-cases orchestrating batch conversion."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from woff2_batch.adapters.codecs import check_codec_reference, load_codec
from woff2_batch.adapters.execution import ProcessExecutionUnit, ThreadExecutionUnit
from woff2_batch.adapters.scanner import DirectoryScanner
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
    RunSummary,
)
from woff2_batch.errors import ConfigurationError, PreconditionError
from woff2_batch.infrastructure.progress import ProgressReporter
from woff2_batch.schemas import BatchConfig

logger = logging.getLogger(__name__)


def _format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    return f"{size / 1024:.1f} KB"


class BatchOrchestrator:
    """Drive scan, dispatch and reporting for one directory.

    Parameters
    ----------
    scanner : JobScanner
        Lists candidate input names.
    unit : ExecutionUnit
        Runs each job; every ``run`` call uses a fresh isolated worker.
    reporter : ProgressSink
        Owns all terminal output for the run.
    options : BatchOptions
        Target extension, dry-run flag and dispatch concurrency.
    """

    def __init__(
        self,
        *,
        scanner: JobScanner,
        unit: ExecutionUnit,
        reporter: ProgressSink,
        options: BatchOptions | None = None,
    ) -> None:
        self.scanner = scanner
        self.unit = unit
        self.reporter = reporter
        self.options = options or BatchOptions()
        self._in_flight: dict[int, str] = {}

    def plan(self, input_dir: Path, output_dir: Path, names: Iterable[str]) -> list[ConversionJob]:
        """Build one job per input name, in scan order."""
        return [
            ConversionJob(
                input_path=(input_dir / name).resolve(),
                output_path=(
                    output_dir / f"{Path(name).stem}{self.options.target_extension}"
                ).resolve(),
                index=index,
            )
            for index, name in enumerate(names)
        ]

    async def run(self, input_dir: Path, output_dir: Path) -> RunSummary:
        """Convert every matching file in ``input_dir`` into ``output_dir``.

        Raises
        ------
        PreconditionError
            If ``input_dir`` does not exist. Nothing is created in that case.
        """
        names = self.scanner.scan(input_dir)
        if not self.options.dry_run and not output_dir.is_dir():
            try:
                output_dir.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise PreconditionError(
                    f"Unable to create output directory '{output_dir}': {exc}"
                ) from exc
            self.reporter.message(f"Created output directory: {output_dir}")

        summary = RunSummary(total_jobs=len(names))
        if not names:
            self.reporter.message(f"No TTF/OTF files found in '{input_dir}'.")
            summary.reporter_errors = self.reporter.write_errors
            return summary

        jobs = self.plan(input_dir, output_dir, names)
        if self.options.dry_run:
            self.reporter.message(f"Would convert {len(jobs)} font files:")
            for job in jobs:
                self.reporter.message(f"  {job.name} -> {job.output_path}")
            summary.total_jobs = 0
            summary.reporter_errors = self.reporter.write_errors
            return summary

        self.reporter.message(f"Found {len(jobs)} font files to convert.")
        await self._dispatch_all(jobs, summary)

        self.reporter.message(
            f"Converted {summary.succeeded}/{summary.total_jobs} font files."
        )
        for failed in summary.failed_jobs:
            self.reporter.message(f"  {failed.job.name}: {failed.message}")
        summary.reporter_errors = self.reporter.write_errors
        return summary

    async def _dispatch_all(self, jobs: list[ConversionJob], summary: RunSummary) -> None:
        claimed: dict[Path, ConversionJob] = {}
        runnable: list[ConversionJob] = []
        for job in jobs:
            owner = claimed.setdefault(job.output_path, job)
            if owner is job:
                runnable.append(job)
                continue
            result = ConversionFailure(
                f"output path collides with '{owner.name}' ({job.output_path.name})"
            )
            self.reporter.stop(self._final_label(job, result), success=False)
            summary.record(job, result)

        concurrency = self.options.dispatch.concurrency
        if concurrency <= 1:
            for job in runnable:
                await self._dispatch_one(job, summary)
            return

        limit = asyncio.Semaphore(concurrency)

        async def _guarded(job: ConversionJob) -> None:
            async with limit:
                await self._dispatch_one(job, summary)

        await asyncio.gather(*(_guarded(job) for job in runnable))

    async def _dispatch_one(self, job: ConversionJob, summary: RunSummary) -> None:
        label = f"Converting '{job.name}'..."
        self._in_flight[job.index] = label
        self.reporter.start(label)
        try:
            result = await self.unit.run(job)
        except Exception as exc:
            logger.exception("unexpected dispatch error for %s", job.input_path)
            result = ConversionFailure(f"execution unit error: {exc}")

        del self._in_flight[job.index]
        success = isinstance(result, ConversionSuccess)
        if not success:
            logger.info("conversion of %s failed: %s", job.input_path, result.message)
        self.reporter.stop(self._final_label(job, result), success=success)
        summary.record(job, result)
        if self._in_flight:
            self.reporter.start(next(reversed(self._in_flight.values())))

    @staticmethod
    def _final_label(job: ConversionJob, result: ConversionResult) -> str:
        if isinstance(result, ConversionSuccess):
            return (
                f"Created '{job.output_path.name}' "
                f"({_format_size(result.input_size)} -> {_format_size(result.output_size)})"
            )
        return f"Failed '{job.name}': {result.message}"


def create_execution_unit(config: BatchConfig) -> ExecutionUnit:
    """Build the execution unit selected by ``config.isolation``.

    A bad codec reference fails the run before any job is dispatched. Under
    process isolation the codec module is only located here; it is imported in
    each child.
    """
    if config.isolation == "thread":
        return ThreadExecutionUnit(load_codec(config.codec))
    check_codec_reference(config.codec)
    return ProcessExecutionUnit(config.codec, start_method=config.start_method)


def convert_directory(
    *,
    input_dir: Path,
    output_dir: Path,
    options: BatchOptions | None = None,
    scanner: JobScanner | None = None,
    unit: ExecutionUnit | None = None,
    reporter: ProgressSink | None = None,
) -> RunSummary:
    """Use-case: convert every font in ``input_dir`` and return the run summary."""
    options = options or BatchOptions()
    try:
        config = BatchConfig(
            input_dir=input_dir,
            output_dir=output_dir,
            extensions=options.scan.extensions,
            target_extension=options.target_extension,
            concurrency=options.dispatch.concurrency,
            isolation=options.dispatch.isolation,
            codec=options.dispatch.codec,
            start_method=options.dispatch.start_method,
            tick_interval=options.report.tick_interval,
            animate=options.report.animate,
            dry_run=options.dry_run,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid batch conversion parameters: {exc}") from exc

    options = build_batch_options(
        extensions=config.extensions,
        target_extension=config.target_extension,
        concurrency=config.concurrency,
        isolation=config.isolation,
        codec=config.codec,
        start_method=config.start_method,
        animate=config.animate,
        tick_interval=config.tick_interval,
        dry_run=config.dry_run,
    )
    scanner = scanner or DirectoryScanner(config.extensions)
    unit = unit or create_execution_unit(config)
    reporter = reporter or ProgressReporter(
        interval=config.tick_interval, animate=config.animate
    )

    orchestrator = BatchOrchestrator(
        scanner=scanner, unit=unit, reporter=reporter, options=options
    )

    async def _run() -> RunSummary:
        try:
            return await orchestrator.run(config.input_dir, config.output_dir)
        finally:
            reporter.close()

    return asyncio.run(_run())


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
    """Build typed option object from command/API params."""
    return BatchOptions(
        target_extension=target_extension,
        dry_run=dry_run,
        scan=ScanOptions(extensions=tuple(extensions)),
        dispatch=DispatchOptions(
            concurrency=concurrency,
            isolation=isolation,  # type: ignore[arg-type]
            codec=codec,
            start_method=start_method,  # type: ignore[arg-type]
        ),
        report=ReportOptions(animate=animate, tick_interval=tick_interval),
    )
