"""Typed option objects shared across batch use-cases."""

from __future__ import annotations

from dataclasses import dataclass

from woff2_batch.types import IsolationMode, StartMethod

DEFAULT_EXTENSIONS: tuple[str, ...] = (".ttf", ".otf")
DEFAULT_TARGET_EXTENSION = ".woff2"
DEFAULT_CODEC = "woff2"


@dataclass(frozen=True)
class ScanOptions:
    """Input discovery configuration."""

    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS


@dataclass(frozen=True)
class DispatchOptions:
    """Execution unit configuration."""

    concurrency: int = 1
    isolation: IsolationMode = "process"
    codec: str = DEFAULT_CODEC
    start_method: StartMethod = "spawn"


@dataclass(frozen=True)
class ReportOptions:
    """Progress output configuration."""

    animate: bool | None = None
    tick_interval: float = 0.08


@dataclass(frozen=True)
class BatchOptions:
    """Shared batch options passed through use-cases."""

    target_extension: str = DEFAULT_TARGET_EXTENSION
    dry_run: bool = False
    scan: ScanOptions = ScanOptions()
    dispatch: DispatchOptions = DispatchOptions()
    report: ReportOptions = ReportOptions()
