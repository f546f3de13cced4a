"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from woff2_batch.application.results import ConversionJob, ConversionResult


class JobScanner(Protocol):
    """List candidate input file names in a directory."""

    def scan(self, directory: Path) -> list[str]:
        """Return matching file names in scan order."""


class ExecutionUnit(Protocol):
    """Run one conversion job away from the controller."""

    async def run(self, job: ConversionJob) -> ConversionResult:
        """Convert ``job`` and return its single result; never raise."""


class ProgressSink(Protocol):
    """Receive progress notifications from the orchestrator."""

    write_errors: int

    def start(self, label: str) -> None:
        """Begin animating ``label``."""

    def update(self, label: str) -> None:
        """Replace the label of the running animation."""

    def stop(self, final_label: str, success: bool = True) -> None:
        """End the animation with a final status line."""

    def message(self, text: str) -> None:
        """Write a plain line."""

    def close(self) -> None:
        """Release any pending animation."""
