"""Terminal progress reporter driven by the asyncio event loop."""

from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import dataclass
from typing import TextIO

import typer

logger = logging.getLogger(__name__)

SPINNER_FRAMES = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")
SUCCESS_GLYPH = "✓"
FAILURE_GLYPH = "✗"
CLEAR_LINE = "\r\x1b[K"


@dataclass
class SpinnerState:
    """Animation state; mutated only by :class:`ProgressReporter`."""

    current_label: str = ""
    frame_index: int = 0
    is_active: bool = False


class ProgressReporter:
    """Single writer for per-job spinner lines and plain messages.

    ``start`` and ``stop`` return immediately; the animation runs as its own
    task on the running event loop and never overlaps another tick.

    Parameters
    ----------
    stream : TextIO | None, default=None
        Output stream, ``sys.stdout`` when omitted.
    interval : float, default=0.08
        Seconds between animation frames.
    animate : bool | None, default=None
        Whether to draw the spinner; defaults to ``stream.isatty()``.
    color : bool | None, default=None
        Whether to colour glyphs; defaults to ``animate``.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        interval: float = 0.08,
        animate: bool | None = None,
        color: bool | None = None,
    ) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self.interval = interval
        self.animate = _isatty(self._stream) if animate is None else animate
        self.color = self.animate if color is None else color
        self._state = SpinnerState()
        self._ticker: asyncio.Task[None] | None = None
        self.write_errors = 0

    @property
    def state(self) -> SpinnerState:
        """Snapshot of the current animation state."""
        return SpinnerState(
            current_label=self._state.current_label,
            frame_index=self._state.frame_index,
            is_active=self._state.is_active,
        )

    @property
    def ticking(self) -> bool:
        """Whether an animation task is scheduled."""
        return self._ticker is not None and not self._ticker.done()

    def start(self, label: str) -> None:
        """Begin a new animation cycle for ``label``.

        Any running tick is cancelled first.
        """
        self._cancel_ticker()
        self._state = SpinnerState(current_label=label, frame_index=0, is_active=True)
        if not self.animate:
            return
        self._write(CLEAR_LINE)
        self._ticker = asyncio.get_running_loop().create_task(self._tick())

    def update(self, label: str) -> None:
        """Change the label shown by the running animation."""
        self._state.current_label = label

    def stop(self, final_label: str, success: bool = True) -> None:
        """Cancel the animation and write the final status line."""
        self._cancel_ticker()
        self._state.is_active = False
        glyph = self._glyph(success)
        prefix = CLEAR_LINE if self.animate else ""
        self._write(f"{prefix}{glyph} {final_label}\n")

    def message(self, text: str) -> None:
        """Write a plain line outside of any animation cycle."""
        prefix = CLEAR_LINE if self.animate and self._state.is_active else ""
        self._write(f"{prefix}{text}\n")

    def close(self) -> None:
        """Cancel any pending animation task."""
        self._cancel_ticker()
        self._state.is_active = False

    async def _tick(self) -> None:
        while self._state.is_active:
            frame = SPINNER_FRAMES[self._state.frame_index]
            if self.color:
                frame = typer.style(frame, fg=typer.colors.CYAN)
            self._write(f"\r{frame} {self._state.current_label}")
            self._state.frame_index = (self._state.frame_index + 1) % len(
                SPINNER_FRAMES
            )
            await asyncio.sleep(self.interval)

    def _cancel_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    def _glyph(self, success: bool) -> str:
        glyph = SUCCESS_GLYPH if success else FAILURE_GLYPH
        if not self.color:
            return glyph
        return typer.style(glyph, fg=typer.colors.GREEN if success else typer.colors.RED)

    def _write(self, text: str) -> None:
        try:
            self._stream.write(text)
            self._stream.flush()
        except (OSError, ValueError) as exc:
            self.write_errors += 1
            if self.write_errors == 1:
                logger.warning("progress output failed: %s", exc)


def _isatty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False
