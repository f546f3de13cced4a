"""Top-level API for batch TTF/OTF to WOFF2 conversion."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from woff2_batch.application.results import RunSummary

__version__ = "0.1.0"


def encode_woff2(data: bytes) -> bytes:
    """Transcode TrueType/OpenType font bytes into WOFF2.

    Parameters
    ----------
    data : bytes
        Full contents of a ``.ttf`` or ``.otf`` file.

    Returns
    -------
    bytes
        WOFF2-compressed font.
    """
    from .adapters.codecs import encode_woff2 as _impl

    return _impl(data)


def convert_directory(
    input_dir: str | Path,
    output_dir: str | Path,
    *,
    extensions: Iterable[str] = (".ttf", ".otf"),
    concurrency: int = 1,
    isolation: str = "process",
    codec: str = "woff2",
    animate: bool | None = None,
) -> RunSummary:
    """Convert every matching font in ``input_dir`` into ``output_dir``.

    Parameters
    ----------
    input_dir : str | Path
        Directory scanned (non-recursively) for input fonts.
    output_dir : str | Path
        Destination directory, created when missing.
    extensions : Iterable[str], default=(".ttf", ".otf")
        Case-insensitive input extensions.
    concurrency : int, default=1
        Maximum number of execution units in flight.
    isolation : {"process", "thread"}, default="process"
        Where each conversion runs.
    codec : str, default="woff2"
        Codec reference (built-in name, ``module:attr`` or ``file.py:attr``).
    animate : bool | None, default=None
        Force the progress spinner on or off; auto-detected from stdout.

    Returns
    -------
    RunSummary
        Counts and per-file failures for the run.

    Raises
    ------
    PreconditionError
        If ``input_dir`` does not exist.
    """
    from .application.use_cases import build_batch_options
    from .application.use_cases import convert_directory as _impl

    options = build_batch_options(
        extensions=extensions,
        concurrency=concurrency,
        isolation=isolation,
        codec=codec,
        animate=animate,
    )
    return _impl(input_dir=Path(input_dir), output_dir=Path(output_dir), options=options)


__all__ = ["RunSummary", "__version__", "convert_directory", "encode_woff2"]
