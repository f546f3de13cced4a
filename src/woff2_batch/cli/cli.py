#!/usr/bin/env python3
"""
woff2_batch.cli.cli

Typer-based CLI for converting a directory of TTF/OTF fonts to WOFF2.

Each font is converted in its own isolated execution unit, so a malformed or
crashing font is reported as a failed item while the rest of the batch keeps
going.

Examples
--------
Convert ``./input`` into ``./output``:

    woff2-batch convert

Convert with four workers and a custom codec:

    woff2-batch convert fonts/ web/ --concurrency 4 --codec ./my_codec.py:encode
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

import typer

from woff2_batch.errors import Woff2BatchError

app = typer.Typer(
    name="woff2-batch",
    help="Convert directories of TTF/OTF fonts to WOFF2.",
    no_args_is_help=True,
)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error and return the process exit code.

    Parameters
    ----------
    exc : Exception
        Exception raised while running the batch.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.secho(f"✗ {type(exc).__name__}: {exc}", fg=typer.colors.RED, err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _configure_logging(debug: bool) -> None:
    """Route library logging to stderr; verbose only with ``--debug``."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show debug logs and full tracebacks."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug logging and error output.
    """
    _configure_logging(debug)
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    input_dir: Path = typer.Argument(
        Path("input"),
        envvar="WOFF2_BATCH_INPUT_DIR",
        help="Directory containing .ttf/.otf files.",
        show_default=True,
    ),
    output_dir: Path = typer.Argument(
        Path("output"),
        envvar="WOFF2_BATCH_OUTPUT_DIR",
        help="Directory receiving .woff2 files (created if missing).",
        show_default=True,
    ),
    extension: list[str] | None = typer.Option(
        None,
        "--extension",
        help="Input extension to include (repeatable). Default: .ttf and .otf.",
    ),
    concurrency: int = typer.Option(
        1,
        "--concurrency",
        "-j",
        envvar="WOFF2_BATCH_CONCURRENCY",
        min=1,
        help="Maximum conversions in flight.",
    ),
    isolation: str = typer.Option(
        "process",
        "--isolation",
        help="Run each conversion in a fresh 'process' or a worker 'thread'.",
    ),
    codec: str = typer.Option(
        "woff2",
        "--codec",
        help="Codec name, module:attr, or path/to/file.py:attr.",
    ),
    start_method: str = typer.Option(
        "spawn",
        "--start-method",
        help="multiprocessing start method for process isolation.",
    ),
    animation: bool | None = typer.Option(
        None,
        "--animation/--no-animation",
        help="Force the progress spinner on or off (default: auto-detect TTY).",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="List planned conversions without running them."
    ),
) -> None:
    """Convert every font in INPUT_DIR to WOFF2 in OUTPUT_DIR.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    input_dir : Path
        Directory scanned for fonts; must exist.
    output_dir : Path
        Destination directory for converted files.
    concurrency : int
        Maximum number of execution units running at once.

    Notes
    -----
    - Failed fonts are listed in the summary but do not change the exit code.
    - A missing INPUT_DIR exits with code 2 before anything is written.
    """
    debug: bool = bool(ctx.obj.get("debug", False))

    try:
        from woff2_batch.application.use_cases import (
            build_batch_options,
            convert_directory,
        )

        options = build_batch_options(
            extensions=extension or (".ttf", ".otf"),
            concurrency=concurrency,
            isolation=isolation,
            codec=codec,
            start_method=start_method,
            animate=animation,
            dry_run=dry_run,
        )
        summary = convert_directory(
            input_dir=input_dir, output_dir=output_dir, options=options
        )
    except Woff2BatchError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_conversion_error(exc, debug))

    if summary.reporter_errors:
        typer.echo(
            f"warning: {summary.reporter_errors} progress writes failed",
            err=True,
        )


@app.command("doctor")
def doctor_cmd() -> None:
    """Print installed toolchain versions and available codecs."""
    import importlib.metadata as metadata

    from woff2_batch.adapters.codecs import BUILTIN_CODECS

    modules = ["fonttools", "brotli", "pydantic", "typer"]

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in modules:
        try:
            version = metadata.version(module)
            typer.echo(f"{module}: {version}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")

    typer.echo(f"codecs: {', '.join(sorted(BUILTIN_CODECS))}")


if __name__ == "__main__":
    app()
