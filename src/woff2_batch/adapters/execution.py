"""Execution units that run one conversion job in isolation."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import multiprocessing
import os
import signal
from multiprocessing.connection import Connection
from multiprocessing.process import BaseProcess
from pathlib import Path

from woff2_batch.adapters.codecs import load_codec
from woff2_batch.application.results import (
    ConversionFailure,
    ConversionJob,
    ConversionResult,
    ConversionSuccess,
)
from woff2_batch.types import CodecFunction, StartMethod

logger = logging.getLogger(__name__)


def _describe_os_error(exc: OSError) -> str:
    return exc.strerror or str(exc)


def _write_output(path: Path, payload: bytes) -> None:
    """Write ``payload`` beside ``path`` and move it into place.

    A failed write removes only its own temporary file; an existing output is
    left as it was.
    """
    temporary = path.with_name(f".{path.name}.{os.getpid()}.tmp")
    try:
        temporary.write_bytes(payload)
        os.replace(temporary, path)
    except OSError:
        with contextlib.suppress(OSError):
            temporary.unlink(missing_ok=True)
        raise


def convert_job(job: ConversionJob, codec: CodecFunction) -> ConversionResult:
    """Read the input, transcode it once, and write the output on success.

    Every failure is returned as a :class:`ConversionFailure`.
    """
    try:
        data = job.input_path.read_bytes()
    except OSError as exc:
        return ConversionFailure(f"Unable to read input: {_describe_os_error(exc)}")

    try:
        output = codec(data)
    except asyncio.CancelledError:
        raise
    except BaseException as exc:
        # Plug-in codecs may call sys.exit().
        return ConversionFailure(f"{type(exc).__name__}: {exc}")
    if not isinstance(output, (bytes, bytearray)):
        return ConversionFailure(
            f"Codec returned {type(output).__name__}, expected bytes."
        )

    try:
        _write_output(job.output_path, bytes(output))
    except OSError as exc:
        return ConversionFailure(
            f"Unable to write output: {_describe_os_error(exc)}"
        )
    return ConversionSuccess(input_size=len(data), output_size=len(output))


def describe_exit(exitcode: int | None) -> str:
    """Describe how an execution unit ended without reporting a result."""
    if exitcode is None:
        return "execution unit ended without reporting a result"
    if exitcode < 0:
        try:
            name = signal.Signals(-exitcode).name
        except ValueError:
            name = f"signal {-exitcode}"
        return f"execution unit terminated by signal {name}"
    return f"execution unit exited unexpectedly with code {exitcode}"


def _unit_main(job: ConversionJob, codec_reference: str, channel: Connection) -> None:
    """Child-process entry point: convert and send exactly one message."""
    try:
        try:
            codec = load_codec(codec_reference)
        except Exception as exc:
            result: ConversionResult = ConversionFailure(f"{type(exc).__name__}: {exc}")
        else:
            result = convert_job(job, codec)
        channel.send(result)
    finally:
        channel.close()


class ProcessExecutionUnit:
    """Run each job in a freshly spawned process.

    The child resolves the codec itself and reports back over a one-way pipe, so
    a native crash inside the codec only ends that child.
    """

    def __init__(self, codec_reference: str, start_method: StartMethod = "spawn") -> None:
        self.codec_reference = codec_reference
        self._context = multiprocessing.get_context(start_method)

    async def run(self, job: ConversionJob) -> ConversionResult:
        """Convert ``job`` in a child process and await its result."""
        receiver, sender = self._context.Pipe(duplex=False)
        process = self._context.Process(
            target=_unit_main,
            args=(job, self.codec_reference, sender),
            name=f"woff2-unit-{job.index}",
        )
        try:
            process.start()
        except Exception as exc:
            logger.exception("failed to start execution unit for %s", job.input_path)
            receiver.close()
            sender.close()
            return ConversionFailure(f"execution unit failed to start: {exc}")

        # Only the child may hold the write end, so a crash surfaces as EOF.
        sender.close()
        try:
            return await asyncio.to_thread(self._collect, process, receiver)
        finally:
            receiver.close()

    @staticmethod
    def _collect(process: BaseProcess, receiver: Connection) -> ConversionResult:
        try:
            message = receiver.recv()
        except EOFError:
            process.join()
            logger.debug("unit %s exited with %s", process.name, process.exitcode)
            return ConversionFailure(describe_exit(process.exitcode))
        except Exception as exc:
            process.join()
            logger.debug("channel error from %s", process.name, exc_info=True)
            return ConversionFailure(f"execution unit channel error: {exc}")

        process.join()
        if not isinstance(message, (ConversionSuccess, ConversionFailure)):
            return ConversionFailure(
                "execution unit channel error: unexpected message "
                f"{type(message).__name__}"
            )
        return message


class ThreadExecutionUnit:
    """Run each job in a worker thread with an in-process codec."""

    def __init__(self, codec: CodecFunction) -> None:
        self.codec = codec

    async def run(self, job: ConversionJob) -> ConversionResult:
        """Convert ``job`` in a worker thread and await its result."""
        try:
            return await asyncio.to_thread(convert_job, job, self.codec)
        except Exception as exc:
            logger.exception("execution unit error for %s", job.input_path)
            return ConversionFailure(f"execution unit error: {exc}")
