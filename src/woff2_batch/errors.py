"""Exception hierarchy for batch font conversion."""

from __future__ import annotations


class Woff2BatchError(Exception):
    """Base error carrying the process exit code used by the CLI."""

    exit_code: int = 1


class PreconditionError(Woff2BatchError):
    """Raised when the batch cannot start, e.g. the input directory is missing."""

    exit_code = 2


class ConfigurationError(Woff2BatchError):
    """Raised when batch options fail validation."""


class CodecError(Woff2BatchError):
    """Raised by a codec when input bytes cannot be transcoded."""


class CodecLoadError(Woff2BatchError):
    """Raised when a codec reference cannot be resolved."""
