"""Font codecs and codec reference resolution."""

from __future__ import annotations

import importlib
import importlib.util
import io
from pathlib import Path
from types import ModuleType

from woff2_batch.errors import CodecError, CodecLoadError
from woff2_batch.types import CodecFunction

DEFAULT_ATTRIBUTE = "encode"


def encode_woff2(data: bytes) -> bytes:
    """Transcode a TrueType/OpenType font into WOFF2.

    Parameters
    ----------
    data : bytes
        Full contents of a ``.ttf`` or ``.otf`` file.

    Returns
    -------
    bytes
        WOFF2-compressed font.

    Raises
    ------
    CodecError
        If the bytes are not a readable font or compression fails.
    """
    from fontTools.ttLib import TTFont

    try:
        font = TTFont(io.BytesIO(data))
    except Exception as exc:
        raise CodecError(f"Not a valid font: {exc}") from exc

    buffer = io.BytesIO()
    try:
        font.flavor = "woff2"
        font.save(buffer)
    except Exception as exc:
        raise CodecError(f"WOFF2 encoding failed: {exc}") from exc
    finally:
        font.close()
    return buffer.getvalue()


BUILTIN_CODECS: dict[str, str] = {
    "woff2": "woff2_batch.adapters.codecs:encode_woff2",
}


def split_reference(reference: str) -> tuple[str, str]:
    """Split ``module:attribute`` (or ``file.py:attribute``) into its parts.

    The attribute defaults to ``encode`` when omitted.
    """
    cleaned = reference.strip()
    if not cleaned:
        raise CodecLoadError("Codec reference cannot be empty.")
    cleaned = BUILTIN_CODECS.get(cleaned, cleaned)
    target, sep, attribute = cleaned.rpartition(":")
    # Windows drive letters ("C:\\codec.py") are not attribute separators.
    if not sep or not attribute.isidentifier():
        return cleaned, DEFAULT_ATTRIBUTE
    return target, attribute


def _module_file(module_or_path: str) -> Path | None:
    """Return the file a path-style reference names, or None for import paths."""
    candidate = Path(module_or_path)
    if candidate.suffix != ".py" and not candidate.exists():
        return None
    if not candidate.is_file():
        raise CodecLoadError(f"Codec module file '{candidate}' not found.")
    return candidate


def check_codec_reference(reference: str) -> None:
    """Check that ``reference`` names a codec module without executing it.

    Raises
    ------
    CodecLoadError
        If the file does not exist or the module cannot be found.
    """
    target, _ = split_reference(reference)
    if _module_file(target) is not None:
        return
    try:
        found = importlib.util.find_spec(target)
    except Exception as exc:
        raise CodecLoadError(
            f"Unable to import codec module '{target}': {exc}"
        ) from exc
    if found is None:
        raise CodecLoadError(
            f"Unable to import codec module '{target}': no module named '{target}'"
        )


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import a codec module by import path or filesystem path.

    .. warning::
        This executes arbitrary Python code. Only load codecs from trusted
        sources.
    """
    candidate = _module_file(module_or_path)
    if candidate is not None:
        spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
        if spec is None or spec.loader is None:
            raise CodecLoadError(f"Unable to load codec module from {candidate}.")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            raise CodecLoadError(
                f"Unable to execute codec module {candidate}: {exc}"
            ) from exc
        return module

    try:
        return importlib.import_module(module_or_path)
    except Exception as exc:
        raise CodecLoadError(
            f"Unable to import codec module '{module_or_path}': {exc}"
        ) from exc


def load_codec(reference: str) -> CodecFunction:
    """Resolve a codec reference into a ``bytes -> bytes`` callable.

    Parameters
    ----------
    reference : str
        Built-in codec name, ``module:attribute`` or ``path/to/file.py:attribute``.
        The attribute is either a callable or an object exposing ``encode``.

    Returns
    -------
    CodecFunction
        Callable performing the transcoding.

    Raises
    ------
    CodecLoadError
        If the module or attribute cannot be resolved to a callable.
    """
    target, attribute = split_reference(reference)
    module = _import_module_or_path(target)
    try:
        codec = getattr(module, attribute)
    except AttributeError as exc:
        raise CodecLoadError(
            f"Codec module '{target}' has no attribute '{attribute}'."
        ) from exc

    encode = getattr(codec, "encode", None)
    if not callable(codec) and callable(encode):
        return encode
    if callable(codec):
        return codec
    raise CodecLoadError(
        f"Codec '{reference}' must be callable or expose an encode(bytes) method."
    )
