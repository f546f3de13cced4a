"""Unit tests for codec adapters and codec reference loading."""

from __future__ import annotations

import io
import textwrap
from pathlib import Path

import pytest

from woff2_batch.adapters import codecs
from woff2_batch.adapters.codecs import (
    check_codec_reference,
    encode_woff2,
    load_codec,
    split_reference,
)
from woff2_batch.errors import CodecError, CodecLoadError


@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        ("woff2", ("woff2_batch.adapters.codecs", "encode_woff2")),
        ("pkg.mod:convert", ("pkg.mod", "convert")),
        ("pkg.mod", ("pkg.mod", "encode")),
        ("/tmp/codec.py:CODEC", ("/tmp/codec.py", "CODEC")),
        ("C:\\codecs\\mine.py", ("C:\\codecs\\mine.py", "encode")),
    ],
)
def test_split_reference(reference: str, expected: tuple[str, str]) -> None:
    """Split module/attribute pairs and default the attribute to encode."""
    assert split_reference(reference) == expected


def test_split_reference_rejects_blank() -> None:
    """Blank references are rejected."""
    with pytest.raises(CodecLoadError, match="empty"):
        split_reference("   ")


def test_load_builtin_codec() -> None:
    """Resolve the built-in WOFF2 codec by name."""
    assert load_codec("woff2") is codecs.encode_woff2


def test_load_codec_from_file_function(tmp_path: Path) -> None:
    """Load a plain function from a file path."""
    module = tmp_path / "reverse_codec.py"
    module.write_text("def encode(data):\n    return data[::-1]\n")

    codec = load_codec(str(module))
    assert codec(b"abc") == b"cba"


def test_load_codec_from_file_object_with_encode(tmp_path: Path) -> None:
    """Accept objects exposing an encode method."""
    module = tmp_path / "object_codec.py"
    module.write_text(
        textwrap.dedent(
            """
            class Upper:
                def encode(self, data):
                    return data.upper()

            CODEC = Upper()
            """
        )
    )

    codec = load_codec(f"{module}:CODEC")
    assert codec(b"abc") == b"ABC"


def test_load_codec_missing_attribute(tmp_path: Path) -> None:
    """Report missing attributes clearly."""
    module = tmp_path / "empty_codec.py"
    module.write_text("VALUE = 1\n")

    with pytest.raises(CodecLoadError, match="no attribute 'encode'"):
        load_codec(str(module))


def test_load_codec_rejects_non_callable(tmp_path: Path) -> None:
    """Reject attributes that cannot transcode bytes."""
    module = tmp_path / "bad_codec.py"
    module.write_text("encode = 42\n")

    with pytest.raises(CodecLoadError, match="must be callable"):
        load_codec(str(module))


def test_load_codec_missing_file(tmp_path: Path) -> None:
    """A .py path that does not exist fails to load."""
    with pytest.raises(CodecLoadError, match="not found"):
        load_codec(str(tmp_path / "nope.py"))


def test_load_codec_unknown_module() -> None:
    """Unknown import paths fail to load."""
    with pytest.raises(CodecLoadError, match="Unable to import"):
        load_codec("woff2_batch_definitely_missing_module:encode")


def test_load_codec_module_raising_on_import(tmp_path: Path) -> None:
    """Errors while executing the module surface as load errors."""
    module = tmp_path / "broken_codec.py"
    module.write_text("raise RuntimeError('boom')\n")

    with pytest.raises(CodecLoadError, match="boom"):
        load_codec(str(module))


def test_check_codec_reference_does_not_execute(tmp_path: Path) -> None:
    """Checking a file reference never runs the module."""
    module = tmp_path / "loud_codec.py"
    module.write_text("raise RuntimeError('executed')\n")

    check_codec_reference(f"{module}:encode")


@pytest.mark.parametrize("reference", ["woff2", "woff2_batch.adapters.codecs:encode_woff2"])
def test_check_codec_reference_accepts_importable(reference: str) -> None:
    """Importable modules pass the check."""
    check_codec_reference(reference)


def test_check_codec_reference_rejects_unknown_module() -> None:
    """Modules that cannot be found are load errors."""
    with pytest.raises(CodecLoadError, match="no module named"):
        check_codec_reference("woff2_batch_definitely_missing_module:encode")


def test_check_codec_reference_rejects_missing_parent_package() -> None:
    """Dotted references under a missing package are load errors."""
    with pytest.raises(CodecLoadError, match="Unable to import"):
        check_codec_reference("woff2_batch_missing_pkg.codec:encode")


def test_encode_woff2_rejects_garbage() -> None:
    """Non-font input raises a codec error."""
    with pytest.raises(CodecError, match="Not a valid font"):
        encode_woff2(b"definitely not a font")


def test_encode_woff2_produces_woff2(tmp_path: Path, make_truetype) -> None:
    """Valid TrueType input becomes a WOFF2 payload."""
    from fontTools.ttLib import TTFont

    font_path = make_truetype(tmp_path / "Sample.ttf")
    output = encode_woff2(font_path.read_bytes())

    assert output[:4] == b"wOF2"
    font = TTFont(io.BytesIO(output))
    assert font.flavor == "woff2"
    assert "A" in font.getGlyphOrder()
