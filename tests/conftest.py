"""Shared pytest configuration, marker assignment and font fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

FontFactory = Callable[[Path], Path]

_GLYPH_ORDER = [".notdef", "space", "A", "a"]
_CMAP = {0x20: "space", 0x41: "A", 0x61: "a"}
_ADVANCES = {".notdef": 600, "space": 500, "A": 600, "a": 600}


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


def _draw_box(pen: object) -> None:
    pen.moveTo((100, 0))  # type: ignore[attr-defined]
    pen.lineTo((100, 700))  # type: ignore[attr-defined]
    pen.lineTo((500, 700))  # type: ignore[attr-defined]
    pen.lineTo((500, 0))  # type: ignore[attr-defined]
    pen.closePath()  # type: ignore[attr-defined]


def _name_strings(family: str) -> dict[str, object]:
    return {
        "familyName": {"en": family},
        "styleName": {"en": "Regular"},
        "uniqueFontIdentifier": f"woff2-batch-tests: {family}",
        "fullName": {"en": f"{family} Regular"},
        "psName": f"{family}-Regular",
        "version": "Version 1.000",
    }


def build_truetype(path: Path) -> Path:
    """Write a minimal glyf-based font to ``path``."""
    from fontTools.fontBuilder import FontBuilder
    from fontTools.pens.ttGlyphPen import TTGlyphPen

    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder(_GLYPH_ORDER)
    builder.setupCharacterMap(_CMAP)
    pen = TTGlyphPen(None)
    _draw_box(pen)
    glyph = pen.glyph()
    builder.setupGlyf({name: glyph for name in _GLYPH_ORDER})
    glyf = builder.font["glyf"]
    builder.setupHorizontalMetrics(
        {name: (width, glyf[name].xMin) for name, width in _ADVANCES.items()}
    )
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable(_name_strings(path.stem))
    builder.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    builder.setupPost()
    builder.save(str(path))
    return path


def build_opentype(path: Path) -> Path:
    """Write a minimal CFF-based font to ``path``."""
    from fontTools.fontBuilder import FontBuilder
    from fontTools.pens.t2CharStringPen import T2CharStringPen

    builder = FontBuilder(1000, isTTF=False)
    builder.setupGlyphOrder(_GLYPH_ORDER)
    builder.setupCharacterMap(_CMAP)
    char_strings = {}
    for name in _GLYPH_ORDER:
        pen = T2CharStringPen(_ADVANCES[name], None)
        _draw_box(pen)
        char_strings[name] = pen.getCharString()
    ps_name = f"{path.stem}-Regular"
    builder.setupCFF(ps_name, {"FullName": ps_name}, char_strings, {})
    lsb = {name: cs.calcBounds(None)[0] for name, cs in char_strings.items()}
    builder.setupHorizontalMetrics(
        {name: (width, lsb[name]) for name, width in _ADVANCES.items()}
    )
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable(_name_strings(path.stem))
    builder.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    builder.setupPost()
    builder.save(str(path))
    return path


@pytest.fixture
def make_truetype() -> FontFactory:
    """Factory writing a valid ``.ttf`` font to the given path."""
    return build_truetype


@pytest.fixture
def make_opentype() -> FontFactory:
    """Factory writing a valid CFF ``.otf`` font to the given path."""
    return build_opentype


@pytest.fixture
def font_dir(tmp_path: Path) -> Path:
    """Input directory holding ``Regular.ttf``, ``Bold.otf`` and ``corrupt.ttf``."""
    directory = tmp_path / "input"
    directory.mkdir()
    build_truetype(directory / "Regular.ttf")
    build_opentype(directory / "Bold.otf")
    (directory / "corrupt.ttf").write_bytes(b"this is not a font\n" * 4)
    (directory / "notes.txt").write_text("ignored")
    return directory
