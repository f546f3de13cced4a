#!/usr/bin/env python3
"""Example codec that subsets fonts to Basic Latin before WOFF2 compression.

Use it with:

    woff2-batch convert input/ output/ --codec examples/custom_codec.py:CODEC
"""

from __future__ import annotations

import io

from fontTools import subset
from fontTools.ttLib import TTFont

from woff2_batch.errors import CodecError

BASIC_LATIN = range(0x20, 0x7F)


class BasicLatinWoff2Codec:
    """Subset to a unicode range, then save as WOFF2."""

    def __init__(self, unicodes: range = BASIC_LATIN) -> None:
        self.unicodes = list(unicodes)

    def encode(self, data: bytes) -> bytes:
        """Return WOFF2 bytes containing only the configured code points."""
        try:
            font = TTFont(io.BytesIO(data))
        except Exception as exc:
            raise CodecError(f"Not a valid font: {exc}") from exc

        subsetter = subset.Subsetter()
        subsetter.populate(unicodes=self.unicodes)
        subsetter.subset(font)

        font.flavor = "woff2"
        buffer = io.BytesIO()
        font.save(buffer)
        font.close()
        return buffer.getvalue()


CODEC = BasicLatinWoff2Codec()
