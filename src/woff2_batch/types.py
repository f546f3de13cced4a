"""Shared type aliases for conversion modules."""

from __future__ import annotations

from collections.abc import Callable
from typing import Literal, TypeAlias

CodecFunction: TypeAlias = Callable[[bytes], bytes]
IsolationMode: TypeAlias = Literal["process", "thread"]
StartMethod: TypeAlias = Literal["spawn", "fork", "forkserver"]
