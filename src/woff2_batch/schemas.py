"""Pydantic schemas for runtime validation of batch inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from woff2_batch.types import IsolationMode, StartMethod


def _normalize_extension(value: str) -> str:
    cleaned = value.strip().lower()
    if not cleaned or cleaned == ".":
        raise ValueError("extensions cannot contain empty entries.")
    if not cleaned.startswith("."):
        cleaned = f".{cleaned}"
    return cleaned


class BatchConfig(BaseModel):
    """Validated input for a directory conversion run."""

    model_config = ConfigDict(extra="forbid")

    input_dir: Path
    output_dir: Path
    extensions: tuple[str, ...] = (".ttf", ".otf")
    target_extension: str = ".woff2"
    concurrency: int = Field(default=1, ge=1)
    isolation: IsolationMode = "process"
    codec: str = "woff2"
    start_method: StartMethod = "spawn"
    tick_interval: float = Field(default=0.08, gt=0.0)
    animate: bool | None = None
    dry_run: bool = False

    @field_validator("extensions")
    @classmethod
    def _validate_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("extensions must contain at least one entry.")
        normalized: list[str] = []
        for item in value:
            ext = _normalize_extension(item)
            if ext not in normalized:
                normalized.append(ext)
        return tuple(normalized)

    @field_validator("target_extension")
    @classmethod
    def _validate_target_extension(cls, value: str) -> str:
        return _normalize_extension(value)

    @field_validator("codec")
    @classmethod
    def _validate_codec(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("codec reference cannot be empty.")
        return value.strip()
