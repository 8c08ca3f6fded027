"""Tracer construction options."""

from typing import Any

from pydantic import BaseModel, Field

from ..config import DEFAULT_HIGH_WATER_MARK, DEFAULT_MAX_BUFFERED
from .events import OutputMode


class TracerOptions(BaseModel):
    """Options recognised when constructing a root tracer."""

    fields: dict[str, Any] | None = None
    output_mode: OutputMode = OutputMode.TEXT
    high_water_mark: int = Field(default=DEFAULT_HIGH_WATER_MARK, ge=1)
    max_buffered: int | None = Field(default=DEFAULT_MAX_BUFFERED, ge=1)
