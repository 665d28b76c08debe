from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class StegoCommand(str, Enum):
    EMBED = "embed"
    EXTRACT = "extract"
    CAPACITY = "capacity"


class StegoCapacityResult(BaseModel):
    width: int
    height: int
    pixel_count: int
    header_bytes: int
    capacity_bytes: int = Field(description="Largest payload the image can hold")


class StegoHideResult(BaseModel):
    output_path: Optional[Path] = None
    payload_size_bytes: int
    envelope_size_bytes: int = Field(description="Header plus payload, one byte per pixel")
    capacity_bytes: int
    remaining_capacity_bytes: int


class StegoRevealResult(BaseModel):
    data: bytes
    size_bytes: int
    checksum: str = Field(description="Envelope checksum as 16 hex digits")
