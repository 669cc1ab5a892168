"""Schemi per i media del profilo."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from bottin.schemas.base import CamelModel


class MediaCreateRequest(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    media_type: Literal["image", "video", "audio"]
    url: str = Field(min_length=1, max_length=1000)
    description: Optional[str] = None
