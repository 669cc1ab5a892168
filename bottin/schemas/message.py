"""Schemi per la messaggistica diretta."""

from __future__ import annotations

from pydantic import Field

from bottin.schemas.base import CamelModel


class MessageCreateRequest(CamelModel):
    receiver_id: int
    content: str = Field(min_length=1, max_length=5000)
