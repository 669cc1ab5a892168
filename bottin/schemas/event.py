"""Schemi per gli eventi."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from bottin.schemas.base import CamelModel, naive_utc


class EventCreateRequest(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    location: str = Field(min_length=1, max_length=255)
    event_date: datetime
    image_url: Optional[str] = None
    organizer_id: Optional[int] = None

    @field_validator("event_date")
    @classmethod
    def normalize_event_date(cls, value):
        return naive_utc(value)


class EventUpdateRequest(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = Field(default=None, min_length=1, max_length=255)
    event_date: Optional[datetime] = None
    image_url: Optional[str] = None
    organizer_id: Optional[int] = None

    @field_validator("event_date")
    @classmethod
    def normalize_event_date(cls, value):
        return naive_utc(value)


class EventListQuery(CamelModel):
    limit: Optional[int] = Field(default=None, gt=0)
