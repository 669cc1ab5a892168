"""Schemi per la bacheca TROC'DAM."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from bottin.schemas.base import CamelModel

AdCategory = Literal["collaboration", "equipment", "service", "event"]


class TrocAdCreateRequest(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    category: AdCategory


class TrocAdUpdateRequest(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    category: Optional[AdCategory] = None


class TrocAdListQuery(CamelModel):
    category: Optional[AdCategory] = None
    limit: Optional[int] = Field(default=None, gt=0)
    user_id: Optional[int] = None
