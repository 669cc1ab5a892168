"""Schemi per registrazione, login e aggiornamento profilo."""

from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field

from bottin.schemas.base import CamelModel


class SocialMedia(CamelModel):
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    youtube: Optional[str] = None
    spotify: Optional[str] = None
    behance: Optional[str] = None
    linkedin: Optional[str] = None
    other: Optional[str] = None


class ProfileFields(CamelModel):
    profile_image: Optional[str] = None
    bio: Optional[str] = None
    discipline: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    social_media: Optional[SocialMedia] = None
    cv: Optional[str] = None


class RegisterRequest(ProfileFields):
    username: str = Field(min_length=3, max_length=64)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    first_name: str = Field(min_length=1, max_length=128)
    last_name: str = Field(min_length=1, max_length=128)


class LoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserUpdateRequest(ProfileFields):
    """Aggiornamento parziale: is_admin/is_approved vengono filtrati dal servizio per i non-admin."""

    username: Optional[str] = Field(default=None, min_length=3, max_length=64)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=8, max_length=128)
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    is_approved: Optional[bool] = None
    is_admin: Optional[bool] = None


class UserListQuery(CamelModel):
    approved: Optional[bool] = None
    discipline: Optional[str] = None
    q: Optional[str] = None


class AdminFlagRequest(CamelModel):
    is_admin: bool
