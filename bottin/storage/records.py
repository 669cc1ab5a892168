"""
Record restituiti dallo storage.

Entrambi i backend (SQL e memoria) restituiscono questi dataclass e mai
istanze ORM: chi chiama osserva lo stesso comportamento qualunque sia lo
storage configurato. ``to_dict()`` produce la rappresentazione JSON
(chiavi camelCase) usata dalle API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class UserRecord:
    id: int
    username: str
    email: str
    password_hash: str
    first_name: str
    last_name: str
    profile_image: Optional[str] = None
    bio: Optional[str] = None
    discipline: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    social_media: Dict[str, str] = field(default_factory=dict)
    cv: Optional[str] = None
    is_approved: bool = False
    is_admin: bool = False
    created_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> Dict[str, Any]:
        """Rappresentazione pubblica: l'hash della password non esce mai."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "profileImage": self.profile_image,
            "bio": self.bio,
            "discipline": self.discipline,
            "location": self.location,
            "website": self.website,
            "socialMedia": dict(self.social_media or {}),
            "cv": self.cv,
            "isApproved": self.is_approved,
            "isAdmin": self.is_admin,
            "createdAt": _iso(self.created_at),
        }


@dataclass
class ProfileMediaRecord:
    id: int
    user_id: int
    title: str
    media_type: str
    url: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "mediaType": self.media_type,
            "url": self.url,
            "description": self.description,
            "createdAt": _iso(self.created_at),
        }


@dataclass
class EventRecord:
    id: int
    title: str
    description: str
    location: str
    event_date: datetime
    image_url: Optional[str] = None
    organizer_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "eventDate": _iso(self.event_date),
            "imageUrl": self.image_url,
            "organizerId": self.organizer_id,
            "createdAt": _iso(self.created_at),
        }


@dataclass
class TrocAdRecord:
    id: int
    title: str
    description: str
    category: str
    user_id: int
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "userId": self.user_id,
            "createdAt": _iso(self.created_at),
        }


@dataclass
class MessageRecord:
    id: int
    sender_id: int
    receiver_id: int
    content: str
    is_read: bool = False
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "senderId": self.sender_id,
            "receiverId": self.receiver_id,
            "content": self.content,
            "isRead": self.is_read,
            "createdAt": _iso(self.created_at),
        }


@dataclass
class SessionRecord:
    id: str
    user_id: int
    is_admin: bool
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.utcnow()) >= self.expires_at


# Campi modificabili tramite update_*: id e created_at restano immutabili
USER_UPDATABLE_FIELDS = frozenset({
    "username", "email", "password_hash", "first_name", "last_name",
    "profile_image", "bio", "discipline", "location", "website",
    "social_media", "cv", "is_approved", "is_admin",
})
EVENT_UPDATABLE_FIELDS = frozenset({
    "title", "description", "location", "event_date", "image_url", "organizer_id",
})
TROC_AD_UPDATABLE_FIELDS = frozenset({"title", "description", "category"})
