"""
Servizi per i media del profilo (ProfileMedia).
"""

from __future__ import annotations

from typing import List, Optional

from bottin.schemas import MediaCreateRequest
from bottin.services.errors import NotFound
from bottin.services.permissions import CurrentUser, ensure_self_or_admin
from bottin.services.user_service import get_visible_user
from bottin.storage.base import Storage
from bottin.storage.records import ProfileMediaRecord


def list_media(
    storage: Storage, actor: Optional[CurrentUser], user_id: int
) -> List[ProfileMediaRecord]:
    """Media di un utente; stessa regola di visibilità del profilo."""
    get_visible_user(storage, actor, user_id)
    return storage.get_profile_media(user_id)


def add_media(
    storage: Storage,
    actor: Optional[CurrentUser],
    user_id: int,
    data: MediaCreateRequest,
) -> ProfileMediaRecord:
    ensure_self_or_admin(actor, user_id)
    if storage.get_user(user_id) is None:
        raise NotFound("User not found")

    draft = data.model_dump()
    draft["user_id"] = user_id
    return storage.create_profile_media(draft)


def remove_media(
    storage: Storage, actor: Optional[CurrentUser], user_id: int, media_id: int
) -> None:
    """Cancella un media; deve appartenere all'utente indicato nell'URL."""
    ensure_self_or_admin(actor, user_id)
    media = storage.get_media(media_id)
    if media is None or media.user_id != user_id:
        raise NotFound("Media not found")
    if not storage.delete_profile_media(media_id):
        raise NotFound("Media not found")
