"""
Servizi per i profili utente (User).
"""

from __future__ import annotations

import logging
from typing import List, Optional

from bottin.schemas import UserListQuery, UserUpdateRequest
from bottin.services.auth_service import (
    clean_social_media,
    ensure_unique_identity,
    hash_password,
)
from bottin.services.errors import NotFound
from bottin.services.logging import log_structured_event
from bottin.services.permissions import (
    CurrentUser,
    can_view_user,
    ensure_admin,
    ensure_self_or_admin,
)
from bottin.storage.base import Storage
from bottin.storage.records import UserRecord

logger = logging.getLogger(__name__)

# Campi che solo un admin può modificare: per gli altri vengono scartati in silenzio
ADMIN_ONLY_FIELDS = ("is_admin", "is_approved")

# Campi obbligatori: un null esplicito nel body viene ignorato
REQUIRED_FIELDS = ("username", "email", "first_name", "last_name", "password")


def list_users(
    storage: Storage, actor: Optional[CurrentUser], query: UserListQuery
) -> List[UserRecord]:
    """
    Elenco utenti.

    I non-admin vedono solo utenti approvati: ``approved=false`` per loro
    restituisce un elenco vuoto. Per un admin ``approved`` assente
    significa "tutti".
    """
    if actor is not None and actor.is_admin:
        is_approved = query.approved
    elif query.approved is False:
        return []
    else:
        is_approved = True
    return storage.get_users(
        is_approved=is_approved,
        discipline=query.discipline or None,
        keyword=(query.q or "").strip() or None,
    )


def get_visible_user(
    storage: Storage, actor: Optional[CurrentUser], user_id: int
) -> UserRecord:
    """Restituisce l'utente se visibile al chiamante, altrimenti NotFound (mai 403)."""
    user = storage.get_user(user_id)
    if user is None or not can_view_user(actor, user):
        raise NotFound("User not found")
    return user


def update_user(
    storage: Storage,
    actor: Optional[CurrentUser],
    user_id: int,
    data: UserUpdateRequest,
) -> UserRecord:
    """Aggiorna un profilo (sé stessi o admin)."""
    actor = ensure_self_or_admin(actor, user_id)

    if storage.get_user(user_id) is None:
        raise NotFound("User not found")

    changes = data.changes()
    if not actor.is_admin:
        for key in ADMIN_ONLY_FIELDS:
            if key in changes:
                logger.info(
                    "Campo riservato agli admin ignorato",
                    extra={"field": key, "actor_id": actor.id, "user_id": user_id},
                )
                changes.pop(key)
    for key in REQUIRED_FIELDS:
        if key in changes and changes[key] is None:
            changes.pop(key)

    ensure_unique_identity(
        storage,
        username=changes.get("username"),
        email=changes.get("email"),
        exclude_user_id=user_id,
    )

    if "password" in changes:
        changes["password_hash"] = hash_password(changes.pop("password"))
    if "social_media" in changes:
        changes["social_media"] = clean_social_media(changes["social_media"])

    updated = storage.update_user(user_id, changes)
    if updated is None:
        raise NotFound("User not found")

    if actor.id != user_id:
        log_structured_event(
            "user_updated_by_admin",
            actor_id=actor.id,
            user_id=user_id,
            fields=sorted(changes),
        )
    return updated


def delete_user(storage: Storage, actor: Optional[CurrentUser], user_id: int) -> None:
    """Rifiuto/rimozione di un utente da parte di un admin."""
    actor = ensure_admin(actor)
    if not storage.delete_user(user_id):
        raise NotFound("User not found")
    log_structured_event("user_deleted", actor_id=actor.id, user_id=user_id)
