"""
Regole di autorizzazione condivise dai servizi.

CurrentUser è l'identità risolta dalla sessione per la richiesta corrente
(vedi bottin.middleware.auth); None indica un chiamante anonimo.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from bottin.services.errors import AuthenticationRequired, PermissionDenied
from bottin.storage.records import UserRecord


@dataclass(frozen=True)
class CurrentUser:
    id: int
    username: str
    is_admin: bool = False


def require_actor(actor: Optional[CurrentUser]) -> CurrentUser:
    if actor is None:
        raise AuthenticationRequired()
    return actor


def is_self_or_admin(actor: Optional[CurrentUser], owner_id: Optional[int]) -> bool:
    if actor is None:
        return False
    return actor.is_admin or (owner_id is not None and actor.id == owner_id)


def ensure_self_or_admin(actor: Optional[CurrentUser], owner_id: Optional[int]) -> CurrentUser:
    actor = require_actor(actor)
    if not is_self_or_admin(actor, owner_id):
        raise PermissionDenied()
    return actor


def ensure_admin(actor: Optional[CurrentUser]) -> CurrentUser:
    actor = require_actor(actor)
    if not actor.is_admin:
        raise PermissionDenied()
    return actor


def can_view_user(actor: Optional[CurrentUser], user: UserRecord) -> bool:
    """Un profilo non approvato è visibile solo a sé stesso e agli admin."""
    return bool(user.is_approved) or is_self_or_admin(actor, user.id)
