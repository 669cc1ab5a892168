"""
Servizi di autenticazione: registrazione, login e account admin iniziale.

Le password sono salvate solo come hash werkzeug e verificate con
check_password_hash; il testo in chiaro non viene mai persistito.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from bottin.schemas import RegisterRequest
from bottin.services.errors import AuthenticationRequired, Conflict, PermissionDenied
from bottin.services.logging import log_structured_event
from bottin.storage.base import Storage
from bottin.storage.records import UserRecord

logger = logging.getLogger(__name__)

PENDING_APPROVAL_MESSAGE = "Your account is pending approval"


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def clean_social_media(value: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """Tiene solo i link valorizzati."""
    if not value:
        return {}
    return {key: link for key, link in value.items() if link}


def ensure_unique_identity(
    storage: Storage,
    *,
    username: Optional[str] = None,
    email: Optional[str] = None,
    exclude_user_id: Optional[int] = None,
) -> None:
    """Solleva Conflict se username o email appartengono già a un altro utente."""
    if username:
        existing = storage.get_user_by_username(username)
        if existing and existing.id != exclude_user_id:
            raise Conflict("Username already exists")
    if email:
        existing = storage.get_user_by_email(email)
        if existing and existing.id != exclude_user_id:
            raise Conflict("Email already exists")


def register_user(storage: Storage, data: RegisterRequest) -> UserRecord:
    """Crea un nuovo artista, sempre non approvato e non admin."""
    ensure_unique_identity(storage, username=data.username, email=data.email)

    draft = data.model_dump(exclude={"password"})
    draft["social_media"] = clean_social_media(draft.get("social_media"))
    draft["password_hash"] = hash_password(data.password)
    draft["is_approved"] = False
    draft["is_admin"] = False

    user = storage.create_user(draft)
    log_structured_event(
        "user_registered",
        message="Nuovo utente registrato, in attesa di approvazione",
        user_id=user.id,
        username=user.username,
    )
    return user


def authenticate(storage: Storage, username: str, password: str) -> UserRecord:
    """
    Verifica le credenziali.

    - utente inesistente o password errata -> AuthenticationRequired (401)
    - utente non ancora approvato -> PermissionDenied (403)
    """
    user = storage.get_user_by_username(username)
    if user is None or not check_password_hash(user.password_hash, password):
        log_structured_event("login_failed", level="warning", username=username)
        raise AuthenticationRequired("Invalid credentials")

    if not user.is_approved:
        log_structured_event("login_pending", user_id=user.id)
        raise PermissionDenied(PENDING_APPROVAL_MESSAGE)

    log_structured_event("login", user_id=user.id, is_admin=user.is_admin)
    return user


def ensure_admin_account(
    storage: Storage,
    username: str,
    password: str,
    email: str,
    *,
    first_name: str = "Admin",
    last_name: str = "DAM",
) -> UserRecord:
    """
    Crea (o promuove) l'account amministratore iniziale.

    Idempotente: se l'utente esiste già viene solo marcato approvato e admin.
    """
    existing = storage.get_user_by_username(username)
    if existing is not None:
        if existing.is_admin and existing.is_approved:
            return existing
        logger.info("Utente esistente promosso ad admin: %s", username)
        return storage.update_user(existing.id, {"is_admin": True, "is_approved": True})

    user = storage.create_user(
        {
            "username": username,
            "email": email,
            "password_hash": hash_password(password),
            "first_name": first_name,
            "last_name": last_name,
            "bio": "DAM Administrator",
            "discipline": "Administration",
            "is_approved": True,
            "is_admin": True,
        }
    )
    log_structured_event("admin_created", user_id=user.id, username=username)
    return user
