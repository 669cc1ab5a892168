"""
Pacchetto per i servizi (logica di business) dell'applicazione.

I servizi orchestrano:
- storage (SQL o memoria, stessa interfaccia)
- regole di autorizzazione (self-or-admin, approvazione, visibilità)
- logging strutturato degli eventi rilevanti

Ricevono lo storage e l'utente corrente come argomenti e sollevano le
eccezioni di ``bottin.services.errors``; non conoscono Flask.
"""

from . import (
    admin_service,
    auth_service,
    event_service,
    media_service,
    message_service,
    troc_service,
    user_service,
)
from .errors import (
    AuthenticationRequired,
    Conflict,
    InvalidInput,
    NotFound,
    PermissionDenied,
    ServiceError,
)
from .permissions import CurrentUser
from .session_store import SessionStore

__all__ = [
    "admin_service",
    "auth_service",
    "event_service",
    "media_service",
    "message_service",
    "troc_service",
    "user_service",
    "AuthenticationRequired",
    "Conflict",
    "InvalidInput",
    "NotFound",
    "PermissionDenied",
    "ServiceError",
    "CurrentUser",
    "SessionStore",
]
