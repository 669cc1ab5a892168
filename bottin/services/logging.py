"""
Eventi di audit del bottin (logger ``bottin.audit``).

Ogni evento è una riga JSON (vedi ``JsonFormatter`` in bottin.extensions)
con ``extra.action`` e i campi passati dal servizio. Azioni emesse:

- user_registered, login, login_failed, login_pending   (auth_service)
- user_updated_by_admin, user_deleted                   (user_service)
- user_approved, admin_flag_changed                     (admin_service)
- admin_created                                         (auth_service, bootstrap)
- troc_ad_created                                       (troc_service)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

AUDIT_LOGGER_NAME = "bottin.audit"

AUDIT_MESSAGES = {
    "user_registered": "Nuovo utente registrato, in attesa di approvazione",
    "login": "Login riuscito",
    "login_failed": "Credenziali non valide",
    "login_pending": "Login rifiutato: account non ancora approvato",
    "user_updated_by_admin": "Profilo modificato da un admin",
    "user_deleted": "Utente rimosso da un admin",
    "user_approved": "Utente approvato",
    "admin_flag_changed": "Ruolo admin modificato",
    "admin_created": "Account admin pronto",
    "troc_ad_created": "Nuovo annuncio TROC'DAM",
}

# Attributi di LogRecord: un campo extra con questi nomi fa fallire makeRecord
_RESERVED = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def log_structured_event(
    action: str,
    *,
    message: Optional[str] = None,
    level: str = "info",
    **fields: Any,
) -> None:
    """Registra l'azione ``action`` con i suoi campi sul logger di audit.

    I campi che collidono con gli attributi di LogRecord (es. ``name``)
    vengono salvati con prefisso ``field_``.
    """
    logger = logging.getLogger(AUDIT_LOGGER_NAME)
    log_method = getattr(logger, level.lower(), logger.info)

    payload: Dict[str, Any] = {"action": action}
    for key, value in fields.items():
        payload[f"field_{key}" if key in _RESERVED else key] = value

    log_method(message or AUDIT_MESSAGES.get(action, action), extra=payload)
