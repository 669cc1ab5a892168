"""
Eccezioni di dominio sollevate dai servizi.

Le API le traducono nella busta JSON standard con il relativo status HTTP
(vedi bottin.api.responses); i servizi non conoscono Flask.
"""

from __future__ import annotations

from typing import Dict, List, Optional


class ServiceError(Exception):
    """Base di tutti gli errori applicativi previsti."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(ServiceError):
    """Dati mancanti o malformati (400)."""

    status_code = 400
    default_message = "Invalid input"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []


class Conflict(InvalidInput):
    """Violazione di unicità (username/email già usati)."""


class AuthenticationRequired(ServiceError):
    """Sessione assente o credenziali errate (401)."""

    status_code = 401
    default_message = "Unauthorized"


class PermissionDenied(ServiceError):
    """Utente autenticato ma non autorizzato (403)."""

    status_code = 403
    default_message = "Forbidden"


class NotFound(ServiceError):
    """Risorsa inesistente, o nascosta al chiamante (404)."""

    status_code = 404
    default_message = "Not found"
