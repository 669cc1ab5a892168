"""
Busta JSON comune alle API e gestione centralizzata degli errori.

Formato:
{
  "success": true|false,
  "message": "...",
  "payload": ... | null,
  "errors": [{"field": ..., "message": ...}]   # solo per errori di validazione
}
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from bottin.schemas import ValidationResult
from bottin.services.errors import InvalidInput, ServiceError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def success(payload: Any = None, message: str = "", status: int = 200):
    return jsonify({"success": True, "message": message, "payload": payload}), status


def failure(
    message: str,
    status: int,
    errors: Optional[List[Dict[str, str]]] = None,
):
    body: Dict[str, Any] = {"success": False, "message": message, "payload": None}
    if errors:
        body["errors"] = errors
    return jsonify(body), status


def validation_failed(result: ValidationResult):
    return failure("Invalid input", 400, errors=result.errors)


def request_json() -> Any:
    """Body JSON della richiesta; {} se assente o non decodificabile."""
    data = request.get_json(silent=True)
    return {} if data is None else data


def register_error_handlers(app: Flask) -> None:
    """Traduce eccezioni di dominio e inattese nella busta JSON."""

    @app.errorhandler(ServiceError)
    def handle_service_error(exc: ServiceError):
        errors = exc.errors if isinstance(exc, InvalidInput) else None
        return failure(exc.message, exc.status_code, errors=errors)

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        return failure(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        # Nessun dettaglio interno nella risposta: lo stacktrace resta nei log
        logger.exception("Errore inatteso durante la richiesta")
        return failure(INTERNAL_ERROR_MESSAGE, 500)
