"""
API JSON di autenticazione.

Endpoint principali:

POST /api/auth/register   Registra un artista (non approvato)
POST /api/auth/login      Apre una sessione (solo utenti approvati)
POST /api/auth/logout     Chiude la sessione corrente
GET  /api/auth/me         Utente della sessione corrente
"""

from __future__ import annotations

from flask import Blueprint

from bottin.api.responses import failure, request_json, success, validation_failed
from bottin.middleware.auth import current_user, login_required, login_user, logout_user
from bottin.schemas import LoginRequest, RegisterRequest, validate
from bottin.services import auth_service
from bottin.services.errors import AuthenticationRequired
from bottin.storage import get_storage

api_auth_bp = Blueprint("api_auth", __name__)


@api_auth_bp.route("/register", methods=["POST"])
def api_register():
    """
    Body JSON atteso:
    {
      "username": "...", "email": "...", "password": "...",
      "firstName": "...", "lastName": "...",
      "bio": "...", "discipline": "...", "location": "...", ...
    }
    """
    result = validate(RegisterRequest, request_json())
    if not result.ok:
        return validation_failed(result)

    user = auth_service.register_user(get_storage(), result.data)
    return success(
        user.to_dict(),
        message="Registration received, your account is pending approval",
        status=201,
    )


@api_auth_bp.route("/login", methods=["POST"])
def api_login():
    result = validate(LoginRequest, request_json())
    if not result.ok:
        return failure("Username and password are required", 400, errors=result.errors)

    user = auth_service.authenticate(
        get_storage(), result.data.username, result.data.password
    )
    login_user(user)
    return success(user.to_dict(), message="Login successful")


@api_auth_bp.route("/logout", methods=["POST"])
def api_logout():
    logout_user()
    return success(None, message="Logout successful")


@api_auth_bp.route("/me", methods=["GET"])
@login_required
def api_me():
    user = get_storage().get_user(current_user().id)
    if user is None:
        logout_user()
        raise AuthenticationRequired("User not found")
    return success(user.to_dict())
