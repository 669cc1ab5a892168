"""
Middleware dell'applicazione (sessione e utente corrente).
"""

from .auth import (
    admin_required,
    current_user,
    init_auth,
    login_required,
    login_user,
    logout_user,
)

__all__ = [
    "admin_required",
    "current_user",
    "init_auth",
    "login_required",
    "login_user",
    "logout_user",
]
