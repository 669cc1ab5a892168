"""
Pacchetto per le API JSON consumate dal frontend.

Contiene:
- api_auth_bp     -> registrazione, login, logout, utente corrente
- api_users_bp    -> profili artista e media
- api_events_bp   -> eventi
- api_troc_bp     -> bacheca TROC'DAM
- api_messages_bp -> messaggistica diretta
- api_admin_bp    -> approvazioni e analytics
"""

from .api_auth import api_auth_bp
from .api_users import api_users_bp
from .api_events import api_events_bp
from .api_troc import api_troc_bp
from .api_messages import api_messages_bp
from .api_admin import api_admin_bp
from .responses import register_error_handlers

__all__ = [
    "api_auth_bp",
    "api_users_bp",
    "api_events_bp",
    "api_troc_bp",
    "api_messages_bp",
    "api_admin_bp",
    "register_error_handlers",
]
