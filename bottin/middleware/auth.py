"""
Middleware di autenticazione basato su sessione lato server.

Obiettivo:
- risolvere, per ogni richiesta, l'utente corrente in ``flask.g.current_user``
  (``CurrentUser`` oppure None per un chiamante anonimo)
- offrire i decoratori ``login_required`` e ``admin_required`` alle route

Il cookie ``dam_session`` (firmato da Flask con SECRET_KEY) contiene solo la
chiave di sessione; utente, flag admin e scadenza vivono nel SessionStore.
Una sessione decade se scaduta, se l'utente non esiste più o se il suo flag
admin non corrisponde più al record salvato.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import Flask, current_app, g, session

from bottin.services.errors import AuthenticationRequired, PermissionDenied
from bottin.services.permissions import CurrentUser
from bottin.services.session_store import SessionStore
from bottin.storage import get_storage
from bottin.storage.records import SessionRecord, UserRecord

logger = logging.getLogger(__name__)

SESSION_KEY = "sid"


def get_session_store() -> SessionStore:
    return current_app.extensions["session_store"]


def current_user() -> Optional[CurrentUser]:
    return g.get("current_user")


def init_auth(app: Flask) -> None:
    """Registra l'hook che popola g.current_user prima di ogni richiesta."""

    @app.before_request
    def load_current_user() -> None:
        g.current_user = None

        key = session.get(SESSION_KEY)
        if not key:
            return

        store = get_session_store()
        record = store.resolve(key)
        if record is None:
            session.pop(SESSION_KEY, None)
            return

        user = get_storage().get_user(record.user_id)
        if user is None or bool(user.is_admin) != record.is_admin:
            logger.info(
                "Sessione invalidata",
                extra={"user_id": record.user_id, "user_exists": user is not None},
            )
            store.close(key)
            session.pop(SESSION_KEY, None)
            return

        g.current_user = CurrentUser(
            id=user.id, username=user.username, is_admin=record.is_admin
        )


def login_user(user: UserRecord) -> SessionRecord:
    """
    Apre una sessione server-side e la lega al cookie del browser.

    L'eventuale sessione precedente dello stesso cookie viene chiusa.
    """
    store = get_session_store()
    store.close(session.get(SESSION_KEY))
    record = store.open(user)
    session.clear()
    session[SESSION_KEY] = record.id
    session.permanent = True
    g.current_user = CurrentUser(id=user.id, username=user.username, is_admin=record.is_admin)
    return record


def logout_user() -> bool:
    """Chiude la sessione corrente; idempotente."""
    key = session.pop(SESSION_KEY, None)
    session.clear()
    g.current_user = None
    return get_session_store().close(key)


def login_required(view):
    @wraps(view)
    def decorated_function(*args, **kwargs):
        if current_user() is None:
            raise AuthenticationRequired()
        return view(*args, **kwargs)
    return decorated_function


def admin_required(view):
    @wraps(view)
    def decorated_function(*args, **kwargs):
        user = current_user()
        if user is None:
            raise AuthenticationRequired()
        if not user.is_admin:
            raise PermissionDenied()
        return view(*args, **kwargs)
    return decorated_function
