"""
Session store lato server.

Associa una chiave casuale a {user_id, is_admin, expires_at}. La persistenza
è delegata allo storage configurato; il cookie del browser trasporta solo
la chiave. Un'istanza per app, agganciata in ``app.extensions["session_store"]``.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from bottin.storage.base import Storage
from bottin.storage.records import SessionRecord, UserRecord

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, storage: Storage, lifetime: timedelta = timedelta(days=7)) -> None:
        self.storage = storage
        self.lifetime = lifetime

    def open(self, user: UserRecord, now: Optional[datetime] = None) -> SessionRecord:
        """
        Crea una sessione per un utente appena autenticato.

        Ad ogni login vengono eliminate anche le sessioni scadute di tutti
        gli utenti, comprese quelle il cui cookie non tornerà più.
        """
        now = now or datetime.utcnow()
        purged = self.storage.delete_expired_sessions(now)
        if purged:
            logger.info("Sessioni scadute eliminate", extra={"count": purged})
        record = SessionRecord(
            id=secrets.token_hex(16),
            user_id=user.id,
            is_admin=bool(user.is_admin),
            expires_at=now + self.lifetime,
        )
        return self.storage.create_session(record)

    def resolve(self, key: Optional[str], now: Optional[datetime] = None) -> Optional[SessionRecord]:
        """Restituisce la sessione valida per la chiave, eliminandola se scaduta."""
        if not key:
            return None
        record = self.storage.get_session(key)
        if record is None:
            return None
        if record.is_expired(now):
            logger.info("Sessione scaduta eliminata", extra={"user_id": record.user_id})
            self.storage.delete_session(key)
            return None
        return record

    def close(self, key: Optional[str]) -> bool:
        if not key:
            return False
        return self.storage.delete_session(key)

    def close_all_for_user(self, user_id: int) -> int:
        return self.storage.delete_sessions_for_user(user_id)
