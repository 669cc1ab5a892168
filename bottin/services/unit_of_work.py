"""
Unit of Work Pattern.
Gestisce la transazione del database atomica e l'accesso ai repository.
"""
from typing import Optional

from bottin.extensions import db
from bottin.repositories import (
    EventRepository,
    MessageRepository,
    ProfileMediaRepository,
    SessionRepository,
    TrocAdRepository,
    UserRepository,
)


class UnitOfWork:
    def __init__(self):
        self.session = db.session
        self._users: Optional[UserRepository] = None
        self._media: Optional[ProfileMediaRepository] = None
        self._events: Optional[EventRepository] = None
        self._troc_ads: Optional[TrocAdRepository] = None
        self._messages: Optional[MessageRepository] = None
        self._sessions: Optional[SessionRepository] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.rollback()
            return False
        # Flask gestisce la chiusura della sessione, non chiudere qui

    @property
    def users(self) -> UserRepository:
        if self._users is None:
            self._users = UserRepository(self.session)
        return self._users

    @property
    def media(self) -> ProfileMediaRepository:
        if self._media is None:
            self._media = ProfileMediaRepository(self.session)
        return self._media

    @property
    def events(self) -> EventRepository:
        if self._events is None:
            self._events = EventRepository(self.session)
        return self._events

    @property
    def troc_ads(self) -> TrocAdRepository:
        if self._troc_ads is None:
            self._troc_ads = TrocAdRepository(self.session)
        return self._troc_ads

    @property
    def messages(self) -> MessageRepository:
        if self._messages is None:
            self._messages = MessageRepository(self.session)
        return self._messages

    @property
    def sessions(self) -> SessionRepository:
        if self._sessions is None:
            self._sessions = SessionRepository(self.session)
        return self._sessions

    def commit(self):
        try:
            self.session.commit()
        except Exception:
            self.rollback()
            raise

    def rollback(self):
        self.session.rollback()
