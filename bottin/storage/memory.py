"""
Storage in memoria basato su dizionari.

Usato in sviluppo locale (DevConfig) e nei test. Riproduce esattamente
ordinamenti, filtri e gestione dei "non trovato" di DatabaseStorage.
I record vengono copiati in ingresso e in uscita: chi chiama non può
modificare lo stato interno senza passare da update_*.
"""

from __future__ import annotations

import copy
import itertools
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from bottin.storage.base import Storage, pick_fields
from bottin.storage.records import (
    EVENT_UPDATABLE_FIELDS,
    TROC_AD_UPDATABLE_FIELDS,
    USER_UPDATABLE_FIELDS,
    EventRecord,
    MessageRecord,
    ProfileMediaRecord,
    SessionRecord,
    TrocAdRecord,
    UserRecord,
)


def _newest_first(records):
    return sorted(records, key=lambda r: (r.created_at, r.id), reverse=True)


def _oldest_first(records):
    return sorted(records, key=lambda r: (r.created_at, r.id))


def _apply_limit(records, limit: Optional[int]):
    if limit:
        return records[:limit]
    return records


class MemoryStorage(Storage):
    def __init__(self) -> None:
        self._users: Dict[int, UserRecord] = {}
        self._media: Dict[int, ProfileMediaRecord] = {}
        self._events: Dict[int, EventRecord] = {}
        self._troc_ads: Dict[int, TrocAdRecord] = {}
        self._messages: Dict[int, MessageRecord] = {}
        self._sessions: Dict[str, SessionRecord] = {}

        self._user_ids = itertools.count(1)
        self._media_ids = itertools.count(1)
        self._event_ids = itertools.count(1)
        self._troc_ad_ids = itertools.count(1)
        self._message_ids = itertools.count(1)

    @staticmethod
    def _copy(record):
        return copy.deepcopy(record) if record is not None else None

    # --- Users ---------------------------------------------------------------
    def get_user(self, user_id: int) -> Optional[UserRecord]:
        return self._copy(self._users.get(user_id))

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        if not username:
            return None
        wanted = username.lower()
        for user in self._users.values():
            if user.username.lower() == wanted:
                return self._copy(user)
        return None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        if not email:
            return None
        wanted = email.lower()
        for user in self._users.values():
            if user.email.lower() == wanted:
                return self._copy(user)
        return None

    def create_user(self, draft: Mapping[str, Any]) -> UserRecord:
        data = pick_fields(draft, USER_UPDATABLE_FIELDS)
        data.setdefault("is_approved", False)
        data.setdefault("is_admin", False)
        data["social_media"] = dict(data.get("social_media") or {})
        user = UserRecord(id=next(self._user_ids), created_at=datetime.utcnow(), **data)
        self._users[user.id] = user
        return self._copy(user)

    def update_user(self, user_id: int, fields: Mapping[str, Any]) -> Optional[UserRecord]:
        user = self._users.get(user_id)
        if user is None:
            return None
        for key, value in pick_fields(fields, USER_UPDATABLE_FIELDS).items():
            if key == "social_media":
                value = dict(value or {})
            setattr(user, key, copy.deepcopy(value))
        return self._copy(user)

    def delete_user(self, user_id: int) -> bool:
        if self._users.pop(user_id, None) is None:
            return False
        self._media = {k: m for k, m in self._media.items() if m.user_id != user_id}
        self._troc_ads = {k: a for k, a in self._troc_ads.items() if a.user_id != user_id}
        self._messages = {
            k: m
            for k, m in self._messages.items()
            if m.sender_id != user_id and m.receiver_id != user_id
        }
        for event in self._events.values():
            if event.organizer_id == user_id:
                event.organizer_id = None
        self.delete_sessions_for_user(user_id)
        return True

    def get_users(
        self,
        *,
        is_approved: Optional[bool] = None,
        discipline: Optional[str] = None,
        keyword: Optional[str] = None,
    ) -> List[UserRecord]:
        users = list(self._users.values())
        if is_approved is not None:
            users = [u for u in users if bool(u.is_approved) == is_approved]
        if discipline:
            users = [u for u in users if u.discipline == discipline]
        if keyword:
            needle = keyword.lower()
            users = [
                u
                for u in users
                if needle in u.full_name.lower() or (u.bio and needle in u.bio.lower())
            ]
        return [self._copy(u) for u in _newest_first(users)]

    # --- ProfileMedia --------------------------------------------------------
    def get_media(self, media_id: int) -> Optional[ProfileMediaRecord]:
        return self._copy(self._media.get(media_id))

    def get_profile_media(self, user_id: int) -> List[ProfileMediaRecord]:
        media = [m for m in self._media.values() if m.user_id == user_id]
        return [self._copy(m) for m in _newest_first(media)]

    def create_profile_media(self, draft: Mapping[str, Any]) -> ProfileMediaRecord:
        media = ProfileMediaRecord(
            id=next(self._media_ids),
            user_id=draft["user_id"],
            title=draft["title"],
            media_type=draft["media_type"],
            url=draft["url"],
            description=draft.get("description"),
            created_at=datetime.utcnow(),
        )
        self._media[media.id] = media
        return self._copy(media)

    def delete_profile_media(self, media_id: int) -> bool:
        return self._media.pop(media_id, None) is not None

    # --- Events --------------------------------------------------------------
    def get_event(self, event_id: int) -> Optional[EventRecord]:
        return self._copy(self._events.get(event_id))

    def get_events(self, limit: Optional[int] = None) -> List[EventRecord]:
        events = sorted(self._events.values(), key=lambda e: (e.event_date, e.id))
        return [self._copy(e) for e in _apply_limit(events, limit)]

    def create_event(self, draft: Mapping[str, Any]) -> EventRecord:
        data = pick_fields(draft, EVENT_UPDATABLE_FIELDS)
        event = EventRecord(id=next(self._event_ids), created_at=datetime.utcnow(), **data)
        self._events[event.id] = event
        return self._copy(event)

    def update_event(self, event_id: int, fields: Mapping[str, Any]) -> Optional[EventRecord]:
        event = self._events.get(event_id)
        if event is None:
            return None
        for key, value in pick_fields(fields, EVENT_UPDATABLE_FIELDS).items():
            setattr(event, key, value)
        return self._copy(event)

    def delete_event(self, event_id: int) -> bool:
        return self._events.pop(event_id, None) is not None

    # --- TrocAds -------------------------------------------------------------
    def get_troc_ad(self, ad_id: int) -> Optional[TrocAdRecord]:
        return self._copy(self._troc_ads.get(ad_id))

    def get_troc_ads(
        self,
        *,
        category: Optional[str] = None,
        limit: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> List[TrocAdRecord]:
        ads = list(self._troc_ads.values())
        if category:
            ads = [a for a in ads if a.category == category]
        if user_id is not None:
            ads = [a for a in ads if a.user_id == user_id]
        return [self._copy(a) for a in _apply_limit(_newest_first(ads), limit)]

    def create_troc_ad(self, draft: Mapping[str, Any]) -> TrocAdRecord:
        ad = TrocAdRecord(
            id=next(self._troc_ad_ids),
            title=draft["title"],
            description=draft["description"],
            category=draft["category"],
            user_id=draft["user_id"],
            created_at=datetime.utcnow(),
        )
        self._troc_ads[ad.id] = ad
        return self._copy(ad)

    def update_troc_ad(self, ad_id: int, fields: Mapping[str, Any]) -> Optional[TrocAdRecord]:
        ad = self._troc_ads.get(ad_id)
        if ad is None:
            return None
        for key, value in pick_fields(fields, TROC_AD_UPDATABLE_FIELDS).items():
            setattr(ad, key, value)
        return self._copy(ad)

    def delete_troc_ad(self, ad_id: int) -> bool:
        return self._troc_ads.pop(ad_id, None) is not None

    # --- Messages ------------------------------------------------------------
    def get_message(self, message_id: int) -> Optional[MessageRecord]:
        return self._copy(self._messages.get(message_id))

    def get_messages(self, user_id: int) -> List[MessageRecord]:
        messages = [
            m
            for m in self._messages.values()
            if m.sender_id == user_id or m.receiver_id == user_id
        ]
        return [self._copy(m) for m in _newest_first(messages)]

    def get_conversation(self, user_a: int, user_b: int) -> List[MessageRecord]:
        pair = {(user_a, user_b), (user_b, user_a)}
        messages = [
            m for m in self._messages.values() if (m.sender_id, m.receiver_id) in pair
        ]
        return [self._copy(m) for m in _oldest_first(messages)]

    def create_message(self, draft: Mapping[str, Any]) -> MessageRecord:
        message = MessageRecord(
            id=next(self._message_ids),
            sender_id=draft["sender_id"],
            receiver_id=draft["receiver_id"],
            content=draft["content"],
            is_read=False,
            created_at=datetime.utcnow(),
        )
        self._messages[message.id] = message
        return self._copy(message)

    def mark_message_as_read(self, message_id: int) -> bool:
        message = self._messages.get(message_id)
        if message is None:
            return False
        message.is_read = True
        return True

    def mark_conversation_as_read(self, receiver_id: int, sender_id: int) -> int:
        updated = 0
        for message in self._messages.values():
            if (
                message.receiver_id == receiver_id
                and message.sender_id == sender_id
                and not message.is_read
            ):
                message.is_read = True
                updated += 1
        return updated

    def count_unread(self, user_id: int) -> int:
        return sum(
            1
            for m in self._messages.values()
            if m.receiver_id == user_id and not m.is_read
        )

    def delete_message(self, message_id: int) -> bool:
        return self._messages.pop(message_id, None) is not None

    # --- Sessions ------------------------------------------------------------
    def create_session(self, record: SessionRecord) -> SessionRecord:
        self._sessions[record.id] = self._copy(record)
        return self._copy(record)

    def get_session(self, session_id: str) -> Optional[SessionRecord]:
        return self._copy(self._sessions.get(session_id))

    def delete_session(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def delete_sessions_for_user(self, user_id: int) -> int:
        doomed = [sid for sid, s in self._sessions.items() if s.user_id == user_id]
        for sid in doomed:
            del self._sessions[sid]
        return len(doomed)

    def delete_expired_sessions(self, now: datetime) -> int:
        doomed = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
        for sid in doomed:
            del self._sessions[sid]
        return len(doomed)
