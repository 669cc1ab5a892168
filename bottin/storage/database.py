"""
Storage relazionale (produzione).

Ogni operazione apre una UnitOfWork sulla db.session di Flask-SQLAlchemy,
delega ai repository e converte i modelli ORM in record prima del commit.
Gli errori SQLAlchemy (connessione, vincoli di unicità) risalgono invariati
dopo il rollback della UnitOfWork.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping, Optional

from bottin.models import Event, Message, ProfileMedia, TrocAd, User, UserSession
from bottin.services.unit_of_work import UnitOfWork
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


# ---------------------------------------------------------------------
# Conversione modello ORM -> record
# ---------------------------------------------------------------------
def _user_record(user: Optional[User]) -> Optional[UserRecord]:
    if user is None:
        return None
    return UserRecord(
        id=user.id,
        username=user.username,
        email=user.email,
        password_hash=user.password_hash,
        first_name=user.first_name,
        last_name=user.last_name,
        profile_image=user.profile_image,
        bio=user.bio,
        discipline=user.discipline,
        location=user.location,
        website=user.website,
        social_media=dict(user.social_media or {}),
        cv=user.cv,
        is_approved=bool(user.is_approved),
        is_admin=bool(user.is_admin),
        created_at=user.created_at,
    )


def _media_record(media: Optional[ProfileMedia]) -> Optional[ProfileMediaRecord]:
    if media is None:
        return None
    return ProfileMediaRecord(
        id=media.id,
        user_id=media.user_id,
        title=media.title,
        media_type=media.media_type,
        url=media.url,
        description=media.description,
        created_at=media.created_at,
    )


def _event_record(event: Optional[Event]) -> Optional[EventRecord]:
    if event is None:
        return None
    return EventRecord(
        id=event.id,
        title=event.title,
        description=event.description,
        location=event.location,
        event_date=event.event_date,
        image_url=event.image_url,
        organizer_id=event.organizer_id,
        created_at=event.created_at,
    )


def _ad_record(ad: Optional[TrocAd]) -> Optional[TrocAdRecord]:
    if ad is None:
        return None
    return TrocAdRecord(
        id=ad.id,
        title=ad.title,
        description=ad.description,
        category=ad.category,
        user_id=ad.user_id,
        created_at=ad.created_at,
    )


def _message_record(message: Optional[Message]) -> Optional[MessageRecord]:
    if message is None:
        return None
    return MessageRecord(
        id=message.id,
        sender_id=message.sender_id,
        receiver_id=message.receiver_id,
        content=message.content,
        is_read=bool(message.is_read),
        created_at=message.created_at,
    )


def _session_record(user_session: Optional[UserSession]) -> Optional[SessionRecord]:
    if user_session is None:
        return None
    return SessionRecord(
        id=user_session.id,
        user_id=user_session.user_id,
        is_admin=bool(user_session.is_admin),
        expires_at=user_session.expires_at,
    )


class DatabaseStorage(Storage):
    """Implementazione di Storage su SQLAlchemy (MySQL in produzione, SQLite nei test)."""

    # --- Users ---------------------------------------------------------------
    def get_user(self, user_id: int) -> Optional[UserRecord]:
        with UnitOfWork() as uow:
            return _user_record(uow.users.get_by_id(user_id))

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        with UnitOfWork() as uow:
            return _user_record(uow.users.get_by_username(username))

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        with UnitOfWork() as uow:
            return _user_record(uow.users.get_by_email(email))

    def create_user(self, draft: Mapping[str, Any]) -> UserRecord:
        data = pick_fields(draft, USER_UPDATABLE_FIELDS)
        data.setdefault("is_approved", False)
        data.setdefault("is_admin", False)
        data["social_media"] = dict(data.get("social_media") or {})
        with UnitOfWork() as uow:
            user = uow.users.add(User(**data))
            uow.session.flush()
            record = _user_record(user)
            uow.commit()
            return record

    def update_user(self, user_id: int, fields: Mapping[str, Any]) -> Optional[UserRecord]:
        with UnitOfWork() as uow:
            user = uow.users.get_by_id(user_id)
            if user is None:
                return None
            for key, value in pick_fields(fields, USER_UPDATABLE_FIELDS).items():
                if key == "social_media":
                    value = dict(value or {})
                setattr(user, key, value)
            uow.session.flush()
            record = _user_record(user)
            uow.commit()
            return record

    def delete_user(self, user_id: int) -> bool:
        with UnitOfWork() as uow:
            user = uow.users.get_by_id(user_id)
            if user is None:
                return False
            uow.media.delete_by_user(user_id)
            uow.troc_ads.delete_by_user(user_id)
            uow.messages.delete_for_user(user_id)
            uow.sessions.delete_for_user(user_id)
            uow.events.detach_organizer(user_id)
            uow.users.delete(user)
            uow.commit()
            return True

    def get_users(
        self,
        *,
        is_approved: Optional[bool] = None,
        discipline: Optional[str] = None,
        keyword: Optional[str] = None,
    ) -> List[UserRecord]:
        with UnitOfWork() as uow:
            users = uow.users.search(
                is_approved=is_approved, discipline=discipline, keyword=keyword
            )
            return [_user_record(u) for u in users]

    # --- ProfileMedia --------------------------------------------------------
    def get_media(self, media_id: int) -> Optional[ProfileMediaRecord]:
        with UnitOfWork() as uow:
            return _media_record(uow.media.get_by_id(media_id))

    def get_profile_media(self, user_id: int) -> List[ProfileMediaRecord]:
        with UnitOfWork() as uow:
            return [_media_record(m) for m in uow.media.list_by_user(user_id)]

    def create_profile_media(self, draft: Mapping[str, Any]) -> ProfileMediaRecord:
        with UnitOfWork() as uow:
            media = uow.media.add(
                ProfileMedia(
                    user_id=draft["user_id"],
                    title=draft["title"],
                    media_type=draft["media_type"],
                    url=draft["url"],
                    description=draft.get("description"),
                )
            )
            uow.session.flush()
            record = _media_record(media)
            uow.commit()
            return record

    def delete_profile_media(self, media_id: int) -> bool:
        with UnitOfWork() as uow:
            deleted = uow.media.delete_by_id(media_id)
            if deleted:
                uow.commit()
            return deleted

    # --- Events --------------------------------------------------------------
    def get_event(self, event_id: int) -> Optional[EventRecord]:
        with UnitOfWork() as uow:
            return _event_record(uow.events.get_by_id(event_id))

    def get_events(self, limit: Optional[int] = None) -> List[EventRecord]:
        with UnitOfWork() as uow:
            return [_event_record(e) for e in uow.events.list_by_date(limit)]

    def create_event(self, draft: Mapping[str, Any]) -> EventRecord:
        with UnitOfWork() as uow:
            event = uow.events.add(Event(**pick_fields(draft, EVENT_UPDATABLE_FIELDS)))
            uow.session.flush()
            record = _event_record(event)
            uow.commit()
            return record

    def update_event(self, event_id: int, fields: Mapping[str, Any]) -> Optional[EventRecord]:
        with UnitOfWork() as uow:
            event = uow.events.get_by_id(event_id)
            if event is None:
                return None
            for key, value in pick_fields(fields, EVENT_UPDATABLE_FIELDS).items():
                setattr(event, key, value)
            uow.session.flush()
            record = _event_record(event)
            uow.commit()
            return record

    def delete_event(self, event_id: int) -> bool:
        with UnitOfWork() as uow:
            deleted = uow.events.delete_by_id(event_id)
            if deleted:
                uow.commit()
            return deleted

    # --- TrocAds -------------------------------------------------------------
    def get_troc_ad(self, ad_id: int) -> Optional[TrocAdRecord]:
        with UnitOfWork() as uow:
            return _ad_record(uow.troc_ads.get_by_id(ad_id))

    def get_troc_ads(
        self,
        *,
        category: Optional[str] = None,
        limit: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> List[TrocAdRecord]:
        with UnitOfWork() as uow:
            ads = uow.troc_ads.search(category=category, user_id=user_id, limit=limit)
            return [_ad_record(a) for a in ads]

    def create_troc_ad(self, draft: Mapping[str, Any]) -> TrocAdRecord:
        with UnitOfWork() as uow:
            ad = uow.troc_ads.add(
                TrocAd(
                    title=draft["title"],
                    description=draft["description"],
                    category=draft["category"],
                    user_id=draft["user_id"],
                )
            )
            uow.session.flush()
            record = _ad_record(ad)
            uow.commit()
            return record

    def update_troc_ad(self, ad_id: int, fields: Mapping[str, Any]) -> Optional[TrocAdRecord]:
        with UnitOfWork() as uow:
            ad = uow.troc_ads.get_by_id(ad_id)
            if ad is None:
                return None
            for key, value in pick_fields(fields, TROC_AD_UPDATABLE_FIELDS).items():
                setattr(ad, key, value)
            uow.session.flush()
            record = _ad_record(ad)
            uow.commit()
            return record

    def delete_troc_ad(self, ad_id: int) -> bool:
        with UnitOfWork() as uow:
            deleted = uow.troc_ads.delete_by_id(ad_id)
            if deleted:
                uow.commit()
            return deleted

    # --- Messages ------------------------------------------------------------
    def get_message(self, message_id: int) -> Optional[MessageRecord]:
        with UnitOfWork() as uow:
            return _message_record(uow.messages.get_by_id(message_id))

    def get_messages(self, user_id: int) -> List[MessageRecord]:
        with UnitOfWork() as uow:
            return [_message_record(m) for m in uow.messages.list_for_user(user_id)]

    def get_conversation(self, user_a: int, user_b: int) -> List[MessageRecord]:
        with UnitOfWork() as uow:
            return [_message_record(m) for m in uow.messages.conversation(user_a, user_b)]

    def create_message(self, draft: Mapping[str, Any]) -> MessageRecord:
        with UnitOfWork() as uow:
            message = uow.messages.add(
                Message(
                    sender_id=draft["sender_id"],
                    receiver_id=draft["receiver_id"],
                    content=draft["content"],
                    is_read=False,
                )
            )
            uow.session.flush()
            record = _message_record(message)
            uow.commit()
            return record

    def mark_message_as_read(self, message_id: int) -> bool:
        with UnitOfWork() as uow:
            message = uow.messages.get_by_id(message_id)
            if message is None:
                return False
            message.is_read = True
            uow.commit()
            return True

    def mark_conversation_as_read(self, receiver_id: int, sender_id: int) -> int:
        with UnitOfWork() as uow:
            updated = uow.messages.mark_conversation_read(receiver_id, sender_id)
            uow.commit()
            return updated

    def count_unread(self, user_id: int) -> int:
        with UnitOfWork() as uow:
            return uow.messages.count_unread(user_id)

    def delete_message(self, message_id: int) -> bool:
        with UnitOfWork() as uow:
            deleted = uow.messages.delete_by_id(message_id)
            if deleted:
                uow.commit()
            return deleted

    # --- Sessions ------------------------------------------------------------
    def create_session(self, record: SessionRecord) -> SessionRecord:
        with UnitOfWork() as uow:
            uow.sessions.add(
                UserSession(
                    id=record.id,
                    user_id=record.user_id,
                    is_admin=record.is_admin,
                    expires_at=record.expires_at,
                )
            )
            uow.commit()
            return record

    def get_session(self, session_id: str) -> Optional[SessionRecord]:
        with UnitOfWork() as uow:
            return _session_record(uow.sessions.get_by_id(session_id))

    def delete_session(self, session_id: str) -> bool:
        with UnitOfWork() as uow:
            deleted = uow.sessions.delete_by_id(session_id)
            if deleted:
                uow.commit()
            return deleted

    def delete_sessions_for_user(self, user_id: int) -> int:
        with UnitOfWork() as uow:
            deleted = uow.sessions.delete_for_user(user_id)
            uow.commit()
            return deleted

    def delete_expired_sessions(self, now: datetime) -> int:
        with UnitOfWork() as uow:
            deleted = uow.sessions.delete_expired(now)
            uow.commit()
            return deleted
