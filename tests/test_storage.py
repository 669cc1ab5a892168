"""
Contratto comune dei backend di storage (memoria e SQL).
"""

from datetime import datetime, timedelta

from bottin.storage.records import SessionRecord


def _user(storage, username, **extra):
    draft = {
        "username": username,
        "email": f"{username}@dam-artists.org",
        "password_hash": "hash",
        "first_name": username.title(),
        "last_name": "Artist",
    }
    draft.update(extra)
    return storage.create_user(draft)


def _event(storage, title, when, organizer_id=None):
    return storage.create_event(
        {
            "title": title,
            "description": "Descrizione",
            "location": "Montreal",
            "event_date": when,
            "organizer_id": organizer_id,
        }
    )


def test_create_user_defaults(storage):
    user = _user(storage, "ana")

    assert user.id is not None
    assert user.created_at is not None
    assert user.is_approved is False
    assert user.is_admin is False
    assert user.social_media == {}
    assert storage.get_user(user.id).username == "ana"


def test_missing_ids_are_not_errors(storage):
    assert storage.get_user(999) is None
    assert storage.update_user(999, {"bio": "x"}) is None
    assert storage.delete_user(999) is False
    assert storage.update_event(999, {"title": "x"}) is None
    assert storage.delete_event(999) is False
    assert storage.update_troc_ad(999, {"title": "x"}) is None
    assert storage.delete_troc_ad(999) is False
    assert storage.mark_message_as_read(999) is False
    assert storage.delete_message(999) is False
    assert storage.delete_profile_media(999) is False
    assert storage.get_session("missing") is None
    assert storage.delete_session("missing") is False


def test_lookup_is_case_insensitive(storage):
    user = _user(storage, "Marie")

    assert storage.get_user_by_username("marie").id == user.id
    assert storage.get_user_by_email("MARIE@dam-artists.org").id == user.id
    assert storage.get_user_by_username("nobody") is None


def test_update_user_keeps_identity_fields(storage):
    user = _user(storage, "leo")

    updated = storage.update_user(
        user.id, {"id": 42, "created_at": datetime(2000, 1, 1), "bio": "Peintre"}
    )

    assert updated.id == user.id
    assert updated.created_at == user.created_at
    assert updated.bio == "Peintre"


def test_returned_records_are_detached(storage):
    user = _user(storage, "zoe")
    user.bio = "modificato fuori dallo storage"

    assert storage.get_user(user.id).bio is None


def test_get_users_filters_and_order(storage):
    first = _user(storage, "alba", discipline="Musique", bio="Violoncelliste")
    second = _user(storage, "bruno", discipline="Danse", is_approved=True)
    third = _user(storage, "carla", discipline="Musique", is_approved=True)

    assert [u.id for u in storage.get_users()] == [third.id, second.id, first.id]
    assert [u.id for u in storage.get_users(is_approved=True)] == [third.id, second.id]
    assert [u.id for u in storage.get_users(is_approved=False)] == [first.id]
    assert [u.id for u in storage.get_users(discipline="Musique")] == [third.id, first.id]
    # keyword su nome completo e bio, senza distinzione di maiuscole
    assert [u.id for u in storage.get_users(keyword="VIOLON")] == [first.id]
    assert [u.id for u in storage.get_users(keyword="bruno artist")] == [second.id]
    assert storage.get_users(keyword="100%") == []


def test_events_sorted_by_date_with_limit(storage):
    now = datetime(2026, 5, 1, 20, 0)
    late = _event(storage, "Tardi", now + timedelta(days=10))
    soon = _event(storage, "Presto", now + timedelta(days=1))
    middle = _event(storage, "Medio", now + timedelta(days=5))

    assert [e.id for e in storage.get_events()] == [soon.id, middle.id, late.id]
    assert [e.id for e in storage.get_events(limit=2)] == [soon.id, middle.id]


def test_troc_ads_filters(storage):
    user = _user(storage, "dina")
    other = _user(storage, "enzo")
    gear = storage.create_troc_ad(
        {"title": "Ampli", "description": "Da vendere", "category": "equipment", "user_id": user.id}
    )
    collab = storage.create_troc_ad(
        {"title": "Duo", "description": "Cerco", "category": "collaboration", "user_id": other.id}
    )
    extra = storage.create_troc_ad(
        {"title": "Mixer", "description": "Usato", "category": "equipment", "user_id": other.id}
    )

    assert [a.id for a in storage.get_troc_ads()] == [extra.id, collab.id, gear.id]
    assert [a.id for a in storage.get_troc_ads(category="equipment")] == [extra.id, gear.id]
    assert [a.id for a in storage.get_troc_ads(user_id=other.id)] == [extra.id, collab.id]
    assert [a.id for a in storage.get_troc_ads(limit=1)] == [extra.id]

    updated = storage.update_troc_ad(gear.id, {"title": "Ampli valvolare", "user_id": other.id})
    assert updated.title == "Ampli valvolare"
    assert updated.user_id == user.id


def test_conversation_and_read_flags(storage):
    a = _user(storage, "anna")
    b = _user(storage, "bea")
    c = _user(storage, "chiara")

    m1 = storage.create_message({"sender_id": a.id, "receiver_id": b.id, "content": "ciao"})
    m2 = storage.create_message({"sender_id": b.id, "receiver_id": a.id, "content": "salut"})
    m3 = storage.create_message({"sender_id": a.id, "receiver_id": b.id, "content": "ça va?"})
    storage.create_message({"sender_id": c.id, "receiver_id": b.id, "content": "altro"})

    assert [m.id for m in storage.get_conversation(a.id, b.id)] == [m1.id, m2.id, m3.id]
    assert [m.id for m in storage.get_conversation(b.id, a.id)] == [m1.id, m2.id, m3.id]
    assert [m.id for m in storage.get_messages(a.id)] == [m3.id, m2.id, m1.id]
    assert storage.count_unread(b.id) == 3

    # Solo i messaggi a -> b, non quelli di c
    assert storage.mark_conversation_as_read(b.id, a.id) == 2
    assert storage.count_unread(b.id) == 1
    assert storage.mark_conversation_as_read(b.id, a.id) == 0

    assert storage.mark_message_as_read(m2.id) is True
    assert storage.get_message(m2.id).is_read is True
    assert storage.count_unread(a.id) == 0

    assert storage.delete_message(m1.id) is True
    assert [m.id for m in storage.get_conversation(a.id, b.id)] == [m2.id, m3.id]


def test_delete_user_cascades(storage):
    owner = _user(storage, "franco")
    friend = _user(storage, "gina")
    media = storage.create_profile_media(
        {"user_id": owner.id, "title": "Demo", "media_type": "audio", "url": "https://cdn.dam/demo.mp3"}
    )
    ad = storage.create_troc_ad(
        {"title": "Studio", "description": "Affitto", "category": "service", "user_id": owner.id}
    )
    message = storage.create_message(
        {"sender_id": friend.id, "receiver_id": owner.id, "content": "ciao"}
    )
    event = _event(storage, "Vernissage", datetime(2026, 6, 1), organizer_id=owner.id)
    storage.create_session(
        SessionRecord(
            id="s-franco",
            user_id=owner.id,
            is_admin=False,
            expires_at=datetime.utcnow() + timedelta(days=1),
        )
    )

    assert storage.delete_user(owner.id) is True

    assert storage.get_user(owner.id) is None
    assert storage.get_media(media.id) is None
    assert storage.get_troc_ad(ad.id) is None
    assert storage.get_message(message.id) is None
    assert storage.get_session("s-franco") is None
    assert storage.get_event(event.id).organizer_id is None
    assert storage.get_user(friend.id) is not None


def test_profile_media_newest_first(storage):
    user = _user(storage, "ivo")
    photo = storage.create_profile_media(
        {"user_id": user.id, "title": "Foto", "media_type": "image", "url": "https://cdn.dam/a.jpg"}
    )
    clip = storage.create_profile_media(
        {"user_id": user.id, "title": "Clip", "media_type": "video", "url": "https://cdn.dam/b.mp4"}
    )

    assert [m.id for m in storage.get_profile_media(user.id)] == [clip.id, photo.id]
    assert storage.delete_profile_media(photo.id) is True
    assert [m.id for m in storage.get_profile_media(user.id)] == [clip.id]


def test_sessions_round_trip(storage):
    user = _user(storage, "luca")
    expires = datetime(2030, 1, 1, 12, 0)
    for key in ("s1", "s2"):
        storage.create_session(
            SessionRecord(id=key, user_id=user.id, is_admin=False, expires_at=expires)
        )

    stored = storage.get_session("s1")
    assert stored.user_id == user.id
    assert stored.expires_at == expires

    assert storage.delete_session("s1") is True
    assert storage.delete_sessions_for_user(user.id) == 1
    assert storage.get_session("s2") is None


def test_delete_expired_sessions(storage):
    user = _user(storage, "marta")
    now = datetime(2026, 4, 1, 9, 0)
    for key, expires in (
        ("old", now - timedelta(days=1)),
        ("edge", now),
        ("live", now + timedelta(hours=1)),
    ):
        storage.create_session(
            SessionRecord(id=key, user_id=user.id, is_admin=False, expires_at=expires)
        )

    assert storage.delete_expired_sessions(now) == 2
    assert storage.get_session("old") is None
    assert storage.get_session("edge") is None
    assert storage.get_session("live") is not None
    assert storage.delete_expired_sessions(now) == 0
