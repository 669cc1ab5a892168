"""
Servizi per gli eventi (Event).
"""

from __future__ import annotations

from typing import List, Optional

from bottin.schemas import EventCreateRequest, EventUpdateRequest
from bottin.services.errors import InvalidInput, NotFound, PermissionDenied
from bottin.services.permissions import CurrentUser, ensure_self_or_admin, require_actor
from bottin.storage.base import Storage
from bottin.storage.records import EventRecord

REQUIRED_FIELDS = ("title", "description", "location", "event_date")


def list_events(storage: Storage, limit: Optional[int] = None) -> List[EventRecord]:
    return storage.get_events(limit)


def get_event(storage: Storage, event_id: int) -> EventRecord:
    event = storage.get_event(event_id)
    if event is None:
        raise NotFound("Event not found")
    return event


def _ensure_organizer_exists(storage: Storage, organizer_id: int) -> None:
    if storage.get_user(organizer_id) is None:
        raise InvalidInput(
            errors=[{"field": "organizerId", "message": "Organizer does not exist"}]
        )


def create_event(
    storage: Storage, actor: Optional[CurrentUser], data: EventCreateRequest
) -> EventRecord:
    """
    Crea un evento. L'organizzatore di default è il chiamante;
    solo un admin può creare eventi per conto di altri.
    """
    actor = require_actor(actor)
    draft = data.model_dump()
    if not draft.get("organizer_id"):
        draft["organizer_id"] = actor.id

    if draft["organizer_id"] != actor.id:
        if not actor.is_admin:
            raise PermissionDenied()
        _ensure_organizer_exists(storage, draft["organizer_id"])

    return storage.create_event(draft)


def update_event(
    storage: Storage,
    actor: Optional[CurrentUser],
    event_id: int,
    data: EventUpdateRequest,
) -> EventRecord:
    actor = require_actor(actor)
    event = get_event(storage, event_id)
    ensure_self_or_admin(actor, event.organizer_id)

    changes = data.changes()
    for key in REQUIRED_FIELDS:
        if key in changes and changes[key] is None:
            changes.pop(key)
    # Solo un admin può riassegnare l'organizzatore
    if not actor.is_admin:
        changes.pop("organizer_id", None)
    elif changes.get("organizer_id") is not None:
        _ensure_organizer_exists(storage, changes["organizer_id"])

    updated = storage.update_event(event_id, changes)
    if updated is None:
        raise NotFound("Event not found")
    return updated


def delete_event(storage: Storage, actor: Optional[CurrentUser], event_id: int) -> None:
    actor = require_actor(actor)
    event = get_event(storage, event_id)
    ensure_self_or_admin(actor, event.organizer_id)
    if not storage.delete_event(event_id):
        raise NotFound("Event not found")
