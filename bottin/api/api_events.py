"""
API JSON per gli eventi.

GET    /api/events[?limit=N]    Eventi per data crescente
GET    /api/events/<id>
POST   /api/events              Crea (organizzatore = chiamante, salvo admin)
PUT    /api/events/<id>         Organizzatore o admin
DELETE /api/events/<id>         Organizzatore o admin
"""

from __future__ import annotations

from flask import Blueprint, request

from bottin.api.responses import request_json, success, validation_failed
from bottin.middleware.auth import current_user, login_required
from bottin.schemas import EventCreateRequest, EventListQuery, EventUpdateRequest, validate
from bottin.services import event_service
from bottin.storage import get_storage

api_events_bp = Blueprint("api_events", __name__)


@api_events_bp.route("", methods=["GET"])
def api_list_events():
    result = validate(EventListQuery, request.args.to_dict())
    if not result.ok:
        return validation_failed(result)

    events = event_service.list_events(get_storage(), result.data.limit)
    return success([e.to_dict() for e in events])


@api_events_bp.route("/<int:event_id>", methods=["GET"])
def api_get_event(event_id: int):
    event = event_service.get_event(get_storage(), event_id)
    return success(event.to_dict())


@api_events_bp.route("", methods=["POST"])
@login_required
def api_create_event():
    result = validate(EventCreateRequest, request_json())
    if not result.ok:
        return validation_failed(result)

    event = event_service.create_event(get_storage(), current_user(), result.data)
    return success(event.to_dict(), status=201)


@api_events_bp.route("/<int:event_id>", methods=["PUT"])
@login_required
def api_update_event(event_id: int):
    result = validate(EventUpdateRequest, request_json())
    if not result.ok:
        return validation_failed(result)

    event = event_service.update_event(get_storage(), current_user(), event_id, result.data)
    return success(event.to_dict(), message="Event updated")


@api_events_bp.route("/<int:event_id>", methods=["DELETE"])
@login_required
def api_delete_event(event_id: int):
    event_service.delete_event(get_storage(), current_user(), event_id)
    return success({"deleted": True}, message="Event deleted")
