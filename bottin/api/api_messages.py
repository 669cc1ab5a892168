"""
API JSON per la messaggistica diretta (i client fanno polling).

GET   /api/messages                       Tutti i messaggi del chiamante
GET   /api/messages/unread-count          Messaggi ricevuti non letti
POST  /api/messages                       Invia un messaggio
GET   /api/messages/<user_id>             Conversazione in ordine cronologico
PATCH /api/messages/<user_id>/read-all    Segna letta la conversazione
PATCH /api/messages/<message_id>/read     Segna letto un messaggio (destinatario)
"""

from __future__ import annotations

from flask import Blueprint

from bottin.api.responses import request_json, success, validation_failed
from bottin.middleware.auth import current_user, login_required
from bottin.schemas import MessageCreateRequest, validate
from bottin.services import message_service
from bottin.storage import get_storage

api_messages_bp = Blueprint("api_messages", __name__)


@api_messages_bp.route("", methods=["GET"])
@login_required
def api_list_messages():
    messages = message_service.list_messages(get_storage(), current_user())
    return success([m.to_dict() for m in messages])


@api_messages_bp.route("/unread-count", methods=["GET"])
@login_required
def api_unread_count():
    count = message_service.unread_count(get_storage(), current_user())
    return success({"unread": count})


@api_messages_bp.route("", methods=["POST"])
@login_required
def api_send_message():
    result = validate(MessageCreateRequest, request_json())
    if not result.ok:
        return validation_failed(result)

    message = message_service.send_message(get_storage(), current_user(), result.data)
    return success(message.to_dict(), status=201)


@api_messages_bp.route("/<int:user_id>", methods=["GET"])
@login_required
def api_conversation(user_id: int):
    messages = message_service.get_conversation(get_storage(), current_user(), user_id)
    return success([m.to_dict() for m in messages])


@api_messages_bp.route("/<int:user_id>/read-all", methods=["PATCH"])
@login_required
def api_mark_conversation_read(user_id: int):
    updated = message_service.mark_conversation_read(get_storage(), current_user(), user_id)
    return success({"updated": updated}, message="Conversation marked as read")


@api_messages_bp.route("/<int:message_id>/read", methods=["PATCH"])
@login_required
def api_mark_read(message_id: int):
    message_service.mark_read(get_storage(), current_user(), message_id)
    return success({"id": message_id, "isRead": True}, message="Message marked as read")
