"""
Servizi per la messaggistica diretta (Message).

Non c'è consegna in tempo reale: i client rileggono periodicamente
le conversazioni.
"""

from __future__ import annotations

from typing import List, Optional

from bottin.schemas import MessageCreateRequest
from bottin.services.errors import InvalidInput, NotFound, PermissionDenied
from bottin.services.permissions import CurrentUser, require_actor
from bottin.storage.base import Storage
from bottin.storage.records import MessageRecord


def list_messages(storage: Storage, actor: Optional[CurrentUser]) -> List[MessageRecord]:
    actor = require_actor(actor)
    return storage.get_messages(actor.id)


def get_conversation(
    storage: Storage, actor: Optional[CurrentUser], other_user_id: int
) -> List[MessageRecord]:
    actor = require_actor(actor)
    return storage.get_conversation(actor.id, other_user_id)


def send_message(
    storage: Storage, actor: Optional[CurrentUser], data: MessageCreateRequest
) -> MessageRecord:
    """Il destinatario deve esistere ed essere approvato, altrimenti 404."""
    actor = require_actor(actor)
    if data.receiver_id == actor.id:
        raise InvalidInput(
            errors=[{"field": "receiverId", "message": "Cannot send a message to yourself"}]
        )

    receiver = storage.get_user(data.receiver_id)
    if receiver is None or not receiver.is_approved:
        raise NotFound("Recipient not found")

    return storage.create_message(
        {
            "sender_id": actor.id,
            "receiver_id": receiver.id,
            "content": data.content,
        }
    )


def mark_read(storage: Storage, actor: Optional[CurrentUser], message_id: int) -> None:
    """Solo il destinatario può segnare un messaggio come letto."""
    actor = require_actor(actor)
    message = storage.get_message(message_id)
    if message is None:
        raise NotFound("Message not found")
    if message.receiver_id != actor.id:
        raise PermissionDenied()
    if not storage.mark_message_as_read(message_id):
        raise NotFound("Message not found")


def mark_conversation_read(
    storage: Storage, actor: Optional[CurrentUser], other_user_id: int
) -> int:
    """Segna come letti i messaggi ricevuti da ``other_user_id``."""
    actor = require_actor(actor)
    return storage.mark_conversation_as_read(actor.id, other_user_id)


def unread_count(storage: Storage, actor: Optional[CurrentUser]) -> int:
    actor = require_actor(actor)
    return storage.count_unread(actor.id)
