"""
Repository specifico per Message.
"""
from typing import List

from sqlalchemy import and_, or_

from bottin.models import Message
from bottin.repositories.base import SqlAlchemyRepository


class MessageRepository(SqlAlchemyRepository[Message]):
    def __init__(self, session):
        super().__init__(session, Message)

    def list_for_user(self, user_id: int) -> List[Message]:
        """Messaggi inviati o ricevuti dall'utente, dal più recente."""
        return (
            self.session.query(Message)
            .filter(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
            .order_by(Message.created_at.desc(), Message.id.desc())
            .all()
        )

    def conversation(self, user_a: int, user_b: int) -> List[Message]:
        """Scambio tra due utenti in ordine cronologico."""
        return (
            self.session.query(Message)
            .filter(
                or_(
                    and_(Message.sender_id == user_a, Message.receiver_id == user_b),
                    and_(Message.sender_id == user_b, Message.receiver_id == user_a),
                )
            )
            .order_by(Message.created_at.asc(), Message.id.asc())
            .all()
        )

    def mark_conversation_read(self, receiver_id: int, sender_id: int) -> int:
        return (
            self.session.query(Message)
            .filter(
                Message.receiver_id == receiver_id,
                Message.sender_id == sender_id,
                Message.is_read.is_(False),
            )
            .update({Message.is_read: True}, synchronize_session=False)
        )

    def count_unread(self, user_id: int) -> int:
        return (
            self.session.query(Message)
            .filter(Message.receiver_id == user_id, Message.is_read.is_(False))
            .count()
        )

    def delete_for_user(self, user_id: int) -> int:
        return (
            self.session.query(Message)
            .filter(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
            .delete(synchronize_session=False)
        )
