"""
Repository specifico per UserSession.
"""
from datetime import datetime

from bottin.models import UserSession
from bottin.repositories.base import SqlAlchemyRepository


class SessionRepository(SqlAlchemyRepository[UserSession]):
    def __init__(self, session):
        super().__init__(session, UserSession)

    def delete_for_user(self, user_id: int) -> int:
        return (
            self.session.query(UserSession)
            .filter_by(user_id=user_id)
            .delete(synchronize_session=False)
        )

    def delete_expired(self, now: datetime) -> int:
        return (
            self.session.query(UserSession)
            .filter(UserSession.expires_at <= now)
            .delete(synchronize_session=False)
        )
