"""
Repository specifico per ProfileMedia.
"""
from typing import List

from bottin.models import ProfileMedia
from bottin.repositories.base import SqlAlchemyRepository


class ProfileMediaRepository(SqlAlchemyRepository[ProfileMedia]):
    def __init__(self, session):
        super().__init__(session, ProfileMedia)

    def list_by_user(self, user_id: int) -> List[ProfileMedia]:
        """Media di un utente, dal più recente."""
        return (
            self.session.query(ProfileMedia)
            .filter_by(user_id=user_id)
            .order_by(ProfileMedia.created_at.desc(), ProfileMedia.id.desc())
            .all()
        )

    def delete_by_user(self, user_id: int) -> int:
        return (
            self.session.query(ProfileMedia)
            .filter_by(user_id=user_id)
            .delete(synchronize_session=False)
        )
