"""
Repository specifico per TrocAd (bacheca TROC'DAM).
"""
from typing import List, Optional

from bottin.models import TrocAd
from bottin.repositories.base import SqlAlchemyRepository


class TrocAdRepository(SqlAlchemyRepository[TrocAd]):
    def __init__(self, session):
        super().__init__(session, TrocAd)

    def search(
        self,
        *,
        category: Optional[str] = None,
        user_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[TrocAd]:
        """Annunci filtrati, dal più recente."""
        query = self.session.query(TrocAd)
        if category:
            query = query.filter(TrocAd.category == category)
        if user_id is not None:
            query = query.filter(TrocAd.user_id == user_id)
        query = query.order_by(TrocAd.created_at.desc(), TrocAd.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def delete_by_user(self, user_id: int) -> int:
        return (
            self.session.query(TrocAd)
            .filter_by(user_id=user_id)
            .delete(synchronize_session=False)
        )
