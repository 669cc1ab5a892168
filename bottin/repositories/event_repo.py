"""
Repository specifico per Event.
"""
from typing import List, Optional

from bottin.models import Event
from bottin.repositories.base import SqlAlchemyRepository


class EventRepository(SqlAlchemyRepository[Event]):
    def __init__(self, session):
        super().__init__(session, Event)

    def list_by_date(self, limit: Optional[int] = None) -> List[Event]:
        """Eventi ordinati per data evento crescente."""
        query = self.session.query(Event).order_by(Event.event_date.asc(), Event.id.asc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def detach_organizer(self, user_id: int) -> int:
        """Gli eventi di un utente cancellato restano, senza organizzatore."""
        return (
            self.session.query(Event)
            .filter_by(organizer_id=user_id)
            .update({Event.organizer_id: None}, synchronize_session=False)
        )
