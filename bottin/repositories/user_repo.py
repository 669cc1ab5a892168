"""
Repository specifico per User.
Eredita le funzioni base (add, get, list) da SqlAlchemyRepository.
"""
from typing import List, Optional

from sqlalchemy import func

from bottin.models import User
from bottin.repositories.base import SqlAlchemyRepository


def like_pattern(keyword: str) -> str:
    """Pattern LIKE "contiene" con i caratteri jolly dell'utente neutralizzati."""
    escaped = keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class UserRepository(SqlAlchemyRepository[User]):
    def __init__(self, session):
        super().__init__(session, User)

    def get_by_username(self, username: str) -> Optional[User]:
        """Cerca utente per username, senza distinzione maiuscole/minuscole."""
        if not username:
            return None
        return (
            self.session.query(User)
            .filter(func.lower(User.username) == username.lower())
            .first()
        )

    def get_by_email(self, email: str) -> Optional[User]:
        """Cerca utente per email, senza distinzione maiuscole/minuscole."""
        if not email:
            return None
        return (
            self.session.query(User)
            .filter(func.lower(User.email) == email.lower())
            .first()
        )

    def search(
        self,
        *,
        is_approved: Optional[bool] = None,
        discipline: Optional[str] = None,
        keyword: Optional[str] = None,
    ) -> List[User]:
        """Elenco utenti filtrato, dal più recente."""
        query = self.session.query(User)
        if is_approved is not None:
            query = query.filter(User.is_approved.is_(is_approved))
        if discipline:
            query = query.filter(User.discipline == discipline)
        if keyword:
            pattern = like_pattern(keyword)
            full_name = User.first_name + " " + User.last_name
            query = query.filter(
                full_name.ilike(pattern, escape="\\")
                | User.bio.ilike(pattern, escape="\\")
            )
        return query.order_by(User.created_at.desc(), User.id.desc()).all()
