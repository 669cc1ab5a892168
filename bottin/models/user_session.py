"""
Modello UserSession (tabella: sessions).

Sessione lato server: il cookie del browser contiene solo l'id.
"""

from datetime import datetime

from bottin.extensions import db


class UserSession(db.Model):
    __tablename__ = "sessions"

    id = db.Column(db.String(64), primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_admin = db.Column(db.Boolean, nullable=False, default=False)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<UserSession user_id={self.user_id} expires_at={self.expires_at}>"
