"""
Modello Event (tabella: events).
"""

from datetime import datetime

from bottin.extensions import db


class Event(db.Model):
    __tablename__ = "events"

    id = db.Column(db.Integer, primary_key=True)

    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    location = db.Column(db.String(255), nullable=False)
    event_date = db.Column(db.DateTime, nullable=False, index=True)
    image_url = db.Column(db.String(1000), nullable=True)

    # L'evento sopravvive alla cancellazione dell'organizzatore
    organizer_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )

    organizer = db.relationship("User")

    def __repr__(self) -> str:
        return f"<Event id={self.id} title={self.title!r}>"
