"""
Modello ProfileMedia (tabella: profile_media).

Immagini, video e tracce audio mostrati sul profilo di un artista.
L'URL è una stringa opaca: il file vive su uno storage esterno.
"""

from datetime import datetime

from bottin.extensions import db


class ProfileMedia(db.Model):
    __tablename__ = "profile_media"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = db.Column(db.String(255), nullable=False)
    media_type = db.Column(db.String(16), nullable=False)  # image | video | audio
    url = db.Column(db.String(1000), nullable=False)
    description = db.Column(db.Text, nullable=True)

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )

    user = db.relationship("User", back_populates="media")

    def __repr__(self) -> str:
        return f"<ProfileMedia id={self.id} user_id={self.user_id} type={self.media_type!r}>"
