"""
Modello User (tabella: users).

Rappresenta un artista iscritto al bottin oppure un membro dello staff
(is_admin). Il login è possibile solo dopo l'approvazione (is_approved).
"""

from datetime import datetime

from bottin.extensions import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    # Credenziali: la password è salvata solo come hash werkzeug
    username = db.Column(db.String(64), nullable=False, unique=True, index=True)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    # Anagrafica / profilo pubblico
    first_name = db.Column(db.String(128), nullable=False)
    last_name = db.Column(db.String(128), nullable=False)
    profile_image = db.Column(db.String(500), nullable=True)
    bio = db.Column(db.Text, nullable=True)
    discipline = db.Column(db.String(128), nullable=True, index=True)
    location = db.Column(db.String(128), nullable=True)
    website = db.Column(db.String(500), nullable=True)
    # es. {"instagram": "...", "spotify": "..."}
    social_media = db.Column(db.JSON, nullable=True)
    cv = db.Column(db.Text, nullable=True)

    # Stato
    is_approved = db.Column(db.Boolean, nullable=False, default=False, index=True)
    is_admin = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )

    # Relazioni
    media = db.relationship(
        "ProfileMedia", back_populates="user", lazy="dynamic", passive_deletes=True
    )
    troc_ads = db.relationship(
        "TrocAd", back_populates="user", lazy="dynamic", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
