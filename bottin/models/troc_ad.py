"""
Modello TrocAd (tabella: troc_ads).

Annuncio della bacheca TROC'DAM, pubblicabile solo da artisti approvati.
"""

from datetime import datetime

from bottin.extensions import db


class TrocAd(db.Model):
    __tablename__ = "troc_ads"

    id = db.Column(db.Integer, primary_key=True)

    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    # collaboration | equipment | service | event
    category = db.Column(db.String(32), nullable=False, index=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )

    user = db.relationship("User", back_populates="troc_ads")

    def __repr__(self) -> str:
        return f"<TrocAd id={self.id} category={self.category!r}>"
