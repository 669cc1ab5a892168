"""
Pacchetto per i modelli SQLAlchemy.

Qui vengono esportate le classi modello principali.
"""

from .user import User
from .profile_media import ProfileMedia
from .event import Event
from .troc_ad import TrocAd
from .message import Message
from .user_session import UserSession

__all__ = [
    "User",
    "ProfileMedia",
    "Event",
    "TrocAd",
    "Message",
    "UserSession",
]
