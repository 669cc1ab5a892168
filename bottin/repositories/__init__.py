"""
Package repositories.
Espone i Repository per l'accesso ai dati SQL.
"""

from .user_repo import UserRepository
from .profile_media_repo import ProfileMediaRepository
from .event_repo import EventRepository
from .troc_ad_repo import TrocAdRepository
from .message_repo import MessageRepository
from .session_repo import SessionRepository

__all__ = [
    "UserRepository",
    "ProfileMediaRepository",
    "EventRepository",
    "TrocAdRepository",
    "MessageRepository",
    "SessionRepository",
]
