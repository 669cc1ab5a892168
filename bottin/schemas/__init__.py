"""
Schemi pydantic per la validazione dei body JSON e delle query string.
"""

from .base import CamelModel, ValidationResult, validate
from .user import (
    AdminFlagRequest,
    LoginRequest,
    RegisterRequest,
    SocialMedia,
    UserListQuery,
    UserUpdateRequest,
)
from .media import MediaCreateRequest
from .event import EventCreateRequest, EventListQuery, EventUpdateRequest
from .troc import TrocAdCreateRequest, TrocAdListQuery, TrocAdUpdateRequest
from .message import MessageCreateRequest

__all__ = [
    "CamelModel",
    "ValidationResult",
    "validate",
    "AdminFlagRequest",
    "LoginRequest",
    "RegisterRequest",
    "SocialMedia",
    "UserListQuery",
    "UserUpdateRequest",
    "MediaCreateRequest",
    "EventCreateRequest",
    "EventListQuery",
    "EventUpdateRequest",
    "TrocAdCreateRequest",
    "TrocAdListQuery",
    "TrocAdUpdateRequest",
    "MessageCreateRequest",
]
