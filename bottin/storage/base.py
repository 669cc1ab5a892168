"""
Interfaccia comune dello storage.

Due implementazioni conformi:
- DatabaseStorage (bottin.storage.database): produzione, SQLAlchemy + Unit of Work
- MemoryStorage (bottin.storage.memory): sviluppo locale e test

Regole valide per entrambe:
- get_* restituisce il record oppure None
- update_* restituisce None se l'id non esiste, non crea mai record
- delete_* restituisce False se l'id non esiste, non solleva eccezioni
- gli errori del backend (connessione, vincoli) risalgono invariati
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from bottin.storage.records import (
    EventRecord,
    MessageRecord,
    ProfileMediaRecord,
    SessionRecord,
    TrocAdRecord,
    UserRecord,
)


class Storage(ABC):
    """Operazioni CRUD e letture filtrate per ogni entità del bottin."""

    # --- Users ---------------------------------------------------------------
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[UserRecord]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        """Ricerca case-insensitive."""

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        """Ricerca case-insensitive."""

    @abstractmethod
    def create_user(self, draft: Mapping[str, Any]) -> UserRecord:
        """Crea sempre l'utente con is_approved=False e is_admin=False, salvo override esplicito."""

    @abstractmethod
    def update_user(self, user_id: int, fields: Mapping[str, Any]) -> Optional[UserRecord]: ...

    @abstractmethod
    def delete_user(self, user_id: int) -> bool:
        """Cancella utente, media, annunci, messaggi e sessioni; gli eventi restano senza organizzatore."""

    @abstractmethod
    def get_users(
        self,
        *,
        is_approved: Optional[bool] = None,
        discipline: Optional[str] = None,
        keyword: Optional[str] = None,
    ) -> List[UserRecord]:
        """Utenti ordinati per created_at decrescente."""

    # --- ProfileMedia --------------------------------------------------------
    @abstractmethod
    def get_media(self, media_id: int) -> Optional[ProfileMediaRecord]: ...

    @abstractmethod
    def get_profile_media(self, user_id: int) -> List[ProfileMediaRecord]:
        """Media di un utente, created_at decrescente."""

    @abstractmethod
    def create_profile_media(self, draft: Mapping[str, Any]) -> ProfileMediaRecord: ...

    @abstractmethod
    def delete_profile_media(self, media_id: int) -> bool: ...

    # --- Events --------------------------------------------------------------
    @abstractmethod
    def get_event(self, event_id: int) -> Optional[EventRecord]: ...

    @abstractmethod
    def get_events(self, limit: Optional[int] = None) -> List[EventRecord]:
        """Eventi ordinati per event_date crescente."""

    @abstractmethod
    def create_event(self, draft: Mapping[str, Any]) -> EventRecord: ...

    @abstractmethod
    def update_event(self, event_id: int, fields: Mapping[str, Any]) -> Optional[EventRecord]: ...

    @abstractmethod
    def delete_event(self, event_id: int) -> bool: ...

    # --- TrocAds -------------------------------------------------------------
    @abstractmethod
    def get_troc_ad(self, ad_id: int) -> Optional[TrocAdRecord]: ...

    @abstractmethod
    def get_troc_ads(
        self,
        *,
        category: Optional[str] = None,
        limit: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> List[TrocAdRecord]:
        """Annunci ordinati per created_at decrescente."""

    @abstractmethod
    def create_troc_ad(self, draft: Mapping[str, Any]) -> TrocAdRecord: ...

    @abstractmethod
    def update_troc_ad(self, ad_id: int, fields: Mapping[str, Any]) -> Optional[TrocAdRecord]: ...

    @abstractmethod
    def delete_troc_ad(self, ad_id: int) -> bool: ...

    # --- Messages ------------------------------------------------------------
    @abstractmethod
    def get_message(self, message_id: int) -> Optional[MessageRecord]: ...

    @abstractmethod
    def get_messages(self, user_id: int) -> List[MessageRecord]:
        """Messaggi inviati o ricevuti, created_at decrescente."""

    @abstractmethod
    def get_conversation(self, user_a: int, user_b: int) -> List[MessageRecord]:
        """Messaggi tra due utenti nei due sensi, created_at crescente."""

    @abstractmethod
    def create_message(self, draft: Mapping[str, Any]) -> MessageRecord: ...

    @abstractmethod
    def mark_message_as_read(self, message_id: int) -> bool: ...

    @abstractmethod
    def mark_conversation_as_read(self, receiver_id: int, sender_id: int) -> int:
        """Segna come letti i messaggi sender -> receiver; restituisce quanti sono cambiati."""

    @abstractmethod
    def count_unread(self, user_id: int) -> int: ...

    @abstractmethod
    def delete_message(self, message_id: int) -> bool: ...

    # --- Sessions ------------------------------------------------------------
    @abstractmethod
    def create_session(self, record: SessionRecord) -> SessionRecord: ...

    @abstractmethod
    def get_session(self, session_id: str) -> Optional[SessionRecord]: ...

    @abstractmethod
    def delete_session(self, session_id: str) -> bool: ...

    @abstractmethod
    def delete_sessions_for_user(self, user_id: int) -> int: ...

    @abstractmethod
    def delete_expired_sessions(self, now: datetime) -> int:
        """Elimina le sessioni con expires_at <= now; restituisce quante."""


def pick_fields(fields: Mapping[str, Any], allowed) -> Dict[str, Any]:
    """Filtra un dizionario di aggiornamento sui soli campi ammessi."""
    return {key: value for key, value in fields.items() if key in allowed}
