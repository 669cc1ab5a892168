"""
Repository SQLAlchemy di base del bottin.

Lavora sulla sessione della UnitOfWork che lo possiede: non fa mai commit,
restituisce modelli ORM e lascia a DatabaseStorage la conversione in record.
I repository per entità aggiungono solo letture filtrate e operazioni bulk.
"""
from typing import Generic, Optional, Type, TypeVar

from bottin.extensions import db

M = TypeVar("M", bound=db.Model)


class SqlAlchemyRepository(Generic[M]):
    def __init__(self, session, model_cls: Type[M]):
        self.session = session
        self.model_cls = model_cls

    def add(self, entity: M) -> M:
        self.session.add(entity)
        return entity

    def get_by_id(self, entity_id) -> Optional[M]:
        """Intero per le entità, stringa per le sessioni; None se assente."""
        if entity_id is None:
            return None
        return self.session.get(self.model_cls, entity_id)

    def delete(self, entity: M) -> None:
        self.session.delete(entity)

    def delete_by_id(self, entity_id) -> bool:
        # Il "non trovato" è un esito normale dello storage, non un errore
        entity = self.get_by_id(entity_id)
        if entity is None:
            return False
        self.delete(entity)
        return True
