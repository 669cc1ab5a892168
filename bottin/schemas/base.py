"""
Base comune degli schemi di richiesta e validazione con risultato "taggato".

Ogni route chiama ``validate(Schema, dati)`` e riceve un ValidationResult:
``ok=True`` con ``data`` (istanza dello schema) oppure ``ok=False`` con
``errors`` (lista di {"field", "message"}). Nessuna eccezione pydantic
arriva alle route.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

S = TypeVar("S", bound=BaseModel)


class CamelModel(BaseModel):
    """JSON in camelCase verso attributi snake_case; campi sconosciuti ignorati."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def changes(self) -> Dict[str, Any]:
        """Solo i campi effettivamente presenti nel body (per gli update parziali)."""
        return self.model_dump(exclude_unset=True)


@dataclass
class ValidationResult(Generic[S]):
    ok: bool
    data: Optional[S] = None
    errors: List[Dict[str, str]] = field(default_factory=list)


def format_errors(exc: ValidationError) -> List[Dict[str, str]]:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "body"
        problems.append({"field": loc, "message": err.get("msg", "Invalid value")})
    return problems


def validate(schema: Type[S], payload: Any) -> ValidationResult[S]:
    if payload is None:
        payload = {}
    try:
        return ValidationResult(ok=True, data=schema.model_validate(payload))
    except ValidationError as exc:
        return ValidationResult(ok=False, errors=format_errors(exc))


def naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Le date sono salvate naive in UTC: normalizza gli ISO con offset (es. '...Z')."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
