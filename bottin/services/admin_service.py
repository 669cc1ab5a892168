"""
Servizi di amministrazione: approvazioni, ruoli e analytics.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from bottin.services.errors import NotFound
from bottin.services.logging import log_structured_event
from bottin.services.permissions import CurrentUser, ensure_admin
from bottin.storage.base import Storage
from bottin.storage.records import UserRecord

RECENT_LIMIT = 10


@dataclass
class AnalyticsReport:
    counts: Dict[str, int]
    distribution: Dict[str, Dict[str, int]]
    recent: Dict[str, List[Any]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "counts": self.counts,
            "distribution": self.distribution,
            "recent": {
                key: [item.to_dict() for item in items]
                for key, items in self.recent.items()
            },
        }


def list_pending_users(storage: Storage, actor: Optional[CurrentUser]) -> List[UserRecord]:
    ensure_admin(actor)
    return storage.get_users(is_approved=False)


def approve_user(storage: Storage, actor: Optional[CurrentUser], user_id: int) -> UserRecord:
    actor = ensure_admin(actor)
    user = storage.update_user(user_id, {"is_approved": True})
    if user is None:
        raise NotFound("User not found")
    log_structured_event("user_approved", actor_id=actor.id, user_id=user_id)
    return user


def set_admin_flag(
    storage: Storage,
    actor: Optional[CurrentUser],
    user_id: int,
    is_admin: bool,
) -> UserRecord:
    """
    Concede o revoca il ruolo admin.

    Le sessioni aperte dell'utente decadono alla richiesta successiva
    (vedi bottin.middleware.auth): il flag admin di sessione deve
    corrispondere al record salvato.
    """
    actor = ensure_admin(actor)
    user = storage.update_user(user_id, {"is_admin": bool(is_admin)})
    if user is None:
        raise NotFound("User not found")
    log_structured_event(
        "admin_flag_changed",
        actor_id=actor.id,
        user_id=user_id,
        is_admin=bool(is_admin),
    )
    return user


def _by_creation(records) -> List[Any]:
    return sorted(
        records,
        key=lambda r: (r.created_at or datetime.min, r.id),
        reverse=True,
    )[:RECENT_LIMIT]


def build_analytics(storage: Storage, actor: Optional[CurrentUser]) -> AnalyticsReport:
    """Conteggi, distribuzioni e attività recente per la dashboard admin."""
    ensure_admin(actor)

    users = storage.get_users()
    approved = [u for u in users if u.is_approved]
    events = storage.get_events()
    ads = storage.get_troc_ads()

    by_discipline = Counter(u.discipline for u in approved if u.discipline)
    by_location = Counter(u.location for u in approved if u.location)
    by_category = Counter(ad.category for ad in ads)

    return AnalyticsReport(
        counts={
            "totalUsers": len(users),
            "approvedUsers": len(approved),
            "pendingUsers": len(users) - len(approved),
            "events": len(events),
            "trocAds": len(ads),
        },
        distribution={
            "usersByDiscipline": dict(by_discipline),
            "usersByLocation": dict(by_location),
            "adsByCategory": dict(by_category),
        },
        recent={
            "users": _by_creation(approved),
            "events": _by_creation(events),
            "ads": _by_creation(ads),
        },
    )
