"""
Servizi per la bacheca TROC'DAM (TrocAd).
"""

from __future__ import annotations

from typing import List, Optional

from bottin.schemas import TrocAdCreateRequest, TrocAdListQuery, TrocAdUpdateRequest
from bottin.services.errors import NotFound, PermissionDenied
from bottin.services.logging import log_structured_event
from bottin.services.permissions import CurrentUser, ensure_self_or_admin, require_actor
from bottin.storage.base import Storage
from bottin.storage.records import TrocAdRecord

APPROVED_ONLY_MESSAGE = "Only approved artists can create ads"


def list_ads(storage: Storage, query: TrocAdListQuery) -> List[TrocAdRecord]:
    return storage.get_troc_ads(
        category=query.category, limit=query.limit, user_id=query.user_id
    )


def get_ad(storage: Storage, ad_id: int) -> TrocAdRecord:
    ad = storage.get_troc_ad(ad_id)
    if ad is None:
        raise NotFound("Ad not found")
    return ad


def create_ad(
    storage: Storage, actor: Optional[CurrentUser], data: TrocAdCreateRequest
) -> TrocAdRecord:
    """
    Pubblica un annuncio.

    L'approvazione si verifica sul record salvato al momento della scrittura,
    non sullo stato letto al login: una revoca nel frattempo blocca l'annuncio.
    """
    actor = require_actor(actor)
    author = storage.get_user(actor.id)
    if author is None or not author.is_approved:
        raise PermissionDenied(APPROVED_ONLY_MESSAGE)

    draft = data.model_dump()
    draft["user_id"] = actor.id
    ad = storage.create_troc_ad(draft)
    log_structured_event("troc_ad_created", ad_id=ad.id, user_id=actor.id, category=ad.category)
    return ad


def update_ad(
    storage: Storage,
    actor: Optional[CurrentUser],
    ad_id: int,
    data: TrocAdUpdateRequest,
) -> TrocAdRecord:
    actor = require_actor(actor)
    ad = get_ad(storage, ad_id)
    ensure_self_or_admin(actor, ad.user_id)

    changes = {key: value for key, value in data.changes().items() if value is not None}
    updated = storage.update_troc_ad(ad_id, changes)
    if updated is None:
        raise NotFound("Ad not found")
    return updated


def delete_ad(storage: Storage, actor: Optional[CurrentUser], ad_id: int) -> None:
    actor = require_actor(actor)
    ad = get_ad(storage, ad_id)
    ensure_self_or_admin(actor, ad.user_id)
    if not storage.delete_troc_ad(ad_id):
        raise NotFound("Ad not found")
