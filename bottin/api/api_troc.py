"""
API JSON per la bacheca TROC'DAM.

GET    /api/troc[?category=...&limit=N&userId=...]   Annunci dal più recente
GET    /api/troc/<id>
POST   /api/troc                  Solo artisti approvati
PUT    /api/troc/<id>             Autore o admin
DELETE /api/troc/<id>             Autore o admin
"""

from __future__ import annotations

from flask import Blueprint, request

from bottin.api.responses import request_json, success, validation_failed
from bottin.middleware.auth import current_user, login_required
from bottin.schemas import TrocAdCreateRequest, TrocAdListQuery, TrocAdUpdateRequest, validate
from bottin.services import troc_service
from bottin.storage import get_storage

api_troc_bp = Blueprint("api_troc", __name__)


@api_troc_bp.route("", methods=["GET"])
def api_list_ads():
    result = validate(TrocAdListQuery, request.args.to_dict())
    if not result.ok:
        return validation_failed(result)

    ads = troc_service.list_ads(get_storage(), result.data)
    return success([a.to_dict() for a in ads])


@api_troc_bp.route("/<int:ad_id>", methods=["GET"])
def api_get_ad(ad_id: int):
    ad = troc_service.get_ad(get_storage(), ad_id)
    return success(ad.to_dict())


@api_troc_bp.route("", methods=["POST"])
@login_required
def api_create_ad():
    result = validate(TrocAdCreateRequest, request_json())
    if not result.ok:
        return validation_failed(result)

    ad = troc_service.create_ad(get_storage(), current_user(), result.data)
    return success(ad.to_dict(), status=201)


@api_troc_bp.route("/<int:ad_id>", methods=["PUT"])
@login_required
def api_update_ad(ad_id: int):
    result = validate(TrocAdUpdateRequest, request_json())
    if not result.ok:
        return validation_failed(result)

    ad = troc_service.update_ad(get_storage(), current_user(), ad_id, result.data)
    return success(ad.to_dict(), message="Ad updated")


@api_troc_bp.route("/<int:ad_id>", methods=["DELETE"])
@login_required
def api_delete_ad(ad_id: int):
    troc_service.delete_ad(get_storage(), current_user(), ad_id)
    return success({"deleted": True}, message="Ad deleted")
