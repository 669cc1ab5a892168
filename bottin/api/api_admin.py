"""
API JSON riservate agli amministratori.

GET   /api/admin/pending-users           Utenti in attesa di approvazione
GET   /api/admin/analytics               Conteggi, distribuzioni, attività recente
PATCH /api/admin/users/<id>/approve      Approva un utente
PATCH /api/admin/users/<id>/admin        Concede/revoca il ruolo admin {"isAdmin": bool}
"""

from __future__ import annotations

from flask import Blueprint

from bottin.api.responses import request_json, success, validation_failed
from bottin.middleware.auth import admin_required, current_user
from bottin.schemas import AdminFlagRequest, validate
from bottin.services import admin_service
from bottin.storage import get_storage

api_admin_bp = Blueprint("api_admin", __name__)


@api_admin_bp.route("/pending-users", methods=["GET"])
@admin_required
def api_pending_users():
    users = admin_service.list_pending_users(get_storage(), current_user())
    return success([u.to_dict() for u in users])


@api_admin_bp.route("/analytics", methods=["GET"])
@admin_required
def api_analytics():
    report = admin_service.build_analytics(get_storage(), current_user())
    return success(report.to_dict())


@api_admin_bp.route("/users/<int:user_id>/approve", methods=["PATCH"])
@admin_required
def api_approve_user(user_id: int):
    user = admin_service.approve_user(get_storage(), current_user(), user_id)
    return success(user.to_dict(), message="User approved")


@api_admin_bp.route("/users/<int:user_id>/admin", methods=["PATCH"])
@admin_required
def api_set_admin_flag(user_id: int):
    result = validate(AdminFlagRequest, request_json())
    if not result.ok:
        return validation_failed(result)

    user = admin_service.set_admin_flag(
        get_storage(), current_user(), user_id, result.data.is_admin
    )
    return success(user.to_dict(), message="Admin role updated")
