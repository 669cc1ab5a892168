"""
API JSON per i profili artista e i relativi media.

Endpoint principali:

GET    /api/users                              Elenco (approved, discipline, q)
GET    /api/users/<id>                         Profilo (404 se non visibile)
PUT    /api/users/<id>                         Aggiorna profilo (sé stessi o admin)
DELETE /api/users/<id>                         Rifiuta/rimuove utente (admin)
GET    /api/users/<id>/media                   Media del profilo
POST   /api/users/<id>/media                   Aggiunge un media
DELETE /api/users/<id>/media/<media_id>        Cancella un media
"""

from __future__ import annotations

from flask import Blueprint, request

from bottin.api.responses import request_json, success, validation_failed
from bottin.middleware.auth import admin_required, current_user, login_required
from bottin.schemas import MediaCreateRequest, UserListQuery, UserUpdateRequest, validate
from bottin.services import media_service, user_service
from bottin.storage import get_storage

api_users_bp = Blueprint("api_users", __name__)


@api_users_bp.route("", methods=["GET"])
def api_list_users():
    result = validate(UserListQuery, request.args.to_dict())
    if not result.ok:
        return validation_failed(result)

    users = user_service.list_users(get_storage(), current_user(), result.data)
    return success([u.to_dict() for u in users])


@api_users_bp.route("/<int:user_id>", methods=["GET"])
def api_get_user(user_id: int):
    user = user_service.get_visible_user(get_storage(), current_user(), user_id)
    return success(user.to_dict())


@api_users_bp.route("/<int:user_id>", methods=["PUT"])
@login_required
def api_update_user(user_id: int):
    """
    Aggiornamento parziale del profilo.

    ``isAdmin`` e ``isApproved`` inviati da un non-admin vengono ignorati
    senza errore.
    """
    result = validate(UserUpdateRequest, request_json())
    if not result.ok:
        return validation_failed(result)

    user = user_service.update_user(get_storage(), current_user(), user_id, result.data)
    return success(user.to_dict(), message="Profile updated")


@api_users_bp.route("/<int:user_id>", methods=["DELETE"])
@admin_required
def api_delete_user(user_id: int):
    user_service.delete_user(get_storage(), current_user(), user_id)
    return success({"deleted": True}, message="User deleted")


@api_users_bp.route("/<int:user_id>/media", methods=["GET"])
def api_list_media(user_id: int):
    media = media_service.list_media(get_storage(), current_user(), user_id)
    return success([m.to_dict() for m in media])


@api_users_bp.route("/<int:user_id>/media", methods=["POST"])
@login_required
def api_add_media(user_id: int):
    result = validate(MediaCreateRequest, request_json())
    if not result.ok:
        return validation_failed(result)

    media = media_service.add_media(get_storage(), current_user(), user_id, result.data)
    return success(media.to_dict(), status=201)


@api_users_bp.route("/<int:user_id>/media/<int:media_id>", methods=["DELETE"])
@login_required
def api_delete_media(user_id: int, media_id: int):
    media_service.remove_media(get_storage(), current_user(), user_id, media_id)
    return success({"deleted": True}, message="Media deleted")
