"""
Pacchetto principale dell'applicazione Flask del bottin DAM.
"""

from flask import Flask, jsonify
from config import DevConfig
from .extensions import init_extensions


def create_app(config_class=DevConfig) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)
    init_extensions(app)

    from .services.session_store import SessionStore
    from .storage import MemoryStorage, build_storage

    storage = build_storage(app.config)
    app.extensions["storage"] = storage
    app.extensions["session_store"] = SessionStore(storage, app.config["SESSION_LIFETIME"])

    if isinstance(storage, MemoryStorage):
        _seed_admin(app)

    from .middleware.auth import init_auth
    init_auth(app)

    _register_blueprints(app)

    app.logger.info(
        "Applicazione Flask inizializzata.",
        extra={"storage_backend": type(storage).__name__},
    )

    @app.route("/health")
    def healthcheck():
        return jsonify({"status": "ok"}), 200

    return app


def _seed_admin(app: Flask) -> None:
    # Lo storage in memoria parte vuoto ad ogni avvio: senza un admin
    # nessun utente potrebbe essere approvato
    username = app.config.get("ADMIN_USERNAME")
    password = app.config.get("ADMIN_PASSWORD")
    if not username or not password:
        return

    from .services.auth_service import ensure_admin_account

    ensure_admin_account(
        app.extensions["storage"],
        username,
        password,
        app.config.get("ADMIN_EMAIL") or "admin@dam.org",
    )


def _register_blueprints(app: Flask) -> None:
    from .api import (
        api_admin_bp,
        api_auth_bp,
        api_events_bp,
        api_messages_bp,
        api_troc_bp,
        api_users_bp,
        register_error_handlers,
    )

    app.register_blueprint(api_auth_bp, url_prefix="/api/auth")
    app.register_blueprint(api_users_bp, url_prefix="/api/users")
    app.register_blueprint(api_events_bp, url_prefix="/api/events")
    app.register_blueprint(api_troc_bp, url_prefix="/api/troc")
    app.register_blueprint(api_messages_bp, url_prefix="/api/messages")
    app.register_blueprint(api_admin_bp, url_prefix="/api/admin")

    register_error_handlers(app)
