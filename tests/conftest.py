"""
Fixture condivise della suite.

Ogni test che usa ``app`` gira due volte: con lo storage in memoria e con
DatabaseStorage su SQLite in memoria, così i due backend restano allineati.
"""

import pytest

from bottin import create_app
from bottin.extensions import db
from bottin.schemas import RegisterRequest
from bottin.services import auth_service
from config import TestConfig

PASSWORD = "secret-password"
ADMIN_PASSWORD = "admin-password"


def _config_for(backend: str):
    return type(f"{backend.title()}TestConfig", (TestConfig,), {"STORAGE_BACKEND": backend})


@pytest.fixture(params=["memory", "sql"])
def app(request):
    backend = request.param
    app = create_app(_config_for(backend))
    if backend == "sql":
        with app.app_context():
            db.create_all()

    yield app

    if backend == "sql":
        with app.app_context():
            db.session.remove()
            db.drop_all()


@pytest.fixture
def storage(app):
    """Storage dell'app con un contesto applicativo aperto per tutto il test."""
    with app.app_context():
        yield app.extensions["storage"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_artist(app):
    """Factory: registra un artista (approvato di default) e restituisce il record."""

    def _make(username, *, approved=True, **profile):
        payload = {
            "username": username,
            "email": f"{username}@dam-artists.org",
            "password": PASSWORD,
            "first_name": profile.pop("first_name", username.title()),
            "last_name": profile.pop("last_name", "Artist"),
            **profile,
        }
        with app.app_context():
            storage = app.extensions["storage"]
            user = auth_service.register_user(storage, RegisterRequest(**payload))
            if approved:
                user = storage.update_user(user.id, {"is_approved": True})
            return user

    return _make


@pytest.fixture
def admin(app):
    with app.app_context():
        return auth_service.ensure_admin_account(
            app.extensions["storage"], "admin", ADMIN_PASSWORD, "admin@dam-artists.org"
        )


@pytest.fixture
def login(app):
    """Factory: restituisce un test client con sessione aperta per l'utente."""

    def _login(username, password=PASSWORD):
        client = app.test_client()
        response = client.post(
            "/api/auth/login", json={"username": username, "password": password}
        )
        assert response.status_code == 200, response.get_json()
        return client

    return _login


@pytest.fixture
def admin_client(admin, login):
    return login(admin.username, ADMIN_PASSWORD)
