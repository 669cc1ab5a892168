from conftest import ADMIN_PASSWORD, PASSWORD


def _register(client, username="nadia", **extra):
    payload = {
        "username": username,
        "email": f"{username}@dam-artists.org",
        "password": PASSWORD,
        "firstName": "Nadia",
        "lastName": "Roy",
        "discipline": "Photographie",
        "socialMedia": {"instagram": "@nadia", "spotify": ""},
    }
    payload.update(extra)
    return client.post("/api/auth/register", json=payload)


def test_register_creates_pending_user(client):
    response = _register(client)

    assert response.status_code == 201
    body = response.get_json()
    assert body["success"] is True
    user = body["payload"]
    assert user["isApproved"] is False
    assert user["isAdmin"] is False
    assert user["socialMedia"] == {"instagram": "@nadia"}
    assert "passwordHash" not in user
    assert "password_hash" not in user


def test_register_ignores_privilege_fields(client):
    response = _register(client, isAdmin=True, isApproved=True)

    user = response.get_json()["payload"]
    assert user["isAdmin"] is False
    assert user["isApproved"] is False


def test_register_validation_errors(client):
    response = client.post(
        "/api/auth/register",
        json={"username": "ab", "email": "not-an-email", "password": "short"},
    )

    assert response.status_code == 400
    body = response.get_json()
    assert body["success"] is False
    assert body["payload"] is None
    fields = {error["field"] for error in body["errors"]}
    assert {"username", "email", "password", "firstName", "lastName"} <= fields


def test_register_duplicate_username_and_email(client):
    assert _register(client).status_code == 201

    response = _register(client, email="other@dam-artists.org")
    assert response.status_code == 400
    assert response.get_json()["message"] == "Username already exists"

    response = _register(client, username="NADIA2", email="NADIA@dam-artists.org")
    assert response.status_code == 400
    assert response.get_json()["message"] == "Email already exists"


def test_login_requires_fields(client):
    response = client.post("/api/auth/login", json={"username": "nadia"})

    assert response.status_code == 400
    assert response.get_json()["message"] == "Username and password are required"


def test_login_pending_user_is_forbidden(client):
    _register(client)

    response = client.post(
        "/api/auth/login", json={"username": "nadia", "password": PASSWORD}
    )

    assert response.status_code == 403
    assert response.get_json()["message"] == "Your account is pending approval"


def test_login_wrong_password(client, make_artist):
    make_artist("omar")

    response = client.post(
        "/api/auth/login", json={"username": "omar", "password": "wrong-password"}
    )

    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid credentials"


def test_login_me_logout(client, make_artist):
    user = make_artist("paola")

    response = client.post(
        "/api/auth/login", json={"username": "paola", "password": PASSWORD}
    )
    assert response.status_code == 200
    assert response.get_json()["payload"]["id"] == user.id

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.get_json()["payload"]["username"] == "paola"

    assert client.post("/api/auth/logout").status_code == 200
    assert client.get("/api/auth/me").status_code == 401
    # logout idempotente
    assert client.post("/api/auth/logout").status_code == 200


def test_me_without_session(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    body = response.get_json()
    assert body == {"success": False, "message": "Unauthorized", "payload": None}


def test_session_dropped_when_admin_flag_changes(admin_client, make_artist, login):
    user = make_artist("rita")
    rita = login("rita")

    response = admin_client.patch(f"/api/admin/users/{user.id}/admin", json={"isAdmin": True})
    assert response.status_code == 200

    # La sessione aperta con is_admin=False non è più valida
    assert rita.get("/api/auth/me").status_code == 401
    promoted = login("rita")
    assert promoted.get("/api/admin/pending-users").status_code == 200


def test_session_dropped_when_user_deleted(admin_client, make_artist, login):
    user = make_artist("sara")
    sara = login("sara")

    assert admin_client.delete(f"/api/users/{user.id}").status_code == 200
    assert sara.get("/api/auth/me").status_code == 401


def test_admin_login(admin, client):
    response = client.post(
        "/api/auth/login", json={"username": "ADMIN", "password": ADMIN_PASSWORD}
    )

    assert response.status_code == 200
    assert response.get_json()["payload"]["isAdmin"] is True


def test_health_and_unknown_route(client):
    assert client.get("/health").get_json() == {"status": "ok"}

    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.get_json()["success"] is False


def test_password_is_stored_hashed(app, client):
    _register(client, username="tobia")

    with app.app_context():
        stored = app.extensions["storage"].get_user_by_username("tobia")
    assert stored.password_hash != PASSWORD
    assert PASSWORD not in stored.password_hash


def test_logout_invalidates_session_server_side(app, make_artist, login):
    make_artist("ugo")
    client = login("ugo")
    cookie = client.get_cookie("dam_session").value

    client.post("/api/auth/logout")

    # Il vecchio cookie, riusato altrove, non apre più alcuna sessione
    replay = app.test_client()
    replay.set_cookie("dam_session", cookie)
    assert replay.get("/api/auth/me").status_code == 401
