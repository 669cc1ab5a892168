def test_anonymous_list_shows_only_approved(client, make_artist):
    make_artist("alice", discipline="Musique")
    make_artist("pending", approved=False)

    response = client.get("/api/users")

    assert response.status_code == 200
    usernames = [u["username"] for u in response.get_json()["payload"]]
    assert usernames == ["alice"]


def test_non_admin_unapproved_filter_is_empty(client, make_artist, login):
    make_artist("alice")
    make_artist("pending", approved=False)

    for caller in (client, login("alice")):
        response = caller.get("/api/users?approved=false")
        assert response.status_code == 200
        assert response.get_json()["payload"] == []

    approved = client.get("/api/users?approved=true").get_json()["payload"]
    assert [u["username"] for u in approved] == ["alice"]


def test_admin_list_filters(admin_client, make_artist):
    make_artist("alice", discipline="Musique", bio="Chanteuse jazz")
    make_artist("bob", discipline="Danse")
    make_artist("pending", approved=False)

    pending = admin_client.get("/api/users?approved=false").get_json()["payload"]
    assert [u["username"] for u in pending] == ["pending"]

    everyone = admin_client.get("/api/users").get_json()["payload"]
    assert {u["username"] for u in everyone} == {"admin", "alice", "bob", "pending"}

    musicians = admin_client.get("/api/users?discipline=Musique").get_json()["payload"]
    assert [u["username"] for u in musicians] == ["alice"]

    jazz = admin_client.get("/api/users?q=JAZZ").get_json()["payload"]
    assert [u["username"] for u in jazz] == ["alice"]


def test_invalid_query_parameter(client):
    response = client.get("/api/users?approved=maybe")

    assert response.status_code == 400
    assert response.get_json()["errors"][0]["field"] == "approved"


def test_unapproved_profile_is_hidden(client, make_artist, login):
    hidden = make_artist("hidden", approved=False)
    make_artist("viewer")

    assert client.get(f"/api/users/{hidden.id}").status_code == 404
    assert login("viewer").get(f"/api/users/{hidden.id}").status_code == 404
    assert client.get("/api/users/999").get_json()["message"] == "User not found"


def test_admin_sees_unapproved_profile(admin_client, make_artist):
    hidden = make_artist("hidden", approved=False)

    response = admin_client.get(f"/api/users/{hidden.id}")

    assert response.status_code == 200
    assert response.get_json()["payload"]["isApproved"] is False


def test_update_own_profile_drops_privilege_fields(make_artist, login):
    user = make_artist("chloe")
    client = login("chloe")

    response = client.put(
        f"/api/users/{user.id}",
        json={"bio": "Sculptrice", "isAdmin": True, "isApproved": False, "firstName": None},
    )

    assert response.status_code == 200
    payload = response.get_json()["payload"]
    assert payload["bio"] == "Sculptrice"
    assert payload["isAdmin"] is False
    assert payload["isApproved"] is True
    assert payload["firstName"] == "Chloe"


def test_update_password_changes_login(make_artist, login, app):
    user = make_artist("dario")
    client = login("dario")

    response = client.put(f"/api/users/{user.id}", json={"password": "another-password"})
    assert response.status_code == 200

    assert login("dario", "another-password").get("/api/auth/me").status_code == 200
    failed = app.test_client().post(
        "/api/auth/login", json={"username": "dario", "password": "secret-password"}
    )
    assert failed.status_code == 401


def test_update_other_profile_is_forbidden(make_artist, login):
    target = make_artist("elena")
    make_artist("fabio")

    response = login("fabio").put(f"/api/users/{target.id}", json={"bio": "hack"})

    assert response.status_code == 403


def test_update_requires_login(client, make_artist):
    user = make_artist("gaia")

    assert client.put(f"/api/users/{user.id}", json={"bio": "x"}).status_code == 401


def test_update_duplicate_username(make_artist, login):
    make_artist("hugo")
    user = make_artist("irene")

    response = login("irene").put(f"/api/users/{user.id}", json={"username": "HUGO"})

    assert response.status_code == 400
    assert response.get_json()["message"] == "Username already exists"


def test_admin_can_approve_via_update(admin_client, make_artist):
    user = make_artist("jacopo", approved=False)

    response = admin_client.put(f"/api/users/{user.id}", json={"isApproved": True})

    assert response.get_json()["payload"]["isApproved"] is True


def test_delete_user_requires_admin(make_artist, login, admin_client):
    target = make_artist("karim")
    make_artist("lina")

    assert login("lina").delete(f"/api/users/{target.id}").status_code == 403

    response = admin_client.delete(f"/api/users/{target.id}")
    assert response.status_code == 200
    assert response.get_json()["payload"] == {"deleted": True}
    assert admin_client.get(f"/api/users/{target.id}").status_code == 404
    assert admin_client.delete(f"/api/users/{target.id}").status_code == 404


def test_profile_media_lifecycle(client, make_artist, login):
    owner = make_artist("marco")
    make_artist("nina")
    marco = login("marco")

    response = marco.post(
        f"/api/users/{owner.id}/media",
        json={"title": "Demo", "mediaType": "audio", "url": "https://cdn.dam/demo.mp3"},
    )
    assert response.status_code == 201
    media = response.get_json()["payload"]
    assert media["userId"] == owner.id

    listed = client.get(f"/api/users/{owner.id}/media").get_json()["payload"]
    assert [m["id"] for m in listed] == [media["id"]]

    # Solo il proprietario (o un admin) può cancellare
    nina = login("nina")
    assert nina.delete(f"/api/users/{owner.id}/media/{media['id']}").status_code == 403

    response = marco.delete(f"/api/users/{owner.id}/media/{media['id']}")
    assert response.status_code == 200
    assert client.get(f"/api/users/{owner.id}/media").get_json()["payload"] == []


def test_media_must_belong_to_user(make_artist, login):
    owner = make_artist("olga")
    other = make_artist("piero")
    olga = login("olga")
    media = olga.post(
        f"/api/users/{owner.id}/media",
        json={"title": "Foto", "mediaType": "image", "url": "https://cdn.dam/f.jpg"},
    ).get_json()["payload"]

    piero = login("piero")
    response = piero.delete(f"/api/users/{other.id}/media/{media['id']}")

    assert response.status_code == 404
    assert response.get_json()["message"] == "Media not found"


def test_media_invalid_type(make_artist, login):
    owner = make_artist("quinto")

    response = login("quinto").post(
        f"/api/users/{owner.id}/media",
        json={"title": "Doc", "mediaType": "pdf", "url": "https://cdn.dam/x.pdf"},
    )

    assert response.status_code == 400
    assert response.get_json()["errors"][0]["field"] == "mediaType"


def test_media_of_hidden_user(client, make_artist):
    hidden = make_artist("riccardo", approved=False)

    assert client.get(f"/api/users/{hidden.id}/media").status_code == 404
