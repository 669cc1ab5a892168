def test_admin_routes_require_admin(client, make_artist, login):
    make_artist("artista")
    artist = login("artista")

    assert client.get("/api/admin/pending-users").status_code == 401
    assert artist.get("/api/admin/pending-users").status_code == 403
    assert artist.get("/api/admin/analytics").status_code == 403


def test_pending_users_and_approval(admin_client, make_artist, client):
    pending = make_artist("nuovo", approved=False)
    make_artist("vecchio")

    listed = admin_client.get("/api/admin/pending-users").get_json()["payload"]
    assert [u["username"] for u in listed] == ["nuovo"]

    response = admin_client.patch(f"/api/admin/users/{pending.id}/approve")
    assert response.status_code == 200
    assert response.get_json()["payload"]["isApproved"] is True

    assert admin_client.get("/api/admin/pending-users").get_json()["payload"] == []
    login_response = client.post(
        "/api/auth/login", json={"username": "nuovo", "password": "secret-password"}
    )
    assert login_response.status_code == 200

    assert admin_client.patch("/api/admin/users/999/approve").status_code == 404


def test_set_admin_flag_validation(admin_client, make_artist):
    user = make_artist("ruolo")

    assert admin_client.patch(f"/api/admin/users/{user.id}/admin", json={}).status_code == 400

    response = admin_client.patch(f"/api/admin/users/{user.id}/admin", json={"isAdmin": True})
    assert response.get_json()["payload"]["isAdmin"] is True


def test_analytics(admin_client, make_artist, login):
    make_artist("mia", discipline="Musique", location="Montreal")
    make_artist("teo", discipline="Musique", location="Quebec")
    make_artist("ugo", discipline="Danse", location="Montreal")
    make_artist("attesa", approved=False, discipline="Cinema")

    mia = login("mia")
    mia.post("/api/troc", json={"title": "Synth", "description": "Vendo", "category": "equipment"})
    mia.post("/api/troc", json={"title": "Duo", "description": "Cerco", "category": "collaboration"})
    mia.post(
        "/api/events",
        json={
            "title": "Concert",
            "description": "Live",
            "location": "Montreal",
            "eventDate": "2026-11-20T20:00:00",
        },
    )

    report = admin_client.get("/api/admin/analytics").get_json()["payload"]

    assert report["counts"] == {
        "totalUsers": 5,
        "approvedUsers": 4,
        "pendingUsers": 1,
        "events": 1,
        "trocAds": 2,
    }
    assert report["distribution"]["usersByDiscipline"] == {
        "Musique": 2,
        "Danse": 1,
        "Administration": 1,
    }
    assert report["distribution"]["usersByLocation"] == {"Montreal": 2, "Quebec": 1}
    assert report["distribution"]["adsByCategory"] == {"equipment": 1, "collaboration": 1}
    assert [u["username"] for u in report["recent"]["users"]] == ["ugo", "teo", "mia", "admin"]
    assert [e["title"] for e in report["recent"]["events"]] == ["Concert"]
    assert [a["title"] for a in report["recent"]["ads"]] == ["Duo", "Synth"]
