import pytest


@pytest.fixture
def pair(make_artist, login):
    alice = make_artist("alice")
    bob = make_artist("bob")
    return alice, bob, login("alice"), login("bob")


def _send(client, receiver_id, content):
    return client.post("/api/messages", json={"receiverId": receiver_id, "content": content})


def test_conversation_is_symmetric(pair):
    alice, bob, alice_client, bob_client = pair
    _send(alice_client, bob.id, "Salut Bob")
    _send(bob_client, alice.id, "Salut Alice")
    _send(alice_client, bob.id, "On collabore?")

    seen_by_alice = alice_client.get(f"/api/messages/{bob.id}").get_json()["payload"]
    seen_by_bob = bob_client.get(f"/api/messages/{alice.id}").get_json()["payload"]

    assert [m["content"] for m in seen_by_alice] == ["Salut Bob", "Salut Alice", "On collabore?"]
    assert seen_by_alice == seen_by_bob

    inbox = bob_client.get("/api/messages").get_json()["payload"]
    assert [m["content"] for m in inbox] == ["On collabore?", "Salut Alice", "Salut Bob"]


def test_unread_count_and_read_all(pair, make_artist, login):
    alice, bob, alice_client, bob_client = pair
    make_artist("carla")
    carla_client = login("carla")
    _send(alice_client, bob.id, "uno")
    _send(alice_client, bob.id, "due")
    _send(carla_client, bob.id, "tre")

    assert bob_client.get("/api/messages/unread-count").get_json()["payload"] == {"unread": 3}

    response = bob_client.patch(f"/api/messages/{alice.id}/read-all")
    assert response.status_code == 200
    assert response.get_json()["payload"] == {"updated": 2}
    assert bob_client.get("/api/messages/unread-count").get_json()["payload"] == {"unread": 1}


def test_only_receiver_marks_read(pair):
    alice, bob, alice_client, bob_client = pair
    message = _send(alice_client, bob.id, "Ciao").get_json()["payload"]
    assert message["isRead"] is False

    assert alice_client.patch(f"/api/messages/{message['id']}/read").status_code == 403

    response = bob_client.patch(f"/api/messages/{message['id']}/read")
    assert response.status_code == 200
    conversation = bob_client.get(f"/api/messages/{alice.id}").get_json()["payload"]
    assert conversation[0]["isRead"] is True

    assert bob_client.patch("/api/messages/999/read").status_code == 404


def test_recipient_must_be_approved(pair, make_artist):
    _, _, alice_client, _ = pair
    pending = make_artist("pending", approved=False)

    response = _send(alice_client, pending.id, "Ciao")
    assert response.status_code == 404
    assert response.get_json()["message"] == "Recipient not found"

    assert _send(alice_client, 999, "Ciao").status_code == 404


def test_cannot_message_yourself(pair):
    alice, _, alice_client, _ = pair

    response = _send(alice_client, alice.id, "Io")

    assert response.status_code == 400
    assert response.get_json()["errors"][0]["field"] == "receiverId"


def test_empty_message_rejected(pair):
    _, bob, alice_client, _ = pair

    assert _send(alice_client, bob.id, "").status_code == 400


def test_messages_require_login(client):
    assert client.get("/api/messages").status_code == 401
    assert client.get("/api/messages/unread-count").status_code == 401
    assert client.post("/api/messages", json={"receiverId": 1, "content": "x"}).status_code == 401
