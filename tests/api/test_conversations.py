"""Tests for the /conversations endpoints."""


def _agent(client, headers, name="Support bot"):
    return client.post("/agents", json={"name": name}, headers=headers).get_json()["data"]


def _conversation(client, headers, **fields):
    response = client.post("/conversations", json=fields, headers=headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]


class TestConversations:
    def test_create_with_agent(self, client, alice):
        user, _token, headers = alice
        agent = _agent(client, headers)

        conversation = _conversation(client, headers, agent_id=agent["id"], title="Billing")

        assert conversation["owner_id"] == user["id"]
        assert conversation["agent_id"] == agent["id"]
        assert conversation["agent_name"] == "Support bot"
        assert conversation["title"] == "Billing"
        assert conversation["status"] == "open"

    def test_create_without_agent(self, client, alice):
        _user, _token, headers = alice

        conversation = _conversation(client, headers)

        assert conversation["agent_id"] is None
        assert conversation["agent_name"] is None

    def test_create_with_foreign_agent_is_not_found(self, client, alice, bob):
        _user, _token, alice_headers = alice
        _user, _token, bob_headers = bob
        agent = _agent(client, alice_headers)

        response = client.post("/conversations", json={"agent_id": agent["id"]}, headers=bob_headers)

        assert response.status_code == 404

    def test_list_filters(self, client, alice):
        _user, _token, headers = alice
        agent = _agent(client, headers)
        with_agent = _conversation(client, headers, agent_id=agent["id"])
        closed = _conversation(client, headers, status="closed")

        by_agent = client.get(f"/conversations?agent_id={agent['id']}", headers=headers).get_json()["data"]
        by_status = client.get("/conversations?status=closed", headers=headers).get_json()["data"]
        everything = client.get("/conversations", headers=headers).get_json()["data"]

        assert [c["id"] for c in by_agent] == [with_agent["id"]]
        assert [c["id"] for c in by_status] == [closed["id"]]
        assert [c["id"] for c in everything] == [closed["id"], with_agent["id"]]

    def test_list_is_owner_scoped(self, client, alice, bob):
        _user, _token, alice_headers = alice
        _user, _token, bob_headers = bob
        _conversation(client, alice_headers)

        assert client.get("/conversations", headers=bob_headers).get_json()["data"] == []

    def test_get_foreign_conversation_is_not_found(self, client, alice, bob):
        _user, _token, alice_headers = alice
        _user, _token, bob_headers = bob
        conversation = _conversation(client, alice_headers)

        assert client.get(f"/conversations/{conversation['id']}", headers=alice_headers).status_code == 200
        assert client.get(f"/conversations/{conversation['id']}", headers=bob_headers).status_code == 404

    def test_deleting_agent_keeps_conversation(self, client, alice):
        _user, _token, headers = alice
        agent = _agent(client, headers)
        conversation = _conversation(client, headers, agent_id=agent["id"])

        client.delete(f"/agents/{agent['id']}", headers=headers)

        data = client.get(f"/conversations/{conversation['id']}", headers=headers).get_json()["data"]
        assert data["agent_id"] is None

    def test_messages_oldest_first(self, client, alice):
        _user, _token, headers = alice
        conversation = _conversation(client, headers)
        for text in ("one", "two", "three"):
            client.post("/chat/send", json={"conversation_id": conversation["id"], "message": text}, headers=headers)

        response = client.get(f"/conversations/{conversation['id']}/messages", headers=headers)

        assert response.status_code == 200
        assert [m["content"] for m in response.get_json()["data"]] == ["one", "two", "three"]

    def test_messages_of_foreign_conversation(self, client, alice, bob):
        _user, _token, alice_headers = alice
        _user, _token, bob_headers = bob
        conversation = _conversation(client, alice_headers)

        response = client.get(f"/conversations/{conversation['id']}/messages", headers=bob_headers)

        assert response.status_code == 404

    def test_requires_authentication(self, client):
        assert client.get("/conversations").status_code == 401
        assert client.post("/conversations", json={}).status_code == 401
