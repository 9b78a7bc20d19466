from fastapi.testclient import TestClient


def test_banned_word_crud(client: TestClient, admin):
    created = client.post(
        "/api/banned-words",
        json={"phrase": "scam", "category": "fraud"},
        headers=admin.headers,
    )
    assert created.status_code == 201
    word_id = created.json()["id"]
    assert created.json()["enabled"] is True

    duplicate = client.post("/api/banned-words", json={"phrase": "scam"}, headers=admin.headers)
    assert duplicate.status_code == 409

    updated = client.put(f"/api/banned-words/{word_id}", json={"enabled": False}, headers=admin.headers)
    assert updated.status_code == 200
    assert updated.json()["enabled"] is False
    assert updated.json()["phrase"] == "scam"

    deleted = client.delete(f"/api/banned-words/{word_id}", headers=admin.headers)
    assert deleted.status_code == 204
    assert client.get(f"/api/banned-words/{word_id}", headers=admin.headers).status_code == 404


def test_banned_word_rename_conflict(client: TestClient, admin):
    client.post("/api/banned-words", json={"phrase": "alpha"}, headers=admin.headers)
    beta = client.post("/api/banned-words", json={"phrase": "beta"}, headers=admin.headers).json()

    response = client.put(f"/api/banned-words/{beta['id']}", json={"phrase": "alpha"}, headers=admin.headers)

    assert response.status_code == 409


def test_banned_word_listing(client: TestClient, admin):
    for phrase, category, enabled in (("zebra", "b", True), ("apple", "a", True), ("mango", "a", False)):
        client.post(
            "/api/banned-words",
            json={"phrase": phrase, "category": category, "enabled": enabled},
            headers=admin.headers,
        )

    by_phrase = client.get(
        "/api/banned-words",
        params={"order_by": "phrase", "direction": "asc"},
        headers=admin.headers,
    ).json()
    enabled_in_a = client.get(
        "/api/banned-words",
        params={"category": "a", "enabled": True},
        headers=admin.headers,
    ).json()
    searched = client.get("/api/banned-words", params={"search": "EBR"}, headers=admin.headers).json()

    assert [w["phrase"] for w in by_phrase["data"]] == ["apple", "mango", "zebra"]
    assert [w["phrase"] for w in enabled_in_a["data"]] == ["apple"]
    assert [w["phrase"] for w in searched["data"]] == ["zebra"]


def test_disabled_phrase_does_not_block_content(client: TestClient, member, admin, community):
    client.post("/api/banned-words", json={"phrase": "legacy", "enabled": False}, headers=admin.headers)

    response = client.post(
        "/api/posts",
        json={"community_id": community["id"], "title": "Legacy code", "body": "Refactoring tips"},
        headers=member.headers,
    )

    assert response.status_code == 201


def test_members_cannot_manage_banned_words(client: TestClient, member):
    assert client.post("/api/banned-words", json={"phrase": "x"}, headers=member.headers).status_code == 403
    assert client.get("/api/banned-words", headers=member.headers).status_code == 403
