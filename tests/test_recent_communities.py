from fastapi.testclient import TestClient


def _communities(client: TestClient, headers, category_id: str, count: int):
    ids = []
    for i in range(count):
        response = client.post(
            "/api/communities",
            json={"name": f"community{i}", "category_id": category_id},
            headers=headers,
        )
        assert response.status_code == 201
        ids.append(response.json()["id"])
    return ids


def _touch(client: TestClient, headers, community_id: str):
    response = client.post("/api/recent-communities", json={"community_id": community_id}, headers=headers)
    assert response.status_code == 200
    return response.json()


def test_touch_inserts_at_rank_one_and_caps_list(client: TestClient, member, category):
    ids = _communities(client, member.headers, category["id"], 6)
    for community_id in ids:
        _touch(client, member.headers, community_id)

    recents = client.get("/api/recent-communities", headers=member.headers).json()

    assert [r["recent_rank"] for r in recents] == [1, 2, 3, 4, 5]
    # Newest first; the first visited community was evicted
    assert [r["community_id"] for r in recents] == list(reversed(ids[1:]))


def test_touch_existing_moves_to_front(client: TestClient, member, category):
    a, b, c = _communities(client, member.headers, category["id"], 3)
    for community_id in (a, b, c):
        _touch(client, member.headers, community_id)

    moved = _touch(client, member.headers, a)

    assert moved["recent_rank"] == 1
    recents = client.get("/api/recent-communities", headers=member.headers).json()
    assert [r["community_id"] for r in recents] == [a, c, b]
    assert len(recents) == 3


def test_delete_compacts_ranks(client: TestClient, member, other_member, category):
    a, b, c = _communities(client, member.headers, category["id"], 3)
    entries = [_touch(client, member.headers, community_id) for community_id in (a, b, c)]
    middle = next(e for e in entries if e["community_id"] == b)

    assert client.delete(f"/api/recent-communities/{middle['id']}", headers=other_member.headers).status_code == 403
    assert client.delete(f"/api/recent-communities/{middle['id']}", headers=member.headers).status_code == 204

    recents = client.get("/api/recent-communities", headers=member.headers).json()
    assert [(r["recent_rank"], r["community_id"]) for r in recents] == [(1, c), (2, a)]


def test_touch_missing_community(client: TestClient, member):
    response = client.post("/api/recent-communities", json={"community_id": "missing"}, headers=member.headers)

    assert response.status_code == 404
