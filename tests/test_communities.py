from fastapi.testclient import TestClient


def test_member_creates_community(client: TestClient, member, community, category):
    assert community["owner_id"] == member.id
    assert community["category_id"] == category["id"]

    response = client.get(f"/api/communities/{community['id']}")
    assert response.status_code == 200
    assert response.json()["display_title"] == "Python"


def test_community_name_is_unique(client: TestClient, other_member, community, category):
    response = client.post(
        "/api/communities",
        json={"name": "python", "category_id": category["id"]},
        headers=other_member.headers,
    )

    assert response.status_code == 409


def test_community_requires_existing_category(client: TestClient, member):
    response = client.post(
        "/api/communities",
        json={"name": "orphans", "category_id": "missing"},
        headers=member.headers,
    )

    assert response.status_code == 404


def test_only_owner_or_admin_updates_community(client: TestClient, other_member, admin, community):
    forbidden = client.put(
        f"/api/communities/{community['id']}",
        json={"description": "hijacked"},
        headers=other_member.headers,
    )
    assert forbidden.status_code == 403

    by_admin = client.put(
        f"/api/communities/{community['id']}",
        json={"description": "Moderated"},
        headers=admin.headers,
    )
    assert by_admin.status_code == 200
    assert by_admin.json()["description"] == "Moderated"


def test_owner_updates_category_with_validation(client: TestClient, member, admin, community):
    bad = client.put(
        f"/api/communities/{community['id']}",
        json={"category_id": "missing"},
        headers=member.headers,
    )
    assert bad.status_code == 404

    empty = client.put(f"/api/communities/{community['id']}", json={"category_id": ""}, headers=member.headers)
    assert empty.status_code == 404
    assert client.get(f"/api/communities/{community['id']}").json()["category_id"] == community["category_id"]

    other = client.post("/api/categories", json={"code": "sci", "name": "Science"}, headers=admin.headers).json()
    good = client.put(
        f"/api/communities/{community['id']}",
        json={"category_id": other["id"], "logo_uri": "https://img.example.com/logo.png"},
        headers=member.headers,
    )
    assert good.status_code == 200
    assert good.json()["category_id"] == other["id"]
    assert good.json()["logo_uri"] == "https://img.example.com/logo.png"


def test_list_communities_filters(client: TestClient, member, other_member, community, category):
    client.post(
        "/api/communities",
        json={"name": "rustaceans", "category_id": category["id"]},
        headers=other_member.headers,
    )

    by_name = client.get("/api/communities", params={"name": "PYTH"}).json()
    by_owner = client.get("/api/communities", params={"owner_id": other_member.id}).json()
    everything = client.get("/api/communities").json()

    assert [c["name"] for c in by_name["data"]] == ["python"]
    assert [c["name"] for c in by_owner["data"]] == ["rustaceans"]
    assert everything["pagination"]["records"] == 2


def test_owner_deletes_community(client: TestClient, member, other_member, community):
    assert client.delete(f"/api/communities/{community['id']}", headers=other_member.headers).status_code == 403

    response = client.delete(f"/api/communities/{community['id']}", headers=member.headers)

    assert response.status_code == 204
    assert client.get(f"/api/communities/{community['id']}").status_code == 404
    assert client.get("/api/communities").json()["pagination"]["records"] == 0
