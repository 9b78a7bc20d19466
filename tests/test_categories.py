from fastapi.testclient import TestClient


def test_admin_creates_category(client: TestClient, admin):
    response = client.post(
        "/api/categories",
        json={"code": "games", "name": "Gaming", "description": "Video games"},
        headers=admin.headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["code"] == "games"
    assert data["description"] == "Video games"

    detail = client.get(f"/api/categories/{data['id']}")
    assert detail.status_code == 200


def test_category_code_and_name_are_unique(client: TestClient, admin, category):
    same_code = client.post("/api/categories", json={"code": "tech", "name": "Other"}, headers=admin.headers)
    same_name = client.post("/api/categories", json={"code": "other", "name": "Technology"}, headers=admin.headers)

    assert same_code.status_code == 409
    assert same_name.status_code == 409


def test_category_code_is_immutable(client: TestClient, admin, category):
    response = client.put(f"/api/categories/{category['id']}", json={"code": "changed"}, headers=admin.headers)
    assert response.status_code == 400

    renamed = client.put(f"/api/categories/{category['id']}", json={"name": "Tech & Science"}, headers=admin.headers)
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Tech & Science"
    assert renamed.json()["code"] == "tech"


def test_member_cannot_create_category(client: TestClient, member):
    response = client.post("/api/categories", json={"code": "x1", "name": "X"}, headers=member.headers)

    assert response.status_code == 403


def test_category_search_and_soft_delete(client: TestClient, admin, category):
    client.post("/api/categories", json={"code": "music", "name": "Music"}, headers=admin.headers)

    found = client.get("/api/categories", params={"search": "TECH"}).json()
    assert [c["code"] for c in found["data"]] == ["tech"]

    deleted = client.delete(f"/api/categories/{category['id']}", headers=admin.headers)
    assert deleted.status_code == 204
    assert client.get(f"/api/categories/{category['id']}").status_code == 404
    assert client.get("/api/categories").json()["pagination"]["records"] == 1
