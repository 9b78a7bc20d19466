from fastapi.testclient import TestClient


def test_integration_crud(client: TestClient, admin):
    created = client.post(
        "/api/external-integrations",
        json={"integration_name": "mailer", "provider_url": "https://mail.example.com", "config_json": "{}"},
        headers=admin.headers,
    )
    assert created.status_code == 201
    integration_id = created.json()["id"]
    assert created.json()["status"] == "active"

    duplicate = client.post(
        "/api/external-integrations",
        json={"integration_name": "mailer", "provider_url": "https://other.example.com"},
        headers=admin.headers,
    )
    assert duplicate.status_code == 409

    updated = client.put(
        f"/api/external-integrations/{integration_id}",
        json={"status": "error", "last_successful_sync_at": "2025-06-01T12:00:00Z"},
        headers=admin.headers,
    )
    assert updated.status_code == 200
    assert updated.json()["status"] == "error"
    assert updated.json()["last_successful_sync_at"].startswith("2025-06-01T12:00:00")
    assert updated.json()["provider_url"] == "https://mail.example.com"

    assert client.delete(f"/api/external-integrations/{integration_id}", headers=admin.headers).status_code == 204
    assert client.get(f"/api/external-integrations/{integration_id}", headers=admin.headers).status_code == 404


def test_integration_filters(client: TestClient, admin):
    client.post(
        "/api/external-integrations",
        json={"integration_name": "mailer", "provider_url": "https://mail.example.com"},
        headers=admin.headers,
    )
    client.post(
        "/api/external-integrations",
        json={"integration_name": "storage", "provider_url": "https://s3.example.org", "status": "inactive"},
        headers=admin.headers,
    )

    too_short = client.get("/api/external-integrations", params={"integration_name": "m"}, headers=admin.headers)
    by_url = client.get("/api/external-integrations", params={"provider_url": ".org"}, headers=admin.headers).json()
    by_status = client.get("/api/external-integrations", params={"status": "active"}, headers=admin.headers).json()

    assert too_short.status_code == 400
    assert [i["integration_name"] for i in by_url["data"]] == ["storage"]
    assert [i["integration_name"] for i in by_status["data"]] == ["mailer"]
