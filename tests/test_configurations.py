from fastapi.testclient import TestClient


def test_configuration_crud_is_audited(client: TestClient, admin):
    created = client.post(
        "/api/configurations",
        json={"key": "max_upload_mb", "value": "10", "description": "Upload size limit"},
        headers=admin.headers,
    )
    assert created.status_code == 201
    config_id = created.json()["id"]

    assert client.post(
        "/api/configurations", json={"key": "max_upload_mb", "value": "20"}, headers=admin.headers
    ).status_code == 409

    updated = client.put(f"/api/configurations/{config_id}", json={"value": "25"}, headers=admin.headers)
    assert updated.status_code == 200
    assert updated.json()["value"] == "25"
    assert updated.json()["description"] == "Upload size limit"

    assert client.delete(f"/api/configurations/{config_id}", headers=admin.headers).status_code == 204

    audit = client.get("/api/audit-logs", params={"entity_id": config_id}, headers=admin.headers).json()
    assert sorted(entry["event_type"] for entry in audit["data"]) == [
        "configuration.create",
        "configuration.delete",
        "configuration.update",
    ]


def test_configuration_listing(client: TestClient, admin):
    for key, value in (("site_name", "Agora"), ("theme", "dark"), ("motd", "Welcome to Agora")):
        client.post("/api/configurations", json={"key": key, "value": value}, headers=admin.headers)
    theme = client.get("/api/configurations", params={"key": "theme"}, headers=admin.headers).json()["data"][0]
    client.delete(f"/api/configurations/{theme['id']}", headers=admin.headers)

    searched = client.get("/api/configurations", params={"q": "agora"}, headers=admin.headers).json()
    live = client.get("/api/configurations", headers=admin.headers).json()
    everything = client.get("/api/configurations", params={"include_deleted": True}, headers=admin.headers).json()

    assert [c["key"] for c in searched["data"]] == ["motd", "site_name"]
    assert live["pagination"]["records"] == 2
    assert everything["pagination"]["records"] == 3
