from fastapi.testclient import TestClient


def test_joins_and_failed_logins_are_audited(client: TestClient, member, admin):
    client.post("/api/auth/member/login", json={"email": member.email, "password": "WrongPass1"})

    joins = client.get(
        "/api/audit-logs",
        params={"event_type": "member.join", "entity_id": member.id},
        headers=admin.headers,
    ).json()
    failures = client.get(
        "/api/audit-logs",
        params={"event_type": "member.login", "result": "failure"},
        headers=admin.headers,
    ).json()

    assert joins["pagination"]["records"] == 1
    assert failures["pagination"]["records"] == 1
    assert failures["data"][0]["actor_id"] == member.id

    entry = client.get(f"/api/audit-logs/{joins['data'][0]['id']}", headers=admin.headers)
    assert entry.status_code == 200
    assert client.get("/api/audit-logs", headers=member.headers).status_code == 403


def test_search_log_filters(client: TestClient, member, admin):
    client.get("/api/posts", params={"query": "python"}, headers=member.headers)
    client.get("/api/posts", params={"query": "rust"})

    too_short = client.get("/api/search-logs", params={"search_query": "p"}, headers=admin.headers)
    python = client.get("/api/search-logs", params={"search_query": "pyth"}, headers=admin.headers).json()
    by_member = client.get("/api/search-logs", params={"member_id": member.id}, headers=admin.headers).json()
    oldest_first = client.get("/api/search-logs", params={"sort": "asc"}, headers=admin.headers).json()

    assert too_short.status_code == 400
    assert [log["search_query"] for log in python["data"]] == ["python"]
    assert by_member["pagination"]["records"] == 1
    assert [log["search_query"] for log in oldest_first["data"]] == ["python", "rust"]


def test_data_export_requests(client: TestClient, member, other_member, admin):
    created = client.post(
        "/api/data-exports",
        json={"export_type": "posts", "export_format": "csv"},
        headers=member.headers,
    )
    assert created.status_code == 201
    export = created.json()
    assert export["status"] == "pending"
    assert export["requested_ip"] == "testclient"

    bad_format = client.post(
        "/api/data-exports",
        json={"export_type": "posts", "export_format": "xml"},
        headers=member.headers,
    )
    assert bad_format.status_code == 422

    assert client.get("/api/data-exports/me", headers=member.headers).json()["pagination"]["records"] == 1
    assert client.get("/api/data-exports/me", headers=other_member.headers).json()["pagination"]["records"] == 0

    completed = client.put(f"/api/data-exports/{export['id']}", json={"status": "completed"}, headers=admin.headers)
    assert completed.status_code == 200
    assert completed.json()["completed_at"] is not None

    done = client.get("/api/data-exports", params={"status": "completed"}, headers=admin.headers).json()
    assert [e["id"] for e in done["data"]] == [export["id"]]
