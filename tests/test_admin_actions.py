from fastapi.testclient import TestClient


def _action(client: TestClient, headers, **overrides):
    body = {"action_type": "ban", "target_entity": "member", "target_entity_id": "m-1", "reason": "spam"}
    body.update(overrides)
    response = client.post("/api/admin-actions", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_admin_records_action(client: TestClient, admin):
    action = _action(client, admin.headers)

    assert action["admin_id"] == admin.id
    listing = client.get("/api/admin-actions", params={"action_type": "ban"}, headers=admin.headers).json()
    assert listing["pagination"]["records"] == 1

    audit = client.get("/api/audit-logs", params={"event_type": "admin_action.ban"}, headers=admin.headers).json()
    assert audit["pagination"]["records"] == 1


def test_only_creating_admin_edits_action(client: TestClient, admin, make_admin):
    action = _action(client, admin.headers)
    other_admin = make_admin()

    forbidden = client.put(f"/api/admin-actions/{action['id']}", json={"result": "lifted"}, headers=other_admin.headers)
    updated = client.put(f"/api/admin-actions/{action['id']}", json={"result": "lifted"}, headers=admin.headers)

    assert forbidden.status_code == 403
    assert updated.status_code == 200
    assert updated.json()["result"] == "lifted"

    assert client.delete(f"/api/admin-actions/{action['id']}", headers=other_admin.headers).status_code == 403
    assert client.delete(f"/api/admin-actions/{action['id']}", headers=admin.headers).status_code == 204


def test_member_appeals_admin_action(client: TestClient, member, other_member, admin):
    action = _action(client, admin.headers, target_entity_id=member.id)

    created = client.post(
        "/api/appeals",
        json={"admin_action_id": action["id"], "appeal_reason": "I was not spamming"},
        headers=member.headers,
    )
    assert created.status_code == 201
    appeal = created.json()
    assert appeal["appeal_status"] == "pending"
    assert appeal["member_id"] == member.id

    mine = client.get("/api/appeals/me", headers=member.headers).json()
    assert [a["id"] for a in mine["data"]] == [appeal["id"]]
    assert client.get("/api/appeals/me", headers=other_member.headers).json()["pagination"]["records"] == 0
    assert client.get(f"/api/appeals/{appeal['id']}", headers=other_member.headers).status_code == 403

    decided = client.put(
        f"/api/appeals/{appeal['id']}",
        json={"appeal_status": "approved", "decision_reason": "Evidence was weak"},
        headers=admin.headers,
    )
    assert decided.status_code == 200
    assert decided.json()["admin_id"] == admin.id
    assert decided.json()["decided_at"] is not None

    approved = client.get("/api/appeals", params={"appeal_status": "approved"}, headers=admin.headers).json()
    assert approved["pagination"]["records"] == 1


def test_appeal_requires_existing_action(client: TestClient, member):
    response = client.post(
        "/api/appeals",
        json={"admin_action_id": "missing", "appeal_reason": "Why?"},
        headers=member.headers,
    )

    assert response.status_code == 404


def test_members_cannot_decide_appeals(client: TestClient, member, admin):
    action = _action(client, admin.headers)
    appeal = client.post(
        "/api/appeals",
        json={"admin_action_id": action["id"], "appeal_reason": "Please"},
        headers=member.headers,
    ).json()

    response = client.put(f"/api/appeals/{appeal['id']}", json={"appeal_status": "approved"}, headers=member.headers)

    assert response.status_code == 403
