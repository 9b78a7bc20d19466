from fastapi.testclient import TestClient


def test_member_reports_post_once(client: TestClient, other_member, post):
    first = client.post(
        f"/api/posts/{post['id']}/reports",
        json={"report_type": "spam", "reason": "Link farm"},
        headers=other_member.headers,
    )
    second = client.post(
        f"/api/posts/{post['id']}/reports",
        json={"report_type": "abuse"},
        headers=other_member.headers,
    )

    assert first.status_code == 201
    assert first.json()["status"] == "pending"
    assert first.json()["reporter_id"] == other_member.id
    assert second.status_code == 409


def test_report_missing_post(client: TestClient, member):
    response = client.post("/api/posts/missing/reports", json={"report_type": "spam"}, headers=member.headers)

    assert response.status_code == 404


def test_admin_resolves_post_report(client: TestClient, member, other_member, admin, post):
    report = client.post(
        f"/api/posts/{post['id']}/reports",
        json={"report_type": "spam"},
        headers=other_member.headers,
    ).json()

    pending = client.get("/api/post-reports", params={"status": "pending"}, headers=admin.headers).json()
    assert pending["pagination"]["records"] == 1

    resolved = client.put(
        f"/api/post-reports/{report['id']}",
        json={"status": "resolved", "resolution_notes": "Removed the links"},
        headers=admin.headers,
    )
    assert resolved.status_code == 200
    data = resolved.json()
    assert data["status"] == "resolved"
    assert data["resolved_at"] is not None
    assert data["admin_id"] == admin.id
    assert data["resolution_notes"] == "Removed the links"

    # The reporter can follow up on their own report; nobody else can
    assert client.get(f"/api/post-reports/{report['id']}", headers=other_member.headers).status_code == 200
    assert client.get(f"/api/post-reports/{report['id']}", headers=member.headers).status_code == 403
    assert client.put(
        f"/api/post-reports/{report['id']}", json={"status": "dismissed"}, headers=member.headers
    ).status_code == 403


def test_invalid_report_status_is_rejected(client: TestClient, other_member, admin, post):
    report = client.post(
        f"/api/posts/{post['id']}/reports",
        json={"report_type": "spam"},
        headers=other_member.headers,
    ).json()

    response = client.put(f"/api/post-reports/{report['id']}", json={"status": "closed"}, headers=admin.headers)

    assert response.status_code == 422


def test_comment_report_lifecycle(client: TestClient, member, other_member, admin, post):
    comment = client.post(
        "/api/comments",
        json={"post_id": post["id"], "content": "Rude remark"},
        headers=member.headers,
    ).json()

    report = client.post(
        f"/api/comments/{comment['id']}/reports",
        json={"report_reason": "harassment"},
        headers=other_member.headers,
    )
    assert report.status_code == 201
    duplicate = client.post(
        f"/api/comments/{comment['id']}/reports",
        json={"report_reason": "again"},
        headers=other_member.headers,
    )
    assert duplicate.status_code == 409

    dismissed = client.put(
        f"/api/comment-reports/{report.json()['id']}",
        json={"status": "dismissed", "resolution": "Not harassment"},
        headers=admin.headers,
    ).json()
    assert dismissed["status"] == "dismissed"
    assert dismissed["resolved_at"] is not None

    listing = client.get("/api/comment-reports", params={"comment_id": comment["id"]}, headers=admin.headers).json()
    assert listing["pagination"]["records"] == 1
