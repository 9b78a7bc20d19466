from fastapi.testclient import TestClient


def test_vote_updates_post_score(client: TestClient, other_member, post):
    response = client.post("/api/votes", json={"post_id": post["id"], "value": 1}, headers=other_member.headers)

    assert response.status_code == 200
    assert response.json()["voter_id"] == other_member.id
    assert client.get(f"/api/posts/{post['id']}").json()["score"] == 1


def test_revote_replaces_existing_vote(client: TestClient, other_member, post):
    first = client.post("/api/votes", json={"post_id": post["id"], "value": 1}, headers=other_member.headers).json()
    second = client.post("/api/votes", json={"post_id": post["id"], "value": -1}, headers=other_member.headers).json()

    assert second["id"] == first["id"]
    assert second["value"] == -1
    assert client.get(f"/api/posts/{post['id']}").json()["score"] == -1


def test_score_sums_votes_from_many_voters(client: TestClient, make_member, post):
    for value in (1, 1, -1, 0):
        voter = make_member()
        client.post("/api/votes", json={"post_id": post["id"], "value": value}, headers=voter.headers)

    assert client.get(f"/api/posts/{post['id']}").json()["score"] == 1


def test_cannot_vote_on_own_post(client: TestClient, member, post):
    response = client.post("/api/votes", json={"post_id": post["id"], "value": 1}, headers=member.headers)

    assert response.status_code == 403


def test_vote_validation(client: TestClient, other_member, post):
    both = client.post(
        "/api/votes",
        json={"post_id": post["id"], "comment_id": "c", "value": 1},
        headers=other_member.headers,
    )
    neither = client.post("/api/votes", json={"value": 1}, headers=other_member.headers)
    bad_value = client.post("/api/votes", json={"post_id": post["id"], "value": 2}, headers=other_member.headers)
    missing = client.post("/api/votes", json={"post_id": "missing", "value": 1}, headers=other_member.headers)

    assert both.status_code == 400
    assert neither.status_code == 400
    assert bad_value.status_code == 400
    assert missing.status_code == 404


def test_update_and_retract_vote(client: TestClient, member, other_member, admin, post):
    vote = client.post("/api/votes", json={"post_id": post["id"], "value": 1}, headers=other_member.headers).json()

    forbidden = client.put(f"/api/votes/{vote['id']}", json={"value": -1}, headers=member.headers)
    assert forbidden.status_code == 403

    updated = client.put(f"/api/votes/{vote['id']}", json={"value": -1}, headers=other_member.headers)
    assert updated.status_code == 200
    assert client.get(f"/api/posts/{post['id']}").json()["score"] == -1

    retracted = client.delete(f"/api/votes/{vote['id']}", headers=admin.headers)
    assert retracted.status_code == 204
    assert client.get(f"/api/posts/{post['id']}").json()["score"] == 0
    assert client.get(f"/api/votes/{vote['id']}", headers=other_member.headers).status_code == 404


def test_comment_votes_and_top_sorting(client: TestClient, member, other_member, community, post):
    comment = client.post(
        "/api/comments",
        json={"post_id": post["id"], "content": "Upvote me"},
        headers=member.headers,
    ).json()
    client.post("/api/votes", json={"comment_id": comment["id"], "value": 1}, headers=other_member.headers)
    assert client.get(f"/api/comments/{comment['id']}").json()["score"] == 1

    second = client.post(
        "/api/posts",
        json={"community_id": community["id"], "title": "Popular", "body": "Vote here"},
        headers=member.headers,
    ).json()
    client.post("/api/votes", json={"post_id": second["id"], "value": 1}, headers=other_member.headers)
    client.post("/api/votes", json={"post_id": post["id"], "value": -1}, headers=other_member.headers)

    top = client.get("/api/posts", params={"sort_by": "top"}).json()
    assert [p["id"] for p in top["data"]] == [second["id"], post["id"]]


def test_admin_lists_votes(client: TestClient, other_member, admin, post):
    client.post("/api/votes", json={"post_id": post["id"], "value": 1}, headers=other_member.headers)

    listing = client.get("/api/votes", params={"voter_id": other_member.id}, headers=admin.headers)

    assert listing.status_code == 200
    assert listing.json()["pagination"]["records"] == 1
    assert client.get("/api/votes", headers=other_member.headers).status_code == 403
