from fastapi.testclient import TestClient
from sqlmodel import Session, select

from community_api.models import PasswordReset
from tests.conftest import TEST_PASSWORD


def test_member_join_returns_tokens_and_profile(client: TestClient):
    response = client.post(
        "/api/auth/member/join",
        json={"email": "alice@example.com", "password": TEST_PASSWORD, "display_name": "Alice"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["member"]["email"] == "alice@example.com"
    assert data["member"]["display_name"] == "Alice"
    assert data["member"]["is_active"] is True
    assert "password_hash" not in data["member"]
    assert set(data["token"]) == {"access", "refresh", "expired_at", "refreshable_until"}
    assert data["token"]["access"] != data["token"]["refresh"]


def test_member_join_rejects_duplicate_email(client: TestClient, make_member):
    make_member("dup@example.com")

    response = client.post("/api/auth/member/join", json={"email": "dup@example.com", "password": TEST_PASSWORD})

    assert response.status_code == 409


def test_member_join_enforces_password_policy(client: TestClient):
    too_short = client.post("/api/auth/member/join", json={"email": "a@example.com", "password": "ab12"})
    no_digit = client.post("/api/auth/member/join", json={"email": "b@example.com", "password": "abcdefghij"})
    no_letter = client.post("/api/auth/member/join", json={"email": "c@example.com", "password": "1234567890"})

    assert too_short.status_code == 400
    assert no_digit.status_code == 400
    assert no_letter.status_code == 400


def test_role_aliases_share_accounts(client: TestClient):
    joined = client.post("/api/auth/memberUser/join", json={"email": "alias@example.com", "password": TEST_PASSWORD})
    assert joined.status_code == 201

    login = client.post("/api/auth/member/login", json={"email": "alias@example.com", "password": TEST_PASSWORD})
    assert login.status_code == 200
    assert login.json()["member"]["id"] == joined.json()["member"]["id"]

    admin = client.post("/api/auth/adminUser/join", json={"email": "boss@example.com", "password": TEST_PASSWORD})
    assert admin.status_code == 201
    assert admin.json()["admin"]["is_super_admin"] is False


def test_login_failures_are_generic(client: TestClient, member):
    wrong_password = client.post("/api/auth/member/login", json={"email": member.email, "password": "Wrong12345"})
    unknown_email = client.post("/api/auth/member/login", json={"email": "nobody@example.com", "password": TEST_PASSWORD})

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json()["detail"] == unknown_email.json()["detail"]


def test_member_cannot_login_as_admin(client: TestClient, member):
    response = client.post("/api/auth/admin/login", json={"email": member.email, "password": TEST_PASSWORD})

    assert response.status_code == 401


def test_login_updates_last_login(client: TestClient, member):
    response = client.post("/api/auth/member/login", json={"email": member.email, "password": TEST_PASSWORD})

    assert response.status_code == 200
    assert response.json()["member"]["last_login_at"] is not None


def test_missing_token_is_unauthorized(client: TestClient):
    response = client.get("/api/sessions/me")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_garbage_token_is_unauthorized(client: TestClient):
    response = client.get("/api/sessions/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


def test_refresh_rotates_tokens(client: TestClient, member):
    response = client.post("/api/auth/member/refresh", json={"refresh_token": member.tokens["refresh"]})

    assert response.status_code == 200
    new_tokens = response.json()["token"]
    assert new_tokens["access"] != member.tokens["access"]
    assert new_tokens["refresh"] != member.tokens["refresh"]

    # The previous access token no longer matches the session row
    stale = client.get("/api/sessions/me", headers=member.headers)
    assert stale.status_code == 401

    fresh = client.get("/api/sessions/me", headers={"Authorization": f"Bearer {new_tokens['access']}"})
    assert fresh.status_code == 200

    # Refresh tokens are single use
    replay = client.post("/api/auth/member/refresh", json={"refresh_token": member.tokens["refresh"]})
    assert replay.status_code == 401


def test_refresh_rejects_access_token_and_wrong_role(client: TestClient, member):
    with_access = client.post("/api/auth/member/refresh", json={"refresh_token": member.tokens["access"]})
    wrong_role = client.post("/api/auth/admin/refresh", json={"refresh_token": member.tokens["refresh"]})

    assert with_access.status_code == 401
    assert wrong_role.status_code == 401


def test_guest_join_and_refresh(client: TestClient):
    response = client.post("/api/auth/guest/join", headers={"User-Agent": "pytest-agent"})

    assert response.status_code == 201
    data = response.json()
    assert data["guest"]["guest_identifier"]
    assert data["guest"]["ip_address"] == "testclient"
    assert data["guest"]["user_agent"] == "pytest-agent"

    headers = {"Authorization": f"Bearer {data['token']['access']}"}
    sessions = client.get("/api/sessions/me", headers=headers)
    assert sessions.status_code == 200
    assert sessions.json()["pagination"]["records"] == 1

    refreshed = client.post("/api/auth/guestUser/refresh", json={"refresh_token": data["token"]["refresh"]})
    assert refreshed.status_code == 200
    assert refreshed.json()["guest"]["id"] == data["guest"]["id"]


def test_guest_cannot_use_member_routes(client: TestClient):
    data = client.post("/api/auth/guest/join").json()
    headers = {"Authorization": f"Bearer {data['token']['access']}"}

    response = client.post("/api/communities", json={"name": "guests", "category_id": "x"}, headers=headers)

    assert response.status_code == 403


def test_deactivated_member_is_locked_out(client: TestClient, member, admin):
    response = client.patch(f"/api/members/{member.id}", json={"is_active": False}, headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    assert client.get("/api/sessions/me", headers=member.headers).status_code == 401
    login = client.post("/api/auth/member/login", json={"email": member.email, "password": TEST_PASSWORD})
    assert login.status_code == 401


def test_password_reset_flow(client: TestClient, session: Session, member):
    response = client.post("/api/auth/member/password/reset/initiate", json={"email": member.email})
    assert response.status_code == 202

    reset = session.exec(select(PasswordReset).where(PasswordReset.member_id == member.id)).one()

    complete = client.post(
        "/api/auth/member/password/reset/complete",
        json={"reset_token": reset.reset_token, "new_password": "NewPassw0rd"},
    )
    assert complete.status_code == 200

    # Existing sessions are invalidated
    assert client.get("/api/sessions/me", headers=member.headers).status_code == 401

    old_login = client.post("/api/auth/member/login", json={"email": member.email, "password": TEST_PASSWORD})
    new_login = client.post("/api/auth/member/login", json={"email": member.email, "password": "NewPassw0rd"})
    assert old_login.status_code == 401
    assert new_login.status_code == 200

    reuse = client.post(
        "/api/auth/member/password/reset/complete",
        json={"reset_token": reset.reset_token, "new_password": "Another123"},
    )
    assert reuse.status_code == 400


def test_password_reset_does_not_reveal_unknown_email(client: TestClient, session: Session, member):
    known = client.post("/api/auth/member/password/reset/initiate", json={"email": member.email})
    unknown = client.post("/api/auth/member/password/reset/initiate", json={"email": "ghost@example.com"})

    assert known.status_code == unknown.status_code == 202
    assert known.json() == unknown.json()
    assert len(session.exec(select(PasswordReset)).all()) == 1


def test_password_reset_applies_policy(client: TestClient, session: Session, member):
    client.post("/api/auth/member/password/reset/initiate", json={"email": member.email})
    reset = session.exec(select(PasswordReset)).one()

    response = client.post(
        "/api/auth/member/password/reset/complete",
        json={"reset_token": reset.reset_token, "new_password": "short"},
    )

    assert response.status_code == 400
