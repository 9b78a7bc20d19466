import jwt

from community_api.config import JWT_SECRET_KEY
from community_api.security import (
    create_token,
    decode_token,
    hash_password,
    password_policy_error,
    verify_password,
)


def test_password_hash_round_trip():
    hashed = hash_password("Sup3rSecret")

    assert hashed != "Sup3rSecret"
    assert verify_password("Sup3rSecret", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("Sup3rSecret", "not-a-hash")


def test_password_policy():
    assert password_policy_error("abc123") is not None
    assert password_policy_error("abcdefgh") is not None
    assert password_policy_error("12345678") is not None
    assert password_policy_error("abcd1234") is None


def test_token_claims():
    token, expires_at = create_token("acct-1", "member", "access", 3600)

    payload = decode_token(token)

    assert payload["id"] == "acct-1"
    assert payload["type"] == "member"
    assert payload["token_type"] == "access"
    assert payload["iss"] == "community-platform"
    assert payload["exp"] - payload["iat"] == 3600
    assert expires_at is not None


def test_tokens_are_unique_per_issue():
    first, _ = create_token("acct-1", "member", "access", 3600)
    second, _ = create_token("acct-1", "member", "access", 3600)

    assert first != second


def test_expired_or_forged_tokens_are_rejected():
    expired, _ = create_token("acct-1", "member", "access", -10)
    forged = jwt.encode({"id": "acct-1", "type": "admin"}, "an-entirely-different-signing-secret-0123456789", algorithm="HS256")
    unsigned_claims = jwt.encode({"id": "acct-1", "type": "admin"}, JWT_SECRET_KEY, algorithm="HS256")

    assert decode_token(expired) is None
    assert decode_token(forged) is None
    assert decode_token(unsigned_claims) is None
