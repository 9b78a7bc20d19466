"""
Account join/login/refresh and member password reset.

Every successful join or login opens an ``AuthSession`` row holding the
issued token pair.  Refresh rotates both tokens on that row, and the bearer
dependencies in ``community_api.security`` only accept an access token that
still matches a live session.
"""
import logging
import secrets
from typing import Dict, Optional, Tuple, Union

from sqlmodel import Session, select

from community_api.config import (
    ACCESS_TOKEN_TTL_SECONDS,
    PASSWORD_RESET_TTL_SECONDS,
    REFRESH_TOKEN_TTL_SECONDS,
)
from community_api.errors import AuthenticationError, ConflictError, InvalidRequestError
from community_api.models import Admin, AuthSession, Guest, Member, PasswordReset
from community_api.security import (
    create_token,
    decode_token,
    hash_password,
    load_account,
    password_policy_error,
    verify_password,
)
from community_api.services.audit_service import record_event
from community_api.utils.timeutil import seconds_from_now, utcnow

logger = logging.getLogger(__name__)

Account = Union[Member, Admin]

_ACCOUNT_MODELS = {"member": Member, "admin": Admin}
_OWNER_COLUMNS = {"guest": "guest_id", "member": "member_id", "admin": "admin_id"}

INVALID_CREDENTIALS = "Invalid email or password"


def _issue_tokens(kind: str, account_id: str) -> Dict:
    access, access_expires = create_token(account_id, kind, "access", ACCESS_TOKEN_TTL_SECONDS)
    refresh, refresh_expires = create_token(account_id, kind, "refresh", REFRESH_TOKEN_TTL_SECONDS)
    return {
        "access": access,
        "refresh": refresh,
        "expired_at": access_expires,
        "refreshable_until": refresh_expires,
    }


def open_session(
    session: Session,
    kind: str,
    account_id: str,
    device_fingerprint: Optional[str] = None,
) -> Tuple[AuthSession, Dict]:
    """Issue a token pair and persist it as a new session row (not committed)."""
    tokens = _issue_tokens(kind, account_id)
    auth_session = AuthSession(
        jwt_token=tokens["access"],
        refresh_token=tokens["refresh"],
        device_fingerprint=device_fingerprint,
        expires_at=tokens["refreshable_until"],
    )
    setattr(auth_session, _OWNER_COLUMNS[kind], account_id)
    session.add(auth_session)
    return auth_session, tokens


def join_guest(
    session: Session,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
    device_fingerprint: Optional[str] = None,
) -> Tuple[Guest, Dict]:
    guest = Guest(
        guest_identifier=secrets.token_hex(16),
        ip_address=ip_address,
        user_agent=user_agent,
    )
    session.add(guest)
    session.flush()

    _, tokens = open_session(session, "guest", guest.id, device_fingerprint)
    record_event(session, "guest.join", actor_id=guest.id, actor_kind="guest", entity_type="guest", entity_id=guest.id)
    session.commit()
    session.refresh(guest)
    logger.info("Guest %s joined", guest.id)
    return guest, tokens


def join_account(
    session: Session,
    kind: str,
    email: str,
    password: str,
    display_name: Optional[str] = None,
    device_fingerprint: Optional[str] = None,
) -> Tuple[Account, Dict]:
    """Register a member or admin and log them straight in."""
    model = _ACCOUNT_MODELS[kind]

    existing = session.exec(select(model).where(model.email == email)).first()
    if existing is not None:
        raise ConflictError("Email is already registered")

    problem = password_policy_error(password)
    if problem:
        raise InvalidRequestError(problem)

    account = model(
        email=email,
        password_hash=hash_password(password),
        display_name=display_name,
        last_login_at=utcnow(),
    )
    session.add(account)
    session.flush()

    _, tokens = open_session(session, kind, account.id, device_fingerprint)
    record_event(session, f"{kind}.join", actor_id=account.id, actor_kind=kind, entity_type=kind, entity_id=account.id)
    session.commit()
    session.refresh(account)
    logger.info("New %s %s joined", kind, account.id)
    return account, tokens


def login(
    session: Session,
    kind: str,
    email: str,
    password: str,
    device_fingerprint: Optional[str] = None,
) -> Tuple[Account, Dict]:
    model = _ACCOUNT_MODELS[kind]
    account = session.exec(select(model).where(model.email == email)).first()

    if (
        account is None
        or account.deleted_at is not None
        or not account.is_active
        or not verify_password(password, account.password_hash)
    ):
        record_event(
            session,
            f"{kind}.login",
            actor_id=account.id if account is not None else None,
            actor_kind=kind,
            entity_type=kind,
            result="failure",
        )
        session.commit()
        logger.warning("Failed %s login attempt", kind)
        raise AuthenticationError(INVALID_CREDENTIALS)

    account.last_login_at = utcnow()
    session.add(account)
    _, tokens = open_session(session, kind, account.id, device_fingerprint)
    record_event(session, f"{kind}.login", actor_id=account.id, actor_kind=kind, entity_type=kind, entity_id=account.id)
    session.commit()
    session.refresh(account)
    return account, tokens


def refresh(session: Session, kind: str, refresh_token: str) -> Tuple[object, Dict]:
    """Rotate the token pair of the session that issued ``refresh_token``."""
    payload = decode_token(refresh_token)
    if not payload or payload.get("token_type") != "refresh" or payload.get("type") != kind:
        raise AuthenticationError("Invalid refresh token")

    auth_session = session.exec(
        select(AuthSession).where(
            AuthSession.refresh_token == refresh_token,
            AuthSession.invalidated_at.is_(None),
            AuthSession.deleted_at.is_(None),
        )
    ).first()
    if auth_session is None or auth_session.expires_at <= utcnow():
        raise AuthenticationError("Session expired or revoked")
    if getattr(auth_session, _OWNER_COLUMNS[kind]) != payload["id"]:
        raise AuthenticationError("Invalid refresh token")

    account = load_account(session, kind, payload["id"])
    if account is None:
        raise AuthenticationError("Account is disabled or no longer exists")

    tokens = _issue_tokens(kind, account.id)
    auth_session.jwt_token = tokens["access"]
    auth_session.refresh_token = tokens["refresh"]
    auth_session.expires_at = tokens["refreshable_until"]
    session.add(auth_session)
    session.commit()
    session.refresh(account)
    logger.info("Refreshed %s session %s", kind, auth_session.id)
    return account, tokens


def initiate_password_reset(session: Session, email: str) -> Optional[PasswordReset]:
    """Create a reset token for an active member; None when nothing was issued.

    Callers must respond identically either way so the endpoint cannot be
    used to probe which emails are registered.
    """
    member = session.exec(select(Member).where(Member.email == email)).first()
    if member is None or member.deleted_at is not None or not member.is_active:
        logger.info("Password reset requested for unknown or inactive email")
        return None

    reset = PasswordReset(
        member_id=member.id,
        reset_token=secrets.token_urlsafe(32),
        expires_at=seconds_from_now(PASSWORD_RESET_TTL_SECONDS),
    )
    session.add(reset)
    record_event(session, "member.password_reset.initiate", actor_id=member.id, actor_kind="member", entity_type="member", entity_id=member.id)
    session.commit()
    session.refresh(reset)
    return reset


def complete_password_reset(session: Session, reset_token: str, new_password: str) -> Member:
    reset = session.exec(
        select(PasswordReset).where(
            PasswordReset.reset_token == reset_token,
            PasswordReset.deleted_at.is_(None),
        )
    ).first()
    now = utcnow()
    if reset is None or reset.used_at is not None or reset.expires_at <= now:
        raise InvalidRequestError("Reset token is invalid or expired")

    member = load_account(session, "member", reset.member_id)
    if member is None:
        raise InvalidRequestError("Reset token is invalid or expired")

    problem = password_policy_error(new_password)
    if problem:
        raise InvalidRequestError(problem)

    member.password_hash = hash_password(new_password)
    reset.used_at = now
    session.add(member)
    session.add(reset)

    live_sessions = session.exec(
        select(AuthSession).where(
            AuthSession.member_id == member.id,
            AuthSession.invalidated_at.is_(None),
        )
    ).all()
    for auth_session in live_sessions:
        auth_session.invalidated_at = now
        session.add(auth_session)

    record_event(session, "member.password_reset.complete", actor_id=member.id, actor_kind="member", entity_type="member", entity_id=member.id)
    session.commit()
    session.refresh(member)
    logger.info("Password reset for member %s; %d sessions invalidated", member.id, len(live_sessions))
    return member
