"""
Password hashing, JWT issuance and the bearer-token dependencies.

Tokens are HS256 JWTs carrying ``id`` (account id), ``type`` (guest,
member or admin) and ``token_type`` (access or refresh).  A token is only
accepted while the session row that issued it is live and the account it
names is active and not soft-deleted, so revoking a session or disabling an
account takes effect immediately.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Tuple
from uuid import uuid4

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlmodel import Session, select

from community_api.config import JWT_ALGORITHM, JWT_ISSUER, JWT_SECRET_KEY
from community_api.database import get_session
from community_api.models import Admin, AuthSession, Guest, Member
from community_api.utils.timeutil import utcnow

logger = logging.getLogger(__name__)

ACCOUNT_KINDS = ("guest", "member", "admin")

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

_LETTER = re.compile(r"[A-Za-z]")
_DIGIT = re.compile(r"\d")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unrecognized hash format
        return False


def password_policy_error(password: str) -> Optional[str]:
    """Return a message describing why ``password`` is too weak, or None."""
    if len(password) < 8:
        return "Password must be at least 8 characters"
    if not _LETTER.search(password) or not _DIGIT.search(password):
        return "Password must contain at least one letter and one digit"
    return None


def create_token(account_id: str, kind: str, token_type: str, ttl_seconds: int) -> Tuple[str, datetime]:
    """Sign a token and return it with its (naive UTC) expiry."""
    issued_at = utcnow()
    expires_at = issued_at + timedelta(seconds=ttl_seconds)
    payload = {
        "id": account_id,
        "type": kind,
        "token_type": token_type,
        "jti": str(uuid4()),
        "iss": JWT_ISSUER,
        "iat": issued_at,
        "exp": expires_at,
    }
    token = jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)
    return token, expires_at


def decode_token(token: str) -> Optional[Dict]:
    """Verify signature, issuer and expiry; None when the token is unusable."""
    try:
        return jwt.decode(
            token,
            JWT_SECRET_KEY,
            algorithms=[JWT_ALGORITHM],
            issuer=JWT_ISSUER,
            options={"require": ["exp", "iat", "iss"]},
        )
    except jwt.PyJWTError as exc:
        logger.debug("Rejected token: %s", exc)
        return None


def load_account(session: Session, kind: str, account_id: str):
    """Fetch a live account row of the given kind, or None."""
    model = {"guest": Guest, "member": Member, "admin": Admin}.get(kind)
    if model is None:
        return None
    account = session.get(model, account_id)
    if account is None or account.deleted_at is not None:
        return None
    if getattr(account, "is_active", True) is False:
        return None
    return account


@dataclass
class Actor:
    """The authenticated caller of a request."""

    id: str
    kind: str  # guest | member | admin
    session_id: str

    @property
    def is_admin(self) -> bool:
        return self.kind == "admin"

    @property
    def is_member(self) -> bool:
        return self.kind == "member"


bearer = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def authenticate(token: str, session: Session) -> Actor:
    payload = decode_token(token)
    if not payload or payload.get("token_type") != "access" or payload.get("type") not in ACCOUNT_KINDS:
        raise _unauthorized("Invalid or expired token")

    auth_session = session.exec(
        select(AuthSession).where(
            AuthSession.jwt_token == token,
            AuthSession.invalidated_at.is_(None),
            AuthSession.deleted_at.is_(None),
        )
    ).first()
    if auth_session is None:
        raise _unauthorized("Session is no longer valid")

    if load_account(session, payload["type"], payload["id"]) is None:
        raise _unauthorized("Account is disabled or no longer exists")

    return Actor(id=payload["id"], kind=payload["type"], session_id=auth_session.id)


def get_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    session: Session = Depends(get_session),
) -> Actor:
    """Any authenticated caller, guests included."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    return authenticate(credentials.credentials, session)


def optional_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    session: Session = Depends(get_session),
) -> Optional[Actor]:
    """Caller if a bearer token was sent, None for anonymous requests."""
    if credentials is None:
        return None
    return authenticate(credentials.credentials, session)


def require_roles(*kinds: str) -> Callable[..., Actor]:
    """Dependency factory restricting a route to the given account kinds."""

    def _role_dependency(actor: Actor = Depends(get_actor)) -> Actor:
        if actor.kind not in kinds:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return actor

    return _role_dependency


require_member = require_roles("member")
require_admin = require_roles("admin")
require_member_or_admin = require_roles("member", "admin")
