"""
Session API Routes
Lists and revokes the login sessions opened by join/login.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import AuthSession
from community_api.security import Actor, get_actor, require_admin
from community_api.services.ownership import ensure_owner_or_admin
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import apply_date_range
from community_api.utils.timeutil import as_naive_utc, utcnow

router = APIRouter()


class SessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    member_id: Optional[str] = None
    admin_id: Optional[str] = None
    guest_id: Optional[str] = None
    device_fingerprint: Optional[str] = None
    expires_at: datetime
    invalidated_at: Optional[datetime] = None
    created_at: datetime


class SessionUpdateRequest(BaseModel):
    device_fingerprint: Optional[str] = None
    expires_at: Optional[datetime] = None
    invalidated_at: Optional[datetime] = None


def _owner_id(auth_session: AuthSession) -> Optional[str]:
    return auth_session.member_id or auth_session.admin_id or auth_session.guest_id


def _owner_column(kind: str):
    return {
        "member": AuthSession.member_id,
        "admin": AuthSession.admin_id,
        "guest": AuthSession.guest_id,
    }[kind]


def _filtered(
    query,
    active_only: bool,
    expired_only: bool,
    device_fingerprint: Optional[str],
    from_date: Optional[datetime],
    to_date: Optional[datetime],
):
    now = utcnow()
    if active_only:
        query = query.where(AuthSession.invalidated_at.is_(None), AuthSession.expires_at > now)
    if expired_only:
        query = query.where(AuthSession.expires_at <= now)
    if device_fingerprint:
        query = query.where(AuthSession.device_fingerprint == device_fingerprint)
    return apply_date_range(query, AuthSession.created_at, from_date, to_date)


def _get_session_row(session: Session, session_id: str) -> AuthSession:
    auth_session = session.get(AuthSession, session_id)
    if not auth_session or auth_session.deleted_at is not None:
        raise HTTPException(status_code=404, detail="Session not found")
    return auth_session


@router.get("/sessions/me", response_model=Page[SessionResponse])
def list_my_sessions(
    active_only: bool = False,
    expired_only: bool = False,
    device_fingerprint: Optional[str] = None,
    from_date: Optional[datetime] = None,
    to_date: Optional[datetime] = None,
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(get_actor),
    session: Session = Depends(get_session),
):
    """Sessions opened by the calling account, newest first."""
    query = select(AuthSession).where(
        _owner_column(actor.kind) == actor.id,
        AuthSession.deleted_at.is_(None),
    )
    query = _filtered(query, active_only, expired_only, device_fingerprint, from_date, to_date)
    return paginate(session, query.order_by(AuthSession.created_at.desc()), params)


@router.get("/sessions", response_model=Page[SessionResponse])
def list_sessions(
    member_id: Optional[str] = None,
    admin_id: Optional[str] = None,
    active_only: bool = False,
    expired_only: bool = False,
    device_fingerprint: Optional[str] = None,
    from_date: Optional[datetime] = None,
    to_date: Optional[datetime] = None,
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    query = select(AuthSession).where(AuthSession.deleted_at.is_(None))
    if member_id:
        query = query.where(AuthSession.member_id == member_id)
    if admin_id:
        query = query.where(AuthSession.admin_id == admin_id)
    query = _filtered(query, active_only, expired_only, device_fingerprint, from_date, to_date)
    return paginate(session, query.order_by(AuthSession.created_at.desc()), params)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
def get_session_detail(
    session_id: str,
    actor: Actor = Depends(get_actor),
    session: Session = Depends(get_session),
):
    auth_session = _get_session_row(session, session_id)
    ensure_owner_or_admin(actor, _owner_id(auth_session), "sessions")
    return auth_session


@router.put("/sessions/{session_id}", response_model=SessionResponse)
def update_session(
    session_id: str,
    request: SessionUpdateRequest,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    auth_session = _get_session_row(session, session_id)

    update_data = request.model_dump(exclude_unset=True)
    # invalidated_at may be cleared with null; expires_at may not
    if "expires_at" in update_data and update_data["expires_at"] is None:
        raise HTTPException(status_code=400, detail="expires_at cannot be null")

    for field, value in update_data.items():
        if isinstance(value, datetime):
            value = as_naive_utc(value)
        setattr(auth_session, field, value)

    session.add(auth_session)
    session.commit()
    session.refresh(auth_session)
    return auth_session


@router.delete("/sessions/{session_id}", response_model=SessionResponse)
def revoke_session(
    session_id: str,
    actor: Actor = Depends(get_actor),
    session: Session = Depends(get_session),
):
    """Invalidate a session; its tokens stop working immediately."""
    auth_session = _get_session_row(session, session_id)
    ensure_owner_or_admin(actor, _owner_id(auth_session), "sessions")

    if auth_session.invalidated_at is None:
        auth_session.invalidated_at = utcnow()
        session.add(auth_session)
        session.commit()
        session.refresh(auth_session)
    return auth_session
