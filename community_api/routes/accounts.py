"""
Account Administration API Routes
Admin views over members, guests and admins; member activation toggle.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import Admin, Guest, Member
from community_api.routes.auth import AdminResponse, GuestResponse, MemberResponse
from community_api.security import Actor, require_admin
from community_api.services.audit_service import record_event
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import apply_date_range, contains_ci, live_row_or_404

router = APIRouter()


class MemberStatusUpdate(BaseModel):
    is_active: bool


@router.get("/members", response_model=Page[MemberResponse])
def list_members(
    email: Optional[str] = None,
    is_active: Optional[bool] = None,
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    query = select(Member).where(Member.deleted_at.is_(None))
    if email:
        query = query.where(contains_ci(Member.email, email))
    if is_active is not None:
        query = query.where(Member.is_active == is_active)
    return paginate(session, query.order_by(Member.created_at.desc()), params)


@router.get("/members/{member_id}", response_model=MemberResponse)
def get_member(
    member_id: str,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    return live_row_or_404(session, Member, member_id, "Member")


@router.patch("/members/{member_id}", response_model=MemberResponse)
def set_member_status(
    member_id: str,
    request: MemberStatusUpdate,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """Activate or deactivate a member. Inactive members cannot authenticate."""
    member = live_row_or_404(session, Member, member_id, "Member")
    member.is_active = request.is_active
    session.add(member)
    record_event(
        session,
        "member.activate" if request.is_active else "member.deactivate",
        actor_id=actor.id,
        actor_kind=actor.kind,
        entity_type="member",
        entity_id=member.id,
    )
    session.commit()
    session.refresh(member)
    return member


@router.get("/guests", response_model=Page[GuestResponse])
def list_guests(
    guest_identifier: Optional[str] = None,
    ip_address: Optional[str] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    query = select(Guest).where(Guest.deleted_at.is_(None))
    if guest_identifier:
        query = query.where(Guest.guest_identifier == guest_identifier)
    if ip_address:
        query = query.where(Guest.ip_address == ip_address)
    query = apply_date_range(query, Guest.created_at, created_from, created_to)
    return paginate(session, query.order_by(Guest.created_at.desc()), params)


@router.get("/admins", response_model=Page[AdminResponse])
def list_admins(
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    query = select(Admin).where(Admin.deleted_at.is_(None)).order_by(Admin.created_at.desc())
    return paginate(session, query, params)
