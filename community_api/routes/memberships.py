"""
Community Membership API Routes
Members join and leave communities.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import Community, CommunityMembership
from community_api.security import Actor, require_member, require_member_or_admin
from community_api.services.ownership import ensure_owner, ensure_owner_or_admin
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import live_row_or_404
from community_api.utils.timeutil import as_naive_utc

router = APIRouter()


class MembershipUpdateRequest(BaseModel):
    joined_at: datetime


class MembershipResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    member_id: str
    community_id: str
    joined_at: datetime


def _get_membership(session: Session, membership_id: str) -> CommunityMembership:
    membership = session.get(CommunityMembership, membership_id)
    if not membership:
        raise HTTPException(status_code=404, detail="Membership not found")
    return membership


@router.post("/communities/{community_id}/memberships", response_model=MembershipResponse, status_code=201)
def join_community(
    community_id: str,
    actor: Actor = Depends(require_member),
    session: Session = Depends(get_session),
):
    live_row_or_404(session, Community, community_id, "Community")

    existing = session.exec(
        select(CommunityMembership).where(
            CommunityMembership.member_id == actor.id,
            CommunityMembership.community_id == community_id,
        )
    ).first()
    if existing:
        raise HTTPException(status_code=409, detail="Already a member of this community")

    membership = CommunityMembership(member_id=actor.id, community_id=community_id)
    session.add(membership)
    session.commit()
    session.refresh(membership)
    return membership


@router.get("/communities/{community_id}/memberships", response_model=Page[MembershipResponse])
def list_community_members(
    community_id: str,
    params: PageParams = Depends(page_params),
    session: Session = Depends(get_session),
):
    live_row_or_404(session, Community, community_id, "Community")
    query = (
        select(CommunityMembership)
        .where(CommunityMembership.community_id == community_id)
        .order_by(CommunityMembership.joined_at)
    )
    return paginate(session, query, params)


@router.get("/memberships/{membership_id}", response_model=MembershipResponse)
def get_membership(membership_id: str, session: Session = Depends(get_session)):
    return _get_membership(session, membership_id)


@router.put("/memberships/{membership_id}", response_model=MembershipResponse)
def update_membership(
    membership_id: str,
    request: MembershipUpdateRequest,
    actor: Actor = Depends(require_member),
    session: Session = Depends(get_session),
):
    membership = _get_membership(session, membership_id)
    ensure_owner(actor, membership.member_id, "memberships")

    membership.joined_at = as_naive_utc(request.joined_at)
    session.add(membership)
    session.commit()
    session.refresh(membership)
    return membership


@router.delete("/memberships/{membership_id}", status_code=204)
def leave_community(
    membership_id: str,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    """Members leave on their own; admins may remove anyone."""
    membership = _get_membership(session, membership_id)
    ensure_owner_or_admin(actor, membership.member_id, "memberships")

    session.delete(membership)
    session.commit()
    return Response(status_code=204)
