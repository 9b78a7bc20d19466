"""
Recent Communities API Routes
A member's five most recently visited communities, ranked 1 (latest) to 5.
"""

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session

from community_api.database import get_session
from community_api.models import Community, RecentCommunity
from community_api.security import Actor, require_member
from community_api.services import recent_community_service
from community_api.services.ownership import ensure_owner
from community_api.utils.sql import live_row_or_404

router = APIRouter()


class RecentCommunityTouchRequest(BaseModel):
    community_id: str


class RecentCommunityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    member_id: str
    community_id: str
    recent_rank: int
    last_activity_at: datetime


def _get_entry(session: Session, entry_id: str, actor: Actor) -> RecentCommunity:
    entry = session.get(RecentCommunity, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Recent community entry not found")
    ensure_owner(actor, entry.member_id, "recent communities")
    return entry


@router.post("/recent-communities", response_model=RecentCommunityResponse)
def touch_recent_community(
    request: RecentCommunityTouchRequest,
    actor: Actor = Depends(require_member),
    session: Session = Depends(get_session),
):
    """Mark a community as just visited (moves or inserts it at rank 1)."""
    live_row_or_404(session, Community, request.community_id, "Community")
    return recent_community_service.touch(session, actor.id, request.community_id)


@router.get("/recent-communities", response_model=List[RecentCommunityResponse])
def list_recent_communities(
    actor: Actor = Depends(require_member),
    session: Session = Depends(get_session),
):
    return recent_community_service.list_recent(session, actor.id)


@router.get("/recent-communities/{entry_id}", response_model=RecentCommunityResponse)
def get_recent_community(
    entry_id: str,
    actor: Actor = Depends(require_member),
    session: Session = Depends(get_session),
):
    return _get_entry(session, entry_id, actor)


@router.delete("/recent-communities/{entry_id}", status_code=204)
def delete_recent_community(
    entry_id: str,
    actor: Actor = Depends(require_member),
    session: Session = Depends(get_session),
):
    entry = _get_entry(session, entry_id, actor)
    recent_community_service.remove(session, entry)
    return Response(status_code=204)
