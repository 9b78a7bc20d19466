"""
Vote API Routes
Up/down votes on posts and comments.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import Vote
from community_api.security import Actor, require_admin, require_member_or_admin
from community_api.services import vote_service
from community_api.services.ownership import ensure_owner_or_admin
from community_api.utils.pagination import Page, PageParams, page_params, paginate

router = APIRouter()


class VoteCastRequest(BaseModel):
    post_id: Optional[str] = None
    comment_id: Optional[str] = None
    value: int


class VoteUpdateRequest(BaseModel):
    value: int


class VoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    voter_id: str
    voter_kind: str
    post_id: Optional[str] = None
    comment_id: Optional[str] = None
    value: int
    created_at: datetime
    updated_at: datetime


@router.post("/votes", response_model=VoteResponse)
def cast_vote(
    request: VoteCastRequest,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    """
    Vote on a post or a comment.

    Voting again on the same target replaces the earlier value.
    """
    return vote_service.cast_vote(
        session, actor, request.value, post_id=request.post_id, comment_id=request.comment_id
    )


@router.get("/votes", response_model=Page[VoteResponse])
def list_votes(
    voter_id: Optional[str] = None,
    post_id: Optional[str] = None,
    comment_id: Optional[str] = None,
    value: Optional[int] = None,
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    statement = select(Vote).where(Vote.deleted_at.is_(None))
    if voter_id:
        statement = statement.where(Vote.voter_id == voter_id)
    if post_id:
        statement = statement.where(Vote.post_id == post_id)
    if comment_id:
        statement = statement.where(Vote.comment_id == comment_id)
    if value is not None:
        statement = statement.where(Vote.value == value)
    return paginate(session, statement.order_by(Vote.created_at.desc()), params)


@router.get("/votes/{vote_id}", response_model=VoteResponse)
def get_vote(
    vote_id: str,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    vote = vote_service.get_live_vote(session, vote_id)
    ensure_owner_or_admin(actor, vote.voter_id, "votes")
    return vote


@router.put("/votes/{vote_id}", response_model=VoteResponse)
def update_vote(
    vote_id: str,
    request: VoteUpdateRequest,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    vote = vote_service.get_live_vote(session, vote_id)
    return vote_service.update_vote(session, actor, vote, request.value)


@router.delete("/votes/{vote_id}", status_code=204)
def retract_vote(
    vote_id: str,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    vote = vote_service.get_live_vote(session, vote_id)
    vote_service.retract_vote(session, actor, vote)
    return Response(status_code=204)
