"""
Voting on posts and comments.

A voter holds at most one live vote per target; casting again updates it.
The target's ``score`` is always the sum of its live votes.
"""
import logging
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from community_api.errors import ForbiddenError, InvalidRequestError, NotFoundError
from community_api.models import Comment, Post, Vote
from community_api.security import Actor
from community_api.services.ownership import ensure_owner, ensure_owner_or_admin
from community_api.utils.timeutil import utcnow

logger = logging.getLogger(__name__)

ALLOWED_VALUES = (1, -1, 0)


def _check_value(value: int) -> None:
    if value not in ALLOWED_VALUES:
        raise InvalidRequestError("value must be 1, -1 or 0")


def _live_target(session: Session, post_id: Optional[str], comment_id: Optional[str]):
    if (post_id is None) == (comment_id is None):
        raise InvalidRequestError("Exactly one of post_id or comment_id is required")
    target = session.get(Post, post_id) if post_id is not None else session.get(Comment, comment_id)
    if target is None or target.deleted_at is not None:
        raise NotFoundError("Vote target not found")
    return target


def recompute_score(session: Session, vote: Vote) -> None:
    """Write the sum of live votes back onto the vote's target."""
    if vote.post_id is not None:
        target = session.get(Post, vote.post_id)
        column = Vote.post_id
        target_id = vote.post_id
    else:
        target = session.get(Comment, vote.comment_id)
        column = Vote.comment_id
        target_id = vote.comment_id
    if target is None:
        return

    total = session.exec(
        select(func.coalesce(func.sum(Vote.value), 0)).where(
            column == target_id,
            Vote.deleted_at.is_(None),
        )
    ).one()
    target.score = int(total)
    session.add(target)


def get_live_vote(session: Session, vote_id: str) -> Vote:
    vote = session.get(Vote, vote_id)
    if vote is None or vote.deleted_at is not None:
        raise NotFoundError("Vote not found")
    return vote


def cast_vote(
    session: Session,
    actor: Actor,
    value: int,
    post_id: Optional[str] = None,
    comment_id: Optional[str] = None,
) -> Vote:
    _check_value(value)
    target = _live_target(session, post_id, comment_id)
    if target.author_id == actor.id:
        raise ForbiddenError("You cannot vote on your own content")

    query = select(Vote).where(Vote.voter_id == actor.id, Vote.deleted_at.is_(None))
    if post_id is not None:
        query = query.where(Vote.post_id == post_id)
    else:
        query = query.where(Vote.comment_id == comment_id)
    vote = session.exec(query).first()

    if vote is None:
        vote = Vote(
            voter_id=actor.id,
            voter_kind=actor.kind,
            post_id=post_id,
            comment_id=comment_id,
            value=value,
        )
    else:
        vote.value = value
        vote.updated_at = utcnow()
    session.add(vote)
    session.flush()

    recompute_score(session, vote)
    session.commit()
    session.refresh(vote)
    return vote


def update_vote(session: Session, actor: Actor, vote: Vote, value: int) -> Vote:
    ensure_owner(actor, vote.voter_id, "votes")
    _check_value(value)
    vote.value = value
    vote.updated_at = utcnow()
    session.add(vote)
    session.flush()

    recompute_score(session, vote)
    session.commit()
    session.refresh(vote)
    return vote


def retract_vote(session: Session, actor: Actor, vote: Vote) -> None:
    ensure_owner_or_admin(actor, vote.voter_id, "votes")
    vote.deleted_at = utcnow()
    session.add(vote)
    session.flush()

    recompute_score(session, vote)
    session.commit()
    logger.debug("Vote %s retracted by %s %s", vote.id, actor.kind, actor.id)
