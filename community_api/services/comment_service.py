"""
Comment writes, including cascading soft delete of reply threads.
"""
import logging
from collections import deque
from typing import List, Optional

from sqlmodel import Session, select

from community_api.errors import InvalidRequestError, NotFoundError
from community_api.models import Comment, Vote
from community_api.security import Actor
from community_api.services.moderation_service import ensure_clean
from community_api.services.ownership import ensure_owner_or_admin
from community_api.services.post_service import get_live_post
from community_api.utils.timeutil import utcnow

logger = logging.getLogger(__name__)


def get_live_comment(session: Session, comment_id: str) -> Comment:
    comment = session.get(Comment, comment_id)
    if comment is None or comment.deleted_at is not None:
        raise NotFoundError("Comment not found")
    return comment


def create_comment(
    session: Session,
    actor: Actor,
    post_id: str,
    content: str,
    parent_id: Optional[str] = None,
) -> Comment:
    get_live_post(session, post_id)

    if parent_id is not None:
        parent = session.get(Comment, parent_id)
        if parent is None or parent.deleted_at is not None:
            raise NotFoundError("Parent comment not found")
        if parent.post_id != post_id:
            raise InvalidRequestError("Parent comment belongs to a different post")

    ensure_clean(session, content)

    comment = Comment(
        post_id=post_id,
        author_id=actor.id,
        author_kind=actor.kind,
        parent_id=parent_id,
        content=content,
    )
    session.add(comment)
    session.commit()
    session.refresh(comment)
    return comment


def update_comment(session: Session, actor: Actor, comment: Comment, content: str) -> Comment:
    ensure_owner_or_admin(actor, comment.author_id, "comments")
    ensure_clean(session, content)

    comment.content = content
    comment.edited = True
    comment.updated_at = utcnow()
    session.add(comment)
    session.commit()
    session.refresh(comment)
    return comment


def _collect_thread(session: Session, root: Comment) -> List[Comment]:
    """The comment and every live descendant, breadth first."""
    thread = [root]
    queue = deque([root.id])
    while queue:
        parent_id = queue.popleft()
        children = session.exec(
            select(Comment).where(
                Comment.parent_id == parent_id,
                Comment.deleted_at.is_(None),
            )
        ).all()
        for child in children:
            thread.append(child)
            queue.append(child.id)
    return thread


def delete_comment(session: Session, actor: Actor, comment: Comment) -> int:
    """Soft delete a comment, its replies and their votes. Returns comments removed."""
    ensure_owner_or_admin(actor, comment.author_id, "comments")

    now = utcnow()
    thread = _collect_thread(session, comment)
    thread_ids = [c.id for c in thread]

    for item in thread:
        item.deleted_at = now
        session.add(item)

    votes = session.exec(
        select(Vote).where(
            Vote.comment_id.in_(thread_ids),
            Vote.deleted_at.is_(None),
        )
    ).all()
    for vote in votes:
        vote.deleted_at = now
        session.add(vote)

    session.commit()
    logger.info("Deleted comment %s with %d replies and %d votes", comment.id, len(thread) - 1, len(votes))
    return len(thread)
