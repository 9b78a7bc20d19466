"""
Post writes: creation, edits with snapshots and moderation logs, soft delete.
"""
import logging
from typing import Optional

from sqlmodel import Session

from community_api.errors import NotFoundError
from community_api.models import Community, Post, PostModerationLog, PostSnapshot, SearchLog
from community_api.security import Actor
from community_api.services.audit_service import record_event
from community_api.services.moderation_service import ensure_clean
from community_api.services.ownership import ensure_owner_or_admin
from community_api.utils.timeutil import utcnow

logger = logging.getLogger(__name__)


def get_live_post(session: Session, post_id: str) -> Post:
    post = session.get(Post, post_id)
    if post is None or post.deleted_at is not None:
        raise NotFoundError("Post not found")
    return post


def create_post(
    session: Session,
    actor: Actor,
    community_id: str,
    title: str,
    body: str,
    author_display_name: Optional[str] = None,
) -> Post:
    community = session.get(Community, community_id)
    if community is None or community.deleted_at is not None:
        raise NotFoundError("Community not found")
    ensure_clean(session, title, body)

    post = Post(
        community_id=community_id,
        author_id=actor.id,
        author_kind=actor.kind,
        title=title,
        body=body,
        author_display_name=author_display_name,
    )
    session.add(post)
    session.commit()
    session.refresh(post)
    return post


def _moderated_by_admin(actor: Actor, post: Post) -> bool:
    return actor.is_admin and actor.id != post.author_id


def update_post(
    session: Session,
    actor: Actor,
    post: Post,
    title: Optional[str] = None,
    body: Optional[str] = None,
    author_display_name: Optional[str] = None,
    reason: Optional[str] = None,
) -> Post:
    """Apply an edit after saving the pre-edit content as a snapshot."""
    ensure_owner_or_admin(actor, post.author_id, "posts")
    ensure_clean(session, title, body)

    session.add(
        PostSnapshot(
            post_id=post.id,
            editor_id=actor.id,
            editor_kind=actor.kind,
            title=post.title,
            body=post.body,
        )
    )

    if title is not None:
        post.title = title
    if body is not None:
        post.body = body
    if author_display_name is not None:
        post.author_display_name = author_display_name
    post.updated_at = utcnow()
    session.add(post)

    if _moderated_by_admin(actor, post):
        session.add(PostModerationLog(post_id=post.id, admin_id=actor.id, action_type="edit", action_reason=reason))
        record_event(session, "post.moderate.edit", actor_id=actor.id, actor_kind=actor.kind, entity_type="post", entity_id=post.id)

    session.commit()
    session.refresh(post)
    return post


def delete_post(session: Session, actor: Actor, post: Post, reason: Optional[str] = None) -> None:
    ensure_owner_or_admin(actor, post.author_id, "posts")
    post.deleted_at = utcnow()
    session.add(post)

    if _moderated_by_admin(actor, post):
        session.add(PostModerationLog(post_id=post.id, admin_id=actor.id, action_type="delete", action_reason=reason))
        record_event(session, "post.moderate.delete", actor_id=actor.id, actor_kind=actor.kind, entity_type="post", entity_id=post.id)
        logger.info("Admin %s removed post %s", actor.id, post.id)

    session.commit()


def record_search(
    session: Session,
    actor: Optional[Actor],
    search_query: str,
    result_count: int,
    target_scope: str = "posts",
) -> SearchLog:
    entry = SearchLog(
        search_query=search_query,
        target_scope=target_scope,
        result_count=result_count,
        member_id=actor.id if actor is not None and actor.is_member else None,
        admin_id=actor.id if actor is not None and actor.is_admin else None,
    )
    session.add(entry)
    session.commit()
    return entry
