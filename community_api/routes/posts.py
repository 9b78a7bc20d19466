"""
Post API Routes
Search, CRUD, edit snapshots and admin moderation history for posts.
"""

from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import or_
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import Post, PostModerationLog, PostSnapshot
from community_api.security import Actor, optional_actor, require_admin, require_member_or_admin
from community_api.services import post_service
from community_api.services.ownership import ensure_owner_or_admin
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import apply_date_range, contains_ci, count_rows

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class PostCreateRequest(BaseModel):
    community_id: str
    title: str = Field(min_length=1, max_length=300)
    body: str = Field(min_length=1)
    author_display_name: Optional[str] = Field(default=None, max_length=100)


class PostUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    body: Optional[str] = Field(default=None, min_length=1)
    author_display_name: Optional[str] = Field(default=None, max_length=100)
    reason: Optional[str] = None  # recorded when an admin edits someone else's post


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    community_id: str
    author_id: str
    author_kind: str
    title: str
    body: str
    author_display_name: Optional[str] = None
    score: int
    created_at: datetime
    updated_at: datetime


class PostSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    community_id: str
    author_id: str
    title: str
    author_display_name: Optional[str] = None
    score: int
    created_at: datetime


class SnapshotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    post_id: str
    editor_id: str
    editor_kind: str
    title: str
    body: str
    created_at: datetime


class ModerationLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    post_id: str
    admin_id: str
    action_type: str
    action_reason: Optional[str] = None
    created_at: datetime


_SORT_COLUMNS = {
    "created_at": Post.created_at,
    "updated_at": Post.updated_at,
    "title": Post.title,
    "top": Post.score,
}


# ============================================================================
# Post Endpoints
# ============================================================================


@router.get("/posts", response_model=Page[PostSummary])
def search_posts(
    community_id: Optional[str] = None,
    author_id: Optional[str] = None,
    min_date: Optional[datetime] = None,
    max_date: Optional[datetime] = None,
    query: Optional[str] = None,
    sort_by: Literal["created_at", "updated_at", "title", "top"] = "created_at",
    order: Literal["asc", "desc"] = "desc",
    params: PageParams = Depends(page_params),
    actor: Optional[Actor] = Depends(optional_actor),
    session: Session = Depends(get_session),
):
    """
    Search live posts.

    ``query`` matches title or body case-insensitively and is recorded in
    the search log. ``sort_by=top`` orders by score, newest first on ties.
    """
    statement = select(Post).where(Post.deleted_at.is_(None))
    if community_id:
        statement = statement.where(Post.community_id == community_id)
    if author_id:
        statement = statement.where(Post.author_id == author_id)
    statement = apply_date_range(statement, Post.created_at, min_date, max_date)
    if query:
        statement = statement.where(or_(contains_ci(Post.title, query), contains_ci(Post.body, query)))

    column = _SORT_COLUMNS[sort_by]
    statement = statement.order_by(column.asc() if order == "asc" else column.desc(), Post.created_at.desc())

    if query:
        # record_search commits, which expires rows already loaded
        post_service.record_search(session, actor, query, count_rows(session, statement))
    return paginate(session, statement, params)


@router.get("/posts/{post_id}", response_model=PostResponse)
def get_post(post_id: str, session: Session = Depends(get_session)):
    return post_service.get_live_post(session, post_id)


@router.post("/posts", response_model=PostResponse, status_code=201)
def create_post(
    request: PostCreateRequest,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    return post_service.create_post(
        session,
        actor,
        community_id=request.community_id,
        title=request.title,
        body=request.body,
        author_display_name=request.author_display_name,
    )


@router.put("/posts/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    request: PostUpdateRequest,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    post = post_service.get_live_post(session, post_id)
    return post_service.update_post(
        session,
        actor,
        post,
        title=request.title,
        body=request.body,
        author_display_name=request.author_display_name,
        reason=request.reason,
    )


@router.delete("/posts/{post_id}", status_code=204)
def delete_post(
    post_id: str,
    reason: Optional[str] = None,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    post = post_service.get_live_post(session, post_id)
    post_service.delete_post(session, actor, post, reason=reason)
    return Response(status_code=204)


# ============================================================================
# Snapshots & Moderation History
# ============================================================================


@router.get("/posts/{post_id}/snapshots", response_model=Page[SnapshotResponse])
def list_snapshots(
    post_id: str,
    order: Literal["asc", "desc"] = "desc",
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    """Pre-edit versions of a post. Visible to its author and to admins."""
    post = post_service.get_live_post(session, post_id)
    ensure_owner_or_admin(actor, post.author_id, "posts")

    column = PostSnapshot.created_at
    statement = (
        select(PostSnapshot)
        .where(PostSnapshot.post_id == post_id)
        .order_by(column.asc() if order == "asc" else column.desc())
    )
    return paginate(session, statement, params)


@router.get("/posts/{post_id}/moderation-logs", response_model=Page[ModerationLogResponse])
def list_moderation_logs(
    post_id: str,
    action_type: Optional[str] = None,
    action_reason: Optional[str] = None,
    from_date: Optional[datetime] = None,
    to_date: Optional[datetime] = None,
    sort: Literal["asc", "desc"] = "desc",
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    # Deleted posts keep their moderation history
    statement = select(PostModerationLog).where(PostModerationLog.post_id == post_id)
    if action_type:
        statement = statement.where(PostModerationLog.action_type == action_type)
    if action_reason:
        statement = statement.where(contains_ci(PostModerationLog.action_reason, action_reason))
    statement = apply_date_range(statement, PostModerationLog.created_at, from_date, to_date)

    column = PostModerationLog.created_at
    statement = statement.order_by(column.asc() if sort == "asc" else column.desc())
    return paginate(session, statement, params)
