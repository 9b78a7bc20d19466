"""
Comment API Routes
Threaded comments on posts. Deleting a comment removes its whole reply thread.
"""

from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import Comment
from community_api.security import Actor, require_member_or_admin
from community_api.services import comment_service
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import apply_date_range, contains_ci

router = APIRouter()


class CommentCreateRequest(BaseModel):
    post_id: str
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[str] = None


class CommentUpdateRequest(BaseModel):
    content: str = Field(min_length=1, max_length=10000)


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    post_id: str
    author_id: str
    author_kind: str
    parent_id: Optional[str] = None
    content: str
    edited: bool
    score: int
    created_at: datetime
    updated_at: datetime


@router.get("/comments", response_model=Page[CommentResponse])
def list_comments(
    post_id: Optional[str] = None,
    author_id: Optional[str] = None,
    query: Optional[str] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    sort_by: Literal["created_at", "created_at_asc", "score"] = "created_at",
    params: PageParams = Depends(page_params),
    session: Session = Depends(get_session),
):
    statement = select(Comment).where(Comment.deleted_at.is_(None))
    if post_id:
        statement = statement.where(Comment.post_id == post_id)
    if author_id:
        statement = statement.where(Comment.author_id == author_id)
    if query:
        statement = statement.where(contains_ci(Comment.content, query))
    statement = apply_date_range(statement, Comment.created_at, created_from, created_to)

    if sort_by == "score":
        statement = statement.order_by(Comment.score.desc(), Comment.created_at.desc())
    elif sort_by == "created_at_asc":
        statement = statement.order_by(Comment.created_at.asc())
    else:
        statement = statement.order_by(Comment.created_at.desc())
    return paginate(session, statement, params)


@router.get("/comments/{comment_id}", response_model=CommentResponse)
def get_comment(comment_id: str, session: Session = Depends(get_session)):
    return comment_service.get_live_comment(session, comment_id)


@router.post("/comments", response_model=CommentResponse, status_code=201)
def create_comment(
    request: CommentCreateRequest,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    return comment_service.create_comment(
        session, actor, post_id=request.post_id, content=request.content, parent_id=request.parent_id
    )


@router.put("/comments/{comment_id}", response_model=CommentResponse)
def update_comment(
    comment_id: str,
    request: CommentUpdateRequest,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    comment = comment_service.get_live_comment(session, comment_id)
    return comment_service.update_comment(session, actor, comment, request.content)


@router.delete("/comments/{comment_id}", status_code=204)
def delete_comment(
    comment_id: str,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    comment = comment_service.get_live_comment(session, comment_id)
    comment_service.delete_comment(session, actor, comment)
    return Response(status_code=204)
