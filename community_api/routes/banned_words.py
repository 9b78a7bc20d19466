"""
Banned Word API Routes
Admin-managed phrases that posts and comments may not contain.
"""

from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import BannedWord
from community_api.security import Actor, require_admin
from community_api.services.audit_service import record_event
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import contains_ci, live_row_or_404
from community_api.utils.timeutil import utcnow

router = APIRouter()


class BannedWordCreateRequest(BaseModel):
    phrase: str = Field(min_length=1, max_length=200)
    category: Optional[str] = None
    enabled: bool = True


class BannedWordUpdateRequest(BaseModel):
    phrase: Optional[str] = Field(default=None, min_length=1, max_length=200)
    category: Optional[str] = None
    enabled: Optional[bool] = None


class BannedWordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    phrase: str
    category: Optional[str] = None
    enabled: bool
    created_at: datetime
    updated_at: datetime


_ORDER_COLUMNS = {
    "created_at": BannedWord.created_at,
    "phrase": BannedWord.phrase,
    "category": BannedWord.category,
}


def _phrase_taken(session: Session, phrase: str, exclude_id: Optional[str] = None) -> bool:
    query = select(BannedWord).where(BannedWord.phrase == phrase)
    if exclude_id:
        query = query.where(BannedWord.id != exclude_id)
    return session.exec(query).first() is not None


@router.post("/banned-words", response_model=BannedWordResponse, status_code=201)
def create_banned_word(
    request: BannedWordCreateRequest,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    if _phrase_taken(session, request.phrase):
        raise HTTPException(status_code=409, detail="Phrase is already banned")

    banned = BannedWord(**request.model_dump())
    session.add(banned)
    session.flush()
    record_event(session, "banned_word.create", actor_id=actor.id, actor_kind=actor.kind, entity_type="banned_word", entity_id=banned.id)
    session.commit()
    session.refresh(banned)
    return banned


@router.get("/banned-words", response_model=Page[BannedWordResponse])
def list_banned_words(
    enabled: Optional[bool] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
    order_by: Literal["created_at", "phrase", "category"] = "created_at",
    direction: Literal["asc", "desc"] = "desc",
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    statement = select(BannedWord).where(BannedWord.deleted_at.is_(None))
    if enabled is not None:
        statement = statement.where(BannedWord.enabled == enabled)
    if category:
        statement = statement.where(BannedWord.category == category)
    if search:
        statement = statement.where(contains_ci(BannedWord.phrase, search))

    column = _ORDER_COLUMNS[order_by]
    statement = statement.order_by(column.asc() if direction == "asc" else column.desc())
    return paginate(session, statement, params)


@router.get("/banned-words/{banned_word_id}", response_model=BannedWordResponse)
def get_banned_word(
    banned_word_id: str,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    return live_row_or_404(session, BannedWord, banned_word_id, "Banned word")


@router.put("/banned-words/{banned_word_id}", response_model=BannedWordResponse)
def update_banned_word(
    banned_word_id: str,
    request: BannedWordUpdateRequest,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    banned = live_row_or_404(session, BannedWord, banned_word_id, "Banned word")

    if request.phrase is not None and request.phrase != banned.phrase:
        if _phrase_taken(session, request.phrase, exclude_id=banned.id):
            raise HTTPException(status_code=409, detail="Phrase is already banned")

    update_data = request.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(banned, field, value)
    banned.updated_at = utcnow()

    session.add(banned)
    record_event(session, "banned_word.update", actor_id=actor.id, actor_kind=actor.kind, entity_type="banned_word", entity_id=banned.id)
    session.commit()
    session.refresh(banned)
    return banned


@router.delete("/banned-words/{banned_word_id}", status_code=204)
def delete_banned_word(
    banned_word_id: str,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    banned = live_row_or_404(session, BannedWord, banned_word_id, "Banned word")
    banned.deleted_at = utcnow()
    session.add(banned)
    record_event(session, "banned_word.delete", actor_id=actor.id, actor_kind=actor.kind, entity_type="banned_word", entity_id=banned.id)
    session.commit()
    return Response(status_code=204)
