"""
Search Log API Routes
Admin view of recorded search queries.
"""

from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import SearchLog
from community_api.security import Actor, require_admin
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import apply_date_range, contains_ci

router = APIRouter()


class SearchLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    member_id: Optional[str] = None
    admin_id: Optional[str] = None
    search_query: str
    target_scope: str
    result_count: int
    created_at: datetime


@router.get("/search-logs", response_model=Page[SearchLogResponse])
def list_search_logs(
    search_query: Optional[str] = None,
    member_id: Optional[str] = None,
    admin_id: Optional[str] = None,
    target_scope: Optional[str] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    sort: Literal["asc", "desc"] = "desc",
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    if search_query is not None and len(search_query) < 2:
        raise HTTPException(status_code=400, detail="search_query filter must be at least 2 characters")

    statement = select(SearchLog)
    if search_query:
        statement = statement.where(contains_ci(SearchLog.search_query, search_query))
    if member_id:
        statement = statement.where(SearchLog.member_id == member_id)
    if admin_id:
        statement = statement.where(SearchLog.admin_id == admin_id)
    if target_scope:
        statement = statement.where(SearchLog.target_scope == target_scope)
    statement = apply_date_range(statement, SearchLog.created_at, created_from, created_to)

    column = SearchLog.created_at
    statement = statement.order_by(column.asc() if sort == "asc" else column.desc())
    return paginate(session, statement, params)
