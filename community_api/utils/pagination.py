"""
Page/limit pagination shared by every list endpoint.

Responses use the shape::

    {"pagination": {"current", "limit", "records", "pages"}, "data": [...]}
"""
import math
from dataclasses import dataclass
from typing import Generic, List, TypeVar

from fastapi import Query
from pydantic import BaseModel
from sqlmodel import Session

from community_api.utils.sql import count_rows

T = TypeVar("T")

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class Pagination(BaseModel):
    current: int
    limit: int
    records: int
    pages: int


class Page(BaseModel, Generic[T]):
    pagination: Pagination
    data: List[T]


@dataclass
class PageParams:
    page: int = 1
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> PageParams:
    return PageParams(page=page, limit=limit)


def build_pagination(params: PageParams, records: int) -> Pagination:
    return Pagination(
        current=params.page,
        limit=params.limit,
        records=records,
        pages=math.ceil(records / params.limit) if records else 0,
    )


def paginate(session: Session, statement, params: PageParams) -> dict:
    """Run ``statement`` for one page and count the full result set.

    Returns a dict ready to be validated into ``Page[...]``; rows are left as
    ORM objects so response models can read them with ``from_attributes``.
    """
    records = count_rows(session, statement)
    rows = session.exec(statement.offset(params.offset).limit(params.limit)).all()
    return {"pagination": build_pagination(params, records), "data": rows}
