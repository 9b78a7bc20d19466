"""
Category API Routes
Public browsing plus admin CRUD. Category codes are immutable.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import or_
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import Category
from community_api.security import Actor, require_admin
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import contains_ci, live_row_or_404
from community_api.utils.timeutil import utcnow

router = APIRouter()


class CategoryCreateRequest(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None


class CategoryUpdateRequest(BaseModel):
    code: Optional[str] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    code: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


def _name_taken(session: Session, name: str, exclude_id: Optional[str] = None) -> bool:
    query = select(Category).where(Category.name == name)
    if exclude_id:
        query = query.where(Category.id != exclude_id)
    return session.exec(query).first() is not None


@router.get("/categories", response_model=Page[CategoryResponse])
def list_categories(
    search: Optional[str] = None,
    params: PageParams = Depends(page_params),
    session: Session = Depends(get_session),
):
    query = select(Category).where(Category.deleted_at.is_(None))
    if search:
        query = query.where(or_(contains_ci(Category.name, search), contains_ci(Category.code, search)))
    return paginate(session, query.order_by(Category.name), params)


@router.get("/categories/{category_id}", response_model=CategoryResponse)
def get_category(category_id: str, session: Session = Depends(get_session)):
    return live_row_or_404(session, Category, category_id, "Category")


@router.post("/categories", response_model=CategoryResponse, status_code=201)
def create_category(
    request: CategoryCreateRequest,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    # Unique columns: soft-deleted rows still hold their code and name
    if session.exec(select(Category).where(Category.code == request.code)).first():
        raise HTTPException(status_code=409, detail="Category code already exists")
    if _name_taken(session, request.name):
        raise HTTPException(status_code=409, detail="Category name already exists")

    category = Category(**request.model_dump())
    session.add(category)
    session.commit()
    session.refresh(category)
    return category


@router.put("/categories/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    request: CategoryUpdateRequest,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    category = live_row_or_404(session, Category, category_id, "Category")

    if request.code is not None and request.code != category.code:
        raise HTTPException(status_code=400, detail="Category code cannot be changed")
    if request.name is not None and request.name != category.name:
        if _name_taken(session, request.name, exclude_id=category.id):
            raise HTTPException(status_code=409, detail="Category name already exists")
        category.name = request.name
    if request.description is not None:
        category.description = request.description

    category.updated_at = utcnow()
    session.add(category)
    session.commit()
    session.refresh(category)
    return category


@router.delete("/categories/{category_id}", status_code=204)
def delete_category(
    category_id: str,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    category = live_row_or_404(session, Category, category_id, "Category")
    category.deleted_at = utcnow()
    session.add(category)
    session.commit()
    return Response(status_code=204)
