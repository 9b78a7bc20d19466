"""
Community API Routes
Public browsing; members create communities and owners (or admins) manage them.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import Category, Community
from community_api.security import Actor, require_member, require_member_or_admin
from community_api.services.audit_service import record_event
from community_api.services.ownership import ensure_owner_or_admin
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import contains_ci, live_row_or_404
from community_api.utils.timeutil import utcnow

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class CommunityCreateRequest(BaseModel):
    name: str = Field(min_length=3, max_length=50)
    category_id: str
    display_title: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
    logo_uri: Optional[str] = None
    banner_uri: Optional[str] = None


class CommunityUpdateRequest(BaseModel):
    category_id: Optional[str] = None
    display_title: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
    logo_uri: Optional[str] = None
    banner_uri: Optional[str] = None


class CommunityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    category_id: str
    owner_id: str
    name: str
    display_title: Optional[str] = None
    description: Optional[str] = None
    logo_uri: Optional[str] = None
    banner_uri: Optional[str] = None
    created_at: datetime
    updated_at: datetime


def _require_category(session: Session, category_id: str) -> Category:
    category = session.get(Category, category_id)
    if not category or category.deleted_at is not None:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


# ============================================================================
# Community Endpoints
# ============================================================================


@router.get("/communities", response_model=Page[CommunityResponse])
def list_communities(
    name: Optional[str] = None,
    category_id: Optional[str] = None,
    owner_id: Optional[str] = None,
    params: PageParams = Depends(page_params),
    session: Session = Depends(get_session),
):
    """Live communities, newest first."""
    query = select(Community).where(Community.deleted_at.is_(None))
    if name:
        query = query.where(contains_ci(Community.name, name))
    if category_id:
        query = query.where(Community.category_id == category_id)
    if owner_id:
        query = query.where(Community.owner_id == owner_id)
    return paginate(session, query.order_by(Community.created_at.desc()), params)


@router.get("/communities/{community_id}", response_model=CommunityResponse)
def get_community(community_id: str, session: Session = Depends(get_session)):
    return live_row_or_404(session, Community, community_id, "Community")


@router.post("/communities", response_model=CommunityResponse, status_code=201)
def create_community(
    request: CommunityCreateRequest,
    actor: Actor = Depends(require_member),
    session: Session = Depends(get_session),
):
    """
    Create a community owned by the calling member.

    Constraints:
    - name must be unique (409), including names of deleted communities
    - category must exist (404)
    """
    if session.exec(select(Community).where(Community.name == request.name)).first():
        raise HTTPException(status_code=409, detail="Community name already exists")
    _require_category(session, request.category_id)

    community = Community(owner_id=actor.id, **request.model_dump())
    session.add(community)
    session.commit()
    session.refresh(community)
    return community


@router.put("/communities/{community_id}", response_model=CommunityResponse)
def update_community(
    community_id: str,
    request: CommunityUpdateRequest,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    community = live_row_or_404(session, Community, community_id, "Community")
    ensure_owner_or_admin(actor, community.owner_id, "communities")

    update_data = request.model_dump(exclude_unset=True)
    if update_data.get("category_id") is not None:
        _require_category(session, update_data["category_id"])
    for field, value in update_data.items():
        if field == "category_id" and value is None:
            continue
        setattr(community, field, value)

    community.updated_at = utcnow()
    session.add(community)
    session.commit()
    session.refresh(community)
    return community


@router.delete("/communities/{community_id}", status_code=204)
def delete_community(
    community_id: str,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    community = live_row_or_404(session, Community, community_id, "Community")
    ensure_owner_or_admin(actor, community.owner_id, "communities")

    community.deleted_at = utcnow()
    session.add(community)
    if actor.is_admin:
        record_event(
            session,
            "community.moderate.delete",
            actor_id=actor.id,
            actor_kind=actor.kind,
            entity_type="community",
            entity_id=community.id,
        )
    session.commit()
    return Response(status_code=204)
