"""
Admin Action API Routes
A record of moderation decisions that members can appeal against.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import AdminAction
from community_api.security import Actor, require_admin, require_member_or_admin
from community_api.services.audit_service import record_event
from community_api.services.ownership import ensure_owner
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import apply_date_range, live_row_or_404
from community_api.utils.timeutil import utcnow

router = APIRouter()


class AdminActionCreateRequest(BaseModel):
    action_type: str = Field(min_length=1, max_length=50)
    target_entity: str = Field(min_length=1, max_length=50)
    target_entity_id: Optional[str] = None
    reason: Optional[str] = None
    result: Optional[str] = None


class AdminActionUpdateRequest(BaseModel):
    reason: Optional[str] = None
    result: Optional[str] = None


class AdminActionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    admin_id: str
    action_type: str
    target_entity: str
    target_entity_id: Optional[str] = None
    reason: Optional[str] = None
    result: Optional[str] = None
    created_at: datetime
    updated_at: datetime


@router.post("/admin-actions", response_model=AdminActionResponse, status_code=201)
def create_admin_action(
    request: AdminActionCreateRequest,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    action = AdminAction(admin_id=actor.id, **request.model_dump())
    session.add(action)
    session.flush()
    record_event(
        session,
        f"admin_action.{action.action_type}",
        actor_id=actor.id,
        actor_kind=actor.kind,
        entity_type=action.target_entity,
        entity_id=action.target_entity_id,
    )
    session.commit()
    session.refresh(action)
    return action


@router.get("/admin-actions", response_model=Page[AdminActionResponse])
def list_admin_actions(
    admin_id: Optional[str] = None,
    action_type: Optional[str] = None,
    target_entity: Optional[str] = None,
    target_entity_id: Optional[str] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    statement = select(AdminAction).where(AdminAction.deleted_at.is_(None))
    if admin_id:
        statement = statement.where(AdminAction.admin_id == admin_id)
    if action_type:
        statement = statement.where(AdminAction.action_type == action_type)
    if target_entity:
        statement = statement.where(AdminAction.target_entity == target_entity)
    if target_entity_id:
        statement = statement.where(AdminAction.target_entity_id == target_entity_id)
    statement = apply_date_range(statement, AdminAction.created_at, created_from, created_to)
    return paginate(session, statement.order_by(AdminAction.created_at.desc()), params)


@router.get("/admin-actions/{action_id}", response_model=AdminActionResponse)
def get_admin_action(
    action_id: str,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    # Members may look up an action to appeal it
    return live_row_or_404(session, AdminAction, action_id, "Admin action")


@router.put("/admin-actions/{action_id}", response_model=AdminActionResponse)
def update_admin_action(
    action_id: str,
    request: AdminActionUpdateRequest,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    action = live_row_or_404(session, AdminAction, action_id, "Admin action")
    ensure_owner(actor, action.admin_id, "admin actions")

    update_data = request.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(action, field, value)
    action.updated_at = utcnow()

    session.add(action)
    session.commit()
    session.refresh(action)
    return action


@router.delete("/admin-actions/{action_id}", status_code=204)
def delete_admin_action(
    action_id: str,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    action = live_row_or_404(session, AdminAction, action_id, "Admin action")
    ensure_owner(actor, action.admin_id, "admin actions")

    action.deleted_at = utcnow()
    session.add(action)
    session.commit()
    return Response(status_code=204)
