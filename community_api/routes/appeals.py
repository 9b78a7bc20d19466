"""
Appeal API Routes
Members contest admin actions; admins decide.
"""

from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import AdminAction, Appeal
from community_api.security import Actor, require_admin, require_member, require_member_or_admin
from community_api.services.audit_service import record_event
from community_api.services.ownership import ensure_owner_or_admin
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import apply_date_range, live_row_or_404
from community_api.utils.timeutil import utcnow

router = APIRouter()

AppealStatus = Literal["pending", "approved", "rejected"]


class AppealCreateRequest(BaseModel):
    admin_action_id: str
    appeal_reason: str = Field(min_length=1, max_length=5000)


class AppealUpdateRequest(BaseModel):
    appeal_status: Optional[AppealStatus] = None
    decision_reason: Optional[str] = None


class AppealResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    member_id: str
    admin_action_id: str
    admin_id: Optional[str] = None
    appeal_reason: str
    appeal_status: str
    decision_reason: Optional[str] = None
    decided_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


@router.post("/appeals", response_model=AppealResponse, status_code=201)
def create_appeal(
    request: AppealCreateRequest,
    actor: Actor = Depends(require_member),
    session: Session = Depends(get_session),
):
    live_row_or_404(session, AdminAction, request.admin_action_id, "Admin action")

    appeal = Appeal(
        member_id=actor.id,
        admin_action_id=request.admin_action_id,
        appeal_reason=request.appeal_reason,
    )
    session.add(appeal)
    session.commit()
    session.refresh(appeal)
    return appeal


@router.get("/appeals/me", response_model=Page[AppealResponse])
def list_my_appeals(
    appeal_status: Optional[AppealStatus] = None,
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_member),
    session: Session = Depends(get_session),
):
    statement = select(Appeal).where(Appeal.member_id == actor.id, Appeal.deleted_at.is_(None))
    if appeal_status:
        statement = statement.where(Appeal.appeal_status == appeal_status)
    return paginate(session, statement.order_by(Appeal.created_at.desc()), params)


@router.get("/appeals", response_model=Page[AppealResponse])
def list_appeals(
    member_id: Optional[str] = None,
    admin_id: Optional[str] = None,
    admin_action_id: Optional[str] = None,
    appeal_status: Optional[AppealStatus] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    decided_from: Optional[datetime] = None,
    decided_to: Optional[datetime] = None,
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    statement = select(Appeal).where(Appeal.deleted_at.is_(None))
    if member_id:
        statement = statement.where(Appeal.member_id == member_id)
    if admin_id:
        statement = statement.where(Appeal.admin_id == admin_id)
    if admin_action_id:
        statement = statement.where(Appeal.admin_action_id == admin_action_id)
    if appeal_status:
        statement = statement.where(Appeal.appeal_status == appeal_status)
    statement = apply_date_range(statement, Appeal.created_at, created_from, created_to)
    statement = apply_date_range(statement, Appeal.decided_at, decided_from, decided_to)
    return paginate(session, statement.order_by(Appeal.created_at.desc()), params)


@router.get("/appeals/{appeal_id}", response_model=AppealResponse)
def get_appeal(
    appeal_id: str,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    appeal = live_row_or_404(session, Appeal, appeal_id, "Appeal")
    ensure_owner_or_admin(actor, appeal.member_id, "appeals")
    return appeal


@router.put("/appeals/{appeal_id}", response_model=AppealResponse)
def decide_appeal(
    appeal_id: str,
    request: AppealUpdateRequest,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """Record a decision; the deciding admin and time are stamped."""
    appeal = live_row_or_404(session, Appeal, appeal_id, "Appeal")

    if request.appeal_status is not None:
        appeal.appeal_status = request.appeal_status
    if request.decision_reason is not None:
        appeal.decision_reason = request.decision_reason
    appeal.admin_id = actor.id
    appeal.decided_at = utcnow() if appeal.appeal_status != "pending" else None
    appeal.updated_at = utcnow()

    session.add(appeal)
    record_event(
        session,
        "appeal.decide",
        actor_id=actor.id,
        actor_kind=actor.kind,
        entity_type="appeal",
        entity_id=appeal.id,
        details=appeal.appeal_status,
    )
    session.commit()
    session.refresh(appeal)
    return appeal
