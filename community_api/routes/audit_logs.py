"""
Audit Log API Routes
Read-only admin access to the audit trail.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import AuditLog
from community_api.security import Actor, require_admin
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import apply_date_range

router = APIRouter()


class AuditLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    event_type: str
    actor_id: Optional[str] = None
    actor_kind: Optional[str] = None
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    result: str
    details: Optional[str] = None
    created_at: datetime


@router.get("/audit-logs", response_model=Page[AuditLogResponse])
def list_audit_logs(
    event_type: Optional[str] = None,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    actor_id: Optional[str] = None,
    result: Optional[str] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    statement = select(AuditLog)
    if event_type:
        statement = statement.where(AuditLog.event_type == event_type)
    if entity_type:
        statement = statement.where(AuditLog.entity_type == entity_type)
    if entity_id:
        statement = statement.where(AuditLog.entity_id == entity_id)
    if actor_id:
        statement = statement.where(AuditLog.actor_id == actor_id)
    if result:
        statement = statement.where(AuditLog.result == result)
    statement = apply_date_range(statement, AuditLog.created_at, created_from, created_to)
    return paginate(session, statement.order_by(AuditLog.created_at.desc()), params)


@router.get("/audit-logs/{log_id}", response_model=AuditLogResponse)
def get_audit_log(
    log_id: str,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    entry = session.get(AuditLog, log_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Audit log not found")
    return entry
