"""
Data Export API Routes
Members request exports of their data; admins track and update them.
"""

from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import DataExportLog
from community_api.security import Actor, require_admin, require_member
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import apply_date_range, live_row_or_404
from community_api.utils.timeutil import utcnow

router = APIRouter()

ExportFormat = Literal["json", "csv"]
ExportStatus = Literal["pending", "completed", "failed"]


class DataExportCreateRequest(BaseModel):
    export_type: str = Field(min_length=1, max_length=50)
    export_format: ExportFormat = "json"


class DataExportUpdateRequest(BaseModel):
    status: ExportStatus


class DataExportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    member_id: str
    export_type: str
    export_format: str
    status: str
    requested_ip: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


@router.post("/data-exports", response_model=DataExportResponse, status_code=201)
def request_data_export(
    request: DataExportCreateRequest,
    http_request: Request,
    actor: Actor = Depends(require_member),
    session: Session = Depends(get_session),
):
    export = DataExportLog(
        member_id=actor.id,
        export_type=request.export_type,
        export_format=request.export_format,
        requested_ip=http_request.client.host if http_request.client else None,
    )
    session.add(export)
    session.commit()
    session.refresh(export)
    return export


@router.get("/data-exports/me", response_model=Page[DataExportResponse])
def list_my_data_exports(
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_member),
    session: Session = Depends(get_session),
):
    statement = (
        select(DataExportLog)
        .where(DataExportLog.member_id == actor.id, DataExportLog.deleted_at.is_(None))
        .order_by(DataExportLog.created_at.desc())
    )
    return paginate(session, statement, params)


@router.get("/data-exports", response_model=Page[DataExportResponse])
def list_data_exports(
    member_id: Optional[str] = None,
    status: Optional[ExportStatus] = None,
    export_type: Optional[str] = None,
    export_format: Optional[ExportFormat] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    sort: Literal["asc", "desc"] = "desc",
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    statement = select(DataExportLog).where(DataExportLog.deleted_at.is_(None))
    if member_id:
        statement = statement.where(DataExportLog.member_id == member_id)
    if status:
        statement = statement.where(DataExportLog.status == status)
    if export_type:
        statement = statement.where(DataExportLog.export_type == export_type)
    if export_format:
        statement = statement.where(DataExportLog.export_format == export_format)
    statement = apply_date_range(statement, DataExportLog.created_at, created_from, created_to)

    column = DataExportLog.created_at
    statement = statement.order_by(column.asc() if sort == "asc" else column.desc())
    return paginate(session, statement, params)


@router.put("/data-exports/{export_id}", response_model=DataExportResponse)
def update_data_export(
    export_id: str,
    request: DataExportUpdateRequest,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    export = live_row_or_404(session, DataExportLog, export_id, "Data export")
    export.status = request.status
    export.completed_at = utcnow() if request.status == "completed" else None
    export.updated_at = utcnow()

    session.add(export)
    session.commit()
    session.refresh(export)
    return export
