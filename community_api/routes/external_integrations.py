"""
External Integration API Routes
Admin registry of third-party providers the platform syncs with.
"""

from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import ExternalIntegration
from community_api.security import Actor, require_admin
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import apply_date_range, contains_ci, live_row_or_404
from community_api.utils.timeutil import as_naive_utc, utcnow

router = APIRouter()

IntegrationStatus = Literal["active", "inactive", "error"]

MIN_FILTER_LENGTH = 2


class IntegrationCreateRequest(BaseModel):
    integration_name: str = Field(min_length=1, max_length=100)
    provider_url: str = Field(min_length=1, max_length=500)
    status: IntegrationStatus = "active"
    config_json: Optional[str] = None


class IntegrationUpdateRequest(BaseModel):
    provider_url: Optional[str] = Field(default=None, min_length=1, max_length=500)
    status: Optional[IntegrationStatus] = None
    config_json: Optional[str] = None
    last_successful_sync_at: Optional[datetime] = None


class IntegrationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    integration_name: str
    provider_url: str
    status: str
    config_json: Optional[str] = None
    last_successful_sync_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


@router.post("/external-integrations", response_model=IntegrationResponse, status_code=201)
def create_integration(
    request: IntegrationCreateRequest,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    existing = session.exec(
        select(ExternalIntegration).where(ExternalIntegration.integration_name == request.integration_name)
    ).first()
    if existing:
        raise HTTPException(status_code=409, detail="Integration name already exists")

    integration = ExternalIntegration(**request.model_dump())
    session.add(integration)
    session.commit()
    session.refresh(integration)
    return integration


@router.get("/external-integrations", response_model=Page[IntegrationResponse])
def list_integrations(
    integration_name: Optional[str] = None,
    provider_url: Optional[str] = None,
    status: Optional[IntegrationStatus] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """Substring filters need at least two characters."""
    for label, value in (("integration_name", integration_name), ("provider_url", provider_url)):
        if value is not None and len(value) < MIN_FILTER_LENGTH:
            raise HTTPException(
                status_code=400,
                detail=f"{label} filter must be at least {MIN_FILTER_LENGTH} characters",
            )

    statement = select(ExternalIntegration).where(ExternalIntegration.deleted_at.is_(None))
    if integration_name:
        statement = statement.where(contains_ci(ExternalIntegration.integration_name, integration_name))
    if provider_url:
        statement = statement.where(contains_ci(ExternalIntegration.provider_url, provider_url))
    if status:
        statement = statement.where(ExternalIntegration.status == status)
    statement = apply_date_range(statement, ExternalIntegration.created_at, created_from, created_to)
    return paginate(session, statement.order_by(ExternalIntegration.created_at.desc()), params)


@router.get("/external-integrations/{integration_id}", response_model=IntegrationResponse)
def get_integration(
    integration_id: str,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    return live_row_or_404(session, ExternalIntegration, integration_id, "Integration")


@router.put("/external-integrations/{integration_id}", response_model=IntegrationResponse)
def update_integration(
    integration_id: str,
    request: IntegrationUpdateRequest,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    integration = live_row_or_404(session, ExternalIntegration, integration_id, "Integration")

    update_data = request.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        if isinstance(value, datetime):
            value = as_naive_utc(value)
        setattr(integration, field, value)
    integration.updated_at = utcnow()

    session.add(integration)
    session.commit()
    session.refresh(integration)
    return integration


@router.delete("/external-integrations/{integration_id}", status_code=204)
def delete_integration(
    integration_id: str,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    integration = live_row_or_404(session, ExternalIntegration, integration_id, "Integration")
    integration.deleted_at = utcnow()
    session.add(integration)
    session.commit()
    return Response(status_code=204)
