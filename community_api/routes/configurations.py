"""
Configuration API Routes
Admin-managed key/value settings. Every change is written to the audit log.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import or_
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import Configuration
from community_api.security import Actor, require_admin
from community_api.services.audit_service import record_event
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import contains_ci, live_row_or_404
from community_api.utils.timeutil import utcnow

router = APIRouter()


class ConfigurationCreateRequest(BaseModel):
    key: str = Field(min_length=1, max_length=100)
    value: str
    description: Optional[str] = None


class ConfigurationUpdateRequest(BaseModel):
    value: Optional[str] = None
    description: Optional[str] = None


class ConfigurationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    key: str
    value: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


def _audit(session: Session, actor: Actor, event_type: str, configuration: Configuration) -> None:
    record_event(
        session,
        event_type,
        actor_id=actor.id,
        actor_kind=actor.kind,
        entity_type="configuration",
        entity_id=configuration.id,
        details=configuration.key,
    )


@router.post("/configurations", response_model=ConfigurationResponse, status_code=201)
def create_configuration(
    request: ConfigurationCreateRequest,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    if session.exec(select(Configuration).where(Configuration.key == request.key)).first():
        raise HTTPException(status_code=409, detail="Configuration key already exists")

    configuration = Configuration(**request.model_dump())
    session.add(configuration)
    session.flush()
    _audit(session, actor, "configuration.create", configuration)
    session.commit()
    session.refresh(configuration)
    return configuration


@router.get("/configurations", response_model=Page[ConfigurationResponse])
def list_configurations(
    key: Optional[str] = None,
    q: Optional[str] = None,
    include_deleted: bool = False,
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    statement = select(Configuration)
    if not include_deleted:
        statement = statement.where(Configuration.deleted_at.is_(None))
    if key:
        statement = statement.where(Configuration.key == key)
    if q:
        statement = statement.where(
            or_(
                contains_ci(Configuration.key, q),
                contains_ci(Configuration.value, q),
                contains_ci(Configuration.description, q),
            )
        )
    return paginate(session, statement.order_by(Configuration.key), params)


@router.get("/configurations/{configuration_id}", response_model=ConfigurationResponse)
def get_configuration(
    configuration_id: str,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    return live_row_or_404(session, Configuration, configuration_id, "Configuration")


@router.put("/configurations/{configuration_id}", response_model=ConfigurationResponse)
def update_configuration(
    configuration_id: str,
    request: ConfigurationUpdateRequest,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    configuration = live_row_or_404(session, Configuration, configuration_id, "Configuration")

    update_data = request.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(configuration, field, value)
    configuration.updated_at = utcnow()

    session.add(configuration)
    _audit(session, actor, "configuration.update", configuration)
    session.commit()
    session.refresh(configuration)
    return configuration


@router.delete("/configurations/{configuration_id}", status_code=204)
def delete_configuration(
    configuration_id: str,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    configuration = live_row_or_404(session, Configuration, configuration_id, "Configuration")
    configuration.deleted_at = utcnow()
    session.add(configuration)
    _audit(session, actor, "configuration.delete", configuration)
    session.commit()
    return Response(status_code=204)
