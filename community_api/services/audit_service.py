"""
Audit trail for security-relevant events.

Rows are added to the caller's session and persisted with the caller's
commit, so an audit entry never outlives a rolled-back change.
"""
import logging
from typing import Optional

from sqlmodel import Session

from community_api.models import AuditLog

logger = logging.getLogger(__name__)


def record_event(
    session: Session,
    event_type: str,
    actor_id: Optional[str] = None,
    actor_kind: Optional[str] = None,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    result: str = "success",
    details: Optional[str] = None,
) -> AuditLog:
    entry = AuditLog(
        event_type=event_type,
        actor_id=actor_id,
        actor_kind=actor_kind,
        entity_type=entity_type,
        entity_id=entity_id,
        result=result,
        details=details,
    )
    session.add(entry)
    logger.info(
        "audit event=%s actor=%s:%s entity=%s:%s result=%s",
        event_type,
        actor_kind,
        actor_id,
        entity_type,
        entity_id,
        result,
    )
    return entry
