from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class AuditLog(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    event_type: str = Field(index=True)
    actor_id: Optional[str] = Field(default=None, index=True)
    actor_kind: Optional[str] = None
    entity_type: Optional[str] = Field(default=None, index=True)
    entity_id: Optional[str] = Field(default=None, index=True)
    result: str = Field(default="success")
    details: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, index=True)
