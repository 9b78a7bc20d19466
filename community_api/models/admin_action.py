from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class AdminAction(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    admin_id: str = Field(foreign_key="admin.id", index=True)
    action_type: str = Field(index=True)
    target_entity: str
    target_entity_id: Optional[str] = None
    reason: Optional[str] = None
    result: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow, sa_column_kwargs={"onupdate": utcnow})
    deleted_at: Optional[datetime] = Field(default=None, index=True)
