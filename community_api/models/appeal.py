from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class Appeal(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    member_id: str = Field(foreign_key="member.id", index=True)
    admin_action_id: str = Field(foreign_key="adminaction.id", index=True)
    admin_id: Optional[str] = Field(default=None, foreign_key="admin.id", index=True)  # deciding admin
    appeal_reason: str
    appeal_status: str = Field(default="pending", index=True)  # pending | approved | rejected
    decision_reason: Optional[str] = None
    decided_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow, sa_column_kwargs={"onupdate": utcnow})
    deleted_at: Optional[datetime] = Field(default=None, index=True)
