from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class PostReport(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    post_id: str = Field(foreign_key="post.id", index=True)
    reporter_id: str = Field(index=True)
    reporter_kind: str = Field(default="member")
    admin_id: Optional[str] = Field(default=None, foreign_key="admin.id")  # resolving admin
    report_type: str
    reason: Optional[str] = None
    status: str = Field(default="pending", index=True)  # pending | reviewed | resolved | dismissed
    resolution_notes: Optional[str] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow, sa_column_kwargs={"onupdate": utcnow})
    deleted_at: Optional[datetime] = Field(default=None, index=True)
