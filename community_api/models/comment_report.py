from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class CommentReport(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    comment_id: str = Field(foreign_key="comment.id", index=True)
    reporter_id: str = Field(index=True)
    reporter_kind: str = Field(default="member")
    admin_id: Optional[str] = Field(default=None, foreign_key="admin.id")
    report_reason: str
    status: str = Field(default="pending", index=True)
    resolution: Optional[str] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow, sa_column_kwargs={"onupdate": utcnow})
    deleted_at: Optional[datetime] = Field(default=None, index=True)
