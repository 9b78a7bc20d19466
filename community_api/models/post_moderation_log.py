from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class PostModerationLog(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    post_id: str = Field(foreign_key="post.id", index=True)
    admin_id: str = Field(foreign_key="admin.id", index=True)
    action_type: str  # edit | delete
    action_reason: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
