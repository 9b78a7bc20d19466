from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class SearchLog(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    member_id: Optional[str] = Field(default=None, foreign_key="member.id", index=True)
    admin_id: Optional[str] = Field(default=None, foreign_key="admin.id", index=True)
    search_query: str
    target_scope: str = Field(default="posts", index=True)
    result_count: int = Field(default=0)
    created_at: datetime = Field(default_factory=utcnow, index=True)
