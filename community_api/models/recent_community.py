from datetime import datetime

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class RecentCommunity(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    member_id: str = Field(foreign_key="member.id", index=True)
    community_id: str = Field(foreign_key="community.id", index=True)
    recent_rank: int  # 1 = most recently visited
    last_activity_at: datetime = Field(default_factory=utcnow)
