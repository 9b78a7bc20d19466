from datetime import datetime

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class CommunityMembership(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("member_id", "community_id", name="uq_membership_member_community"),)

    id: str = Field(default_factory=new_id, primary_key=True)
    member_id: str = Field(foreign_key="member.id", index=True)
    community_id: str = Field(foreign_key="community.id", index=True)
    joined_at: datetime = Field(default_factory=utcnow)
