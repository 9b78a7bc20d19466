from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id


class CommunityRule(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("community_id", "rule_index", name="uq_community_rule_index"),)

    id: str = Field(default_factory=new_id, primary_key=True)
    community_id: str = Field(foreign_key="community.id", index=True)
    rule_index: int  # 1-based display order, kept contiguous
    rule_line: str
