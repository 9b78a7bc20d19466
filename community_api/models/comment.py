from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class Comment(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    post_id: str = Field(foreign_key="post.id", index=True)
    author_id: str = Field(index=True)
    author_kind: str = Field(default="member")  # member | admin
    parent_id: Optional[str] = Field(default=None, foreign_key="comment.id", index=True)
    content: str
    edited: bool = Field(default=False)
    score: int = Field(default=0)
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow, sa_column_kwargs={"onupdate": utcnow})
    deleted_at: Optional[datetime] = Field(default=None, index=True)
