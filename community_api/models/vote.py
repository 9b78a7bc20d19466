from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class Vote(SQLModel, table=True):
    """A vote on exactly one of post_id / comment_id."""

    id: str = Field(default_factory=new_id, primary_key=True)
    voter_id: str = Field(index=True)
    voter_kind: str = Field(default="member")  # member | admin
    post_id: Optional[str] = Field(default=None, foreign_key="post.id", index=True)
    comment_id: Optional[str] = Field(default=None, foreign_key="comment.id", index=True)
    value: int  # 1 upvote, -1 downvote, 0 neutral
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow, sa_column_kwargs={"onupdate": utcnow})
    deleted_at: Optional[datetime] = Field(default=None, index=True)
