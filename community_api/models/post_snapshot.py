from datetime import datetime

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class PostSnapshot(SQLModel, table=True):
    """Copy of a post's content taken just before an edit."""

    id: str = Field(default_factory=new_id, primary_key=True)
    post_id: str = Field(foreign_key="post.id", index=True)
    editor_id: str
    editor_kind: str = Field(default="member")
    title: str
    body: str
    created_at: datetime = Field(default_factory=utcnow)
