from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class Community(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    category_id: str = Field(foreign_key="category.id", index=True)
    owner_id: str = Field(foreign_key="member.id", index=True)
    name: str = Field(index=True, unique=True)
    display_title: Optional[str] = None
    description: Optional[str] = None
    logo_uri: Optional[str] = None
    banner_uri: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow, sa_column_kwargs={"onupdate": utcnow})
    deleted_at: Optional[datetime] = Field(default=None, index=True)
