from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class BannedWord(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    phrase: str = Field(index=True, unique=True)
    category: Optional[str] = Field(default=None, index=True)
    enabled: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow, sa_column_kwargs={"onupdate": utcnow})
    deleted_at: Optional[datetime] = Field(default=None, index=True)
