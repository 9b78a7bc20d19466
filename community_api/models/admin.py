from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class Admin(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
    display_name: Optional[str] = None
    is_active: bool = Field(default=True)
    is_super_admin: bool = Field(default=False)
    last_login_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow, sa_column_kwargs={"onupdate": utcnow})
    deleted_at: Optional[datetime] = Field(default=None, index=True)
