from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class Guest(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    guest_identifier: str = Field(index=True, unique=True)  # anonymous device/browser id
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = Field(default=None, index=True)
