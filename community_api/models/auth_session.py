from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class AuthSession(SQLModel, table=True):
    """One issued token pair; exactly one of the owner ids is set."""

    id: str = Field(default_factory=new_id, primary_key=True)
    member_id: Optional[str] = Field(default=None, foreign_key="member.id", index=True)
    admin_id: Optional[str] = Field(default=None, foreign_key="admin.id", index=True)
    guest_id: Optional[str] = Field(default=None, foreign_key="guest.id", index=True)
    jwt_token: str = Field(index=True)
    refresh_token: str = Field(index=True)
    device_fingerprint: Optional[str] = None
    expires_at: datetime  # end of the refresh window
    invalidated_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None
