from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from community_api.utils.ids import new_id
from community_api.utils.timeutil import utcnow


class ExternalIntegration(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    integration_name: str = Field(index=True, unique=True)
    provider_url: str
    status: str = Field(default="active", index=True)
    config_json: Optional[str] = None  # opaque provider config, stored as text
    last_successful_sync_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow, sa_column_kwargs={"onupdate": utcnow})
    deleted_at: Optional[datetime] = Field(default=None, index=True)
