"""Activity schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class ActivityResponse(BaseModel):
    """Activity log entry."""

    id: UUID
    tenant_id: UUID
    user_id: UUID | None
    entity_type: str
    entity_id: UUID
    action: str
    description: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
