"""Live update notification schemas."""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from evalboard.models.enums import NotificationKind
from evalboard.models.base import utc_now


class NotificationEvent(BaseModel):
    """One change to the teacher or evaluation collections."""
    id: str = Field(..., description="Stable event id; used to drop duplicates")
    kind: NotificationKind
    message: str
    teacher_id: Optional[int] = None
    evaluation_id: Optional[int] = None
    created_at: datetime = Field(default_factory=utc_now)
    read: bool = False


class NotificationListResponse(BaseModel):
    """Newest first, capped history."""
    items: List[NotificationEvent]
    unread_count: int
