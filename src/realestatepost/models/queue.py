"""Posting queue models."""

from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator


class QueueStatus(str, Enum):
    """Queue entry status; unrecognized server values map to UNKNOWN."""
    PENDING = "pending"
    POSTED = "posted"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN

    @property
    def label(self) -> str:
        return self.value.capitalize()


class QueueEntry(BaseModel):
    """Item in the server-side posting queue."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: StrictStr = Field(..., description="Queue entry ID (opaque)")
    type: StrictStr = Field(..., description="Content kind, e.g. listing or tip")
    content: StrictStr = Field(..., description="Post text")
    priority: StrictInt = Field(..., description="Posting priority")
    status: QueueStatus = Field(..., description="pending, posted or unknown")
    created_at: StrictStr = Field(..., alias="createdAt", description="Creation time (ISO-8601)")

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value):
        if isinstance(value, QueueStatus):
            return value
        return QueueStatus(str(value).lower())

    @property
    def created_date(self) -> str:
        """Date portion (YYYY-MM-DD) of the creation timestamp."""
        return self.created_at[:10]

    @property
    def created_datetime(self) -> Optional[datetime]:
        try:
            return datetime.fromisoformat(self.created_at.replace("Z", "+00:00"))
        except ValueError:
            return None


class QueueSnapshot(BaseModel):
    """Queue contents plus today's posting counters."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    queue: list[QueueEntry] = Field(..., description="Entries in server order")
    daily_post_count: StrictInt = Field(..., alias="dailyPostCount", description="Posts published today")
    remaining_posts_today: StrictInt = Field(
        ...,
        alias="remainingPostsToday",
        description="Posts still allowed today"
    )

    @property
    def pending_count(self) -> int:
        return sum(1 for entry in self.queue if entry.status is QueueStatus.PENDING)
