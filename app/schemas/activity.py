from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.activity import ActivityStatus


class ActivityStatusIn(str, Enum):
    """Statuses an admin may set; pending is only ever the initial state."""
    APPROVED = "approved"
    REJECTED = "rejected"


class ActivityOut(BaseModel):
    id: int
    student_id: int
    student_name: str
    roll_number: str

    title: str
    type: str
    date: date
    description: Optional[str] = None

    file_url: Optional[str] = None
    file_name: Optional[str] = None

    status: ActivityStatus
    submitted_at: datetime
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None

    # base value of this type in the point table, earned once approved
    points: int = 0

    model_config = ConfigDict(from_attributes=True)


class StatusUpdateIn(BaseModel):
    status: ActivityStatusIn


class BulkStatusIn(BaseModel):
    ids: List[int] = Field(..., min_length=1, max_length=500)
    status: ActivityStatusIn


class BulkStatusOut(BaseModel):
    status: ActivityStatusIn
    requested: int
    updated: int
    failed_ids: List[int] = []
