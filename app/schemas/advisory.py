from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, validator
from app.schemas.base import BaseSchema, EmptyState, as_utc

class AdvisoryStatus(str, Enum):
    pending = "Pending"
    in_progress = "In Progress"
    completed = "Completed"
    urgent = "Urgent"

class AdvisoryPriority(str, Enum):
    low = "Low"
    medium = "Medium"
    high = "High"
    critical = "Critical"

class AdvisoryBase(BaseModel):
    title: str = Field(..., min_length=1)
    requested_by: str = Field(..., min_length=1)
    department: str = Field(..., min_length=1)
    request_number: Optional[str] = None
    date_received: Optional[datetime] = None
    due_date: Optional[datetime] = None
    status: AdvisoryStatus = AdvisoryStatus.pending
    assigned_to: str = ""
    priority: AdvisoryPriority = AdvisoryPriority.medium
    description: str = ""

    @validator('date_received', 'due_date')
    def normalize_timezone(cls, v):
        return as_utc(v)

class AdvisoryCreate(AdvisoryBase):
    pass

class AdvisoryRequest(AdvisoryBase, BaseSchema):
    pass

class AdvisoryListResponse(BaseModel):
    items: list[AdvisoryRequest]
    total: int
    empty_state: Optional[EmptyState] = None

class AdvisoryCard(BaseModel):
    request: AdvisoryRequest
    days_remaining: Optional[int] = None

class AdvisoryBoard(BaseModel):
    """Requests grouped into kanban columns, most pressing column first."""
    columns: dict[str, list[AdvisoryCard]]
    total: int
    empty_state: Optional[EmptyState] = None
