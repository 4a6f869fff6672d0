from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, validator
from app.schemas.base import EmptyState, as_utc

class ActionType(str, Enum):
    view = "VIEW"
    update = "UPDATE"
    create = "CREATE"
    delete = "DELETE"
    download = "DOWNLOAD"

class DateRange(str, Enum):
    today = "today"
    week = "week"
    month = "month"
    all = "all"

class AuditLogBase(BaseModel):
    user_id: Optional[str] = None
    user_name: str = ""
    action: ActionType
    resource: str
    resource_id: str = ""
    ip_address: Optional[str] = None
    details: str = ""

class AuditLogCreate(AuditLogBase):
    pass

class AuditLog(AuditLogBase):
    id: str
    timestamp: datetime

    @validator('timestamp')
    def normalize_timezone(cls, v):
        return as_utc(v)

    class Config:
        from_attributes = True

class AuditStats(BaseModel):
    total: int
    today: int
    unique_users: int
    resources_accessed: int

class AuditLogListResponse(BaseModel):
    items: list[AuditLog]
    total: int
    stats: AuditStats
    empty_state: Optional[EmptyState] = None
