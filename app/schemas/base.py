from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive timestamps coming back from the store as UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class EmptyState(BaseModel):
    title: str
    message: str = "Try adjusting your search or filter criteria"


class BaseSchema(BaseModel):
    id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
