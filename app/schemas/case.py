from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, validator
from app.schemas.base import BaseSchema, EmptyState, as_utc

class ProceduralStage(str, Enum):
    mention = "Mention"
    interlocutory = "Interlocutory"
    trial = "Trial"
    judgment = "Judgment"

class CaseStatus(str, Enum):
    active = "Active"
    pending = "Pending"
    closed = "Closed"
    urgent = "Urgent"

class CaseBase(BaseModel):
    suit_number: str = Field(..., min_length=1)
    case_title: str = Field(..., min_length=1)
    adversary_party: str = Field(..., min_length=1)
    procedural_stage: ProceduralStage = ProceduralStage.mention
    assigned_counsel: str = ""
    status: CaseStatus = CaseStatus.active
    next_hearing: Optional[datetime] = None
    court: str = ""
    filed_date: Optional[datetime] = None
    description: str = ""

    class Config:
        from_attributes = True

    @validator('procedural_stage', pre=True)
    def validate_stage(cls, v):
        if isinstance(v, ProceduralStage):
            return v

        if isinstance(v, str):
            for stage in ProceduralStage:
                if stage.value.lower() == v.lower():
                    return stage
            raise ValueError(f"Invalid procedural stage: {v}. Valid values are: {[e.value for e in ProceduralStage]}")

        raise ValueError(f"Procedural stage must be a string, got {type(v)}")

    @validator('next_hearing', 'filed_date')
    def normalize_timezone(cls, v):
        return as_utc(v)

class CaseCreate(CaseBase):
    pass

class Case(CaseBase, BaseSchema):
    pass

class CaseListResponse(BaseModel):
    items: list[Case]
    total: int
    empty_state: Optional[EmptyState] = None

class UrgentHearing(BaseModel):
    case: Case
    time_remaining: str
