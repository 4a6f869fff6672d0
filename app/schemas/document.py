from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, validator
from app.schemas.base import BaseSchema, EmptyState, as_utc

class DocumentType(str, Enum):
    mou = "MoU"
    court_process = "Court Process"
    legal_opinion = "Legal Opinion"
    contract = "Contract"
    correspondence = "Correspondence"

class DocumentStatus(str, Enum):
    draft = "Draft"
    final = "Final"
    archived = "Archived"

class DocumentBase(BaseModel):
    name: str = Field(..., min_length=1)
    type: DocumentType
    case_id: Optional[str] = None
    version: str = "1.0"
    uploaded_by: str = ""
    size: str = ""
    status: DocumentStatus = DocumentStatus.draft

class DocumentCreate(DocumentBase):
    pass

class Document(DocumentBase, BaseSchema):
    uploaded_at: Optional[datetime] = None
    last_modified: Optional[datetime] = None

    @validator('uploaded_at', 'last_modified')
    def normalize_timezone(cls, v):
        return as_utc(v)

class DocumentListResponse(BaseModel):
    items: list[Document]
    total: int
    type_counts: dict[str, int]
    empty_state: Optional[EmptyState] = None
