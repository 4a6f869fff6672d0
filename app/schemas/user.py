from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from app.schemas.base import EmptyState

class UserRole(str, Enum):
    admin = "admin"
    legal_officer = "legal_officer"

class Profile(BaseModel):
    id: Optional[str] = None
    user_id: str
    full_name: str
    email: str
    department: Optional[str] = None
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True

class User(BaseModel):
    id: str
    full_name: str
    email: str
    role: Optional[UserRole] = None
    department: Optional[str] = None
    avatar_url: Optional[str] = None

class CurrentUser(BaseModel):
    """Identity of the caller as resolved from a bearer token."""
    id: str
    email: Optional[str] = None
    role: Optional[UserRole] = None

class UserListResponse(BaseModel):
    items: list[User]
    total: int
    counts: dict[str, int]
    empty_state: Optional[EmptyState] = None

# Bodies of the user-administration functions. Fields are optional here so
# the handlers can report missing fields in a single message.

class CreateUserRequest(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    full_name: Optional[str] = Field(None, alias="fullName")
    role: Optional[str] = None
    department: Optional[str] = None

    class Config:
        populate_by_name = True

class UpdateUserRequest(BaseModel):
    user_id: Optional[str] = Field(None, alias="userId")
    full_name: Optional[str] = Field(None, alias="fullName")
    department: Optional[str] = None
    role: Optional[str] = None

    class Config:
        populate_by_name = True

class DeleteUserRequest(BaseModel):
    user_id: Optional[str] = Field(None, alias="userId")

    class Config:
        populate_by_name = True

class BootstrapAdminRequest(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    full_name: Optional[str] = Field(None, alias="fullName")

    class Config:
        populate_by_name = True
