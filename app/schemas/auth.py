from typing import Optional
from pydantic import BaseModel, EmailStr
from app.schemas.user import Profile, UserRole

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    refresh_token: Optional[str] = None

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class SessionInfo(BaseModel):
    user_id: str
    email: Optional[str] = None
    profile: Optional[Profile] = None
    role: Optional[UserRole] = None
    is_admin: bool = False
