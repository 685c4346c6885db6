from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from eventquote.core.enums import UserRole


class RegisterIn(BaseModel):
    email: str = Field(..., min_length=3, max_length=120)
    password: str = Field(..., min_length=6)
    name: Optional[str] = None


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserOut(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    role: UserRole
    created_at: datetime
