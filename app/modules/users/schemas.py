from enum import Enum
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class Role(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"


class UserResponse(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    role: Role = Role.MEMBER
    created_at: datetime

    class Config:
        from_attributes = True
