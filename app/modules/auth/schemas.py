from pydantic import BaseModel, EmailStr
from typing import Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
    role: Optional[str] = None
    redirect_to: Optional[str] = None


class IdentityResponse(BaseModel):
    id: str
    email: Optional[str] = None
    role: Optional[str] = None
    user_metadata: dict = {}


class LandingResponse(BaseModel):
    redirect_to: str
