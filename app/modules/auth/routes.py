from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import LoginRequest, TokenResponse, IdentityResponse, LandingResponse
from app.modules.auth.service import AuthService
from app.core.dependencies import get_auth_service, get_current_identity, get_current_token, get_user_role, landing_path
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
    supabase: Client = Depends(get_supabase)
):
    """Login, get access token and the page to land on for the account's role"""
    token = service.login(login_data)
    token.role = get_user_role(token.user_id, supabase)
    token.redirect_to = landing_path(token.role)
    return token


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and revoke the caller's session"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=IdentityResponse)
async def get_me(identity: Dict = Depends(get_current_identity)):
    """Get current authenticated identity and its role"""
    return identity


@router.get("/landing", response_model=LandingResponse)
async def landing(identity: Dict = Depends(get_current_identity)):
    """Where an authenticated visitor belongs: admin console or member view"""
    return LandingResponse(redirect_to=landing_path(identity.get("role")))
