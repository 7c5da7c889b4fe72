"""
Core dependencies for session resolution and role gating
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config import settings
from app.database.supabase_client import get_supabase, get_auth_supabase
from app.modules.auth.service import AuthService
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"

# auto_error disabled so a missing header gets the same 401 + Location as a bad token
security = HTTPBearer(auto_error=False)


def redirect_exception(status_code: int, location: str, detail: str) -> HTTPException:
    """HTTPException carrying the client-side page the caller should navigate to."""
    return HTTPException(
        status_code=status_code,
        detail=detail,
        headers={"Location": location}
    )


def get_auth_service(supabase: Client = Depends(get_auth_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    if credentials is None or not credentials.credentials:
        raise redirect_exception(status.HTTP_401_UNAUTHORIZED, settings.login_path, "Not authenticated")
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Dict[str, Any]:
    """Resolve the bearer token to the authenticated user"""
    try:
        return auth_service.get_current_user(token)
    except HTTPException as e:
        raise redirect_exception(e.status_code, settings.login_path, e.detail)


def get_user_role(user_id: str, supabase: Client) -> Optional[str]:
    """Return the profile role, or None when it cannot be determined (fails closed)."""
    try:
        result = supabase.table("profiles")\
            .select("role")\
            .eq("id", user_id)\
            .single()\
            .execute()
        if not result or not result.data:
            return None
        return result.data.get("role")
    except Exception as e:
        logger.error(f"Error getting role for user {user_id}: {e}")
        return None


def is_admin(identity: Dict[str, Any]) -> bool:
    return identity.get("role") == ADMIN_ROLE


def landing_path(role: Optional[str]) -> str:
    """Page an identity with the given role lands on after sign-in"""
    return settings.admin_path if role == ADMIN_ROLE else settings.member_path


def get_current_identity(
    user_data: Dict[str, Any] = Depends(get_current_user),
    supabase: Client = Depends(get_supabase)
) -> Dict[str, Any]:
    """Authenticated user with its profile role attached"""
    role = get_user_role(user_data["id"], supabase)
    return {**user_data, "role": role}


def require_admin(identity: Dict[str, Any] = Depends(get_current_identity)) -> Dict[str, Any]:
    """Dependency that sends non-admins to the member view before any admin fetch runs"""
    if not is_admin(identity):
        raise redirect_exception(
            status.HTTP_403_FORBIDDEN,
            settings.member_path,
            "Administrator role required"
        )
    return identity


def require_confirmation(confirm: bool) -> None:
    """Destructive admin actions must be confirmed explicitly before any store call"""
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Confirmation required: repeat the request with confirm=true"
        )
