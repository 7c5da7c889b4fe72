from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.users.schemas import Role, UserResponse
from app.modules.users.service import UserService
from app.core.dependencies import require_admin
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


@router.get("", response_model=List[UserResponse])
async def list_users(
    role: Optional[Role] = None,
    user_data: Dict = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    """List users (admin). Use role=member for the grantee picker."""
    return service.list_users(role=role)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    user_data: Dict = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    """Get user by ID (admin)"""
    return service.get_user_by_id(user_id)
