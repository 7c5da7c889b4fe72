from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.permissions.schemas import (
    PermissionGrant, PermissionResponse, PermissionWithDetailsResponse
)
from app.modules.permissions.service import PermissionService
from app.core.dependencies import require_admin, require_confirmation
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/permissions", tags=["permissions"])


def get_permission_service(supabase: Client = Depends(get_supabase)) -> PermissionService:
    return PermissionService(supabase)


@router.get("", response_model=List[PermissionWithDetailsResponse])
async def list_permissions(
    user_data: Dict = Depends(require_admin),
    service: PermissionService = Depends(get_permission_service)
):
    """List all grants with document title and grantee (admin)"""
    return service.list_permissions()


@router.post("", response_model=PermissionResponse, status_code=201)
async def grant_permission(
    grant_data: PermissionGrant,
    user_data: Dict = Depends(require_admin),
    service: PermissionService = Depends(get_permission_service)
):
    """Grant a member view access to a document (admin). 409 if already granted."""
    return service.grant_permission(grant_data)


@router.delete("/{permission_id}", status_code=204)
async def revoke_permission(
    permission_id: str,
    confirm: bool = False,
    user_data: Dict = Depends(require_admin),
    service: PermissionService = Depends(get_permission_service)
):
    """Revoke a grant (admin)"""
    require_confirmation(confirm)
    service.revoke_permission(permission_id)
    return None
