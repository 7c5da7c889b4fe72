from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.admin.schemas import AdminOverviewResponse
from app.modules.documents.service import DocumentService
from app.modules.permissions.service import PermissionService
from app.modules.users.service import UserService
from app.core.dependencies import require_admin
from supabase import Client
from typing import Dict
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/overview", response_model=AdminOverviewResponse)
async def admin_overview(
    user_data: Dict = Depends(require_admin),
    supabase: Client = Depends(get_supabase)
):
    """Everything the admin console renders: users, documents, stored files and grants.

    The four fetches are independent; each degrades to an empty list on its own.
    """
    documents = DocumentService(supabase)
    overview = AdminOverviewResponse(
        users=UserService(supabase).list_users(),
        documents=documents.list_documents(),
        storage_files=documents.list_storage_files(),
        permissions=PermissionService(supabase).list_permissions()
    )
    logger.info(
        f"Admin overview for {user_data['id']}: {len(overview.users)} users, "
        f"{len(overview.documents)} documents, {len(overview.storage_files)} files, "
        f"{len(overview.permissions)} permissions"
    )
    return overview
