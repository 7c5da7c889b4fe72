from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.library.schemas import LibraryDocumentResponse
from app.modules.library.service import LibraryService
from app.core.dependencies import get_current_identity
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/library", tags=["library"])


def get_library_service(supabase: Client = Depends(get_supabase)) -> LibraryService:
    return LibraryService(supabase)


@router.get("/documents", response_model=List[LibraryDocumentResponse])
async def list_my_documents(
    identity: Dict = Depends(get_current_identity),
    service: LibraryService = Depends(get_library_service)
):
    """Documents shared with the current user. Download via /documents/{id}/download."""
    return service.list_documents(identity["id"])
