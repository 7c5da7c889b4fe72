from fastapi import APIRouter, Depends, HTTPException, Response
from app.database.supabase_client import get_supabase
from app.modules.documents.schemas import (
    DocumentCreate, DocumentLink, DocumentResponse, StorageFileResponse
)
from app.modules.documents.service import DocumentService, FileDownload
from app.modules.permissions.service import PermissionService
from app.core.dependencies import require_admin, require_confirmation, get_current_identity, is_admin
from supabase import Client
from typing import List, Dict
from urllib.parse import quote

router = APIRouter(prefix="/documents", tags=["documents"])


def get_document_service(supabase: Client = Depends(get_supabase)) -> DocumentService:
    return DocumentService(supabase)


def get_permission_service(supabase: Client = Depends(get_supabase)) -> PermissionService:
    return PermissionService(supabase)


def attachment_response(download: FileDownload) -> Response:
    # RFC 5987 filename* keeps non-ASCII titles intact
    disposition = f"attachment; filename*=UTF-8''{quote(download.file_name)}"
    return Response(
        content=download.content,
        media_type=download.media_type,
        headers={"Content-Disposition": disposition}
    )


@router.get("", response_model=List[DocumentResponse])
async def list_documents(
    user_data: Dict = Depends(require_admin),
    service: DocumentService = Depends(get_document_service)
):
    """List all documents, newest first (admin)"""
    return service.list_documents()


@router.post("", response_model=DocumentResponse, status_code=201)
async def create_document(
    document_data: DocumentCreate,
    user_data: Dict = Depends(require_admin),
    service: DocumentService = Depends(get_document_service)
):
    """Create a text-only document (admin)"""
    return service.create_text_document(document_data, user_data["id"])


@router.post("/link", response_model=DocumentResponse, status_code=201)
async def link_document(
    link_data: DocumentLink,
    user_data: Dict = Depends(require_admin),
    service: DocumentService = Depends(get_document_service)
):
    """Link a blob from the storage bucket to a new document record (admin)"""
    return service.link_document(link_data, user_data["id"])


@router.get("/storage/files", response_model=List[StorageFileResponse])
async def list_storage_files(
    user_data: Dict = Depends(require_admin),
    service: DocumentService = Depends(get_document_service)
):
    """List up to 100 blobs in the documents bucket, sorted by name (admin)"""
    return service.list_storage_files()


@router.get("/storage/files/{file_path:path}")
async def download_storage_file(
    file_path: str,
    user_data: Dict = Depends(require_admin),
    service: DocumentService = Depends(get_document_service)
):
    """Download a blob by its storage path (admin)"""
    return attachment_response(service.download_storage_file(file_path))


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    user_data: Dict = Depends(require_admin),
    service: DocumentService = Depends(get_document_service)
):
    """Get document by ID (admin)"""
    return service.get_document(document_id)


@router.delete("/{document_id}", status_code=204)
async def delete_document(
    document_id: str,
    confirm: bool = False,
    user_data: Dict = Depends(require_admin),
    service: DocumentService = Depends(get_document_service)
):
    """Delete the document record; the stored file and its grants are left untouched (admin)"""
    require_confirmation(confirm)
    service.delete_document(document_id)
    return None


@router.get("/{document_id}/download")
async def download_document(
    document_id: str,
    identity: Dict = Depends(get_current_identity),
    service: DocumentService = Depends(get_document_service),
    permissions: PermissionService = Depends(get_permission_service)
):
    """Download the attached file, or a text export when none is attached. Members need a view grant."""
    if not is_admin(identity) and not permissions.has_view_permission(document_id, identity["id"]):
        raise HTTPException(status_code=403, detail="You do not have access to this document")
    document = service.get_document(document_id)
    return attachment_response(service.download_document(document))
