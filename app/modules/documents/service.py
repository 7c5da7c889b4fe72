from supabase import Client
from app.config import settings
from app.modules.documents.schemas import (
    DocumentCreate, DocumentLink, DocumentResponse, StorageFileResponse
)
from app.modules.documents.formatting import (
    TEXT_EXPORT_MEDIA_TYPE, format_file_size, render_text_export, text_export_file_name
)
from app.modules.documents.storage import DocumentStorage
from app.modules.users.service import UserService
from typing import List, NamedTuple, Optional
from fastapi import HTTPException
import logging
import posixpath

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = "application/octet-stream"


class FileDownload(NamedTuple):
    content: bytes
    file_name: str
    media_type: str


def to_document_response(row: dict) -> DocumentResponse:
    return DocumentResponse(**row, file_size_label=format_file_size(row.get("file_size")))


class DocumentService:
    def __init__(self, supabase: Client, storage: Optional[DocumentStorage] = None):
        self.supabase = supabase
        self.storage = storage or DocumentStorage(supabase)

    def list_documents(self) -> List[DocumentResponse]:
        """All documents, newest first. Errors degrade to an empty list."""
        try:
            result = self.supabase.table("documents")\
                .select("*")\
                .order("created_at", desc=True)\
                .limit(settings.list_limit)\
                .execute()
            return [to_document_response(doc) for doc in result.data or []]
        except Exception as e:
            logger.error(f"Error listing documents: {e}")
            return []

    def get_document(self, document_id: str) -> DocumentResponse:
        """Get document by ID"""
        try:
            result = self.supabase.table("documents")\
                .select("*")\
                .eq("id", document_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Document not found")

            return to_document_response(result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_text_document(self, document_data: DocumentCreate, owner_id: str) -> DocumentResponse:
        """Create a text-only document (no blob attached)"""
        return self._insert({
            "title": document_data.title,
            "content": document_data.content or None,
            "owner_id": owner_id
        })

    def link_document(self, link_data: DocumentLink, owner_id: str) -> DocumentResponse:
        """Create a document record pointing at a blob already in the bucket"""
        try:
            file = self.storage.find_file(link_data.file_name)
        except Exception as e:
            logger.error(f"Storage listing failed while linking {link_data.file_name}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to list storage: {str(e)}")
        if file is None:
            raise HTTPException(status_code=404, detail="File not found in storage")

        return self._insert({
            "title": link_data.title,
            "content": link_data.content or None,
            "file_path": file.name,
            "file_name": file.name,
            "file_size": file.size,
            "file_type": file.mimetype,
            "owner_id": owner_id
        })

    def _insert(self, row: dict) -> DocumentResponse:
        try:
            result = self.supabase.table("documents").insert(row).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create document")

            logger.info(f"Created document {result.data[0]['id']} ({row['title']})")
            return to_document_response(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to create document: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_document(self, document_id: str) -> bool:
        """Delete the document row only; the blob and any permission rows stay."""
        try:
            result = self.supabase.table("documents")\
                .delete()\
                .eq("id", document_id)\
                .execute()

            return len(result.data or []) > 0
        except Exception as e:
            logger.error(f"Failed to delete document {document_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_storage_files(self) -> List[StorageFileResponse]:
        """Blobs available for linking. Errors degrade to an empty list."""
        try:
            return self.storage.list_files()
        except Exception as e:
            logger.error(f"Error listing storage files: {e}")
            return []

    def download_storage_file(self, file_path: str, file_name: Optional[str] = None,
                              media_type: Optional[str] = None) -> FileDownload:
        """Fetch blob bytes; failures are reported, not retried."""
        try:
            content = self.storage.download_file(file_path)
        except Exception as e:
            logger.error(f"Download of {file_path} failed: {e}")
            raise HTTPException(status_code=500, detail=f"Download failed: {str(e)}")
        return FileDownload(
            content=content,
            file_name=file_name or posixpath.basename(file_path) or file_path,
            media_type=media_type or DEFAULT_MEDIA_TYPE
        )

    def download_document(self, document: DocumentResponse) -> FileDownload:
        """Blob download when a file is attached, otherwise a plain-text export."""
        if document.file_path:
            return self.download_storage_file(
                document.file_path,
                file_name=document.file_name or document.title,
                media_type=document.file_type
            )
        owner_email = self._owner_email(document.owner_id)
        text = render_text_export(document.title, document.created_at, owner_email, document.content)
        return FileDownload(
            content=text.encode("utf-8"),
            file_name=text_export_file_name(document.title),
            media_type=TEXT_EXPORT_MEDIA_TYPE
        )

    def _owner_email(self, owner_id: str) -> Optional[str]:
        try:
            owner = UserService(self.supabase).get_profiles_by_ids([owner_id]).get(owner_id)
        except Exception as e:
            logger.warning(f"Owner lookup failed for {owner_id}: {e}")
            return None
        return owner.get("email") if owner else None
