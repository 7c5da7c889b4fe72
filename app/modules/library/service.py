from supabase import Client
from app.modules.documents.formatting import format_file_size
from app.modules.library.schemas import LibraryDocumentResponse
from app.modules.permissions.service import PermissionService
from app.modules.users.service import UserService
from typing import List
import logging

logger = logging.getLogger(__name__)

LIBRARY_COLUMNS = "id, title, content, created_at, owner_id, file_path, file_name, file_size, file_type"


class LibraryService:
    """Read-only view of the documents shared with one identity"""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_documents(self, user_id: str) -> List[LibraryDocumentResponse]:
        """Granted documents enriched with owner identity. Errors degrade to an empty list."""
        try:
            # 1. Document IDs granted to this user
            document_ids = PermissionService(self.supabase).list_viewable_document_ids(user_id)
            if not document_ids:
                return []

            # 2. Documents; grants to deleted documents simply find no row
            docs_result = self.supabase.table("documents")\
                .select(LIBRARY_COLUMNS)\
                .in_("id", list(set(document_ids)))\
                .order("created_at", desc=True)\
                .execute()
            docs = docs_result.data or []
            if not docs:
                return []

            # 3. Owners, merged locally; a failed lookup only drops the owner fields
            try:
                owners = UserService(self.supabase).get_profiles_by_ids(d["owner_id"] for d in docs)
            except Exception as e:
                logger.warning(f"Owner lookup failed for library of {user_id}: {e}")
                owners = {}
            documents = []
            for doc in docs:
                owner = owners.get(doc["owner_id"]) or {}
                documents.append(LibraryDocumentResponse(
                    **doc,
                    file_size_label=format_file_size(doc.get("file_size")),
                    owner_email=owner.get("email"),
                    owner_name=owner.get("full_name")
                ))
            return documents
        except Exception as e:
            logger.error(f"Error listing library documents for {user_id}: {e}")
            return []
