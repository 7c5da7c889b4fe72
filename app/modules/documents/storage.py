"""Supabase Storage access for the documents bucket."""
import logging
from typing import List, Optional

from supabase import Client

from app.config import settings
from app.modules.documents.formatting import format_file_size
from app.modules.documents.schemas import StorageFileResponse

logger = logging.getLogger(__name__)


class DocumentStorage:
    def __init__(self, supabase: Client, bucket_name: Optional[str] = None):
        self.bucket_name = bucket_name or settings.storage_bucket
        if not self.bucket_name:
            raise ValueError("storage_bucket must be configured")
        self.supabase = supabase

    def _bucket(self):
        return self.supabase.storage.from_(self.bucket_name)

    def list_files(self, limit: Optional[int] = None) -> List[StorageFileResponse]:
        """List bucket root sorted by name. Hidden placeholders (".emptyFolderPlaceholder") are dropped."""
        entries = self._bucket().list("", {
            "limit": limit or settings.storage_list_limit,
            "offset": 0,
            "sortBy": {"column": "name", "order": "asc"},
        })
        files = []
        for entry in entries or []:
            name = entry.get("name")
            if not name or name.startswith("."):
                continue
            metadata = entry.get("metadata") or {}
            size = metadata.get("size")
            files.append(StorageFileResponse(
                name=name,
                id=entry.get("id"),
                size=size,
                mimetype=metadata.get("mimetype"),
                size_label=format_file_size(size),
                created_at=entry.get("created_at"),
                updated_at=entry.get("updated_at"),
            ))
        if not files:
            logger.warning(f"No files found in storage bucket '{self.bucket_name}'")
        return files

    def find_file(self, name: str) -> Optional[StorageFileResponse]:
        for file in self.list_files():
            if file.name == name:
                return file
        return None

    def download_file(self, path: str) -> bytes:
        """Download blob bytes; storage errors propagate to the caller."""
        data = self._bucket().download(path)
        logger.info(f"Downloaded {path} from bucket '{self.bucket_name}' ({len(data)} bytes)")
        return data
