from typing import Optional
from app.modules.documents.schemas import DocumentResponse


class LibraryDocumentResponse(DocumentResponse):
    owner_email: Optional[str] = None
    owner_name: Optional[str] = None
