from pydantic import BaseModel
from typing import List
from app.modules.documents.schemas import DocumentResponse, StorageFileResponse
from app.modules.permissions.schemas import PermissionWithDetailsResponse
from app.modules.users.schemas import UserResponse


class AdminOverviewResponse(BaseModel):
    users: List[UserResponse] = []
    documents: List[DocumentResponse] = []
    storage_files: List[StorageFileResponse] = []
    permissions: List[PermissionWithDetailsResponse] = []
