from pydantic import BaseModel
from typing import Optional
from datetime import datetime

DELETED_LABEL = "deleted"
UNKNOWN_LABEL = "unknown"


class PermissionGrant(BaseModel):
    document_id: str
    user_id: str


class PermissionResponse(BaseModel):
    id: str
    document_id: str
    user_id: str
    can_view: bool = True
    can_edit: bool = False  # stored but inert
    granted_at: datetime

    class Config:
        from_attributes = True


class PermissionWithDetailsResponse(PermissionResponse):
    document_title: str = DELETED_LABEL
    document_deleted: bool = False
    grantee_email: str = DELETED_LABEL
    grantee_name: Optional[str] = None
    grantee_deleted: bool = False
