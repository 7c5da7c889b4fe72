from supabase import Client
from postgrest.exceptions import APIError
from app.config import settings
from app.modules.permissions.schemas import (
    DELETED_LABEL, UNKNOWN_LABEL, PermissionGrant, PermissionResponse, PermissionWithDetailsResponse
)
from app.modules.users.schemas import Role
from app.modules.users.service import UserService
from typing import Dict, List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


class PermissionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def grant_permission(self, grant_data: PermissionGrant) -> PermissionResponse:
        """Grant a member view access to a document"""
        grantee = UserService(self.supabase).get_user_by_id(grant_data.user_id)
        if grantee.role == Role.ADMIN:
            raise HTTPException(status_code=400, detail="Access can only be granted to members")

        try:
            result = self.supabase.table("document_permissions").insert({
                "document_id": grant_data.document_id,
                "user_id": grant_data.user_id,
                "can_view": True,
                "can_edit": False
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to grant permission")

            logger.info(f"Granted {grant_data.user_id} view access to document {grant_data.document_id}")
            return PermissionResponse(**result.data[0])
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise HTTPException(status_code=409, detail="User already has access to this document")
            logger.error(f"Failed to grant permission: {e}")
            raise HTTPException(status_code=500, detail=e.message or str(e))
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to grant permission: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def revoke_permission(self, permission_id: str) -> bool:
        """Revoke a grant by its ID"""
        try:
            result = self.supabase.table("document_permissions")\
                .delete()\
                .eq("id", permission_id)\
                .execute()

            return len(result.data or []) > 0
        except Exception as e:
            logger.error(f"Failed to revoke permission {permission_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_permissions(self) -> List[PermissionWithDetailsResponse]:
        """All grants with document title and grantee identity. Dangling references show as deleted."""
        try:
            result = self.supabase.table("document_permissions")\
                .select("*")\
                .order("granted_at", desc=True)\
                .limit(settings.list_limit)\
                .execute()
            rows = result.data or []
            if not rows:
                return []

            # None means the lookup failed: rows are labelled unknown, not deleted
            try:
                titles = self._document_titles([p["document_id"] for p in rows])
            except Exception as e:
                logger.warning(f"Document title lookup failed: {e}")
                titles = None
            try:
                grantees = UserService(self.supabase).get_profiles_by_ids(p["user_id"] for p in rows)
            except Exception as e:
                logger.warning(f"Grantee lookup failed: {e}")
                grantees = None

            permissions = []
            for row in rows:
                details = dict(row)
                title = titles.get(row["document_id"]) if titles is not None else None
                if titles is None:
                    details.update(document_title=UNKNOWN_LABEL)
                elif title is None:
                    logger.warning(f"Permission {row['id']} references deleted document {row['document_id']}")
                    details.update(document_title=DELETED_LABEL, document_deleted=True)
                else:
                    details.update(document_title=title)
                grantee = grantees.get(row["user_id"]) if grantees is not None else None
                if grantees is None:
                    details.update(grantee_email=UNKNOWN_LABEL)
                elif grantee is None:
                    details.update(grantee_email=DELETED_LABEL, grantee_deleted=True)
                else:
                    details.update(grantee_email=grantee.get("email"), grantee_name=grantee.get("full_name"))
                permissions.append(PermissionWithDetailsResponse(**details))
            return permissions
        except Exception as e:
            logger.error(f"Error listing permissions: {e}")
            return []

    def _document_titles(self, document_ids: List[str]) -> Dict[str, str]:
        ids = list(set(document_ids))
        result = self.supabase.table("documents")\
            .select("id, title")\
            .in_("id", ids)\
            .execute()
        return {d["id"]: d["title"] for d in result.data or []}

    def list_viewable_document_ids(self, user_id: str) -> List[str]:
        """IDs of documents the user holds a view grant for"""
        result = self.supabase.table("document_permissions")\
            .select("document_id")\
            .eq("user_id", user_id)\
            .eq("can_view", True)\
            .execute()
        return [p["document_id"] for p in result.data or []]

    def has_view_permission(self, document_id: str, user_id: str) -> bool:
        try:
            result = self.supabase.table("document_permissions")\
                .select("id")\
                .eq("document_id", document_id)\
                .eq("user_id", user_id)\
                .eq("can_view", True)\
                .limit(1)\
                .execute()
            return bool(result.data)
        except Exception as e:
            logger.error(f"Error checking access to document {document_id}: {e}")
            return False
