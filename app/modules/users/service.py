from supabase import Client
from app.config import settings
from app.modules.users.schemas import Role, UserResponse
from typing import Dict, Iterable, List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_user_by_id(self, user_id: str) -> UserResponse:
        """Get user profile by ID"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            return UserResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_users(self, role: Optional[Role] = None) -> List[UserResponse]:
        """List profiles, newest first. Errors degrade to an empty list."""
        try:
            query = self.supabase.table("profiles").select("*")
            if role is not None:
                query = query.eq("role", role.value)
            result = query.order("created_at", desc=True)\
                .limit(settings.list_limit)\
                .execute()
            return [UserResponse(**user) for user in result.data or []]
        except Exception as e:
            logger.error(f"Error listing users: {e}")
            return []

    def get_profiles_by_ids(self, user_ids: Iterable[str]) -> Dict[str, dict]:
        """Map id -> {id, email, full_name} for the given ids in one round trip."""
        ids = list({uid for uid in user_ids if uid})
        if not ids:
            return {}
        result = self.supabase.table("profiles")\
            .select("id, email, full_name")\
            .in_("id", ids)\
            .execute()
        return {p["id"]: p for p in result.data or []}
