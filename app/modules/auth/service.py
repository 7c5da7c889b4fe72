from supabase import Client
from app.modules.auth.schemas import LoginRequest, TokenResponse
from fastapi import HTTPException
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            return TokenResponse(
                access_token=auth_response.session.access_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token"""
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            return {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
                "created_at": user.created_at,
            }
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            logger.warning(f"Token verification failed: {error_msg}")
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def logout(self, token: str) -> bool:
        """Revoke the caller's session using Supabase Auth"""
        try:
            # Scoped to the given JWT; other users' sessions are untouched
            self.supabase.auth.admin.sign_out(token)
            return True
        except Exception as e:
            logger.warning(f"Sign-out failed: {e}")
            return False
