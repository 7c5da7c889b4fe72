from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Table/storage access on behalf of signed-in users

    # Storage
    storage_bucket: str = "documents"
    storage_list_limit: int = 100

    # Listing
    list_limit: int = 100

    # Client-side navigation targets returned with 401/403 responses
    login_path: str = "/login"
    member_path: str = "/member"
    admin_path: str = "/admin"

    # App
    app_name: str = "docportal-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
