"""Application configuration using Pydantic Settings."""
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_name: str = "FeeDesk"
    debug: bool = False

    # MongoDB
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "feedesk"

    # JWT
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 480

    # Default admin, created once at startup when no staff exists
    default_admin_staff_id: str = "admin"
    default_admin_password: str = "12345"
    default_admin_name: str = "Administrator"

    # Reject enrollments pointing at unknown plan/branch/semester/session
    strict_references: bool = False

    # Dashboard
    recent_payments_limit: int = 5

    # CORS (comma-separated origins)
    cors_origins: str = "http://localhost:5173"

    @model_validator(mode="after")
    def _require_real_secret(self):
        placeholder = not self.jwt_secret_key or self.jwt_secret_key == "change-me-in-production"
        if placeholder and not self.debug:
            raise ValueError("Set JWT_SECRET_KEY (or DEBUG=true for local runs); staff tokens are signed with it.")
        return self


settings = Settings()
