from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from loglens.services.log_pipeline.grouping import GroupKeyPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LOGLENS_",
        case_sensitive=False,
        extra="ignore"
    )

    # Aggregation
    top_n: int = Field(default=15, ge=1)
    group_key_policy: GroupKeyPolicy = GroupKeyPolicy.FULL_MESSAGE

    # Uploads
    allowed_extensions: str = ".txt,.log"

    # CORS
    cors_origins: str = "http://localhost:5173"

    # Logging
    log_level: str = "INFO"

    @property
    def allowed_extensions_list(self) -> list[str]:
        """Parse accepted file extensions from comma-separated string."""
        return [ext.strip().lower() for ext in self.allowed_extensions.split(",") if ext.strip()]

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


settings = Settings()
