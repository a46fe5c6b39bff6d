"""
Application configuration using pydantic-settings.

All environment variables are defined here with type safety.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    PORT: int = 5000

    # Database
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./backoffice.db",
        description="Async SQLAlchemy URL (postgresql+asyncpg://... in production)",
    )
    AUTO_CREATE_TABLES: bool = Field(
        default=True,
        description="Run metadata.create_all on startup instead of relying on alembic",
    )

    # JWT Configuration
    JWT_SECRET: str = Field(
        min_length=16,
        description="Secret key for JWT token signing",
    )
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE: str = Field(
        default="7d",
        description="Token lifetime: <n>s, <n>m, <n>h, <n>d, <n>w or bare seconds",
    )

    # Password hashing
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)

    # Bootstrap owner account
    ADMIN_EMAIL: str = "admin@hassan-elec.com"
    ADMIN_PASSWORD: str = "admin123"

    # Remote image host: Cloudinary
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    CLOUDINARY_FOLDER: str = "hassan-elec"

    # Remote blob host: Vercel Blob
    BLOB_READ_WRITE_TOKEN: str = ""

    # Local uploads
    UPLOAD_DIR: str = Field(
        default="uploads",
        description="Directory served at /uploads when no remote host is used",
    )
    MAX_UPLOAD_SIZE: int = Field(default=5 * 1024 * 1024, description="Bytes per file")

    # CORS
    CORS_ORIGINS: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cloudinary_configured(self) -> bool:
        return bool(
            self.CLOUDINARY_CLOUD_NAME
            and self.CLOUDINARY_API_KEY
            and self.CLOUDINARY_API_SECRET
        )

    @property
    def blob_configured(self) -> bool:
        return bool(self.BLOB_READ_WRITE_TOKEN)


# Global settings instance
settings = Settings()
