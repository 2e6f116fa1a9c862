"""
Movie Catalog - Configuration Management
========================================

Centralized configuration management using Pydantic Settings.
Supports environment variables, .env files, and default values.

Usage:
    from movie_catalog.core.config import settings

    # Access configuration
    mongo_url = settings.MONGODB_URL
    debug = settings.DEBUG
"""

from pathlib import Path
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        validate_assignment=True,
    )

    # ==========================================
    # APPLICATION SETTINGS
    # ==========================================
    APP_NAME: str = "Movie Catalog"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # ==========================================
    # DATABASE SETTINGS
    # ==========================================
    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "movieDB"
    MONGODB_COLLECTION: str = "movies"
    MONGODB_TIMEOUT_MS: int = 5000

    @field_validator("MONGODB_URL", mode="before")
    @classmethod
    def validate_mongodb_url(cls, v):
        """Ensure the document store URL is a MongoDB connection string"""
        if not v:
            raise ValueError("MONGODB_URL is required")
        if not str(v).startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("MONGODB_URL must be a mongodb:// or mongodb+srv:// URL")
        return v

    # ==========================================
    # MEDIA HOST SETTINGS (Cloudinary)
    # ==========================================
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    CLOUDINARY_FOLDER: Optional[str] = None

    # ==========================================
    # LANGUAGE MODEL SETTINGS (Gemini)
    # ==========================================
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"

    # ==========================================
    # UPLOAD SETTINGS
    # ==========================================
    UPLOAD_DIR: Path = Path("data") / "uploads"
    ALLOWED_IMAGE_TYPES: List[str] = ["jpg", "jpeg", "png", "webp", "gif"]
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB

    # ==========================================
    # LOGGING SETTINGS
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "structured"  # structured, simple, json
    LOG_FILE: Optional[str] = None
    LOG_MAX_SIZE: str = "100MB"
    LOG_BACKUP_COUNT: int = 5
    LOG_ROTATION: str = "daily"  # daily, weekly, size

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @property
    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT.lower() == "production"

    @property
    def safe_mongodb_url(self) -> str:
        """MongoDB URL with credentials stripped, for logging"""
        return self.MONGODB_URL.split("@")[-1] if "@" in self.MONGODB_URL else self.MONGODB_URL


# ==========================================
# GLOBAL SETTINGS INSTANCE
# ==========================================

settings = Settings()


def validate_settings(current: Optional[Settings] = None) -> List[str]:
    """Validate current settings and return any problems"""
    current = current or settings
    errors = []

    if not all([
        current.CLOUDINARY_CLOUD_NAME,
        current.CLOUDINARY_API_KEY,
        current.CLOUDINARY_API_SECRET,
    ]):
        errors.append("Cloudinary credentials are not fully configured; image uploads will fail")

    if not current.GEMINI_API_KEY:
        errors.append("GEMINI_API_KEY is not set; assistant search will fail")

    if current.is_production and current.DEBUG:
        errors.append("DEBUG should be False in production")

    return errors
