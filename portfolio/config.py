"""
Configuration management for the portfolio application.
Uses Pydantic Settings for environment variable management.
"""
from pydantic_settings import BaseSettings
from typing import List


# Owner credit shown in the header and burned into every watermark.
# Changing it requires a code change, not a runtime option.
SITE_OWNER = "Kourtney Shamwell"

# Placeholder only; deployments must set JWT_SECRET_KEY
DEFAULT_JWT_SECRET_KEY = "your-secret-key-change-this-in-production-use-openssl-rand-hex-32"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_TITLE: str = f"{SITE_OWNER} Portfolio"
    API_VERSION: str = "0.1.0"
    API_DESCRIPTION: str = "Portfolio gallery with watermarked uploads and an admin console"

    # CORS Configuration
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]

    # Database Configuration
    # Supabase PostgreSQL in production (postgresql+asyncpg://...), SQLite locally
    DATABASE_URL: str = "sqlite+aiosqlite:///./portfolio.db"

    # Cloudinary Configuration
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    CLOUDINARY_UPLOAD_FOLDER: str = "gallery"

    # Upload ceiling before Cloudinary compresses the image
    MAX_UPLOAD_SIZE: int = 100 * 1024 * 1024

    # Where the admin console sends files. Empty means the in-process /api/upload route.
    UPLOAD_ENDPOINT_URL: str = ""

    # Admin Password (bcrypt hash, see generate_password_hash.py)
    ADMIN_PASSWORD_HASH: str = ""

    # JWT Configuration
    # SECRET_KEY should be a long random string (e.g., generated with: openssl rand -hex 32)
    JWT_SECRET_KEY: str = DEFAULT_JWT_SECRET_KEY

    # Seconds between keep-alive comments on an idle change stream
    CHANGEFEED_KEEPALIVE_SECONDS: float = 15.0

    # Contact section
    CONTACT_EMAIL: str = "kourtney@example.com"
    INSTAGRAM_URL: str = "https://instagram.com"
    LINKEDIN_URL: str = "https://linkedin.com"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings


# Global settings instance
settings = Settings()
