# ============================================================================
# FILE: app/config.py
# ============================================================================
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""

    # App settings
    APP_NAME: str = "SyncVote API"
    DEBUG: bool = False
    API_PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    # Document store (SQLAlchemy backed)
    DATABASE_URL: str = "sqlite:///./syncvote.db"  # Change to PostgreSQL in production

    # Redis cache
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_EXPIRE_SECONDS: int = 3600
    SESSION_EXPIRE_SECONDS: int = 3600
    USERS_CACHE_KEY: str = "users"

    # Security
    SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 12

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
