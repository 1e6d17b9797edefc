# app/core/config.py
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    SECRET_KEY: str = "your-super-secret-jwt-key-change-in-prod"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080  # 7 days

    DATABASE_URL: str = "sqlite:///./school.db"
    AUTO_CREATE_TABLES: bool = True

    # Session label used when a mark request does not name one
    DEFAULT_SESSION: str = "Default"

    CORS_ORIGINS: List[str] = [
        "http://localhost",
        "http://127.0.0.1",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:8000",
    ]

    LOG_LEVEL: str = "INFO"
    # When off, 500 responses carry a generic message instead of the raw store error
    EXPOSE_STORE_ERRORS: bool = False

    class Config:
        env_file = ".env"

settings = Settings()
