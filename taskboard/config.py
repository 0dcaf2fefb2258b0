import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel


# Load environment variables
load_dotenv()


class Settings(BaseModel):
    app_name: str = "Taskboard API"
    api_prefix: str = "/api"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./taskboard.db")
    database_echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"

    # Auth
    secret_key: str = os.getenv("SECRET_KEY", "change-me-in-production")
    algorithm: str = os.getenv("ALGORITHM", "HS256")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7))

    # Upper bound for a single unit of work when the caller does not send one
    request_timeout_seconds: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", 10))

    # CORS, comma separated
    cors_origins: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
        if origin.strip()
    ]


@lru_cache
def get_settings() -> Settings:
    return Settings()
