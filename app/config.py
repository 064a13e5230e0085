# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

# ✅ Only load .env in local/dev
if os.environ.get("ENV") != "production":
    from dotenv import load_dotenv
    load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    jwt_secret_key: str
    fernet_secret: str
    jwt_algorithm: str = "HS256"
    token_ttl_days: int = 7
    database_url: str = "sqlite:///./database/clarity.db"
    upload_dir: str = "uploads"
    max_upload_bytes: int = 10 * 1024 * 1024
    cors_origins: List[str] = field(default_factory=list)
    auth_rate_limit: str = "20/minute"
    rate_limit_enabled: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        # 🔐 No fallback secrets: a missing key is a startup error
        jwt_secret = os.getenv("JWT_SECRET_KEY", "").strip()
        if not jwt_secret:
            raise RuntimeError("JWT_SECRET_KEY environment variable is not set.")

        fernet_secret = os.getenv("FERNET_SECRET", "").strip()
        if not fernet_secret:
            raise RuntimeError("FERNET_SECRET is missing. Please set it in your environment or .env file.")

        try:
            token_ttl_days = int(os.getenv("TOKEN_TTL_DAYS", "7"))
            max_upload_bytes = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
        except ValueError as e:
            raise RuntimeError(f"Invalid numeric setting: {e}") from e

        return cls(
            jwt_secret_key=jwt_secret,
            fernet_secret=fernet_secret,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            token_ttl_days=token_ttl_days,
            database_url=os.getenv("DATABASE_URL", "sqlite:///./database/clarity.db"),
            upload_dir=os.getenv("UPLOAD_DIR", "uploads"),
            max_upload_bytes=max_upload_bytes,
            cors_origins=_env_list("CORS_ORIGINS", "http://localhost:3000,http://localhost:19006"),
            auth_rate_limit=os.getenv("AUTH_RATE_LIMIT", "20/minute"),
            rate_limit_enabled=_env_bool("RATE_LIMIT_ENABLED", True),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()
