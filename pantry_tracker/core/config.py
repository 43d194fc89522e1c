import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv


load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables.

    Provides validated access to the Supabase connection used as the
    inventory document store.
    """

    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_SERVICE_KEY: str = os.getenv("SUPABASE_SERVICE_KEY", "")
    INVENTORY_TABLE: str = os.getenv("INVENTORY_TABLE", "inventory")
    STORE_TIMEOUT_SECONDS: int = int(os.getenv("STORE_TIMEOUT_SECONDS", "10"))
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")

    # Full re-list after each add/remove; when off, only the changed entry is patched
    REFRESH_AFTER_MUTATION: bool = _env_flag("REFRESH_AFTER_MUTATION", True)
    SERIALIZE_MUTATIONS: bool = _env_flag("SERIALIZE_MUTATIONS", True)
    MAX_NAME_LENGTH: int = int(os.getenv("MAX_NAME_LENGTH", "100"))

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8080"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    CORS_ALLOWED_ORIGINS_ENV: str = os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000")

    @classmethod
    def is_development(cls) -> bool:
        return cls.ENVIRONMENT == "development"

    @staticmethod
    def allowed_origins(extra_origins: List[str] | None = None) -> List[str]:
        env_origins = [o.strip() for o in os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000").split(",") if o.strip()]
        merged = list(env_origins)
        if extra_origins:
            merged.extend(extra_origins)
        # Deduplicate while preserving order
        seen = set()
        result: List[str] = []
        for origin in merged:
            if origin not in seen:
                seen.add(origin)
                result.append(origin)
        return result

    @classmethod
    def validate(cls) -> None:
        if cls.is_development():
            return
        if not cls.SUPABASE_URL:
            raise ValueError("SUPABASE_URL environment variable is required")
        if not cls.SUPABASE_SERVICE_KEY:
            raise ValueError("SUPABASE_SERVICE_KEY environment variable is required")
        if not cls.INVENTORY_TABLE:
            raise ValueError("INVENTORY_TABLE must not be empty")
