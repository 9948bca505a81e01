"""Runtime settings, read from the environment (and a ``.env`` file)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_FILE = Path(__file__).resolve().parents[3] / "data" / "storefront.json"

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:5174",
)


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    data_file: Path = _DEFAULT_DATA_FILE
    jwt_secret: str = "dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    token_ttl_days: int = 7
    storage_timeout: float = 5.0
    log_level: str = "INFO"
    log_json: bool = False
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    @staticmethod
    def from_env() -> Settings:
        load_dotenv()
        origins = os.getenv("STOREFRONT_CORS_ORIGINS")
        return Settings(
            data_file=Path(os.getenv("STOREFRONT_DATA_FILE", str(_DEFAULT_DATA_FILE))),
            jwt_secret=os.getenv("STOREFRONT_JWT_SECRET", "dev-secret-change-me"),
            jwt_algorithm=os.getenv("STOREFRONT_JWT_ALGORITHM", "HS256"),
            token_ttl_days=int(os.getenv("STOREFRONT_TOKEN_TTL_DAYS", "7")),
            storage_timeout=float(os.getenv("STOREFRONT_STORAGE_TIMEOUT", "5.0")),
            log_level=os.getenv("STOREFRONT_LOG_LEVEL", "INFO"),
            log_json=_as_bool(os.getenv("STOREFRONT_LOG_JSON", "false")),
            cors_origins=(
                tuple(o.strip() for o in origins.split(",") if o.strip())
                if origins
                else DEFAULT_CORS_ORIGINS
            ),
        )
