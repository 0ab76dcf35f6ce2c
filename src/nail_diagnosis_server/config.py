"""Server configuration — reads settings from environment variables.

All settings have sensible defaults for local development.  In production
the values are typically overridden via env vars or a ``.env`` file.
"""

import os
from dataclasses import dataclass, field

from nail_diagnosis.constants import (
    CATALOG_BASE_URL,
    CATALOG_PRODUCTS_PATH,
    CATALOG_TIMEOUT_SECONDS,
)


@dataclass(frozen=True)
class ServerSettings:
    """Immutable server configuration read from environment at startup."""

    # Network
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS — comma-separated origins, or "*" for wide-open dev mode
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    # Ruleset directory (None → the rules/v1/ bundled with nail_diagnosis)
    ruleset_dir: str | None = None

    # Logging
    log_level: str = "INFO"

    # Storefront catalog used for product recommendations
    catalog_base_url: str = CATALOG_BASE_URL
    catalog_products_path: str = CATALOG_PRODUCTS_PATH
    catalog_timeout_seconds: float = CATALOG_TIMEOUT_SECONDS


def load_settings() -> ServerSettings:
    """Build settings from ``SERVER_*`` and ``CATALOG_*`` environment variables."""
    raw_origins = os.getenv("SERVER_CORS_ORIGINS", "*")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]

    return ServerSettings(
        host=os.getenv("SERVER_HOST", "0.0.0.0"),
        port=int(os.getenv("SERVER_PORT", "8080")),
        cors_origins=origins,
        ruleset_dir=os.getenv("SERVER_RULESET_DIR") or None,
        log_level=os.getenv("SERVER_LOG_LEVEL", "INFO").upper(),
        catalog_base_url=os.getenv("CATALOG_BASE_URL", CATALOG_BASE_URL),
        catalog_products_path=os.getenv("CATALOG_PRODUCTS_PATH", CATALOG_PRODUCTS_PATH),
        catalog_timeout_seconds=float(
            os.getenv("CATALOG_TIMEOUT_SECONDS", str(CATALOG_TIMEOUT_SECONDS))
        ),
    )
