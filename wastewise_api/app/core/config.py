"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration; in a deployment you should
at least override ``SECRET_KEY``, which signs the session cookie.
"""

import os
from dataclasses import dataclass
from typing import List


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "WasteWise API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Key used by the session middleware to sign the session cookie.
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    session_cookie: str = os.getenv("SESSION_COOKIE", "wastewise_session")
    session_max_age: int = int(os.getenv("SESSION_MAX_AGE", str(60 * 60 * 24 * 7)))

    # Populate the in-memory store with demo centers, items and events
    # at startup.  Tests switch this off to start from an empty store.
    seed_sample_data: bool = _env_flag("SEED_SAMPLE_DATA", "true")

    # Radius applied by list endpoints when the client sends coordinates
    # without an explicit ``radius``.
    default_radius_km: float = float(os.getenv("DEFAULT_RADIUS_KM", "5"))

    # Comma-separated list of origins allowed by the CORS middleware.
    cors_origins: str = os.getenv("CORS_ORIGINS", "")

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
