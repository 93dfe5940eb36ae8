"""
Cocktail API — Application Configuration
==========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a default `settings` object.
Who:   Passed into create_app(), which hands the relevant values to each
       component (rate limiters, drink service, auth guards) at construction.
When:  Loaded once at module import time; tests build their own instances.

Design Decision:
    Components never read the module-level `settings` directly. The app factory
    receives a Settings instance and wires it onto app.state, so a test can build
    an isolated app with tiny rate limits or zero latency without patching globals.
"""

from typing import Dict, List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Attributes are grouped by concern for readability.
    """

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # Comma-separated list of allowed browser origins
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Authentication ────────────────────────────────────────────────────
    # Which credential scheme the drink routes accept.
    #   api_key: "Bearer <api key>" looked up verbatim
    #   token:   "Bearer mock-jwt-<principal id>" (no signature, allowlist only)
    auth_scheme: Literal["api_key", "token"] = Field(default="api_key")

    # Exposes POST /auth/token, which hands out credentials by username.
    # Turn off anywhere the mock credentials should not be discoverable.
    enable_dev_auth: bool = Field(default=True)

    # ── Mock Handlers ─────────────────────────────────────────────────────
    # Artificial delay applied by create/update/delete. 0 disables it.
    mock_latency_ms: int = Field(default=100, ge=0, le=10_000)

    # ── Rate Limiting ─────────────────────────────────────────────────────
    # Fixed window per client IP. Four independent limiters, strictest last.
    search_rate_limit_requests: int = Field(default=100, ge=1, le=100_000)
    search_rate_limit_window: int = Field(default=900, ge=1, le=86400)  # seconds

    api_rate_limit_requests: int = Field(default=50, ge=1, le=100_000)
    api_rate_limit_window: int = Field(default=900, ge=1, le=86400)

    write_rate_limit_requests: int = Field(default=10, ge=1, le=100_000)
    write_rate_limit_window: int = Field(default=900, ge=1, le=86400)

    auth_rate_limit_requests: int = Field(default=5, ge=1, le=100_000)
    auth_rate_limit_window: int = Field(default=900, ge=1, le=86400)

    # How often expired windows are purged from memory
    rate_limit_sweep_interval: float = Field(default=60.0, gt=0, le=3600)

    def rate_limit_policies(self) -> Dict[str, Dict[str, int]]:
        """Limiter name → {max_requests, window_seconds}."""
        return {
            name: {
                "max_requests": getattr(self, f"{name}_rate_limit_requests"),
                "window_seconds": getattr(self, f"{name}_rate_limit_window"),
            }
            for name in ("search", "api", "write", "auth")
        }

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Default instance used by `cocktail_api.main:app`
settings = Settings()
