"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Policy overrides left as None fall back to the named policy's own defaults
    - policy_mode is validated against PolicyMode at load time

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: the service runs the extended policy out-of-the-box
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from cc_eligibility.core.domain_types import PolicyMode
from cc_eligibility.core.policy import PARCEL_WEIGHT_THRESHOLD


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Policy
    policy_mode: PolicyMode = PolicyMode.EXTENDED
    parcel_weight_threshold: float = PARCEL_WEIGHT_THRESHOLD

    # JSON lists in env, e.g. TARGET_INCLUDE='["credit","stripe"]'
    target_include: list[str] | None = None
    target_exclude: list[str] | None = None
    allowed_shipping_methods: list[str] | None = None

    @field_validator("policy_mode", mode="before")
    @classmethod
    def normalize_policy_mode(cls, v):
        """Accept BASE / Extended etc. from env files."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    # API
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
