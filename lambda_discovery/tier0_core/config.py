"""
lambda_discovery.tier0_core.config
────────────────────────────────────
Typed configuration with env layering. Reads from .env → environment
variables. All fields are typed via Pydantic; invalid values raise
ConfigurationError from get_config(), not at first use.

Stack: pydantic-settings
"""
from __future__ import annotations

import re
from functools import lru_cache

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lambda_discovery.tier0_core.errors import ConfigurationError

_REGION_RE = re.compile(r"^[a-z]{2}(-[a-z]+)+-\d+$")

BACKENDS = frozenset({"aws", "mock"})


class DiscoveryConfig(BaseSettings):
    """
    Typed discovery configuration.

    The deployment stage is fixed to ``prod`` and is intentionally not a
    setting.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ── AWS ───────────────────────────────────────────────────────────────────
    aws_region: str = Field(default="us-east-1", alias="AWS_REGION")

    # ── Backend ───────────────────────────────────────────────────────────────
    discovery_backend: str = Field(default="aws", alias="DISCOVERY_BACKEND")

    # ── Metrics ───────────────────────────────────────────────────────────────
    metrics_enabled: bool = Field(default=True, alias="DISCOVERY_METRICS_ENABLED")

    @field_validator("aws_region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        v = v.strip().lower()
        if not _REGION_RE.match(v):
            raise ValueError(f"not an AWS region name: {v!r}")
        return v

    @field_validator("discovery_backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        if v.lower() not in BACKENDS:
            raise ValueError(f"discovery_backend must be one of {sorted(BACKENDS)}, got {v!r}")
        return v.lower()


@lru_cache(maxsize=1)
def get_config() -> DiscoveryConfig:
    """
    Return the singleton discovery config. Cached after first call.
    Call _reset_config() in tests to pick up new env vars.
    """
    try:
        return DiscoveryConfig()
    except PydanticValidationError as exc:
        fields = ", ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(
            user_message="Invalid discovery configuration.",
            detail=fields,
        ) from exc


def _reset_config() -> None:
    """For tests — clear the config cache."""
    get_config.cache_clear()


__all__ = ["DiscoveryConfig", "get_config"]
