"""
lambda_discovery.tier0_core.errors
────────────────────────────────────
Error taxonomy for endpoint discovery. Every error carries a stable
machine-readable code, a user-safe message and internal detail.

A missing integration on a (resource, method) pair is NOT an error and has
no class here: the gateway inspector reports it as an empty result.
"""
from __future__ import annotations

from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class DiscoveryError(Exception):
    """
    Base class for all discovery errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - user_message: safe to surface to callers
    - detail: internal context
    - status_code: HTTP status code if surfaced through an API
    """

    status_code: int = 500
    code: str = "internal_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "An unexpected error occurred.",
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.user_message = user_message
        self.detail = detail or user_message
        self.metadata = metadata
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.user_message,
            }
        }


# ── Typed error classes ───────────────────────────────────────────────────────

class ValidationError(DiscoveryError):
    """Input validation failure (e.g. a malformed service id)."""
    status_code = 422
    code = "validation_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "Validation failed.",
        fields: dict | None = None,
        **metadata: Any,
    ) -> None:
        self.fields = fields or {}
        super().__init__(code, user_message, **metadata)

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.fields:
            d["error"]["fields"] = self.fields
        return d


class NotFoundError(DiscoveryError):
    """Requested resource does not exist."""
    status_code = 404
    code = "not_found"


class FunctionNotFoundError(NotFoundError):
    """The named function is not registered in Lambda."""
    code = "function_not_found"

    def __init__(self, function_name: str, **metadata: Any) -> None:
        self.function_name = function_name
        super().__init__(
            user_message=f"No function named {function_name!r} is registered.",
            function_name=function_name,
            **metadata,
        )


class NoEndpointError(NotFoundError):
    """The function exists but no gateway integration points at it."""
    code = "no_endpoint"

    def __init__(self, function_name: str, function_arn: str, **metadata: Any) -> None:
        self.function_name = function_name
        self.function_arn = function_arn
        super().__init__(
            user_message=f"No API Gateway endpoint is bound to function {function_name!r}.",
            detail=f"no integration uri contains {function_arn}",
            function_name=function_name,
            function_arn=function_arn,
            **metadata,
        )


class UpstreamError(DiscoveryError):
    """Lambda or API Gateway call failed."""
    status_code = 502
    code = "upstream_error"


class ConfigurationError(DiscoveryError):
    """Misconfiguration detected at startup."""
    status_code = 500
    code = "configuration_error"


__all__ = [
    "DiscoveryError",
    "ValidationError",
    "NotFoundError",
    "FunctionNotFoundError",
    "NoEndpointError",
    "UpstreamError",
    "ConfigurationError",
]
