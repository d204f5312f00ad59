"""
lambda_discovery.tier1_runtime.validate
─────────────────────────────────────────
Input validation via Pydantic v2. Raises the library's ValidationError
(not raw Pydantic errors), and parses discovery service ids.

Service id grammar:
    name                       → all DEFAULT_METHODS are probed
    name:...:GET,POST          → only the last segment's methods are probed
"""
from __future__ import annotations

import re
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError, field_validator

T = TypeVar("T", bound=BaseModel)

# Probe order matters: it is the tie-break order between matches.
DEFAULT_METHODS: tuple[str, ...] = ("GET", "POST", "DELETE", "OPTIONS", "ANY", "PUT")

_METHOD_RE = re.compile(r"^[A-Z]+$")


def validate_input(model: Type[T], data: Any) -> T:
    """
    Validate raw data against a Pydantic model.
    Raises lambda_discovery ValidationError (not Pydantic's) on failure.
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        from lambda_discovery.tier0_core.errors import ValidationError

        fields = {
            ".".join(str(loc) for loc in err["loc"]): err["msg"]
            for err in exc.errors()
        }
        raise ValidationError(
            code="validation_error",
            user_message="Input validation failed.",
            fields=fields,
        ) from exc


class ServiceQuery(BaseModel):
    """A logical function name plus the HTTP methods to probe for it."""

    model_config = ConfigDict(frozen=True)

    function_name: str
    methods: tuple[str, ...] = DEFAULT_METHODS

    @field_validator("function_name")
    @classmethod
    def _non_empty_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("function name must not be empty")
        return v

    @field_validator("methods", mode="before")
    @classmethod
    def _normalize_methods(cls, v: Any) -> tuple[str, ...]:
        if isinstance(v, str):
            v = v.split(",")
        seen: list[str] = []
        for token in v:
            method = str(token).strip().upper()
            if not method:
                continue
            if not _METHOD_RE.match(method):
                raise ValueError(f"not an HTTP method: {token!r}")
            if method not in seen:
                seen.append(method)
        if not seen:
            raise ValueError("at least one HTTP method is required")
        return tuple(seen)


def parse_service_id(service_id: str) -> ServiceQuery:
    """
    Split a service id into a ServiceQuery.

    The function name is the first colon-delimited segment. When there is
    more than one segment the last one is a comma-separated method list;
    any segments in between are ignored.
    """
    segments = service_id.split(":")
    data: dict[str, Any] = {"function_name": segments[0]}
    if len(segments) > 1:
        data["methods"] = segments[-1]
    return validate_input(ServiceQuery, data)


__all__ = ["DEFAULT_METHODS", "ServiceQuery", "parse_service_id", "validate_input"]
