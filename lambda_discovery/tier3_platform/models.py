"""
lambda_discovery.tier3_platform.models
────────────────────────────────────────
Request-scoped values passed between the registry, the gateway inspector
and the resolver. Nothing here is persisted or cached.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit


@dataclass(frozen=True)
class FunctionIdentity:
    name: str
    arn: str


@dataclass(frozen=True)
class GatewayApi:
    id: str
    name: str | None = None


@dataclass(frozen=True)
class ResourcePath:
    id: str
    path_part: str | None = None  # None for the root resource "/"
    path: str | None = None


@dataclass(frozen=True)
class Integration:
    uri: str
    type: str | None = None
    http_method: str | None = None

    def targets(self, function_arn: str) -> bool:
        """True if this integration invokes the function with the given ARN."""
        return function_arn in self.uri


@dataclass(frozen=True)
class PathContext:
    """One candidate (api, resource, integration) triple."""
    api: GatewayApi
    resource: ResourcePath
    integration: Integration


@dataclass(frozen=True)
class ServiceInstance:
    service_id: str
    uri: str
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def scheme(self) -> str:
        return urlsplit(self.uri).scheme

    @property
    def host(self) -> str:
        return urlsplit(self.uri).hostname or ""

    @property
    def secure(self) -> bool:
        return self.scheme == "https"

    @property
    def port(self) -> int:
        explicit = urlsplit(self.uri).port
        if explicit is not None:
            return explicit
        return 443 if self.secure else 80


__all__ = [
    "FunctionIdentity",
    "GatewayApi",
    "ResourcePath",
    "Integration",
    "PathContext",
    "ServiceInstance",
]
