"""
lambda_discovery.tier3_platform.gateway
─────────────────────────────────────────
Gateway inspector: REST APIs, their resources, and the integration bound
to each (resource, HTTP method) pair.

An unbound (resource, method) pair is an expected answer, not a failure:
``get_integrations`` returns an empty list for it. Only transport and
service faults raise.

Backends:
  - ApiGatewayInspector  boto3 ``apigateway`` client (all pages)
  - MockGatewayInspector in-memory, for tests and DISCOVERY_BACKEND=mock
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from lambda_discovery.tier0_core.logging import get_logger
from lambda_discovery.tier3_platform.aws import AWS_ERRORS, error_code, upstream_error
from lambda_discovery.tier3_platform.models import GatewayApi, Integration, ResourcePath

log = get_logger(__name__)


@runtime_checkable
class GatewayInspector(Protocol):
    def list_apis(self) -> list[GatewayApi]: ...
    def list_resource_paths(self, api_id: str) -> list[ResourcePath]: ...
    def get_integrations(
        self, api_id: str, resource_id: str, http_method: str
    ) -> list[Integration]: ...


# ── AWS API Gateway ───────────────────────────────────────────────────────────

class ApiGatewayInspector:
    """Reads REST APIs from AWS API Gateway through a boto3 ``apigateway`` client."""

    def __init__(self, client: Any) -> None:
        self._client = client

    def list_apis(self) -> list[GatewayApi]:
        apis: list[GatewayApi] = []
        try:
            for page in self._client.get_paginator("get_rest_apis").paginate():
                for item in page.get("items", []):
                    apis.append(GatewayApi(item["id"], item.get("name")))
        except AWS_ERRORS as exc:
            raise upstream_error("apigateway", "GetRestApis", exc) from exc
        return apis

    def list_resource_paths(self, api_id: str) -> list[ResourcePath]:
        resources: list[ResourcePath] = []
        try:
            paginator = self._client.get_paginator("get_resources")
            for page in paginator.paginate(restApiId=api_id):
                for item in page.get("items", []):
                    resources.append(
                        ResourcePath(item["id"], item.get("pathPart"), item.get("path"))
                    )
        except AWS_ERRORS as exc:
            raise upstream_error("apigateway", "GetResources", exc) from exc
        return resources

    def get_integrations(
        self, api_id: str, resource_id: str, http_method: str
    ) -> list[Integration]:
        try:
            response = self._client.get_integration(
                restApiId=api_id,
                resourceId=resource_id,
                httpMethod=http_method,
            )
        except AWS_ERRORS as exc:
            if error_code(exc) == "NotFoundException":
                log.debug(
                    "gateway.integration.absent",
                    api_id=api_id,
                    resource_id=resource_id,
                    http_method=http_method,
                )
                return []
            raise upstream_error("apigateway", "GetIntegration", exc) from exc
        return [
            Integration(
                uri=response.get("uri", ""),
                type=response.get("type"),
                http_method=response.get("httpMethod"),
            )
        ]


# ── Mock gateway (tests) ──────────────────────────────────────────────────────

class MockGatewayInspector:
    """
    In-memory gateway. Build it with add_api / add_resource / bind.

    ``probes`` records every get_integrations call as
    (api_id, resource_id, http_method), in call order.
    """

    def __init__(self) -> None:
        self._apis: dict[str, GatewayApi] = {}
        self._resources: dict[str, list[ResourcePath]] = {}
        self._integrations: dict[tuple[str, str, str], Integration] = {}
        self.probes: list[tuple[str, str, str]] = []
        self.calls: list[tuple[str, ...]] = []

    def add_api(self, api_id: str, name: str | None = None) -> GatewayApi:
        api = GatewayApi(api_id, name)
        self._apis[api_id] = api
        self._resources.setdefault(api_id, [])
        return api

    def add_resource(
        self, api_id: str, resource_id: str, path_part: str | None
    ) -> ResourcePath:
        path = "/" if path_part is None else f"/{path_part}"
        resource = ResourcePath(resource_id, path_part, path)
        self._resources[api_id].append(resource)
        return resource

    def bind(
        self, api_id: str, resource_id: str, http_method: str, uri: str
    ) -> Integration:
        integration = Integration(uri=uri, type="AWS_PROXY", http_method="POST")
        self._integrations[(api_id, resource_id, http_method.upper())] = integration
        return integration

    def list_apis(self) -> list[GatewayApi]:
        self.calls.append(("list_apis",))
        return list(self._apis.values())

    def list_resource_paths(self, api_id: str) -> list[ResourcePath]:
        self.calls.append(("list_resource_paths", api_id))
        return list(self._resources.get(api_id, []))

    def get_integrations(
        self, api_id: str, resource_id: str, http_method: str
    ) -> list[Integration]:
        self.probes.append((api_id, resource_id, http_method))
        integration = self._integrations.get((api_id, resource_id, http_method))
        return [integration] if integration is not None else []


__all__ = ["GatewayInspector", "ApiGatewayInspector", "MockGatewayInspector"]
