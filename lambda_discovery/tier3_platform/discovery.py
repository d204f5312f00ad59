"""
lambda_discovery.tier3_platform.discovery
───────────────────────────────────────────
Service endpoint resolution for AWS Lambda functions exposed through
API Gateway. A logical function name resolves to the one public URL:

    https://{api_id}.execute-api.{region}.amazonaws.com/prod/{path_part}

Resolution looks the function's ARN up in Lambda, then probes every
(REST API, resource, HTTP method) in API Gateway for an integration whose
URI contains that ARN. Nothing is cached: each call re-reads both services,
costing one GetIntegration request per (resource, method) pair.

Select the backend via DISCOVERY_BACKEND=aws|mock.
"""
from __future__ import annotations

import time
from collections.abc import Iterable, Iterator
from typing import Any

import boto3

from lambda_discovery.tier0_core.config import DiscoveryConfig, get_config
from lambda_discovery.tier0_core.errors import FunctionNotFoundError, NoEndpointError
from lambda_discovery.tier0_core.logging import bind_context, get_logger, unbind_context
from lambda_discovery.tier0_core.metrics import (
    integration_probes_total,
    resolution_duration,
    resolutions_total,
)
from lambda_discovery.tier1_runtime.validate import (
    DEFAULT_METHODS,
    ServiceQuery,
    parse_service_id,
    validate_input,
)
from lambda_discovery.tier3_platform.gateway import (
    ApiGatewayInspector,
    GatewayInspector,
    MockGatewayInspector,
)
from lambda_discovery.tier3_platform.models import PathContext, ServiceInstance
from lambda_discovery.tier3_platform.registry import (
    FunctionRegistry,
    LambdaFunctionRegistry,
    MockFunctionRegistry,
)

log = get_logger(__name__)

STAGE = "prod"

DESCRIPTION = (
    "A discovery client that returns URIs "
    "for AWS Lambda functions mapped to API Gateway endpoints"
)


class LambdaDiscoveryClient:
    """
    Discovery client returning API Gateway URLs for Lambda functions.

    Usage::

        client = build_discovery_client()
        client.get_services()                 # ["uppercase", ...]
        client.get_instances("uppercase")     # [ServiceInstance(uri=...)]
        client.get_instances("uppercase:POST")
    """

    def __init__(
        self,
        region: str,
        registry: FunctionRegistry,
        gateway: GatewayInspector,
        *,
        metrics_enabled: bool = True,
    ) -> None:
        self.region = region
        self._registry = registry
        self._gateway = gateway
        self._metrics_enabled = metrics_enabled

    def description(self) -> str:
        return DESCRIPTION

    def get_services(self) -> list[str]:
        """Logical names of all Lambda functions, in registry order."""
        return [fn.name for fn in self._registry.list_functions()]

    list_function_names = get_services

    def get_instances(self, service_id: str) -> list[ServiceInstance]:
        """
        A function has at most one public address, so this returns a
        single-element list or raises.
        """
        query = parse_service_id(service_id)
        url = self.resolve_endpoint(query.function_name, query.methods)
        return [ServiceInstance(service_id=query.function_name, uri=url)]

    def resolve_endpoint(
        self, function_name: str, methods: Iterable[str] | str | None = None
    ) -> str:
        """
        Return the gateway URL bound to ``function_name``.

        ``methods`` may be an iterable of HTTP methods or a comma-separated
        string such as ``"GET,POST"``.

        Raises:
            FunctionNotFoundError: Lambda has no such function. No gateway
                call has been made.
            NoEndpointError: no integration URI contains the function ARN.
            UpstreamError: either AWS service failed.
        """
        query = validate_input(
            ServiceQuery,
            {
                "function_name": function_name,
                "methods": DEFAULT_METHODS if methods is None else methods,
            },
        )
        start = time.monotonic()
        outcome = "error"
        try:
            url = self._resolve(query)
            outcome = "resolved"
            return url
        except FunctionNotFoundError:
            outcome = "function_not_found"
            raise
        except NoEndpointError:
            outcome = "no_endpoint"
            raise
        finally:
            if self._metrics_enabled:
                resolutions_total(outcome=outcome).inc()
                resolution_duration().observe(time.monotonic() - start)

    def _resolve(self, query: ServiceQuery) -> str:
        bind_context(function=query.function_name)
        try:
            identity = self._registry.get_function(query.function_name)
            log.info(
                "discovery.resolve.start",
                function_arn=identity.arn,
                methods=list(query.methods),
            )

            matches = (
                ctx for ctx in self._candidates(query.methods)
                if ctx.integration.targets(identity.arn)
            )
            urls = list(dict.fromkeys(self._url(ctx) for ctx in matches))

            if not urls:
                log.warning("discovery.resolve.no_endpoint", function_arn=identity.arn)
                raise NoEndpointError(identity.name, identity.arn)

            log.info("discovery.resolve.match", url=urls[0], candidates=len(urls))
            return urls[0]
        finally:
            unbind_context("function")

    def _candidates(self, methods: Iterable[str]) -> Iterator[PathContext]:
        """Every bound (api, resource, integration) triple, in probe order."""
        methods = tuple(methods)
        for api in self._gateway.list_apis():
            for resource in self._gateway.list_resource_paths(api.id):
                for method in methods:
                    integrations = self._gateway.get_integrations(api.id, resource.id, method)
                    if self._metrics_enabled:
                        result = "bound" if integrations else "absent"
                        integration_probes_total(result=result).inc()
                    for integration in integrations:
                        yield PathContext(api, resource, integration)

    def _url(self, ctx: PathContext) -> str:
        return (
            f"https://{ctx.api.id}.execute-api.{self.region}.amazonaws.com"
            f"/{STAGE}/{ctx.resource.path_part or ''}"
        )


# ── Wiring ────────────────────────────────────────────────────────────────────

def build_discovery_client(
    config: DiscoveryConfig | None = None,
    session: Any = None,
) -> LambdaDiscoveryClient:
    """
    Build a client backed by real AWS services.

    Credentials come from boto3's default chain (env vars, shared config,
    instance role). Pass ``session`` to use a specific boto3 Session.
    """
    config = config or get_config()
    session = session or boto3.session.Session(region_name=config.aws_region)
    return LambdaDiscoveryClient(
        config.aws_region,
        LambdaFunctionRegistry(session.client("lambda", region_name=config.aws_region)),
        ApiGatewayInspector(session.client("apigateway", region_name=config.aws_region)),
        metrics_enabled=config.metrics_enabled,
    )


_client: LambdaDiscoveryClient | None = None


def _build_client() -> LambdaDiscoveryClient:
    config = get_config()
    if config.discovery_backend == "mock":
        return LambdaDiscoveryClient(
            config.aws_region,
            MockFunctionRegistry(),
            MockGatewayInspector(),
            metrics_enabled=config.metrics_enabled,
        )
    return build_discovery_client(config)


def get_discovery_client() -> LambdaDiscoveryClient:
    global _client
    if _client is None:
        _client = _build_client()
    return _client


def set_discovery_client(client: LambdaDiscoveryClient) -> None:
    """Replace the module-level client (e.g. with one built from custom boto3 clients)."""
    global _client
    _client = client


def _reset_client() -> None:
    global _client
    _client = None


# ── Public API ────────────────────────────────────────────────────────────────

def get_services() -> list[str]:
    return get_discovery_client().get_services()


def get_instances(service_id: str) -> list[ServiceInstance]:
    """Return the single ServiceInstance for a service id like ``name`` or ``name:GET,POST``."""
    return get_discovery_client().get_instances(service_id)


def resolve_endpoint(function_name: str, methods: Iterable[str] | str | None = None) -> str:
    """Return the API Gateway URL for a Lambda function."""
    return get_discovery_client().resolve_endpoint(function_name, methods)


__all__ = [
    "DESCRIPTION",
    "STAGE",
    "LambdaDiscoveryClient",
    "build_discovery_client",
    "get_discovery_client",
    "set_discovery_client",
    "get_services",
    "get_instances",
    "resolve_endpoint",
]
