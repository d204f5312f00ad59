"""
lambda_discovery
────────────────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from lambda_discovery.tier0_core.logging import get_logger
from lambda_discovery.tier0_core.errors import (
    DiscoveryError,
    ValidationError,
    NotFoundError,
    FunctionNotFoundError,
    NoEndpointError,
    UpstreamError,
    ConfigurationError,
)
from lambda_discovery.tier0_core.config import get_config, DiscoveryConfig
from lambda_discovery.tier0_core.metrics import start_metrics_server

from lambda_discovery.tier1_runtime.validate import DEFAULT_METHODS, ServiceQuery, parse_service_id

from lambda_discovery.tier3_platform.models import (
    FunctionIdentity,
    GatewayApi,
    ResourcePath,
    Integration,
    ServiceInstance,
)
from lambda_discovery.tier3_platform.registry import (
    FunctionRegistry,
    LambdaFunctionRegistry,
    MockFunctionRegistry,
)
from lambda_discovery.tier3_platform.gateway import (
    GatewayInspector,
    ApiGatewayInspector,
    MockGatewayInspector,
)
from lambda_discovery.tier3_platform.discovery import (
    LambdaDiscoveryClient,
    build_discovery_client,
    get_discovery_client,
    set_discovery_client,
    get_services,
    get_instances,
    resolve_endpoint,
)

__version__ = "0.1.0"
__all__ = [
    # logging
    "get_logger",
    # errors
    "DiscoveryError", "ValidationError", "NotFoundError",
    "FunctionNotFoundError", "NoEndpointError", "UpstreamError", "ConfigurationError",
    # config
    "get_config", "DiscoveryConfig",
    # metrics
    "start_metrics_server",
    # validate
    "DEFAULT_METHODS", "ServiceQuery", "parse_service_id",
    # models
    "FunctionIdentity", "GatewayApi", "ResourcePath", "Integration", "ServiceInstance",
    # registry
    "FunctionRegistry", "LambdaFunctionRegistry", "MockFunctionRegistry",
    # gateway
    "GatewayInspector", "ApiGatewayInspector", "MockGatewayInspector",
    # discovery
    "LambdaDiscoveryClient", "build_discovery_client", "get_discovery_client",
    "set_discovery_client", "get_services", "get_instances", "resolve_endpoint",
]
