"""
lambda_discovery test configuration.

All tests run against in-memory registries/gateways or botocore Stubbers —
no AWS account or network access required.
"""
from __future__ import annotations

import os

import pytest

# ── Force the mock backend for all tests ──────────────────────────────────
# These must be set before any lambda_discovery modules are imported.

os.environ.setdefault("DISCOVERY_BACKEND", "mock")
os.environ.setdefault("DISCOVERY_LOG_LEVEL", "WARNING")
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

REGION = "us-east-1"
ACCOUNT = "123456789012"


def function_arn(name: str) -> str:
    return f"arn:aws:lambda:{REGION}:{ACCOUNT}:function:{name}"


def invocation_uri(name: str) -> str:
    return (
        f"arn:aws:apigateway:{REGION}:lambda:path/2015-03-31/functions/"
        f"{function_arn(name)}/invocations"
    )


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_module_singletons():
    """
    Reset the cached config and discovery client between tests so env
    changes made by one test do not bleed into the next.
    """
    from lambda_discovery.tier0_core.config import _reset_config
    from lambda_discovery.tier3_platform.discovery import _reset_client

    _reset_config()
    _reset_client()
    yield
    _reset_config()
    _reset_client()


@pytest.fixture
def registry():
    """A registry holding ``uppercase`` and ``lowercase``."""
    from lambda_discovery.tier3_platform.registry import MockFunctionRegistry

    reg = MockFunctionRegistry()
    reg.register("uppercase", function_arn("uppercase"))
    reg.register("lowercase", function_arn("lowercase"))
    return reg


@pytest.fixture
def gateway():
    """An empty in-memory gateway."""
    from lambda_discovery.tier3_platform.gateway import MockGatewayInspector
    return MockGatewayInspector()


@pytest.fixture
def client(registry, gateway):
    from lambda_discovery.tier3_platform.discovery import LambdaDiscoveryClient
    return LambdaDiscoveryClient(REGION, registry, gateway)
