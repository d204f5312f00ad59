"""
lambda_discovery.tier3_platform.registry
──────────────────────────────────────────
Function registry: logical function names and their ARNs.

Backends:
  - LambdaFunctionRegistry  boto3 ``lambda`` client (all pages)
  - MockFunctionRegistry    in-memory, for tests and DISCOVERY_BACKEND=mock
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

from lambda_discovery.tier0_core.errors import FunctionNotFoundError
from lambda_discovery.tier0_core.logging import get_logger
from lambda_discovery.tier3_platform.aws import AWS_ERRORS, error_code, upstream_error
from lambda_discovery.tier3_platform.models import FunctionIdentity

log = get_logger(__name__)


@runtime_checkable
class FunctionRegistry(Protocol):
    def list_functions(self) -> list[FunctionIdentity]: ...
    def get_function(self, name: str) -> FunctionIdentity: ...


# ── AWS Lambda ────────────────────────────────────────────────────────────────

class LambdaFunctionRegistry:
    """
    Reads functions from AWS Lambda.

    ``client`` is a boto3 ``lambda`` client; its region and credentials are
    whatever the caller built it with.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    def list_functions(self) -> list[FunctionIdentity]:
        functions: list[FunctionIdentity] = []
        try:
            paginator = self._client.get_paginator("list_functions")
            for page in paginator.paginate():
                for fn in page.get("Functions", []):
                    functions.append(FunctionIdentity(fn["FunctionName"], fn["FunctionArn"]))
        except AWS_ERRORS as exc:
            raise upstream_error("lambda", "ListFunctions", exc) from exc
        return functions

    def get_function(self, name: str) -> FunctionIdentity:
        try:
            response = self._client.get_function(FunctionName=name)
        except AWS_ERRORS as exc:
            if error_code(exc) == "ResourceNotFoundException":
                log.info("discovery.function.not_found", function=name)
                raise FunctionNotFoundError(name) from exc
            raise upstream_error("lambda", "GetFunction", exc) from exc
        config = response["Configuration"]
        return FunctionIdentity(config.get("FunctionName", name), config["FunctionArn"])


# ── Mock registry (tests) ─────────────────────────────────────────────────────

class MockFunctionRegistry:
    """In-memory registry. ``calls`` records every lookup in order."""

    def __init__(self, functions: Iterable[FunctionIdentity] = ()) -> None:
        self._functions: dict[str, FunctionIdentity] = {}
        self.calls: list[tuple[str, ...]] = []
        for fn in functions:
            self.register(fn.name, fn.arn)

    def register(self, name: str, arn: str) -> FunctionIdentity:
        identity = FunctionIdentity(name, arn)
        self._functions[name] = identity
        return identity

    def list_functions(self) -> list[FunctionIdentity]:
        self.calls.append(("list_functions",))
        return list(self._functions.values())

    def get_function(self, name: str) -> FunctionIdentity:
        self.calls.append(("get_function", name))
        if name not in self._functions:
            raise FunctionNotFoundError(name)
        return self._functions[name]


__all__ = ["FunctionRegistry", "LambdaFunctionRegistry", "MockFunctionRegistry"]
