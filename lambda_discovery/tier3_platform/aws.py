"""
lambda_discovery.tier3_platform.aws
─────────────────────────────────────
botocore error helpers shared by the Lambda and API Gateway adapters.
"""
from __future__ import annotations

from botocore.exceptions import BotoCoreError, ClientError

from lambda_discovery.tier0_core.errors import UpstreamError

# Anything a boto3 call can raise that is not a modelled service answer.
AWS_ERRORS = (ClientError, BotoCoreError)


def error_code(exc: BaseException) -> str | None:
    """Return the AWS error code of a ClientError, else None."""
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code")
    return None


def upstream_error(service: str, operation: str, exc: BaseException) -> UpstreamError:
    return UpstreamError(
        user_message=f"{service} {operation} failed.",
        detail=f"{service} {operation} failed: {exc}",
        upstream_service=service,
        operation=operation,
        aws_error_code=error_code(exc),
    )


__all__ = ["AWS_ERRORS", "error_code", "upstream_error"]
