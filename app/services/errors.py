"""Provider error classification.

The S3 and Lightsail façades never let raw botocore exceptions escape. They
wrap them in :class:`ResourceProviderError`, which carries the provider's
error code (kept for diagnostics and returned to API clients as
``errorType``) and a :class:`ProviderErrorKind`, the closed set the
provisioning services branch on.
"""

from __future__ import annotations

import enum
from typing import Optional

from botocore.exceptions import (
    ClientError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)


class ProviderErrorKind(enum.Enum):
    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    INVALID_INPUT = "invalid_input"
    SERVICE_UNAVAILABLE = "service_unavailable"
    ALREADY_EXISTS = "already_exists"
    UNKNOWN = "unknown"


_KIND_BY_CODE: dict[str, ProviderErrorKind] = {
    # S3 HEAD requests have no body, so botocore reports the bare HTTP status as the code.
    "404": ProviderErrorKind.NOT_FOUND,
    "NotFound": ProviderErrorKind.NOT_FOUND,
    "NoSuchBucket": ProviderErrorKind.NOT_FOUND,
    "NotFoundException": ProviderErrorKind.NOT_FOUND,
    "DoesNotExist": ProviderErrorKind.NOT_FOUND,
    "403": ProviderErrorKind.ACCESS_DENIED,
    "AccessDenied": ProviderErrorKind.ACCESS_DENIED,
    "AccessDeniedException": ProviderErrorKind.ACCESS_DENIED,
    "InvalidInputException": ProviderErrorKind.INVALID_INPUT,
    "InvalidBucketName": ProviderErrorKind.INVALID_INPUT,
    "InvalidLocationConstraint": ProviderErrorKind.INVALID_INPUT,
    "IllegalLocationConstraintException": ProviderErrorKind.INVALID_INPUT,
    "MalformedPolicy": ProviderErrorKind.INVALID_INPUT,
    "ServiceException": ProviderErrorKind.SERVICE_UNAVAILABLE,
    "ServiceUnavailable": ProviderErrorKind.SERVICE_UNAVAILABLE,
    "SlowDown": ProviderErrorKind.SERVICE_UNAVAILABLE,
    "InternalError": ProviderErrorKind.SERVICE_UNAVAILABLE,
    "BucketAlreadyExists": ProviderErrorKind.ALREADY_EXISTS,
    "BucketAlreadyOwnedByYou": ProviderErrorKind.ALREADY_EXISTS,
}

_UNAVAILABLE_EXCEPTIONS = (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError)


def provider_error_code(exc: BaseException) -> str:
    """Return the provider-reported error code, or the exception class name."""

    if isinstance(exc, ResourceProviderError):
        return exc.code
    if isinstance(exc, ClientError):
        code = (exc.response.get("Error") or {}).get("Code")
        if code:
            return str(code)
    return type(exc).__name__


def provider_error_message(exc: BaseException) -> str:
    if isinstance(exc, ResourceProviderError):
        return exc.provider_message
    if isinstance(exc, ClientError):
        message = (exc.response.get("Error") or {}).get("Message")
        if message:
            return str(message)
    return str(exc)


def classify_provider_error(exc: BaseException) -> ProviderErrorKind:
    if isinstance(exc, ResourceProviderError):
        return exc.kind
    if isinstance(exc, _UNAVAILABLE_EXCEPTIONS):
        return ProviderErrorKind.SERVICE_UNAVAILABLE
    if isinstance(exc, ClientError):
        return _KIND_BY_CODE.get(provider_error_code(exc), ProviderErrorKind.UNKNOWN)
    return ProviderErrorKind.UNKNOWN


class ResourceProviderError(RuntimeError):
    """A failed call to S3 or Lightsail, already classified."""

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        code: str,
        kind: ProviderErrorKind,
        provider_message: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.code = code
        self.kind = kind
        self.provider_message = provider_message or message

    @classmethod
    def wrap(cls, exc: BaseException, *, operation: str) -> "ResourceProviderError":
        code = provider_error_code(exc)
        return cls(
            f"{operation} failed ({code})",
            operation=operation,
            code=code,
            kind=classify_provider_error(exc),
            provider_message=provider_error_message(exc),
        )
