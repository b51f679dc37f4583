from __future__ import annotations

from http import HTTPStatus
from typing import Optional


class ProvisioningError(RuntimeError):
    """Base class for failures reported to API clients.

    `error_type` is the machine-readable kind returned as ``errorType``. For
    provider failures it is the provider's own error code (for example
    ``AccessDenied``), so clients can still tell what AWS said.
    """

    error_type: str = "UnknownError"
    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, error_type: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if error_type:
            self.error_type = error_type


class InvalidBucketNameError(ProvisioningError):
    error_type = "InvalidNameFormat"
    status_code = HTTPStatus.BAD_REQUEST


class BucketAlreadyExistsError(ProvisioningError):
    error_type = "BucketAlreadyExists"
    status_code = HTTPStatus.CONFLICT


class BucketProvisioningError(ProvisioningError):
    pass


class BucketNotEmptyError(ProvisioningError):
    error_type = "BucketNotEmpty"
    status_code = HTTPStatus.BAD_REQUEST


class BucketDeprovisioningError(ProvisioningError):
    pass


class MissingInstanceParametersError(ProvisioningError):
    error_type = "MissingParameters"
    status_code = HTTPStatus.BAD_REQUEST


class AvailabilityZoneMismatchError(ProvisioningError):
    error_type = "AvailabilityZoneMismatch"
    status_code = HTTPStatus.BAD_REQUEST


class InstanceAlreadyExistsError(ProvisioningError):
    error_type = "InstanceAlreadyExists"
    status_code = HTTPStatus.CONFLICT


class InstanceVerificationError(ProvisioningError):
    pass


class KeyPairCreationError(ProvisioningError):
    pass


class PrivateKeyMissingError(ProvisioningError):
    error_type = "PrivateKeyMissingInResponse"


class InstanceCreationError(ProvisioningError):
    pass


class WebsiteProbeError(ProvisioningError):
    error_type = "WebsiteProbeFailed"
