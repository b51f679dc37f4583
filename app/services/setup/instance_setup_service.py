from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from app.services.config import LightsailConfig
from app.services.errors import ProviderErrorKind, ResourceProviderError
from app.services.lightsail_service import LightsailService
from app.services.setup.errors import (
    AvailabilityZoneMismatchError,
    InstanceAlreadyExistsError,
    InstanceCreationError,
    InstanceVerificationError,
    KeyPairCreationError,
    MissingInstanceParametersError,
    PrivateKeyMissingError,
)


logger = logging.getLogger(__name__)

# Some SDK variants return the key material base64-encoded under a different field.
PRIVATE_KEY_FIELDS = ("privateKey", "privateKeyBase64")


@dataclass(frozen=True)
class InstanceSpec:
    instance_name: Optional[str]
    blueprint_id: Optional[str]
    bundle_id: Optional[str]
    availability_zone: Optional[str]


@dataclass(frozen=True)
class InstanceProvisioned:
    instance_creation_response: dict[str, Any]
    key_pair_name: str
    private_key: str = field(repr=False)


def extract_private_key(key_pair_response: dict[str, Any]) -> Optional[str]:
    for name in PRIVATE_KEY_FIELDS:
        value = key_pair_response.get(name)
        if value:
            return str(value)
    return None


class InstanceSetupService:
    """Create a Lightsail instance bound to a freshly issued SSH key pair.

    The private key is returned to the caller once and never stored or
    logged here. If the HTTP response is lost, so is the key.
    """

    def __init__(
        self,
        *,
        lightsail: LightsailService,
        config: LightsailConfig,
        token_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self._lightsail = lightsail
        self._config = config
        self._token_factory = token_factory

    def _validate(self, spec: InstanceSpec) -> None:
        if not (spec.instance_name and spec.blueprint_id and spec.bundle_id and spec.availability_zone):
            raise MissingInstanceParametersError("Missing required parameters.")

        region = self._config.region_name
        if not spec.availability_zone.startswith(region):
            raise AvailabilityZoneMismatchError(f"Availability zone must be in region {region}")

    def new_key_pair_name(self) -> str:
        return f"{self._config.key_pair_prefix}-{self._token_factory()}"

    async def provision_instance(self, spec: InstanceSpec) -> InstanceProvisioned:
        """Validate the request, check the name, issue a key pair and create the instance.

        Raises:
            MissingInstanceParametersError / AvailabilityZoneMismatchError: before any AWS call.
            InstanceAlreadyExistsError: an instance with this name already exists.
            InstanceVerificationError: the name check failed for another reason.
            KeyPairCreationError / PrivateKeyMissingError: key pair step failed.
            InstanceCreationError: Lightsail rejected the instance creation.
        """

        self._validate(spec)
        instance_name = str(spec.instance_name)

        await self._ensure_name_available(instance_name)

        key_pair_name = self.new_key_pair_name()
        private_key = await self._create_key_pair(key_pair_name)

        try:
            creation = await self._lightsail.create_instances(
                instance_names=[instance_name],
                blueprint_id=str(spec.blueprint_id),
                bundle_id=str(spec.bundle_id),
                availability_zone=str(spec.availability_zone),
                key_pair_name=key_pair_name,
            )
        except ResourceProviderError as exc:
            logger.exception("Error creating instance (instance=%s)", instance_name)
            raise InstanceCreationError(self._creation_message(exc), error_type=exc.code) from exc

        if not isinstance(creation.get("operations"), list) or not creation["operations"]:
            # Lightsail may still be creating the instance; the caller can poll the instance list.
            logger.warning("CreateInstances response has no operations (instance=%s)", instance_name)

        logger.info("Instance creation started (instance=%s key_pair=%s)", instance_name, key_pair_name)
        return InstanceProvisioned(
            instance_creation_response=creation,
            key_pair_name=key_pair_name,
            private_key=private_key,
        )

    async def _ensure_name_available(self, instance_name: str) -> None:
        try:
            await self._lightsail.get_instance(instance_name)
        except ResourceProviderError as exc:
            if exc.kind is ProviderErrorKind.NOT_FOUND:
                logger.info("Instance name available (instance=%s, %s)", instance_name, exc.code)
                return
            logger.exception("Unexpected error checking instance existence (instance=%s)", instance_name)
            raise InstanceVerificationError(
                "Error verifying whether the instance exists.", error_type=exc.code
            ) from exc

        logger.warning("Attempt to create instance with existing name (instance=%s)", instance_name)
        raise InstanceAlreadyExistsError(
            f"An instance named '{instance_name}' already exists. Please choose another name."
        )

    async def _create_key_pair(self, key_pair_name: str) -> str:
        try:
            response = await self._lightsail.create_key_pair(key_pair_name)
        except ResourceProviderError as exc:
            logger.exception("Error creating SSH key pair (key_pair=%s)", key_pair_name)
            raise KeyPairCreationError("Error creating SSH key pair.", error_type=exc.code) from exc

        private_key = extract_private_key(response)
        logger.info("Key pair created (key_pair=%s private_key_present=%s)", key_pair_name, bool(private_key))
        if not private_key:
            raise PrivateKeyMissingError("Could not obtain the private key of the created SSH key pair.")
        return private_key

    @staticmethod
    def _creation_message(exc: ResourceProviderError) -> str:
        if exc.kind is ProviderErrorKind.INVALID_INPUT:
            return "Invalid request data (blueprint, bundle or zone?)."
        if exc.kind is ProviderErrorKind.SERVICE_UNAVAILABLE:
            return f"Lightsail service error: {exc.provider_message}"
        return f"Unexpected error: {exc.provider_message}"
