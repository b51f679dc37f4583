from __future__ import annotations

from typing import Any, Optional

import aioboto3
from botocore.config import Config

from app.services.config import LightsailConfig
from app.services.errors import ResourceProviderError


def _strip_metadata(response: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in response.items() if k != "ResponseMetadata"}


class LightsailService:
    """Compute Resource Provider over the Lightsail API."""

    def __init__(self, config: LightsailConfig, *, session: Optional[aioboto3.Session] = None) -> None:
        self._config = config
        self._session = session or aioboto3.Session()

    @property
    def config(self) -> LightsailConfig:
        return self._config

    def _client(self) -> Any:
        return self._session.client(
            "lightsail",
            region_name=self._config.region_name,
            endpoint_url=self._config.endpoint_url,
            config=Config(
                connect_timeout=self._config.connect_timeout_seconds,
                read_timeout=self._config.read_timeout_seconds,
            ),
        )

    async def _call(self, operation: str, **kwargs: Any) -> dict[str, Any]:
        try:
            lightsail_client: Any = self._client()
            async with lightsail_client as lightsail:
                response = await getattr(lightsail, operation)(**kwargs)
        except Exception as exc:
            raise ResourceProviderError.wrap(exc, operation=operation) from exc
        return _strip_metadata(response or {})

    async def get_instance(self, instance_name: str) -> dict[str, Any]:
        response = await self._call("get_instance", instanceName=instance_name)
        return response.get("instance") or {}

    async def list_instances(self) -> list[dict[str, Any]]:
        response = await self._call("get_instances")
        return response.get("instances") or []

    async def list_bundles(self) -> list[dict[str, Any]]:
        response = await self._call("get_bundles", includeInactive=False)
        return response.get("bundles") or []

    async def list_blueprints(self) -> list[dict[str, Any]]:
        response = await self._call("get_blueprints", includeInactive=False)
        return response.get("blueprints") or []

    async def create_key_pair(self, key_pair_name: str) -> dict[str, Any]:
        """Create an SSH key pair. The response holds the only copy of the private key."""

        return await self._call("create_key_pair", keyPairName=key_pair_name)

    async def create_instances(
        self,
        *,
        instance_names: list[str],
        blueprint_id: str,
        bundle_id: str,
        availability_zone: str,
        key_pair_name: str,
    ) -> dict[str, Any]:
        return await self._call(
            "create_instances",
            instanceNames=instance_names,
            blueprintId=blueprint_id,
            bundleId=bundle_id,
            availabilityZone=availability_zone,
            keyPairName=key_pair_name,
        )
