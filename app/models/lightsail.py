from __future__ import annotations

from typing import Any, Optional

from app.models.base import CamelModel


class ListInstancesResponse(CamelModel):
    instances: list[dict[str, Any]]


class ListBundlesResponse(CamelModel):
    bundles: list[dict[str, Any]]


class ListBlueprintsResponse(CamelModel):
    blueprints: list[dict[str, Any]]


class CreateInstanceRequest(CamelModel):
    """Request body for instance creation.

    Every field is optional at the schema level; presence is checked by
    InstanceSetupService so that missing parameters get a 400 with a
    consistent error body.
    """

    instance_name: Optional[str] = None
    blueprint_id: Optional[str] = None
    bundle_id: Optional[str] = None
    availability_zone: Optional[str] = None


class KeyPairResponse(CamelModel):
    key_pair_name: str
    private_key: str


class CreateInstanceResponse(CamelModel):
    success: bool = True
    message: str
    instance_creation_response: dict[str, Any]
    key_pair: KeyPairResponse
