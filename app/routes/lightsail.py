from __future__ import annotations

from fastapi import APIRouter, Depends
from starlette import status

from app.models.lightsail import (
    CreateInstanceRequest,
    CreateInstanceResponse,
    KeyPairResponse,
    ListBlueprintsResponse,
    ListBundlesResponse,
    ListInstancesResponse,
)
from app.services.dependencies import get_instance_setup_service, get_lightsail_service
from app.services.lightsail_service import LightsailService
from app.services.setup.instance_setup_service import InstanceSetupService, InstanceSpec

router = APIRouter(prefix="/api/lightsail", tags=["lightsail"])


@router.get("/instances", response_model=ListInstancesResponse)
async def list_instances(lightsail: LightsailService = Depends(get_lightsail_service)) -> ListInstancesResponse:
    return ListInstancesResponse(instances=await lightsail.list_instances())


@router.get("/bundles", response_model=ListBundlesResponse)
async def list_bundles(lightsail: LightsailService = Depends(get_lightsail_service)) -> ListBundlesResponse:
    return ListBundlesResponse(bundles=await lightsail.list_bundles())


@router.get("/blueprints", response_model=ListBlueprintsResponse)
async def list_blueprints(lightsail: LightsailService = Depends(get_lightsail_service)) -> ListBlueprintsResponse:
    return ListBlueprintsResponse(blueprints=await lightsail.list_blueprints())


@router.post("/instances", response_model=CreateInstanceResponse, status_code=status.HTTP_201_CREATED)
async def create_instance(
    payload: CreateInstanceRequest,
    svc: InstanceSetupService = Depends(get_instance_setup_service),
) -> CreateInstanceResponse:
    result = await svc.provision_instance(
        InstanceSpec(
            instance_name=payload.instance_name,
            blueprint_id=payload.blueprint_id,
            bundle_id=payload.bundle_id,
            availability_zone=payload.availability_zone,
        )
    )
    return CreateInstanceResponse(
        message="Lightsail instance created with a custom SSH key pair.",
        instance_creation_response=result.instance_creation_response,
        key_pair=KeyPairResponse(key_pair_name=result.key_pair_name, private_key=result.private_key),
    )
