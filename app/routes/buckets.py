from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from starlette import status

from app.models.buckets import (
    CreateBucketRequest,
    CreateBucketResponse,
    DeleteBucketResponse,
    ListBucketsResponse,
    WebsiteTestResponse,
)
from app.services.dependencies import get_bucket_setup_service, get_s3_service, get_website_service
from app.services.s3_service import S3Service
from app.services.setup.bucket_setup_service import BucketSetupService
from app.services.website_service import WebsiteService

router = APIRouter(prefix="/api/buckets", tags=["buckets"])


@router.get("", response_model=ListBucketsResponse)
async def list_buckets(s3: S3Service = Depends(get_s3_service)) -> ListBucketsResponse:
    buckets = await s3.list_buckets()
    return ListBucketsResponse(buckets=buckets)


@router.post("", response_model=CreateBucketResponse, status_code=status.HTTP_201_CREATED)
async def create_bucket(
    payload: CreateBucketRequest,
    svc: BucketSetupService = Depends(get_bucket_setup_service),
) -> CreateBucketResponse:
    bucket = await svc.provision_bucket(payload.bucket_name)
    return CreateBucketResponse(
        message=f"Bucket {bucket.name} created with static website hosting",
        endpoint=bucket.endpoint,
    )


@router.delete("/{bucket_name}", response_model=DeleteBucketResponse)
async def delete_bucket(
    bucket_name: str = Path(..., description="S3 bucket name"),
    svc: BucketSetupService = Depends(get_bucket_setup_service),
) -> DeleteBucketResponse:
    await svc.deprovision_bucket(bucket_name)
    return DeleteBucketResponse(message=f"Bucket {bucket_name} deleted")


@router.get("/{bucket_name}/website-test", response_model=WebsiteTestResponse)
async def website_test(
    bucket_name: str = Path(..., description="S3 bucket name"),
    svc: WebsiteService = Depends(get_website_service),
) -> WebsiteTestResponse:
    result = await svc.probe(bucket_name)
    return WebsiteTestResponse(status=result.status, working=result.working, url=result.url)
