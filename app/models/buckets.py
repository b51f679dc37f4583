from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from app.models.base import CamelModel


class BucketItem(CamelModel):
    name: str = Field(..., description="S3 bucket name")
    creation_date: Optional[datetime] = None
    endpoint: str = Field(..., description="Static website endpoint URL")

    @staticmethod
    def from_s3_bucket(obj: dict[str, Any], *, endpoint: str) -> "BucketItem":
        return BucketItem(
            name=str(obj.get("Name")),
            creation_date=obj.get("CreationDate"),
            endpoint=endpoint,
        )


class ListBucketsResponse(CamelModel):
    buckets: list[BucketItem]


class CreateBucketRequest(CamelModel):
    # Optional so a missing name is reported as InvalidNameFormat rather than a schema error.
    bucket_name: Optional[str] = None


class CreateBucketResponse(CamelModel):
    success: bool = True
    message: str
    endpoint: str


class DeleteBucketResponse(CamelModel):
    success: bool = True
    message: str


class WebsiteTestResponse(CamelModel):
    status: int
    working: bool
    url: str
