from __future__ import annotations

import json
import logging
from typing import Any, Optional

import aioboto3
from botocore.config import Config

from app.models.buckets import BucketItem
from app.services.config import S3Config
from app.services.errors import ProviderErrorKind, ResourceProviderError


logger = logging.getLogger(__name__)


class S3Service:
    """Storage Resource Provider: one method per S3 operation the app needs.

    Every call opens a short-lived client from the shared aioboto3 session and
    wraps botocore failures in ResourceProviderError. Nothing is cached, so
    every existence check or listing is a fresh request to S3.
    """

    def __init__(self, config: S3Config, *, session: Optional[aioboto3.Session] = None) -> None:
        self._config = config
        self._session = session or aioboto3.Session()

    @property
    def config(self) -> S3Config:
        return self._config

    def _client(self) -> Any:
        return self._session.client(
            "s3",
            region_name=self._config.region_name,
            endpoint_url=self._config.endpoint_url,
            config=Config(
                connect_timeout=self._config.connect_timeout_seconds,
                read_timeout=self._config.read_timeout_seconds,
            ),
        )

    async def _call(self, operation: str, **kwargs: Any) -> dict[str, Any]:
        try:
            s3_client: Any = self._client()
            async with s3_client as s3:
                return await getattr(s3, operation)(**kwargs)
        except Exception as exc:
            raise ResourceProviderError.wrap(exc, operation=operation) from exc

    async def bucket_exists(self, bucket_name: str) -> bool:
        """Existence probe. A not-found answer means the name is available.

        S3 answers HEAD with 403 (or 301) for a bucket owned by another
        account, so a globally taken name surfaces as an error here rather
        than as True. Like every probe-then-act check, the answer can be
        stale by the time the bucket is created.
        """

        try:
            await self._call("head_bucket", Bucket=bucket_name)
        except ResourceProviderError as exc:
            if exc.kind is ProviderErrorKind.NOT_FOUND:
                return False
            logger.exception("S3 head_bucket failed (bucket=%s)", bucket_name)
            raise
        return True

    async def create_bucket(self, bucket_name: str) -> None:
        kwargs: dict[str, Any] = {"Bucket": bucket_name}
        if not self._config.is_default_region:
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self._config.region_name}
        await self._call("create_bucket", **kwargs)

    async def delete_bucket(self, bucket_name: str) -> None:
        await self._call("delete_bucket", Bucket=bucket_name)

    async def list_buckets(self) -> list[BucketItem]:
        response = await self._call("list_buckets")
        return [
            BucketItem.from_s3_bucket(b, endpoint=self._config.website_endpoint(str(b.get("Name"))))
            for b in response.get("Buckets", [])
        ]

    async def list_objects(self, bucket_name: str, *, max_keys: int = 1000) -> list[dict[str, Any]]:
        response = await self._call("list_objects_v2", Bucket=bucket_name, MaxKeys=max_keys)
        return response.get("Contents", [])

    async def get_bucket_location(self, bucket_name: str) -> str:
        """Return the bucket's region. S3 reports us-east-1 as an empty location."""

        response = await self._call("get_bucket_location", Bucket=bucket_name)
        return response.get("LocationConstraint") or S3Config.DEFAULT_REGION

    async def allow_public_access(self, bucket_name: str) -> None:
        await self._call(
            "put_public_access_block",
            Bucket=bucket_name,
            PublicAccessBlockConfiguration={
                "BlockPublicAcls": False,
                "IgnorePublicAcls": False,
                "BlockPublicPolicy": False,
                "RestrictPublicBuckets": False,
            },
        )

    async def put_bucket_policy(self, bucket_name: str, policy: dict[str, Any]) -> None:
        await self._call("put_bucket_policy", Bucket=bucket_name, Policy=json.dumps(policy))

    async def put_bucket_website(self, bucket_name: str, *, index_document: str, error_document: str) -> None:
        await self._call(
            "put_bucket_website",
            Bucket=bucket_name,
            WebsiteConfiguration={
                "IndexDocument": {"Suffix": index_document},
                "ErrorDocument": {"Key": error_document},
            },
        )

    async def put_bucket_cors(self, bucket_name: str, rules: list[dict[str, Any]]) -> None:
        await self._call("put_bucket_cors", Bucket=bucket_name, CORSConfiguration={"CORSRules": rules})

    async def put_object(self, bucket_name: str, *, key: str, body: str, content_type: str) -> None:
        if not key:
            raise ValueError("'key' must be provided")

        await self._call(
            "put_object",
            Bucket=bucket_name,
            Key=key,
            Body=body.encode("utf-8"),
            ContentType=content_type,
        )

    async def verify_credentials(self) -> int:
        """Cheap authenticated call used at startup. Returns the number of visible buckets."""

        response = await self._call("list_buckets")
        return len(response.get("Buckets", []))
