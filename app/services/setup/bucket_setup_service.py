from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

from app.services.config import S3Config, WebsiteConfig
from app.services.errors import (
    ProviderErrorKind,
    ResourceProviderError,
    classify_provider_error,
    provider_error_code,
)
from app.services.s3_service import S3Service
from app.services.setup.errors import (
    BucketAlreadyExistsError,
    BucketDeprovisioningError,
    BucketNotEmptyError,
    BucketProvisioningError,
    InvalidBucketNameError,
)


logger = logging.getLogger(__name__)

BUCKET_NAME_PATTERN = re.compile(r"^(?=.{3,63}$)(?!.*\.\.)(?!-)[a-z0-9-]+(?<!-)$")

INDEX_DOCUMENT = "index.html"
ERROR_DOCUMENT = "error.html"
HTML_CONTENT_TYPE = "text/html"


def is_valid_bucket_name(bucket_name: str) -> bool:
    # fullmatch so a trailing newline cannot slip past `$`.
    return BUCKET_NAME_PATTERN.fullmatch(bucket_name) is not None


def public_read_policy(bucket_name: str) -> dict[str, Any]:
    return {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Sid": "PublicReadGetObject",
                "Effect": "Allow",
                "Principal": "*",
                "Action": "s3:GetObject",
                "Resource": f"arn:aws:s3:::{bucket_name}/*",
            }
        ],
    }


def public_get_cors_rules() -> list[dict[str, Any]]:
    return [
        {
            "AllowedHeaders": ["*"],
            "AllowedMethods": ["GET"],
            "AllowedOrigins": ["*"],
            "ExposeHeaders": [],
        }
    ]


@dataclass(frozen=True)
class BucketProvisioned:
    name: str
    endpoint: str


class BucketSetupService:
    """Provision and tear down S3 buckets configured for static website hosting.

    Provisioning is all-or-nothing at the bucket level: once the bucket has been
    created, any later failure deletes it again (one best-effort delete). There
    is no step-level undo; deleting the bucket drops its policy, website
    config, CORS rules and uploaded pages with it.
    """

    def __init__(self, *, s3: S3Service, config: S3Config, website: WebsiteConfig) -> None:
        self._s3 = s3
        self._config = config
        self._website = website

    async def provision_bucket(self, bucket_name: Optional[str]) -> BucketProvisioned:
        """Create a public static-site bucket and return its website endpoint.

        Steps:
        1) Validate the name locally (no AWS call on failure).
        2) Probe for an existing bucket with that name.
        3) Create the bucket, open public access, apply the public-read policy,
           website config and CORS rule, then upload index.html and error.html.

        Raises:
            InvalidBucketNameError: the name does not match the S3 naming rules.
            BucketAlreadyExistsError: the name is already taken.
            BucketProvisioningError: the existence probe failed (no rollback), or a
                later step failed and the bucket was rolled back.
        """

        if bucket_name is None or not is_valid_bucket_name(bucket_name):
            raise InvalidBucketNameError("Invalid bucket name format")

        try:
            exists = await self._s3.bucket_exists(bucket_name)
        except ResourceProviderError as exc:
            # Nothing was created yet, so there is nothing to roll back.
            raise BucketProvisioningError(
                "Error configuring static website hosting",
                error_type=exc.code,
            ) from exc
        if exists:
            raise BucketAlreadyExistsError("Bucket already exists in AWS")

        try:
            await self._create_and_configure(bucket_name)
        except Exception as exc:
            logger.exception("Static site provisioning failed (bucket=%s)", bucket_name)

            if classify_provider_error(exc) is ProviderErrorKind.ALREADY_EXISTS:
                # Lost the race against another create after the probe; nothing of ours to undo.
                logger.warning(
                    "Bucket taken between probe and create (bucket=%s code=%s)",
                    bucket_name,
                    provider_error_code(exc),
                )
                raise BucketAlreadyExistsError("Bucket already exists in AWS") from exc

            await self._rollback(bucket_name)
            raise BucketProvisioningError(
                "Error configuring static website hosting",
                error_type=provider_error_code(exc),
            ) from exc

        endpoint = self._config.website_endpoint(bucket_name)
        logger.info("Static site bucket ready (bucket=%s endpoint=%s)", bucket_name, endpoint)
        return BucketProvisioned(name=bucket_name, endpoint=endpoint)

    async def _create_and_configure(self, bucket_name: str) -> None:
        logger.info("Creating bucket (bucket=%s region=%s)", bucket_name, self._config.region_name)
        await self._s3.create_bucket(bucket_name)

        # Public access blocking has to be off before a public-read policy is accepted.
        await self._s3.allow_public_access(bucket_name)
        await self._s3.put_bucket_policy(bucket_name, public_read_policy(bucket_name))
        await self._s3.put_bucket_website(
            bucket_name,
            index_document=INDEX_DOCUMENT,
            error_document=ERROR_DOCUMENT,
        )
        await self._s3.put_bucket_cors(bucket_name, public_get_cors_rules())

        await self._s3.put_object(
            bucket_name,
            key=INDEX_DOCUMENT,
            body=self._website.index_content,
            content_type=HTML_CONTENT_TYPE,
        )
        await self._s3.put_object(
            bucket_name,
            key=ERROR_DOCUMENT,
            body=self._website.error_content,
            content_type=HTML_CONTENT_TYPE,
        )

    async def _rollback(self, bucket_name: str) -> None:
        try:
            await self._s3.delete_bucket(bucket_name)
        except Exception:
            # Never mask the original failure.
            logger.exception("Rollback failed; bucket may need manual cleanup (bucket=%s)", bucket_name)
        else:
            logger.info("Rolled back bucket (bucket=%s)", bucket_name)

    async def deprovision_bucket(self, bucket_name: str) -> None:
        """Delete an empty bucket.

        Raises:
            BucketNotEmptyError: the bucket still holds objects; nothing is deleted.
            BucketDeprovisioningError: an S3 call failed.
        """

        try:
            location = await self._s3.get_bucket_location(bucket_name)
            if location != self._config.region_name:
                # Informational only; deletion goes ahead regardless of region.
                logger.warning(
                    "Bucket region differs from configured region (bucket=%s location=%s configured=%s)",
                    bucket_name,
                    location,
                    self._config.region_name,
                )

            objects = await self._s3.list_objects(bucket_name, max_keys=1)
            if objects:
                raise BucketNotEmptyError("Bucket is not empty")

            await self._s3.delete_bucket(bucket_name)
        except ResourceProviderError as exc:
            logger.exception("Error deleting bucket (bucket=%s)", bucket_name)
            raise BucketDeprovisioningError(
                self._deprovision_message(exc.kind),
                error_type=exc.code,
            ) from exc

        logger.info("Deleted bucket (bucket=%s)", bucket_name)

    @staticmethod
    def _deprovision_message(kind: ProviderErrorKind) -> str:
        if kind is ProviderErrorKind.ACCESS_DENIED:
            return "Insufficient AWS permissions"
        if kind is ProviderErrorKind.NOT_FOUND:
            return "Bucket does not exist"
        return "Error deleting bucket"
