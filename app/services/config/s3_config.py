from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar, Optional

from app.services.config._env import float_from_env


@dataclass(frozen=True)
class S3Config:
    """Runtime configuration for the S3 client used to host static sites.

    `region_name` is also the region baked into website endpoints, e.g.
    "http://my-site.s3-website.eu-south-2.amazonaws.com".
    """

    region_name: str
    endpoint_url: Optional[str] = None
    _DEFAULT_CONNECT_TIMEOUT_SECONDS: ClassVar[float] = 5.0
    _DEFAULT_READ_TIMEOUT_SECONDS: ClassVar[float] = 10.0
    connect_timeout_seconds: float = _DEFAULT_CONNECT_TIMEOUT_SECONDS
    read_timeout_seconds: float = _DEFAULT_READ_TIMEOUT_SECONDS

    # S3 treats us-east-1 as the implicit location; it must not be sent as a LocationConstraint.
    DEFAULT_REGION: ClassVar[str] = "us-east-1"

    @property
    def is_default_region(self) -> bool:
        return self.region_name == self.DEFAULT_REGION

    def website_endpoint(self, bucket_name: str) -> str:
        return f"http://{bucket_name}.s3-website.{self.region_name}.amazonaws.com"

    @staticmethod
    def from_env() -> "S3Config":
        region_name = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")
        if not region_name:
            raise ValueError("Missing required environment variable: AWS_REGION (or AWS_DEFAULT_REGION)")

        return S3Config(
            region_name=region_name,
            endpoint_url=os.getenv("S3_ENDPOINT_URL") or None,
            connect_timeout_seconds=float_from_env(
                "AWS_CONNECT_TIMEOUT_SECONDS", S3Config._DEFAULT_CONNECT_TIMEOUT_SECONDS
            ),
            read_timeout_seconds=float_from_env("AWS_READ_TIMEOUT_SECONDS", S3Config._DEFAULT_READ_TIMEOUT_SECONDS),
        )
