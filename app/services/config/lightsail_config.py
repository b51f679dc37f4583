from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar, Optional

from app.services.config._env import float_from_env


@dataclass(frozen=True)
class LightsailConfig:
    """Runtime configuration for Lightsail (compute) calls.

    Lightsail may live in a different region than the S3 buckets, so it has
    its own `LIGHTSAIL_REGION` instead of reusing AWS_REGION.
    """

    region_name: str
    endpoint_url: Optional[str] = None
    key_pair_prefix: str = "my-app"
    _DEFAULT_CONNECT_TIMEOUT_SECONDS: ClassVar[float] = 5.0
    _DEFAULT_READ_TIMEOUT_SECONDS: ClassVar[float] = 10.0
    connect_timeout_seconds: float = _DEFAULT_CONNECT_TIMEOUT_SECONDS
    read_timeout_seconds: float = _DEFAULT_READ_TIMEOUT_SECONDS

    @staticmethod
    def from_env() -> "LightsailConfig":
        region_name = os.getenv("LIGHTSAIL_REGION")
        if not region_name:
            raise ValueError("Missing required environment variable: LIGHTSAIL_REGION")

        return LightsailConfig(
            region_name=region_name,
            endpoint_url=os.getenv("LIGHTSAIL_ENDPOINT_URL") or None,
            key_pair_prefix=(os.getenv("LIGHTSAIL_KEY_PAIR_PREFIX") or "").strip() or "my-app",
            connect_timeout_seconds=float_from_env(
                "AWS_CONNECT_TIMEOUT_SECONDS", LightsailConfig._DEFAULT_CONNECT_TIMEOUT_SECONDS
            ),
            read_timeout_seconds=float_from_env(
                "AWS_READ_TIMEOUT_SECONDS", LightsailConfig._DEFAULT_READ_TIMEOUT_SECONDS
            ),
        )
