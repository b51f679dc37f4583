from __future__ import annotations

import logging
from dataclasses import dataclass

import aiohttp

from app.services.config import S3Config, WebsiteConfig
from app.services.setup.errors import WebsiteProbeError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WebsiteProbeResult:
    status: int
    working: bool
    url: str


class WebsiteService:
    """Checks whether a bucket's static website endpoint answers over HTTP."""

    def __init__(self, *, s3_config: S3Config, config: WebsiteConfig, session: aiohttp.ClientSession) -> None:
        self._s3_config = s3_config
        self._config = config
        self._session = session

    async def probe(self, bucket_name: str) -> WebsiteProbeResult:
        url = self._s3_config.website_endpoint(bucket_name)
        timeout = aiohttp.ClientTimeout(total=self._config.probe_timeout_seconds)
        try:
            async with self._session.get(url, timeout=timeout, allow_redirects=True) as resp:
                return WebsiteProbeResult(status=resp.status, working=resp.ok, url=url)
        except Exception as exc:
            logger.exception("Website probe failed (url=%s)", url)
            raise WebsiteProbeError("Error testing website") from exc
