"""Tests for the static website probe."""

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from app.services.config import S3Config, WebsiteConfig
from app.services.setup.errors import WebsiteProbeError
from app.services.website_service import WebsiteService


def _session_returning(status: int, ok: bool) -> MagicMock:
    resp = MagicMock()
    resp.status = status
    resp.ok = ok
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=resp)
    ctx.__aexit__ = AsyncMock(return_value=False)
    session = MagicMock()
    session.get.return_value = ctx
    return session


def _service(session) -> WebsiteService:
    return WebsiteService(
        s3_config=S3Config(region_name="eu-south-2"),
        config=WebsiteConfig(probe_timeout_seconds=3),
        session=session,
    )


async def test_working_site():
    session = _session_returning(200, True)

    result = await _service(session).probe("my-site-1")

    assert result.status == 200
    assert result.working is True
    assert result.url == "http://my-site-1.s3-website.eu-south-2.amazonaws.com"
    args, kwargs = session.get.call_args
    assert args == (result.url,)
    assert kwargs["timeout"].total == 3


async def test_missing_site_is_reported_not_raised():
    result = await _service(_session_returning(404, False)).probe("my-site-1")

    assert (result.status, result.working) == (404, False)


async def test_network_failure_raises_probe_error():
    session = MagicMock()
    session.get.side_effect = aiohttp.ClientConnectionError("refused")

    with pytest.raises(WebsiteProbeError) as exc_info:
        await _service(session).probe("my-site-1")

    assert exc_info.value.error_type == "WebsiteProbeFailed"
    assert exc_info.value.status_code == 500
