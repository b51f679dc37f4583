from __future__ import annotations

from typing import Any

import aioboto3
import aiohttp
from fastapi import FastAPI, Request

from app.services.config import LightsailConfig, S3Config, WebsiteConfig
from app.services.lightsail_service import LightsailService
from app.services.s3_service import S3Service
from app.services.setup.bucket_setup_service import BucketSetupService
from app.services.setup.instance_setup_service import InstanceSetupService
from app.services.website_service import WebsiteService


def _state_value(app: FastAPI, name: str, expected: type) -> Any:
    value = getattr(app.state, name, None)
    if value is None:
        raise RuntimeError(f"{name} not initialized (app.state.{name})")
    if not isinstance(value, expected):
        raise RuntimeError(f"Unexpected {name} type")
    return value


def get_aws_session_from_app(app: FastAPI) -> aioboto3.Session:
    return _state_value(app, "aws_session", aioboto3.Session)


def get_http_session_from_app(app: FastAPI) -> aiohttp.ClientSession:
    return _state_value(app, "http_session", aiohttp.ClientSession)


def get_http_session(request: Request) -> aiohttp.ClientSession:
    return get_http_session_from_app(request.app)


def get_s3_service_from_app(app: FastAPI) -> S3Service:
    """Provider for non-request contexts (e.g. app lifespan startup)."""

    return S3Service(S3Config.from_env(), session=get_aws_session_from_app(app))


def get_s3_service(request: Request) -> S3Service:
    """FastAPI dependency provider for an S3Service instance."""

    return get_s3_service_from_app(request.app)


def get_lightsail_service(request: Request) -> LightsailService:
    return LightsailService(LightsailConfig.from_env(), session=get_aws_session_from_app(request.app))


def get_bucket_setup_service(request: Request) -> BucketSetupService:
    s3 = get_s3_service(request)
    return BucketSetupService(s3=s3, config=s3.config, website=WebsiteConfig.from_env())


def get_instance_setup_service(request: Request) -> InstanceSetupService:
    lightsail = get_lightsail_service(request)
    return InstanceSetupService(lightsail=lightsail, config=lightsail.config)


def get_website_service(request: Request) -> WebsiteService:
    return WebsiteService(
        s3_config=S3Config.from_env(),
        config=WebsiteConfig.from_env(),
        session=get_http_session(request),
    )
