"""Shared pytest fixtures."""

import pytest

from app.services.config import LightsailConfig, S3Config, WebsiteConfig
from tests.fakes import FakeLightsailService, FakeS3Service


@pytest.fixture
def s3_config() -> S3Config:
    return S3Config(region_name="eu-south-2")


@pytest.fixture
def lightsail_config() -> LightsailConfig:
    return LightsailConfig(region_name="eu-west-3")


@pytest.fixture
def website_config() -> WebsiteConfig:
    return WebsiteConfig()


@pytest.fixture
def fake_s3(s3_config: S3Config) -> FakeS3Service:
    return FakeS3Service(s3_config)


@pytest.fixture
def fake_lightsail(lightsail_config: LightsailConfig) -> FakeLightsailService:
    return FakeLightsailService(lightsail_config)
