"""Environment-driven settings for the API, S3, Lightsail and the site pages.

Import config types from here rather than from their modules.
"""

from app.services.config.api_config import ApiConfig
from app.services.config.lightsail_config import LightsailConfig
from app.services.config.s3_config import S3Config
from app.services.config.website_config import WebsiteConfig

__all__ = ["ApiConfig", "LightsailConfig", "S3Config", "WebsiteConfig"]
