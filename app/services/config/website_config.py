from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar

from app.services.config._env import float_from_env


@dataclass(frozen=True)
class WebsiteConfig:
    """Static-site defaults: the pages uploaded to every new bucket and the probe timeout."""

    DEFAULT_INDEX_CONTENT: ClassVar[str] = "<h1>Bienvenido a mi sitio</h1>"
    DEFAULT_ERROR_CONTENT: ClassVar[str] = "<h1>Error 404</h1>"
    _DEFAULT_PROBE_TIMEOUT_SECONDS: ClassVar[float] = 10.0

    index_content: str = DEFAULT_INDEX_CONTENT
    error_content: str = DEFAULT_ERROR_CONTENT
    probe_timeout_seconds: float = _DEFAULT_PROBE_TIMEOUT_SECONDS

    @staticmethod
    def from_env() -> "WebsiteConfig":
        return WebsiteConfig(
            index_content=os.getenv("DEFAULT_INDEX_CONTENT") or WebsiteConfig.DEFAULT_INDEX_CONTENT,
            error_content=os.getenv("DEFAULT_ERROR_CONTENT") or WebsiteConfig.DEFAULT_ERROR_CONTENT,
            probe_timeout_seconds=float_from_env(
                "WEBSITE_PROBE_TIMEOUT_SECONDS", WebsiteConfig._DEFAULT_PROBE_TIMEOUT_SECONDS
            ),
        )
