from __future__ import annotations

import os
from dataclasses import dataclass, field

from app.services.config._env import bool_from_env


@dataclass(frozen=True)
class ApiConfig:
    """HTTP layer settings (CORS, startup checks). Not used by the provisioning services."""

    allowed_origins: tuple[str, ...] = field(default_factory=tuple)
    check_credentials_on_startup: bool = True

    @staticmethod
    def parse_origins(raw: str) -> tuple[str, ...]:
        return tuple(origin.strip() for origin in raw.split(",") if origin.strip())

    @staticmethod
    def from_env() -> "ApiConfig":
        return ApiConfig(
            allowed_origins=ApiConfig.parse_origins(os.getenv("ALLOWED_ORIGINS", "")),
            check_credentials_on_startup=bool_from_env("CHECK_CREDENTIALS_ON_STARTUP", True),
        )
