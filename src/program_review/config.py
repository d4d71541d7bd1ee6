"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

SALT_ROUNDS = 12
MIN_USERNAME_LENGTH = 4
MAX_USERNAME_LENGTH = 20
MAX_PROGRAM_NAME_LENGTH = 60
MAX_COMMENT_LENGTH = 2000
ACTIONS_PER_PAGE = 150
REVISION_EXTENSIONS = (".doc", ".docx", ".pdf", ".xls", ".xlsx", ".tif")
REVISION_MAX_FILE_SIZE = (2**20) * 50
RATE_LIMIT_WINDOW_MINUTES = 30
REQUEST_LIMIT = 20000
LOGIN_REQUEST_LIMIT = 25


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


@dataclass(frozen=True)
class CosmosConfig:
    endpoint: str = field(default_factory=lambda: _env("AZURE_COSMOS_ENDPOINT"))
    key: str = field(default_factory=lambda: _env("AZURE_COSMOS_KEY"))
    database: str = field(default_factory=lambda: _env("AZURE_COSMOS_DATABASE", "program-review"))


@dataclass(frozen=True)
class StorageConfig:
    connection_string: str = field(default_factory=lambda: _env("AZURE_STORAGE_CONNECTION_STRING"))
    container: str = field(default_factory=lambda: _env("AZURE_STORAGE_CONTAINER", "revisions"))


@dataclass(frozen=True)
class AppConfig:
    env: str = field(default_factory=lambda: _env("APP_ENV", "development"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    secret_key: str = field(default_factory=lambda: _env("APP_SECRET_KEY"))
    slow_request_ms: int = field(default_factory=lambda: int(_env("SLOW_REQUEST_MS", "800")))

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@dataclass(frozen=True)
class Settings:
    cosmos: CosmosConfig = field(default_factory=CosmosConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    app: AppConfig = field(default_factory=AppConfig)


def load_settings() -> Settings:
    """Read ``.env`` (if present) into the environment and build settings."""
    load_dotenv()
    return Settings()
