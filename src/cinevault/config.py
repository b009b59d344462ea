"""Application configuration.

Settings are read from the process environment. A `.env` file in the
working directory is loaded first, without overriding variables that are
already set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import find_dotenv, load_dotenv

from cinevault.core.errors import ConfigError

DEFAULT_DATABASE_URL = "sqlite:///data/cinevault.db"
DEFAULT_PORT = 4000


def _split_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the API process."""

    database_url: str = DEFAULT_DATABASE_URL
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    cloudinary_folder: str | None = None
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> Settings:
        """Build settings from environment variables.

        Args:
            load_dotenv_file: Load `.env` before reading the environment.

        Returns:
            Settings instance.

        Raises:
            ConfigError: If PORT is not an integer.
        """
        if load_dotenv_file:
            load_dotenv(find_dotenv(usecwd=True))

        raw_port = os.environ.get("PORT", str(DEFAULT_PORT))
        try:
            port = int(raw_port)
        except ValueError as e:
            raise ConfigError(f"PORT must be an integer, got {raw_port!r}") from e

        return cls(
            database_url=os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL),
            cloudinary_cloud_name=os.environ.get("CLOUDINARY_CLOUD_NAME", ""),
            cloudinary_api_key=os.environ.get("CLOUDINARY_API_KEY", ""),
            cloudinary_api_secret=os.environ.get("CLOUDINARY_API_SECRET", ""),
            cloudinary_folder=os.environ.get("CLOUDINARY_FOLDER") or None,
            host=os.environ.get("HOST", "0.0.0.0"),
            port=port,
            cors_origins=_split_origins(os.environ.get("CORS_ORIGINS", "*")) or ["*"],
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
