"""Runtime settings, read from the environment (and a project .env if present)."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    log_format: str = DEFAULT_LOG_FORMAT

    @classmethod
    def from_env(cls, env_file: Path | str | None = None) -> "Settings":
        # Existing environment variables win over the .env file
        load_dotenv(env_file or Path.cwd() / ".env", override=False)
        return cls(
            log_level=os.getenv("STOCK_LOG_LEVEL", cls.log_level).upper(),
            log_format=os.getenv("STOCK_LOG_FORMAT", cls.log_format),
        )


def configure_logging(settings: Settings | None = None) -> Settings:
    """Set up root logging from settings. Returns the settings used."""
    settings = settings or Settings.from_env()
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=settings.log_format)
    return settings
