"""Settings for the engine process. Only logging is configurable, the rules of chess are not."""

import logging
import os
from typing import Optional, Self

from pydantic import BaseModel, field_validator

ENV_PREFIX = "CHESS_ENGINE_"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class EngineSettings(BaseModel):
    log_level: str = "INFO"
    log_format: str = DEFAULT_LOG_FORMAT

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> Self:
        """Read CHESS_ENGINE_LOG_LEVEL / CHESS_ENGINE_LOG_FORMAT. Missing variables keep their defaults."""
        environ = os.environ if environ is None else environ
        values = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls(**values)


def configure_logging(settings: Optional[EngineSettings] = None) -> None:
    settings = settings or EngineSettings.from_env()
    logging.basicConfig(level=settings.log_level, format=settings.log_format)
