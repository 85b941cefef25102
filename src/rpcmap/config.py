"""Client configuration, loaded from keyword arguments or the environment."""
from __future__ import annotations

import logging
import os
from typing import Any

from pydantic import BaseModel, Field, field_validator
from rich.console import Console
from rich.logging import RichHandler

ENV_PREFIX = "RPCMAP_"


class ClientConfig(BaseModel):
    base_url: str = Field(description="Absolute http(s) URL every route is resolved against.")
    log_level: str = Field(default="WARNING", description="Level for the rpcmap loggers.")

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an absolute http(s) URL, got {value!r}")
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level {value!r}")
        return level

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, **overrides: Any) -> ClientConfig:
        """
        RPCMAP_BASE_URL=http://... -> base_url. Explicit overrides win over the environment.
        """
        values: dict[str, Any] = {}
        for key, value in os.environ.items():
            if key.startswith(prefix) and value:
                values[key[len(prefix):].lower()] = value
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**{k: v for k, v in values.items() if k in cls.model_fields})


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Route the rpcmap loggers through rich on stderr; idempotent."""
    logger = logging.getLogger("rpcmap")
    logger.setLevel(level)
    if not logger.handlers:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    return logger
