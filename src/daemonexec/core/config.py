"""Configuration model for Daemonexec."""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from daemonexec.core.errors import ConfigError
from daemonexec.utils.constants import (
    ENV_DEBUG,
    ENV_LOG_FILE,
    ENV_MAX_ATTEMPTS,
    ENV_PID_FILE,
    ENV_RETRY_DELAY_MS,
    LAUNCH_RETRY_DELAY_MS,
    MAX_LAUNCH_ATTEMPTS,
    NULL_DEVICE,
    TRUTHY_VALUES,
)


class DaemonizerConfig(BaseModel):
    """Daemonizer configuration."""

    max_attempts: int = Field(default=MAX_LAUNCH_ATTEMPTS, ge=1)
    retry_delay_ms: int = Field(default=LAUNCH_RETRY_DELAY_MS, ge=0)
    null_device: str = NULL_DEVICE
    return_to_parent: bool = False
    debug: bool = False
    log_file: Optional[Path] = None
    pid_file: Optional[Path] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DaemonizerConfig":
        """Build a configuration from DAEMONEXEC_* environment variables.

        Args:
            environ: Environment mapping (default: os.environ)

        Returns:
            Validated configuration

        Raises:
            ConfigError: If a value does not validate
        """
        if environ is None:
            environ = os.environ

        data: dict = {}
        if ENV_DEBUG in environ:
            data["debug"] = environ[ENV_DEBUG].strip().lower() in TRUTHY_VALUES
        if environ.get(ENV_LOG_FILE):
            data["log_file"] = environ[ENV_LOG_FILE]
        if environ.get(ENV_PID_FILE):
            data["pid_file"] = environ[ENV_PID_FILE]
        if environ.get(ENV_MAX_ATTEMPTS):
            data["max_attempts"] = environ[ENV_MAX_ATTEMPTS]
        if environ.get(ENV_RETRY_DELAY_MS):
            data["retry_delay_ms"] = environ[ENV_RETRY_DELAY_MS]

        return cls.load(data)

    @classmethod
    def load(cls, data: dict) -> "DaemonizerConfig":
        """Validate raw configuration values.

        Raises:
            ConfigError: If a value does not validate
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
