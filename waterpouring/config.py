"""Configuration dataclasses for the water pouring server."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_IN_SECONDS = 1
DEFAULT_OUTPUT_DIR = Path(__file__).resolve().parent / 'static' / 'output'

# Environment variables read by ServerConfig.from_env()
ENV_TIMEOUT = 'SOLVER_TIMEOUT_IN_SECONDS'
ENV_LOG_LEVEL = 'WATERPOURING_LOG_LEVEL'
ENV_OUTPUT_DIR = 'WATERPOURING_OUTPUT_DIR'
ENV_PERF_LOGGING = 'WATERPOURING_PERF_LOGGING'

_TRUTHY = {'1', 'true', 'yes', 'on'}


@dataclass
class ServerConfig:
    """Server and solver settings."""
    # Maximum duration of a single solve before the request times out
    timeout_in_seconds: int = DEFAULT_TIMEOUT_IN_SECONDS

    # Logging
    log_level: str = 'INFO'

    # Where solution visualizations are written
    output_dir: str = field(default_factory=lambda: str(DEFAULT_OUTPUT_DIR))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ServerConfig:
        """
        Build a config from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            ServerConfig; unset variables keep their defaults

        Notes:
            - Invalid or non-positive timeouts fall back to the default (warning logged)
            - WATERPOURING_PERF_LOGGING switches the class-level
              enable_performance_logging flag
        """
        env = os.environ if environ is None else environ
        config = cls()

        raw_timeout = env.get(ENV_TIMEOUT)
        if raw_timeout is not None:
            config.timeout_in_seconds = _parse_timeout(raw_timeout)

        if env.get(ENV_LOG_LEVEL):
            config.log_level = env[ENV_LOG_LEVEL].strip().upper()

        if env.get(ENV_OUTPUT_DIR):
            config.output_dir = env[ENV_OUTPUT_DIR]

        if ENV_PERF_LOGGING in env:
            cls.enable_performance_logging = env[ENV_PERF_LOGGING].strip().lower() in _TRUTHY

        return config


# Global flag for performance logging (not a dataclass field)
ServerConfig.enable_performance_logging = False


def _parse_timeout(raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %ss",
                       ENV_TIMEOUT, raw, DEFAULT_TIMEOUT_IN_SECONDS)
        return DEFAULT_TIMEOUT_IN_SECONDS
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive, using %ss",
                       ENV_TIMEOUT, raw, DEFAULT_TIMEOUT_IN_SECONDS)
        return DEFAULT_TIMEOUT_IN_SECONDS
    return value


def get_configuration_timeout(config: ServerConfig) -> timedelta:
    """Solve timeout as a timedelta."""
    return timedelta(seconds=config.timeout_in_seconds)
