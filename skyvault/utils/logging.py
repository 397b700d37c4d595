"""
Logging utilities for SkyVault.

The SDK logs through loguru's global logger under the ``skyvault`` name and
is disabled on import. ``get_logger`` enables it and routes SDK records to
stderr and, optionally, a rotating file. Sinks the application installed
itself are left alone.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import contextlib
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from loguru import logger

if TYPE_CHECKING:
    from skyvault.config.settings import SkyVaultSettings

SDK_LOGGER_NAME = "skyvault"

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# Sink ids added by get_logger; replaced on every call.
_sdk_sinks: list[int] = []


def _remove_sdk_sinks() -> None:
    while _sdk_sinks:
        # Already gone if the application called logger.remove() itself.
        with contextlib.suppress(ValueError):
            logger.remove(_sdk_sinks.pop())


def get_logger(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    settings: Optional["SkyVaultSettings"] = None,
    sdk_only: bool = True,
    rotation: str = "10 MB",
    retention: str = "7 days",
    format: str = DEFAULT_FORMAT,
):
    """
    Enable SDK logging and return the logger.

    Calling it again replaces the sinks a previous call installed, so the
    level or file can be changed at runtime without duplicating output.

    Args:
        level: Minimum level; defaults to ``settings.log_level``, then INFO
        log_file: Also write records to this file, rotated and zipped
        settings: Settings supplying the default level
        sdk_only: Only route records emitted by the ``skyvault`` package
        rotation: Log rotation size/time
        retention: Log retention period
        format: Log format string

    Returns:
        The loguru logger
    """
    if level is None:
        level = settings.log_level if settings is not None else "INFO"
    record_filter = SDK_LOGGER_NAME if sdk_only else None

    _remove_sdk_sinks()
    logger.enable(SDK_LOGGER_NAME)

    _sdk_sinks.append(logger.add(sys.stderr, format=format, level=level, filter=record_filter))
    if log_file:
        _sdk_sinks.append(
            logger.add(
                log_file,
                format=format,
                level=level,
                filter=record_filter,
                rotation=rotation,
                retention=retention,
                compression="zip",
            )
        )

    return logger


def disable_logging() -> None:
    """Remove the SDK sinks and silence SDK records again."""
    _remove_sdk_sinks()
    logger.disable(SDK_LOGGER_NAME)
