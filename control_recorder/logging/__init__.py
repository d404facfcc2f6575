"""Operational logging setup (loguru). Independent of the CSV data path."""

from .loguru_bootstrap import (
    LOG_FORMAT,
    PACKAGE_LOGGER,
    InterceptHandler,
    setup_logging,
    teardown_logging,
)

__all__ = [
    "LOG_FORMAT",
    "PACKAGE_LOGGER",
    "InterceptHandler",
    "setup_logging",
    "teardown_logging",
]
