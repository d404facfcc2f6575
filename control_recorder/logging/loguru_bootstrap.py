"""
Loguru sinks for recorder diagnostics.

Library modules log through stdlib loggers below ``control_recorder``.
``setup_logging`` hangs one forwarding handler on that package logger, so the
root logger and any handlers a host application installed stay untouched.
Forwarded records carry their origin as ``extra["source"]``
(``module:function:line``) and only such records reach the sinks added here.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger as _logger

PACKAGE_LOGGER = "control_recorder"
DEFAULT_LEVEL = "WARNING"
LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[source]} | {message}"
)

_sink_ids: List[int] = []


class InterceptHandler(logging.Handler):
    """Forward ``control_recorder.*`` stdlib records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        source = f"{record.name}:{record.funcName}:{record.lineno}"
        _logger.bind(source=source).opt(exception=record.exc_info).log(
            level, record.getMessage()
        )


def _from_recorder(record) -> bool:
    return "source" in record["extra"]


def setup_logging(
    level: str = DEFAULT_LEVEL,
    *,
    console: bool = True,
    file_path: Optional[str | Path] = None,
    serialize: bool = False,
    exclusive: bool = True,
) -> None:
    """Send recorder log records to stderr and/or a log file.

    Args:
        level: Minimum level, applied to the package logger and to every sink.
        console: Add a stderr sink.
        file_path: Optional log file; never one of the CSV files being recorded.
        serialize: Write JSON lines instead of ``LOG_FORMAT``.
        exclusive: Drop every existing loguru sink first (the CLI's choice).
            When False only sinks from an earlier call are replaced.

    Calling it again reconfigures; handlers and sinks are not duplicated.
    """
    teardown_logging()
    if exclusive:
        _logger.remove()

    lvl = level.upper()
    sink_opts = dict(
        level=lvl,
        format=LOG_FORMAT,
        filter=_from_recorder,
        backtrace=False,
        diagnose=False,
        serialize=serialize,
    )
    if console:
        _sink_ids.append(_logger.add(sys.stderr, **sink_opts))
    if file_path:
        _sink_ids.append(_logger.add(str(file_path), **sink_opts))

    pkg = logging.getLogger(PACKAGE_LOGGER)
    pkg.addHandler(InterceptHandler())
    pkg.setLevel(getattr(logging, lvl, logging.WARNING))


def teardown_logging() -> None:
    """Detach the forwarding handler and close the sinks ``setup_logging`` added."""
    pkg = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(pkg.handlers):
        if isinstance(handler, InterceptHandler):
            pkg.removeHandler(handler)
    pkg.setLevel(logging.NOTSET)

    while _sink_ids:
        sink_id = _sink_ids.pop()
        try:
            _logger.remove(sink_id)
        except ValueError:
            # already removed by someone calling logger.remove() directly
            continue
