from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Mapping, Optional, Sequence

from .core.values import Value

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

__all__ = ["EPOCH", "to_utc", "format_timestamp", "encode_value", "encode_row"]


def to_utc(ts: datetime) -> datetime:
    """Normalize to an aware UTC datetime; naive values are taken as UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def format_timestamp(ts: datetime, time_format: Optional[str] = None) -> str:
    """Render the timestamp column.

    With ``time_format`` the UTC time is passed through ``strftime``;
    otherwise the cell holds integer milliseconds since the Unix epoch.
    """
    utc = to_utc(ts)
    if time_format:
        return utc.strftime(time_format)
    return str((utc - EPOCH) // timedelta(milliseconds=1))


def encode_value(key: str, value: Value) -> str:
    text = value.to_text()
    if text is None:
        logger.warning("The binary data of '%s' will not be recorded", key)
        return ""
    return text


def encode_row(keys: Sequence[str], values: Mapping[str, Value]) -> List[str]:
    """Encode one snapshot in schema order. Missing keys become empty fields."""
    row: List[str] = []
    for key in keys:
        value = values.get(key)
        row.append("" if value is None else encode_value(key, value))
    return row
