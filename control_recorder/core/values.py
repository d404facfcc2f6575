"""
Recordable value types.

A value is one of six variants. Each variant is a frozen dataclass that knows
how to render itself as a CSV field; ``Bin`` has no text projection and
returns ``None`` so the caller can decide what to do with it.
"""

from __future__ import annotations

import decimal
import math
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Optional, Union

from ..exceptions import ValueConversionError

__all__ = [
    "Decimal",
    "Integer",
    "Bit",
    "Text",
    "Timeout",
    "Bin",
    "Value",
    "VALUE_TYPES",
    "to_value",
]


def _plain_float(value: float) -> str:
    """Shortest round-trip digits in positional notation, no exponent.

    ``1.0 -> "1"``, ``1e-7 -> "0.0000001"``, ``1e20 -> "100000000000000000000"``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(decimal.Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass(frozen=True)
class Decimal:
    """Floating point reading."""

    value: float

    def to_text(self) -> Optional[str]:
        return _plain_float(float(self.value))


@dataclass(frozen=True)
class Integer:
    """Signed integer."""

    value: int

    def to_text(self) -> Optional[str]:
        return str(int(self.value))


@dataclass(frozen=True)
class Bit:
    """Boolean flag rendered as ``true``/``false``."""

    value: bool

    def to_text(self) -> Optional[str]:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Text:
    value: str

    def to_text(self) -> Optional[str]:
        return self.value


@dataclass(frozen=True)
class Timeout:
    """Remaining duration of a timer.

    Only the expired flag is recorded: a zero duration renders as ``true``,
    anything else as ``false``.
    """

    value: timedelta

    def to_text(self) -> Optional[str]:
        return "true" if self.value == timedelta(0) else "false"


@dataclass(frozen=True)
class Bin:
    """Opaque binary payload. Never persisted."""

    value: bytes

    def to_text(self) -> Optional[str]:
        return None


Value = Union[Decimal, Integer, Bit, Text, Timeout, Bin]

VALUE_TYPES = (Decimal, Integer, Bit, Text, Timeout, Bin)


def to_value(obj: Any) -> Value:
    """Wrap a plain Python object into the matching value variant.

    Raises:
        ValueConversionError: if ``obj`` has no value variant.
    """
    if isinstance(obj, VALUE_TYPES):
        return obj
    # bool is a subclass of int; check it first
    if isinstance(obj, bool):
        return Bit(obj)
    if isinstance(obj, int):
        return Integer(obj)
    if isinstance(obj, float):
        return Decimal(obj)
    if isinstance(obj, str):
        return Text(obj)
    if isinstance(obj, timedelta):
        return Timeout(obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return Bin(bytes(obj))
    raise ValueConversionError(
        f"Cannot convert {type(obj).__name__} to a recordable value"
    )
