"""Core data types shared between the control runtime and the recorder."""

from .state import (
    BangBangState,
    ControllerState,
    IoState,
    PidState,
    SystemState,
)
from .topology import (
    BangBangConfig,
    ControllerConfig,
    Loop,
    PidConfig,
    RuntimeTopology,
    load_topology,
)
from .values import (
    VALUE_TYPES,
    Bin,
    Bit,
    Decimal,
    Integer,
    Text,
    Timeout,
    Value,
    to_value,
)

__all__ = [
    "Bin",
    "Bit",
    "Decimal",
    "Integer",
    "Text",
    "Timeout",
    "Value",
    "VALUE_TYPES",
    "to_value",
    "IoState",
    "PidState",
    "BangBangState",
    "ControllerState",
    "SystemState",
    "PidConfig",
    "BangBangConfig",
    "ControllerConfig",
    "Loop",
    "RuntimeTopology",
    "load_topology",
]
