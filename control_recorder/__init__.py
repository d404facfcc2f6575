"""CSV recorder for control runtime snapshots.

This package provides:
- Typed values, topology models and state containers shared with the runtime
- Key enumeration over a runtime topology (deterministic column names)
- Flattening of runtime state into ``{key: value}`` rows
- A buffered CSV recorder with lazy, once-only header emission

Note: Logging (loguru) is orthogonal and not used for data writing.
"""

from .config import TIMESTAMP_COLUMN, RecorderConfig, load_recorder_config
from .core import (
    BangBangConfig,
    BangBangState,
    Bin,
    Bit,
    Decimal,
    Integer,
    IoState,
    Loop,
    PidConfig,
    PidState,
    RuntimeTopology,
    SystemState,
    Text,
    Timeout,
    Value,
    load_topology,
    to_value,
)
from .encoding import encode_value, format_timestamp
from .exceptions import (
    ConfigurationError,
    ControlRecorderError,
    PersistError,
    ValueConversionError,
)
from .flatten import io_values, rec_vals, system_values
from .keys import loop_keys, rec_keys, runtime_keys, select_keys
from .recorder import CsvRecorder, HeaderState, Snapshot

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Bin",
    "Bit",
    "Decimal",
    "Integer",
    "Text",
    "Timeout",
    "Value",
    "to_value",
    "IoState",
    "PidState",
    "BangBangState",
    "SystemState",
    "PidConfig",
    "BangBangConfig",
    "Loop",
    "RuntimeTopology",
    "load_topology",
    "loop_keys",
    "runtime_keys",
    "rec_keys",
    "select_keys",
    "io_values",
    "system_values",
    "rec_vals",
    "encode_value",
    "format_timestamp",
    "TIMESTAMP_COLUMN",
    "RecorderConfig",
    "load_recorder_config",
    "CsvRecorder",
    "HeaderState",
    "Snapshot",
    "ControlRecorderError",
    "PersistError",
    "ConfigurationError",
    "ValueConversionError",
]
