"""
Instantaneous runtime state handed to the recorder once per control cycle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Dict, Optional, Union

from .values import Bit, Decimal, Value

__all__ = [
    "IoState",
    "PidState",
    "BangBangState",
    "ControllerState",
    "SystemState",
]


@dataclass
class IoState:
    """Current values of inputs, outputs and memory cells, keyed by id."""

    inputs: Dict[str, Value] = field(default_factory=dict)
    outputs: Dict[str, Value] = field(default_factory=dict)
    mem: Dict[str, Value] = field(default_factory=dict)


@dataclass
class PidState:
    """Internal state of a PID controller.

    ``prev_value`` is ``None`` until the controller has run one cycle.
    """

    KIND: ClassVar[str] = "pid"

    target: float
    p: float = 0.0
    i: float = 0.0
    d: float = 0.0
    prev_value: Optional[float] = None

    def rec_values(self) -> Dict[str, Value]:
        values: Dict[str, Value] = {"target": Decimal(self.target)}
        if self.prev_value is not None:
            values["prev_value"] = Decimal(self.prev_value)
        values["p"] = Decimal(self.p)
        values["i"] = Decimal(self.i)
        values["d"] = Decimal(self.d)
        return values


@dataclass
class BangBangState:
    """Internal state of a bang-bang controller."""

    KIND: ClassVar[str] = "bb"

    threshold: float
    current: bool = False

    def rec_values(self) -> Dict[str, Value]:
        return {
            "threshold": Decimal(self.threshold),
            "current": Bit(self.current),
        }


ControllerState = Union[PidState, BangBangState]


@dataclass
class SystemState:
    """Full runtime state at one instant.

    Attributes:
        io: input/output/memory values
        setpoints: setpoint value per loop id
        rules: rule id -> active flag, in rule declaration order
        state_machines: state machine id -> current state name
        controllers: loop id -> controller internal state
    """

    io: IoState = field(default_factory=IoState)
    setpoints: Dict[str, Value] = field(default_factory=dict)
    rules: Dict[str, bool] = field(default_factory=dict)
    state_machines: Dict[str, str] = field(default_factory=dict)
    controllers: Dict[str, ControllerState] = field(default_factory=dict)
