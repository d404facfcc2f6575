"""
Flatten runtime state into ``{key: Value}`` rows.
"""

from __future__ import annotations

from typing import Dict, Union

from .core.state import IoState, SystemState
from .core.values import Text, Value
from .keys import (
    FSM_PREFIX,
    INPUT_PREFIX,
    MEMORY_PREFIX,
    OUTPUT_PREFIX,
    RULES_KEY,
    SETPOINT_PREFIX,
    controller_key,
)

__all__ = ["io_values", "system_values", "rec_vals"]


def io_values(io: IoState) -> Dict[str, Value]:
    """Merge inputs, outputs and memory into one map.

    The three prefixes are disjoint, so no entry overwrites another.
    """
    row: Dict[str, Value] = {}
    for prefix, values in (
        (INPUT_PREFIX, io.inputs),
        (OUTPUT_PREFIX, io.outputs),
        (MEMORY_PREFIX, io.mem),
    ):
        for ident, value in values.items():
            row[f"{prefix}.{ident}"] = value
    return row


def system_values(state: SystemState) -> Dict[str, Value]:
    """Flatten a full system state.

    A PID controller that has not run yet has no ``prev_value`` entry;
    consumers must read a missing key as "no previous value", not zero.
    """
    row = io_values(state.io)

    for loop_id, value in state.setpoints.items():
        row[f"{SETPOINT_PREFIX}.{loop_id}"] = value

    active = [rule_id for rule_id, is_active in state.rules.items() if is_active]
    row[RULES_KEY] = Text(",".join(active))

    for fsm_id, current in state.state_machines.items():
        row[f"{FSM_PREFIX}.{fsm_id}"] = Text(str(current))

    for loop_id, controller in state.controllers.items():
        for field_name, value in controller.rec_values().items():
            row[controller_key(loop_id, controller.KIND, field_name)] = value

    return row


def rec_vals(obj: Union[IoState, SystemState]) -> Dict[str, Value]:
    if isinstance(obj, SystemState):
        return system_values(obj)
    if isinstance(obj, IoState):
        return io_values(obj)
    raise TypeError(f"No recordable values for {type(obj).__name__}")
