"""
Recordable column names.

Keys are namespaced by prefix so that different kinds of runtime state can
never collide in one flat row. The enumeration functions here only look at
topology; the flattener in :mod:`control_recorder.flatten` produces values
under the same names.
"""

from __future__ import annotations

import fnmatch
from typing import Iterable, List, Sequence, Union

from .core.topology import Loop, RuntimeTopology

SETPOINT_PREFIX = "setpoint"
INPUT_PREFIX = "in"
OUTPUT_PREFIX = "out"
MEMORY_PREFIX = "mem"
CONTROLLER_PREFIX = "controller"
FSM_PREFIX = "fsm"
RULES_KEY = "rules"

__all__ = [
    "SETPOINT_PREFIX",
    "INPUT_PREFIX",
    "OUTPUT_PREFIX",
    "MEMORY_PREFIX",
    "CONTROLLER_PREFIX",
    "FSM_PREFIX",
    "RULES_KEY",
    "controller_key",
    "loop_keys",
    "runtime_keys",
    "rec_keys",
    "select_keys",
]


def _key(prefix: str, ident: str) -> str:
    return f"{prefix}.{ident}"


def controller_key(loop_id: str, kind: str, field_name: str) -> str:
    """Column name of one controller field, e.g. ``controller.L1.pid.p``."""
    return f"{CONTROLLER_PREFIX}.{loop_id}.{kind}.{field_name}"


def loop_keys(loop: Loop) -> List[str]:
    """Keys of a single loop in declaration order (not sorted)."""
    keys = [_key(SETPOINT_PREFIX, loop.id)]
    keys.extend(_key(INPUT_PREFIX, i) for i in loop.inputs)
    keys.extend(_key(OUTPUT_PREFIX, o) for o in loop.outputs)
    controller = loop.controller
    keys.extend(
        controller_key(loop.id, controller.kind, name) for name in controller.FIELDS
    )
    return keys


def runtime_keys(runtime: RuntimeTopology) -> List[str]:
    """All recordable keys of a runtime, deduplicated and sorted."""
    keys: List[str] = []
    for loop in runtime.loops:
        keys.extend(loop_keys(loop))
    keys.extend(_key(FSM_PREFIX, fsm_id) for fsm_id in runtime.state_machines)
    keys.append(RULES_KEY)
    return sorted(set(keys))


def rec_keys(obj: Union[Loop, RuntimeTopology]) -> List[str]:
    if isinstance(obj, RuntimeTopology):
        return runtime_keys(obj)
    if isinstance(obj, Loop):
        return loop_keys(obj)
    raise TypeError(f"No recordable keys for {type(obj).__name__}")


def select_keys(keys: Sequence[str], patterns: Iterable[str] | None) -> List[str]:
    """Keep keys matching any glob pattern, preserving input order.

    ``None`` or an empty pattern list keeps every key.
    """
    pats = list(patterns or [])
    if not pats:
        return list(keys)
    return [k for k in keys if any(fnmatch.fnmatchcase(k, p) for p in pats)]
