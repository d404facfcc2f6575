"""
Shared fixtures: a small runtime topology and a matching system state.
"""

import pytest

from control_recorder.core.state import BangBangState, IoState, PidState, SystemState
from control_recorder.core.topology import (
    BangBangConfig,
    Loop,
    PidConfig,
    RuntimeTopology,
)
from control_recorder.core.values import Bit, Decimal, Integer


@pytest.fixture
def pid_loop() -> Loop:
    return Loop(id="L1", inputs=["i1"], outputs=["o1"], controller=PidConfig())


@pytest.fixture
def bb_loop() -> Loop:
    return Loop(
        id="heater",
        inputs=["temp"],
        outputs=["relay"],
        controller=BangBangConfig(default_threshold=21.5),
    )


@pytest.fixture
def topology(pid_loop: Loop, bb_loop: Loop) -> RuntimeTopology:
    return RuntimeTopology(
        loops=[pid_loop, bb_loop],
        state_machines=["main"],
        rules=["overheat", "door_open"],
    )


@pytest.fixture
def system_state() -> SystemState:
    return SystemState(
        io=IoState(
            inputs={"i1": Decimal(0.5), "temp": Decimal(20.0)},
            outputs={"o1": Decimal(1.25), "relay": Bit(True)},
            mem={"counter": Integer(7)},
        ),
        setpoints={"L1": Decimal(1.0), "heater": Decimal(21.5)},
        rules={"overheat": False, "door_open": True},
        state_machines={"main": "running"},
        controllers={
            "L1": PidState(target=1.0, p=0.5, i=0.1, d=0.0, prev_value=0.4),
            "heater": BangBangState(threshold=21.5, current=True),
        },
    )


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo setup_logging() calls so sinks never outlive a test's streams."""
    from control_recorder.logging import teardown_logging

    yield
    teardown_logging()
