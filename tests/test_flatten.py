from control_recorder.core.state import BangBangState, IoState, PidState, SystemState
from control_recorder.core.values import Bit, Decimal, Integer, Text
from control_recorder.flatten import io_values, rec_vals, system_values
from control_recorder.keys import runtime_keys


def test_io_values_prefixes_each_namespace():
    io = IoState(
        inputs={"x": Integer(1)},
        outputs={"x": Integer(2)},
        mem={"x": Integer(3)},
    )
    assert io_values(io) == {
        "in.x": Integer(1),
        "out.x": Integer(2),
        "mem.x": Integer(3),
    }


def test_system_values_full_state(system_state):
    row = system_values(system_state)
    assert row["in.i1"] == Decimal(0.5)
    assert row["out.relay"] == Bit(True)
    assert row["mem.counter"] == Integer(7)
    assert row["setpoint.L1"] == Decimal(1.0)
    assert row["rules"] == Text("door_open")
    assert row["fsm.main"] == Text("running")
    assert row["controller.L1.pid.target"] == Decimal(1.0)
    assert row["controller.L1.pid.prev_value"] == Decimal(0.4)
    assert row["controller.L1.pid.p"] == Decimal(0.5)
    assert row["controller.L1.pid.i"] == Decimal(0.1)
    assert row["controller.L1.pid.d"] == Decimal(0.0)
    assert row["controller.heater.bb.threshold"] == Decimal(21.5)
    assert row["controller.heater.bb.current"] == Bit(True)


def test_flattened_keys_are_recordable(system_state, topology):
    row = system_values(system_state)
    recordable = set(runtime_keys(topology))
    # mem.* is flattened but not part of the loop topology
    assert {k for k in row if not k.startswith("mem.")} <= recordable


def test_pid_without_previous_value_omits_key():
    state = SystemState(controllers={"L1": PidState(target=2.0)})
    row = system_values(state)
    assert "controller.L1.pid.prev_value" not in row
    assert row["controller.L1.pid.target"] == Decimal(2.0)
    assert row["controller.L1.pid.p"] == Decimal(0.0)


def test_active_rules_joined_in_declaration_order():
    state = SystemState(rules={"c": True, "a": False, "b": True})
    assert system_values(state)["rules"] == Text("c,b")


def test_no_active_rules_is_empty_text():
    assert system_values(SystemState())["rules"] == Text("")
    assert system_values(SystemState(rules={"a": False}))["rules"] == Text("")


def test_bang_bang_state_fields():
    state = SystemState(controllers={"h": BangBangState(threshold=1.5, current=False)})
    row = system_values(state)
    assert row == {
        "rules": Text(""),
        "controller.h.bb.threshold": Decimal(1.5),
        "controller.h.bb.current": Bit(False),
    }


def test_rec_vals_dispatch(system_state):
    assert rec_vals(system_state) == system_values(system_state)
    assert rec_vals(system_state.io) == io_values(system_state.io)
