"""Quickstart example for `control_recorder.CsvRecorder`.

Simulates a few cycles of a PID loop and a bang-bang heater, records each
cycle and persists them to ``quickstart.csv`` in the working directory.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import control_recorder as cr
from control_recorder.logging import setup_logging


def main() -> None:
    """Record ten control cycles and write them to CSV."""
    setup_logging(level="INFO")

    topology = cr.RuntimeTopology(
        loops=[
            cr.Loop(
                id="flow",
                inputs=["flow_meter"],
                outputs=["pump"],
                controller=cr.PidConfig(kp=0.8),
            ),
            cr.Loop(
                id="heater",
                inputs=["temp"],
                outputs=["relay"],
                controller=cr.BangBangConfig(),
            ),
        ],
        state_machines=["main"],
        rules=["overheat"],
    )
    out = Path("quickstart.csv")
    recorder = cr.CsvRecorder(
        cr.RecorderConfig.for_runtime(
            out, topology, time_format="%Y-%m-%dT%H:%M:%S.%f"
        )
    )

    start = datetime.now(timezone.utc)
    prev = None
    for cycle in range(10):
        flow = 0.1 * cycle
        temp = 19.0 + 0.4 * cycle
        heating = temp < 21.5
        state = cr.SystemState(
            io=cr.IoState(
                inputs={"flow_meter": cr.Decimal(flow), "temp": cr.Decimal(temp)},
                outputs={"pump": cr.Decimal(1.0 - flow), "relay": cr.Bit(heating)},
            ),
            setpoints={"flow": cr.Decimal(1.0), "heater": cr.Decimal(21.5)},
            rules={"overheat": temp > 22.0},
            state_machines={"main": "running"},
            controllers={
                "flow": cr.PidState(target=1.0, p=0.8 * (1.0 - flow), prev_value=prev),
                "heater": cr.BangBangState(threshold=21.5, current=heating),
            },
        )
        recorder.record_state(start + timedelta(milliseconds=100 * cycle), state)
        prev = flow

    rows = recorder.persist()
    print(f"Wrote {rows} rows to {out.resolve()}")


if __name__ == "__main__":  # pragma: no cover
    main()
