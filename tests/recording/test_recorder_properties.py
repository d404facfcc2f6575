"""
Property Tests: CsvRecorder buffering and persistence

- rows written by persist() == record() calls since the last persist()
- rows within one persist() are in non-decreasing timestamp order, ties
  keeping insertion order
- the header appears exactly once per recorder instance
"""

import csv
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

from hypothesis import given, settings
from hypothesis import strategies as st

from control_recorder.config import RecorderConfig
from control_recorder.core.values import Integer
from control_recorder.recorder import CsvRecorder

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
T0_MS = 1704067200000

offsets = st.lists(st.integers(min_value=0, max_value=50), max_size=30)
batches = st.lists(offsets, min_size=1, max_size=5)


def _read(path: Path) -> list:
    if not path.exists():
        return []
    with open(path, "r", newline="", encoding="utf-8") as fh:
        return list(csv.reader(fh))


class TestPersistBatches:
    @given(batches=batches)
    @settings(max_examples=50, deadline=None)
    def test_rows_counted_ordered_and_header_once(self, batches):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "rec.csv"
            rec = CsvRecorder(RecorderConfig(file_name=path, key_list=["seq"]))
            seq = 0
            total = 0
            for batch in batches:
                start = len(_read(path))
                for off in batch:
                    rec.record(
                        T0 + timedelta(milliseconds=off), {"seq": Integer(seq)}
                    )
                    seq += 1

                written = rec.persist()
                assert written == len(batch)
                assert rec.pending == 0

                rows = _read(path)
                new_rows = rows[start:]
                if start == 0 and batch:
                    assert new_rows[0] == ["timestamp_utc", "seq"]
                    new_rows = new_rows[1:]
                assert len(new_rows) == len(batch)

                keys = [(int(r[0]), int(r[1])) for r in new_rows]
                # timestamp ascending; for equal timestamps insertion order (seq)
                assert keys == sorted(keys)
                assert [k[0] - T0_MS for k in keys] == sorted(batch)
                total += len(batch)

            rows = _read(path)
            headers = [r for r in rows if r[0] == "timestamp_utc"]
            assert len(headers) == (1 if total else 0)
            assert len(rows) - len(headers) == total
