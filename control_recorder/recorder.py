from __future__ import annotations

import csv
import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Mapping

from .config import RecorderConfig
from .core.state import SystemState
from .core.values import Value
from .encoding import encode_row, format_timestamp, to_utc
from .exceptions import PersistError
from .flatten import system_values

logger = logging.getLogger(__name__)

__all__ = ["HeaderState", "Snapshot", "CsvRecorder"]


class HeaderState(enum.Enum):
    """Whether this recorder instance has emitted the CSV header row."""

    NO_HEADER = "no_header"
    HEADER_WRITTEN = "header_written"


@dataclass(frozen=True)
class Snapshot:
    """Flattened system state at one instant."""

    timestamp: datetime
    values: Dict[str, Value] = field(default_factory=dict)


class CsvRecorder:
    """Buffer flattened snapshots in memory and append them to a CSV file.

    ``record()`` is a plain list append and never touches the disk.
    ``persist()`` writes everything buffered since the last successful call,
    sorted by timestamp, then clears the buffer. The header row is written
    once per instance, on the first non-empty ``persist()``; an existing file
    is appended to without checking its header.

    Not thread-safe: one owner calls both methods.

    Usage:
        rec = CsvRecorder(RecorderConfig(file_name="run.csv", key_list=keys))
        rec.record(now, system_values(state))
        rec.persist()
    """

    def __init__(self, config: RecorderConfig) -> None:
        self._config = config
        self._header_state = HeaderState.NO_HEADER
        self._states: List[Snapshot] = []

    @property
    def config(self) -> RecorderConfig:
        return self._config

    @property
    def header_state(self) -> HeaderState:
        return self._header_state

    @property
    def header_written(self) -> bool:
        return self._header_state is HeaderState.HEADER_WRITTEN

    @property
    def pending(self) -> int:
        """Number of buffered snapshots not yet persisted."""
        return len(self._states)

    def __len__(self) -> int:
        return len(self._states)

    def record(self, timestamp: datetime, values: Mapping[str, Value]) -> None:
        """Add a flattened snapshot to the buffer."""
        self._states.append(Snapshot(timestamp, dict(values)))

    def record_state(self, timestamp: datetime, state: SystemState) -> None:
        """Flatten ``state`` and add it to the buffer."""
        self.record(timestamp, system_values(state))

    def persist(self) -> int:
        """Write buffered snapshots to the CSV file.

        Returns:
            Number of data rows written (0 when the buffer was empty).

        Raises:
            PersistError: if the file cannot be opened, written or flushed,
                or a text value cannot be encoded as UTF-8.
                The buffer is kept as-is; rows already on disk stay there.
        """
        if not self._states:
            logger.warning("no states to persist")
            return 0

        cfg = self._config
        try:
            with open(cfg.file_name, "a", newline="", encoding="utf-8") as fh:
                # default \r\n terminator: fields holding \r or \n get quoted
                writer = csv.writer(fh)

                # list.sort is stable: equal timestamps keep insertion order
                self._states.sort(key=lambda snap: to_utc(snap.timestamp))

                if self._header_state is HeaderState.NO_HEADER:
                    writer.writerow(cfg.header())
                    self._header_state = HeaderState.HEADER_WRITTEN
                    logger.debug(
                        "Wrote header with %d columns to %s",
                        len(cfg.key_list) + 1,
                        cfg.file_name,
                    )

                for snap in self._states:
                    row = [format_timestamp(snap.timestamp, cfg.time_format)]
                    row.extend(encode_row(cfg.key_list, snap.values))
                    writer.writerow(row)
                fh.flush()
        except (OSError, UnicodeError) as e:
            raise PersistError(
                f"Failed to persist {len(self._states)} snapshot(s): {e}",
                file_name=cfg.file_name,
            ) from e

        written = len(self._states)
        self._states = []
        logger.debug("Persisted %d row(s) to %s", written, cfg.file_name)
        return written
