import logging
from datetime import datetime, timezone
from pathlib import Path

from control_recorder.config import RecorderConfig
from control_recorder.core.values import Bin, Integer
from control_recorder.logging import (
    PACKAGE_LOGGER,
    InterceptHandler,
    setup_logging,
    teardown_logging,
)
from control_recorder.recorder import CsvRecorder

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _bridges() -> list:
    pkg = logging.getLogger(PACKAGE_LOGGER)
    return [h for h in pkg.handlers if isinstance(h, InterceptHandler)]


def test_recorder_warnings_reach_log_file(tmp_path: Path):
    logfile = tmp_path / "recorder.log"
    setup_logging(level="WARNING", console=False, file_path=logfile)

    rec = CsvRecorder(
        RecorderConfig(file_name=tmp_path / "rec.csv", key_list=["blob", "n"])
    )
    rec.persist()
    rec.record(T0, {"blob": Bin(b"\x01\x02\x03"), "n": Integer(1)})
    rec.persist()

    # closes the file sink
    teardown_logging()

    data = logfile.read_text(encoding="utf-8")
    assert "no states to persist" in data
    assert "The binary data of 'blob' will not be recorded" in data
    assert "control_recorder.recorder:persist:" in data
    assert "control_recorder.encoding:encode_value:" in data
    # debug header/persist events are below the configured level
    assert "Wrote header" not in data


def test_debug_level_includes_persist_events(tmp_path: Path):
    logfile = tmp_path / "recorder.log"
    setup_logging(level="debug", console=False, file_path=logfile)

    rec = CsvRecorder(RecorderConfig(file_name=tmp_path / "rec.csv", key_list=["n"]))
    rec.record(T0, {"n": Integer(1)})
    rec.persist()
    teardown_logging()

    data = logfile.read_text(encoding="utf-8")
    assert "Wrote header with 2 columns" in data
    assert "Persisted 1 row(s)" in data


def test_only_package_loggers_are_forwarded(tmp_path: Path):
    logfile = tmp_path / "recorder.log"
    root_handlers = list(logging.root.handlers)
    setup_logging(console=False, file_path=logfile)

    logging.getLogger("someone.else").warning("foreign warning")
    logging.getLogger("control_recorder.cli.keys").warning("cli warning")
    teardown_logging()

    data = logfile.read_text(encoding="utf-8")
    assert "cli warning" in data
    assert "foreign warning" not in data
    assert logging.root.handlers == root_handlers


def test_setup_twice_keeps_one_bridge_and_teardown_removes_it(tmp_path: Path):
    setup_logging(console=False, file_path=tmp_path / "a.log")
    setup_logging(console=False, file_path=tmp_path / "b.log")
    assert len(_bridges()) == 1
    assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING

    teardown_logging()
    assert _bridges() == []
    assert logging.getLogger(PACKAGE_LOGGER).level == logging.NOTSET


def test_import_does_not_create_files(tmp_path: Path, monkeypatch):
    import importlib

    monkeypatch.chdir(tmp_path)
    m = importlib.import_module("control_recorder.logging.loguru_bootstrap")
    assert hasattr(m, "setup_logging")
    assert list(tmp_path.iterdir()) == []
