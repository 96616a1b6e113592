"""Tests for logging setup and log retention."""

import json
import logging
import os
import sys
import time

import pytest

from maxco.src.infrastructure.logging import log_performance, setup_logging
from maxco.src.infrastructure.logging.logging_config import JSONFormatter, cleanup_old_logs


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_writes_json_and_error_logs(tmp_path, restore_root_logger):
    setup_logging(debug=True, log_dir=str(tmp_path), retention_days=3)

    logging.getLogger("maxco.test").error("rail shorted", extra={"rail": "PP_VDD_MAIN"})
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = (tmp_path / "maxco.log").read_text(encoding="utf-8").splitlines()
    entry = json.loads(lines[-1])
    assert entry["message"] == "rail shorted"
    assert entry["level"] == "ERROR"
    assert entry["rail"] == "PP_VDD_MAIN"
    assert "rail shorted" in (tmp_path / "maxco-errors.log").read_text(encoding="utf-8")


def test_cleanup_removes_only_expired_rotations(tmp_path):
    old = tmp_path / "maxco.log-2020-01-01.log"
    recent = tmp_path / "maxco-errors.log-2099-01-01.log"
    current = tmp_path / "maxco.log"
    for path in (old, recent, current):
        path.write_text("x")
    stale = time.time() - 30 * 86400
    os.utime(old, (stale, stale))
    os.utime(current, (stale, stale))

    assert cleanup_old_logs(tmp_path, retention_days=10) == 1
    assert not old.exists()
    assert recent.exists() and current.exists()


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad reading")
    except ValueError:
        record = logging.getLogger("maxco").makeRecord(
            "maxco", logging.ERROR, __file__, 1, "failed", None, exc_info=sys.exc_info())
    entry = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad reading" in entry["exception"]


def test_log_performance(caplog):
    with caplog.at_level(logging.INFO, logger="maxco.performance"):
        log_performance("ai_request", 1.23456, {"model": "gemini-2.5-flash"})
    assert "ai_request" in caplog.text
