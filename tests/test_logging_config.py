"""Tests for structured logging setup."""

import json
import logging

import pytest
import structlog

from config.logging_config import HANDLER_PREFIX, get_logger, setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if (handler.get_name() or "").startswith(HANDLER_PREFIX):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    structlog.reset_defaults()


def _read_entries(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]


def test_json_lines_written_to_file(tmp_path, restore_logging):
    log_file = tmp_path / "logs" / "ledger.log"

    setup_logging(log_level="INFO", log_file=log_file)
    get_logger("tests").warning("Skipping corrupt bet", bet_id="bet-1")

    entry = _read_entries(log_file)[-1]
    assert entry["event"] == "Skipping corrupt bet"
    assert entry["bet_id"] == "bet-1"
    assert entry["app"] == "betledger"
    assert entry["level"] == "warning"
    assert entry["logger"] == "tests"


def test_stdlib_records_share_the_format(tmp_path, restore_logging):
    log_file = tmp_path / "ledger.log"

    setup_logging(log_level="INFO", log_file=log_file)
    logging.getLogger("plain.stdlib").info("hello %s", "world")

    entry = _read_entries(log_file)[-1]
    assert entry["event"] == "hello world"
    assert entry["app"] == "betledger"


def test_setup_twice_does_not_duplicate_handlers(tmp_path, restore_logging):
    setup_logging(log_file=tmp_path / "a.log")
    setup_logging(log_file=tmp_path / "a.log")

    ours = [
        h for h in logging.getLogger().handlers
        if (h.get_name() or "").startswith(HANDLER_PREFIX)
    ]
    assert len(ours) == 2
