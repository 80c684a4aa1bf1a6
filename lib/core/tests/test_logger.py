import json
import logging

import pytest

from pasterbar_core.config import LoggingSettings
from pasterbar_core.logger import LOGGER_NAME, configure_logging, get_logger


@pytest.fixture
def restore_logger():
    """Put the package logger back the way other tests expect it (propagating)."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_get_logger_children():
    assert get_logger().name == LOGGER_NAME
    assert get_logger("HistoryStore").name == f"{LOGGER_NAME}.HistoryStore"


def test_configure_logging_writes_json_lines(tmp_path, restore_logger):
    log_file = tmp_path / "logs" / "pasterbar.jsonl"
    settings = LoggingSettings(log_level="debug", log_file=log_file, console=False)

    logger = configure_logging(settings)
    logger.getChild("HistoryStore").info("Stored text entry 1")
    for handler in logger.handlers:
        handler.flush()

    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    messages = [record["message"] for record in records]
    assert "Stored text entry 1" in messages
    stored = next(r for r in records if r["message"] == "Stored text entry 1")
    assert stored["levelname"] == "INFO"
    assert stored["name"] == f"{LOGGER_NAME}.HistoryStore"


def test_configure_logging_level_filters(tmp_path, restore_logger):
    log_file = tmp_path / "pasterbar.jsonl"
    settings = LoggingSettings(log_level="warning", log_file=log_file, console=False)

    logger = configure_logging(settings)
    logger.info("quiet")
    logger.warning("loud")
    for handler in logger.handlers:
        handler.flush()

    content = log_file.read_text()
    assert "loud" in content
    assert "quiet" not in content


def test_console_handler_optional(tmp_path, restore_logger):
    with_console = configure_logging(
        LoggingSettings(log_file=tmp_path / "a.jsonl", console=True)
    )
    assert len(with_console.handlers) == 2
    without_console = configure_logging(
        LoggingSettings(log_file=tmp_path / "b.jsonl", console=False)
    )
    assert len(without_console.handlers) == 1
