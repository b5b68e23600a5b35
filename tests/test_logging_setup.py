"""Tests for loguru sink configuration."""

import pytest
from loguru import logger

from core.logging_setup import setup_logging


def test_returns_severity():
    assert setup_logging("warning") == 30


def test_unknown_level():
    with pytest.raises(ValueError):
        setup_logging("LOUD")


def test_file_sink_is_rewritten_each_run(tmp_path):
    log_file = tmp_path / "logs" / "run.log"

    setup_logging("INFO", log_file=log_file)
    logger.warning("first run")
    setup_logging("INFO", log_file=log_file)
    logger.warning("second run")
    logger.remove()

    text = log_file.read_text(encoding="utf-8")
    assert "second run" in text
    assert "first run" not in text
    assert "| WARNING  |" in text


def test_level_filters_file(tmp_path):
    log_file = tmp_path / "run.log"
    setup_logging("ERROR", log_file=log_file)
    logger.warning("quiet")
    logger.error("loud")
    logger.remove()

    text = log_file.read_text(encoding="utf-8")
    assert "loud" in text
    assert "quiet" not in text
