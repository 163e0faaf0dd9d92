"""Tests for loguru setup."""

import importlib

import dramatiq
from loguru import logger

from deeddraw.config.settings import settings
from deeddraw.utils.logging import setup_logging


def test_setup_logging_writes_file(tmp_path):
    """Records at or above the level reach the log file."""
    log_file = tmp_path / "deeddraw.log"

    setup_logging(log_file=str(log_file), level="info")
    logger.debug("hidden detail")
    logger.info("Transaction verified")
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "Starting DeedDraw ledger..." in content
    assert "Transaction verified" in content
    assert "hidden detail" not in content


def test_worker_entrypoint_configures_logging(tmp_path, monkeypatch):
    """Importing the worker module sets up sinks and the broker."""
    log_file = tmp_path / "worker.log"
    monkeypatch.setattr(settings, "log_file", str(log_file))

    worker = importlib.import_module("jobs.worker")
    logger.remove()

    assert worker.broker is dramatiq.get_broker()
    assert "Starting DeedDraw ledger..." in log_file.read_text(encoding="utf-8")
