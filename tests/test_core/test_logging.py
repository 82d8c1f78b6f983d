"""Tests for logging configuration."""

import logging

import structlog

from pdfreflow.utils.logging import configure_logging, get_logger


def test_configure_logging_installs_single_json_handler(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", list(root.handlers))
    previous_level = root.level
    try:
        configure_logging("debug")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert type(root.handlers[0].formatter).__name__ == "JsonFormatter"
    finally:
        root.setLevel(previous_level)
        structlog.reset_defaults()


def test_level_from_environment(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", list(root.handlers))
    monkeypatch.setenv("PDFREFLOW_LOG_LEVEL", "WARNING")
    previous_level = root.level
    try:
        configure_logging()
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous_level)
        structlog.reset_defaults()


def test_get_logger_returns_structlog_logger():
    logger = get_logger("pdfreflow.test")
    assert hasattr(logger, "info")
    assert hasattr(logger, "bind")
