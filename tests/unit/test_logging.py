#!/usr/bin/env python3
"""Test structured logging helpers."""

import json
import logging
import os
import sys
from unittest.mock import patch

import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from elasticache_endpoints.core.logging import (
    ROOT_LOGGER_NAME,
    StructuredFormatter,
    get_logger,
)


def create_record(message="Resolved replication group", **extra):
    record = logging.LogRecord(
        "elasticache_endpoints.resolver", logging.INFO, "", 0, message, (), None
    )
    if extra:
        record.extra_data = extra
    return record


def test_human_format_includes_extra_context():
    formatter = StructuredFormatter()
    formatter.is_lambda = False

    line = formatter.format(create_record(cluster_id="sessions", readers=2))

    assert "INFO" in line
    assert "Resolved replication group [cluster_id=sessions, readers=2]" in line


def test_json_format_in_lambda(monkeypatch):
    monkeypatch.setenv("AWS_LAMBDA_FUNCTION_NAME", "resolver")
    formatter = StructuredFormatter()

    data = json.loads(formatter.format(create_record(cluster_id="sessions")))

    assert data["message"] == "Resolved replication group"
    assert data["level"] == "INFO"
    assert data["cluster_id"] == "sessions"


def test_loggers_live_under_package_namespace():
    assert get_logger("resolver").name == f"{ROOT_LOGGER_NAME}.resolver"
    assert get_logger(f"{ROOT_LOGGER_NAME}.session").name == f"{ROOT_LOGGER_NAME}.session"
    assert get_logger().name == ROOT_LOGGER_NAME


def test_timer_reraises():
    logger = get_logger("timer_test")

    with pytest.raises(ValueError):
        with logger.timer("failing operation"):
            raise ValueError("boom")


def test_timer_logs_expected_failures_as_warning():
    logger = get_logger("timer_test")

    with patch.object(logger, "error") as error, patch.object(logger, "warning") as warning:
        with pytest.raises(KeyError):
            with logger.timer("lookup", expected=(KeyError,), cluster_id="ghost"):
                raise KeyError("ghost")

    error.assert_not_called()
    warning.assert_called_once()
    assert warning.call_args[1]["cluster_id"] == "ghost"


def test_timer_logs_unexpected_failures_as_error():
    logger = get_logger("timer_test")

    with patch.object(logger, "error") as error, patch.object(logger, "warning") as warning:
        with pytest.raises(ValueError):
            with logger.timer("lookup", expected=(KeyError,)):
                raise ValueError("boom")

    warning.assert_not_called()
    error.assert_called_once()
