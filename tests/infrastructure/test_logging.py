"""Tests for structured logging setup."""

import json

import structlog

from storefront.infrastructure.logging import configure_logging


def test_json_output_includes_bound_context(capsys) -> None:
    """Context bound by the middleware shows up in every event."""
    configure_logging("INFO", debug=False)
    structlog.contextvars.bind_contextvars(request_id="req-1")
    try:
        structlog.get_logger().info("Product created", sku="TEE-1")
    finally:
        structlog.contextvars.unbind_contextvars("request_id")
        structlog.reset_defaults()

    event = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert event["event"] == "Product created"
    assert event["sku"] == "TEE-1"
    assert event["request_id"] == "req-1"
    assert event["level"] == "info"


def test_debug_filters_below_level(capsys) -> None:
    configure_logging("WARNING", debug=True)
    try:
        structlog.get_logger().info("hidden")
    finally:
        structlog.reset_defaults()

    assert "hidden" not in capsys.readouterr().out
