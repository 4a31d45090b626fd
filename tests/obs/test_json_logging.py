from __future__ import annotations

import io
import json
import logging

from favqsCli.utils import log_json
from favqsCli.utils.log_json import JsonLogger


def _make_logger(*, max_details: int = 256, level: int = logging.INFO) -> tuple[JsonLogger, io.StringIO]:
    stream = io.StringIO()
    logger = logging.getLogger("favqs.test.json")
    logger.handlers = []
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return JsonLogger("favqs-client", logger=logger, max_details_bytes=max_details), stream


def test_json_logger_emits_required_fields():
    logger, stream = _make_logger()
    logger.emit(
        "INFO",
        "api.response",
        endpoint="/qotd",
        latency_ms=12.5,
        status=200,
        details={"email": "user@example.com"},
    )
    payload = json.loads(stream.getvalue())
    assert payload["event"] == "api.response"
    assert payload["service"] == "favqs-client"
    assert payload["endpoint"] == "/qotd"
    assert payload["latency_ms"] == 12.5
    assert payload["status"] == 200
    assert payload["details"]["email"] == "[redacted]"


def test_json_logger_redacts_secrets():
    logger, stream = _make_logger()
    logger.info(
        "api.session",
        api_key="plain",
        authorization="Token token=abc",
        note="Token token=abcdefghijklmnopqrstuvwxyz0123",
        url="https://favqs.com/api/quotes?filter=art&type=tag",
    )
    details = json.loads(stream.getvalue())["details"]
    assert details["api_key"] == "[redacted]"
    assert details["authorization"] == "[redacted]"
    assert "abcdefghijklmnopqrstuvwxyz0123" not in details["note"]
    assert details["url"] == "https://favqs.com/api/quotes"


def test_json_logger_truncates_large_details():
    logger, stream = _make_logger(max_details=32)
    logger.emit("INFO", "large", details={"values": list(range(100))})
    payload = json.loads(stream.getvalue())
    assert payload["event"] == "large"
    assert "preview" in payload["details"]


def test_json_logger_respects_threshold():
    logger, stream = _make_logger(level=logging.WARNING)
    assert logger.info("quiet") is None
    assert logger.warning("loud") is not None
    lines = stream.getvalue().splitlines()
    assert [json.loads(line)["event"] for line in lines] == ["loud"]


def test_configure_reads_environment(monkeypatch):
    root = logging.getLogger(log_json.ROOT_LOGGER)
    previous = root.level
    try:
        monkeypatch.setenv(log_json.LOG_LEVEL_ENV, "debug")
        assert log_json.configure() == logging.DEBUG
        assert root.level == logging.DEBUG
        assert log_json.configure("bogus") == logging.WARNING
    finally:
        root.setLevel(previous)


def test_json_logger_promotes_kind_unscrubbed():
    logger, stream = _make_logger()
    logger.info("cli.command_failed", kind="SessionEstablishmentError", error="bad")
    payload = json.loads(stream.getvalue())
    assert payload["kind"] == "SessionEstablishmentError"
    assert "kind" not in payload["details"]
