from __future__ import annotations

"""Structured JSON logger with secret redaction."""

import json
import logging
import os
import re
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, MutableMapping

LOG_LEVEL_ENV = "FAVQS_LOG_LEVEL"
ROOT_LOGGER = "favqs"

EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
TOKEN_RE = re.compile(r"(?:token(?:\s+token)?=)?[A-Za-z0-9\-_=]{20,}", re.IGNORECASE)
URL_QUERY_RE = re.compile(r"https?://[^\s?]+\?[^\s]+")

# Keys whose values are dropped outright instead of scrubbed.
_SECRET_KEYS = {"api_key", "authorization", "password", "user_token", "user-token"}

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _scrub(value: str) -> str:
    value = EMAIL_RE.sub("[redacted]", value)
    value = URL_QUERY_RE.sub(lambda m: m.group(0).split("?")[0], value)
    value = TOKEN_RE.sub("[redacted]", value)
    return value


def _sanitize(obj: Any) -> Any:
    if isinstance(obj, dict):
        clean: dict[str, Any] = {}
        for key, value in obj.items():
            if value is None:
                continue
            if str(key).lower() in _SECRET_KEYS:
                clean[str(key)] = "[redacted]"
            else:
                clean[str(key)] = _sanitize(value)
        return clean
    if isinstance(obj, (list, tuple)):
        return [_sanitize(v) for v in obj]
    if isinstance(obj, (int, float, bool)):
        return obj
    if obj is None:
        return None
    return _scrub(str(obj))


def _truncate(details: Mapping[str, Any] | Iterable[Any], max_bytes: int) -> Any:
    if max_bytes <= 0:
        return details
    serialized = json.dumps(details, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
    blob = serialized.encode("utf-8")
    if len(blob) <= max_bytes:
        return details
    preview = blob[:max_bytes].decode("utf-8", errors="ignore")
    return {"note": "truncated", "preview": preview}


def resolve_level(value: str | int | None) -> int:
    if isinstance(value, int):
        return value
    if not value:
        return logging.WARNING
    return _LEVEL_MAP.get(value.strip().upper(), logging.WARNING)


def configure(level: str | int | None = None) -> int:
    """Set the threshold shared by every :class:`JsonLogger`.

    ``level`` falls back to ``FAVQS_LOG_LEVEL`` and then to WARNING.
    """
    resolved = resolve_level(level if level is not None else os.getenv(LOG_LEVEL_ENV))
    logging.getLogger(ROOT_LOGGER).setLevel(resolved)
    return resolved


class JsonLogger:
    """Emit structured JSON events with consistent keys."""

    def __init__(
        self,
        service: str,
        *,
        logger: logging.Logger | None = None,
        max_details_bytes: int = 4096,
    ) -> None:
        self._service = service
        self._logger = logger or logging.getLogger(f"{ROOT_LOGGER}.{service}.json")
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(message)s"))
            self._logger.addHandler(handler)
        self._logger.propagate = False
        self._max_details_bytes = max(0, int(max_details_bytes))

    def info(self, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit("INFO", event, fields)

    def warning(self, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit("WARNING", event, fields)

    def error(self, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit("ERROR", event, fields)

    def emit(self, level: str, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit(level.upper(), event, dict(fields))

    def _emit(self, level: str, event: str, fields: MutableMapping[str, Any]) -> dict[str, Any] | None:
        numeric = _LEVEL_MAP.get(level.upper(), logging.INFO)
        if not self._logger.isEnabledFor(numeric):
            return None
        entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": level.upper(),
            "service": self._service,
            "event": event,
        }
        for key in ("endpoint", "kind", "latency_ms", "status"):
            value = fields.pop(key, None)
            if value is not None:
                entry[key] = value
        details = fields.pop("details", None)
        if details is not None:
            entry["details"] = _truncate(_sanitize(details), self._max_details_bytes)
        if fields:
            residual = _truncate(_sanitize(fields), self._max_details_bytes)
            if "details" in entry and isinstance(entry["details"], dict) and isinstance(residual, dict):
                entry["details"].update(residual)
            else:
                entry["details"] = residual
        payload = json.dumps(entry, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
        self._logger.log(numeric, payload)
        return entry


configure()

__all__ = ["JsonLogger", "configure", "resolve_level"]
