"""Structured Logging — JSON and key=value formatters for substrate audit trails.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Audit fields (path, position, value, error_code, layer, counters) surfaced
      when present; a byte value is also rendered as value_hex
    - Timestamps come from the record, not from the moment of formatting
    - setup_logging owns exactly one root handler, however often it is called

Design Decisions:
    - JSON for the API (log shippers), key=value text for the CLI (terminals)
    - Both formatters share one field extraction so the two modes never drift
"""

import logging
import json
from datetime import datetime, timezone


AUDIT_FIELDS = (
    "path", "position", "value", "error_code", "layer",
    "strike_count", "head_position", "byte_count", "state",
)


def audit_fields(record: logging.LogRecord) -> dict:
    fields = {}
    for key in AUDIT_FIELDS:
        val = record.__dict__.get(key)
        if val is not None:
            fields[key] = val
    if isinstance(fields.get("value"), int):
        fields["value_hex"] = f"0x{fields['value'] & 0xFF:02X}"
    return fields


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, timezone.utc).isoformat()


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": _timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(audit_fields(record))
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=True)


class TextFormatter(logging.Formatter):
    """`<ts> LEVEL logger: message key=value ...` for terminals."""

    def format(self, record: logging.LogRecord) -> str:
        line = f"{_timestamp(record)} {record.levelname} {record.name}: {record.getMessage()}"
        fields = audit_fields(record)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure root logging. Replaces the handler installed by a previous call."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    for existing in list(logging.root.handlers):
        if getattr(existing, "_dotmatrix", False):
            logging.root.removeHandler(existing)
    handler._dotmatrix = True
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
