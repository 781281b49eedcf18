from __future__ import annotations

import json
import logging
import re
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from google.cloud import logging as cloud_logging

CLOUD_TRACE_FIELD = "logging.googleapis.com/trace"

# httpx logs request URLs at INFO, and the direct API URL carries the key
QUIET_LOGGERS = ("httpx", "httpcore", "google", "urllib3")

_request_trace: ContextVar[str | None] = ContextVar("site_synthesizer_trace", default=None)

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}

_KEY_PARAM = re.compile(r"([?&]key=)[^&\s'\"]+")


class CredentialRedactionFilter(logging.Filter):
    """Mask ``key=`` query parameters so API keys in request URLs never reach a sink."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _KEY_PARAM.sub(r"\1***", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


class StructuredFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` fields become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry = self._location(record)
        entry.update(self._extras(record))

        trace_id = _request_trace.get()
        if trace_id:
            entry[CLOUD_TRACE_FIELD] = trace_id
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)

    @staticmethod
    def _location(record: logging.LogRecord) -> dict[str, Any]:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return {
            "timestamp": created.isoformat().replace("+00:00", "Z"),
            "severity": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

    @staticmethod
    def _extras(record: logging.LogRecord) -> dict[str, Any]:
        return {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }


def setup_logging(
    *,
    environment: str = "dev",
    project_id: str | None = None,
    use_cloud_logging: bool = True,
) -> None:
    """Route application logs to Cloud Logging or to JSON lines on stdout.

    Args:
        environment: ``dev`` logs at DEBUG to stdout; anything else logs at INFO
        project_id: GCP project; Cloud Logging is used only when it is set
        use_cloud_logging: Set to False to force stdout outside dev
    """
    level = logging.DEBUG if environment == "dev" else logging.INFO
    redaction = CredentialRedactionFilter()

    if use_cloud_logging and project_id and environment != "dev":
        cloud_logging.Client(project=project_id).setup_logging(log_level=level)
        for handler in logging.getLogger().handlers:
            handler.addFilter(redaction)
    else:
        stdout = logging.StreamHandler(sys.stdout)
        stdout.setFormatter(StructuredFormatter())
        stdout.addFilter(redaction)
        logging.basicConfig(level=level, handlers=[stdout])

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def set_trace_id(trace_id: str) -> None:
    _request_trace.set(trace_id)


def get_trace_id() -> str | None:
    return _request_trace.get()


__all__ = [
    "CLOUD_TRACE_FIELD",
    "CredentialRedactionFilter",
    "StructuredFormatter",
    "get_trace_id",
    "set_trace_id",
    "setup_logging",
]
