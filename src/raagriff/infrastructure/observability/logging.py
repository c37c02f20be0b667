"""Logging setup: correlation IDs, credential redaction, console and JSON output."""

import contextvars
import logging
import re
import sys
import traceback
import uuid
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

# Hey future me, RequestLoggingMiddleware sets this once per request. contextvars keeps
# concurrent requests apart, and the "" default covers startup and shutdown lines.
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)

# access_token=..., "refresh_token": "...", code=... in URLs, reprs and JSON bodies
_SECRET_PATTERN = re.compile(
    r"""(?P<key>(?:\b(?:access_token|refresh_token|client_secret)\b["']?\s*[=:]\s*["']?|\bcode=))"""
    r"""(?P<value>[^\s&"',;)}]+)""",
    re.IGNORECASE,
)
_BEARER_PATTERN = re.compile(r"(?P<key>\bBearer\s+)(?P<value>[A-Za-z0-9._~+/=-]+)")
REDACTED = "***"

_NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "uvicorn.access")


def get_correlation_id() -> str:
    """Return the correlation ID of the current request, or ""."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind a correlation ID to the current context.

    Args:
        correlation_id: ID taken from the X-Correlation-ID header. A fresh UUID4
            is generated when None.

    Returns:
        The ID now in effect
    """
    correlation_id = correlation_id or str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


def redact_secrets(text: str) -> str:
    """Mask OAuth codes, tokens and client secrets inside free text."""
    text = _SECRET_PATTERN.sub(lambda m: m.group("key") + REDACTED, text)
    return _BEARER_PATTERN.sub(lambda m: m.group("key") + REDACTED, text)


class RequestContextFilter(logging.Filter):
    """Stamp records with the correlation ID and scrub credentials from the message."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            return True
        scrubbed = redact_secrets(message)
        if scrubbed != message:
            record.msg = scrubbed
            record.args = None
        return True


class ConsoleFormatter(logging.Formatter):
    """Human-readable lines; exception chains printed root cause first.

    Only frames from our own package are shown:

        12:03:44 │ ERROR   │ raagriff.api.session_cookies:131 │ Upstream failure on /profile
        ╰─► ConnectError: All connection attempts failed
            File "spotify_client.py", line 201, in get
              response = await client.get(
    """

    def formatException(self, ei: Any) -> str:
        _exc_type, exc_value, _exc_tb = ei
        if exc_value is None:
            return ""
        return "\n".join(
            line for exc in _exception_chain(exc_value) for line in _describe(exc)
        )


def _exception_chain(exc: BaseException) -> list[BaseException]:
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain[::-1]


def _describe(exc: BaseException) -> list[str]:
    lines = [f"╰─► {type(exc).__name__}: {exc}"]
    for frame in traceback.extract_tb(exc.__traceback__):
        if "/site-packages/" in frame.filename or "raagriff" not in frame.filename:
            continue
        lines.append(
            f'    File "{Path(frame.filename).name}", line {frame.lineno}, in {frame.name}'
        )
        if frame.line:
            lines.append(f"      {frame.line.strip()}")
    return lines


class JsonLogFormatter(jsonlogger.JsonFormatter):  # type: ignore[name-defined,misc]
    """One JSON object per line for log shipping."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.update(
            timestamp=self.formatTime(record, self.datefmt),
            level=record.levelname,
            logger=record.name,
            location=f"{record.module}.{record.funcName}:{record.lineno}",
        )
        if getattr(record, "correlation_id", ""):
            log_record["correlation_id"] = record.correlation_id
        if record.exc_info:
            log_record["exc_info"] = redact_secrets(self.formatException(record.exc_info))


# Listen future me, the lifespan calls this at startup. It drops whatever handlers the
# root logger had, so tests can call it repeatedly without stacking output.
def configure_logging(
    log_level: str = "INFO",
    json_format: bool = False,
    app_name: str = "raagriff",
) -> None:
    """Install a single stdout handler on the root logger.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: JSON lines instead of the console format
        app_name: Reported in the "Logging configured" line
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(RequestContextFilter())
    if json_format:
        handler.setFormatter(
            JsonLogFormatter(
                "%(timestamp)s %(level)s %(name)s %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
    else:
        handler.setFormatter(
            ConsoleFormatter(
                fmt="%(asctime)s │ %(levelname)-7s │ %(name)s:%(lineno)d │ %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.setLevel(level)
    root.addHandler(handler)

    # uvicorn.access duplicates RequestLoggingMiddleware
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured for %s (level=%s, json=%s)", app_name, log_level, json_format
    )
