"""Structured logging helpers: correlation IDs, operation timing and redaction of logged values."""

import logging
import time
import uuid
import re
from contextvars import ContextVar
from typing import Any, Optional, Dict, Union
from contextlib import contextmanager
from datetime import datetime, timezone

import httpx

from realestatepost.utils.logging_config import LoggingConfig, get_logger


# Correlation ID for the current task (contextvars keep it per asyncio task)
_correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for request tracing."""
    return f"req_{uuid.uuid4().hex[:12]}"


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from context."""
    return _correlation_id_var.get()


def set_correlation_id(correlation_id: Optional[str]) -> None:
    """Set the correlation ID in context."""
    _correlation_id_var.set(correlation_id)


@contextmanager
def correlation_context(correlation_id: Optional[str] = None):
    """Context manager for correlation ID propagation."""
    if correlation_id is None:
        correlation_id = generate_correlation_id()

    old_id = get_correlation_id()
    set_correlation_id(correlation_id)
    try:
        yield correlation_id
    finally:
        set_correlation_id(old_id)


def mask_sensitive_data(text: str) -> str:
    """Mask sensitive data in text (emails, phone numbers, tokens)."""
    if not text or not LoggingConfig.LOG_MASK_SENSITIVE:
        return text

    # Mask email addresses
    text = re.sub(
        r'[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}',
        '[REDACTED_EMAIL]',
        text,
        flags=re.IGNORECASE
    )

    # Mask phone numbers
    text = re.sub(
        r'\b\+?\d[\d\s().-]{7,}\b',
        '[REDACTED_PHONE]',
        text
    )

    # Mask API keys/tokens (common patterns)
    text = re.sub(
        r'(?i)(api[_-]?key|token|secret|password|auth)[\s:=]+([A-Za-z0-9_-]{20,})',
        r'\1=[REDACTED]',
        text
    )

    # Mask Facebook access tokens
    text = re.sub(
        r'EAA[A-Za-z0-9]{20,}',
        '[REDACTED_FB_TOKEN]',
        text
    )

    return text


def sanitize_message_text(text: str, max_length: int = 200) -> Optional[str]:
    """Sanitize post text for logging."""
    if not LoggingConfig.LOG_MESSAGE_CONTENT:
        return None

    if not text:
        return None

    if len(text) > max_length:
        text = text[:max_length] + "..."

    if LoggingConfig.LOG_MASK_SENSITIVE:
        text = mask_sensitive_data(text)

    return text


def redact_url(url: Union[str, httpx.URL]) -> str:
    """Render a URL for logs without credentials, query string or fragment."""
    try:
        parsed = httpx.URL(str(url))
    except httpx.InvalidURL:
        return "[INVALID_URL]"

    if not parsed.scheme:
        return parsed.path

    host = f"[{parsed.host}]" if ":" in parsed.host else parsed.host
    port = f":{parsed.port}" if parsed.port is not None else ""
    return f"{parsed.scheme}://{host}{port}{parsed.path}"


class StructuredLogger:
    """Logger wrapper that attaches structured fields to every record."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _get_extra(self, **kwargs: Any) -> Dict[str, Any]:
        """Build extra fields for structured logging."""
        extra = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        correlation_id = get_correlation_id()
        if correlation_id:
            extra["correlation_id"] = correlation_id

        extra.update(kwargs)

        return extra

    def debug(self, message: str, **kwargs: Any) -> None:
        self.logger.debug(message, extra=self._get_extra(**kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self.logger.info(message, extra=self._get_extra(**kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self.logger.warning(message, extra=self._get_extra(**kwargs))

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        self.logger.error(message, extra=self._get_extra(**kwargs), exc_info=exc_info)


def get_structured_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(get_logger(name))


@contextmanager
def log_timing(operation_name: str, logger: Optional[StructuredLogger] = None, **context: Any):
    """
    Time a client operation and log how it ended.

    The completion record carries ``outcome`` (``ok`` or ``error``) and, on
    failure, the exception type. Exceptions are re-raised unchanged.
    """
    if logger is None:
        logger = get_structured_logger(__name__)

    start_time = time.perf_counter()
    outcome = "ok"
    error_type = None
    logger.debug(f"Starting {operation_name}", operation=operation_name, **context)

    try:
        yield
    except BaseException as e:
        outcome = "error"
        error_type = type(e).__name__
        raise
    finally:
        elapsed_ms = round((time.perf_counter() - start_time) * 1000, 2)
        fields = dict(context, operation=operation_name, outcome=outcome, processing_time_ms=elapsed_ms)
        if error_type:
            fields["error_type"] = error_type

        logger.info(f"Finished {operation_name}", **fields)

        if elapsed_ms > LoggingConfig.LOG_SLOW_OPERATION_THRESHOLD_MS:
            logger.warning(
                f"Slow operation detected: {operation_name}",
                threshold_ms=LoggingConfig.LOG_SLOW_OPERATION_THRESHOLD_MS,
                **fields
            )
