"""Logging configuration for the realestatepost package logger."""

import os
import logging
import sys
from typing import Optional
from pythonjsonlogger import jsonlogger


PACKAGE_LOGGER = "realestatepost"


class LoggingConfig:
    """Environment-driven logging settings for the client."""

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "json").lower()
    LOG_MESSAGE_CONTENT = os.environ.get("LOG_MESSAGE_CONTENT", "true").lower() == "true"
    LOG_MASK_SENSITIVE = os.environ.get("LOG_MASK_SENSITIVE", "true").lower() == "true"
    LOG_CORRELATION_ID_HEADER = os.environ.get("LOG_CORRELATION_ID_HEADER", "X-Correlation-ID")
    LOG_SLOW_OPERATION_THRESHOLD_MS = int(os.environ.get("LOG_SLOW_OPERATION_THRESHOLD_MS", "5000"))

    @classmethod
    def build_formatter(cls) -> logging.Formatter:
        if cls.LOG_FORMAT == "json":
            return jsonlogger.JsonFormatter(
                "%(timestamp)s %(levelname)s %(name)s %(correlation_id)s %(message)s",
                timestamp=True
            )
        return logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    @classmethod
    def configure(cls, level: Optional[str] = None) -> logging.Logger:
        """
        Attach a stderr handler to the package logger.

        Only the ``realestatepost`` logger is touched; the host application's
        root handlers are left alone. Calling this again replaces the handler
        installed by the previous call.
        """
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        resolved_level = getattr(logging, (level or cls.LOG_LEVEL).upper(), logging.INFO)

        for handler in list(package_logger.handlers):
            if getattr(handler, "_realestatepost_handler", False):
                package_logger.removeHandler(handler)

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(resolved_level)
        handler.setFormatter(cls.build_formatter())
        handler._realestatepost_handler = True

        package_logger.addHandler(handler)
        package_logger.setLevel(resolved_level)
        package_logger.propagate = False

        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)

        return package_logger


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure client log output from LOG_* settings and return the package logger."""
    return LoggingConfig.configure(level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)
