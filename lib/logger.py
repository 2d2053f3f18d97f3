# =============================================================================
# lib/logger.py - Structured Logging
# =============================================================================
# Thin layer over the standard logging module:
# - configure_logging(): root handler setup (console or file)
# - LoggerService: leveled calls that take a context dict and extra data,
#   plus helpers for operations, database calls and HTTP requests
#
# Structured fields travel on the record as `record.context` and are printed
# as JSON after the message.
#
# Usage:
#   log = LoggerService("users").child({"module": "UserService"})
#   log.info("User created", data={"user_id": user["id"]})
# =============================================================================

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s%(context_suffix)s"


class ContextFormatter(logging.Formatter):
    """Formatter that appends the record's structured context as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        context = getattr(record, "context", None)
        record.context_suffix = (
            " " + json.dumps(context, default=str, sort_keys=True) if context else ""
        )
        return super().format(record)


def configure_logging(
    level: str = "INFO",
    output_to_file: bool = False,
    log_file_path: str = "./logs/app.log",
) -> None:
    """
    Configure the root logger.

    Handlers are only installed once; later calls just adjust the level.

    Args:
        level: Root log level name
        output_to_file: Write to log_file_path instead of stderr
        log_file_path: Log file, its directory is created when missing
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    if root.handlers:
        return

    if output_to_file:
        path = Path(log_file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter(LOG_FORMAT))
    root.addHandler(handler)


class LoggerService:
    """
    Structured logger with bound context.

    Args:
        name: Underlying logger name
        context: Fields attached to every record from this logger
        logger: Use an existing logging.Logger instead of looking one up
    """

    def __init__(
        self,
        name: str = "app",
        context: dict[str, Any] | None = None,
        logger: logging.Logger | None = None,
    ):
        self._logger = logger or logging.getLogger(name)
        self.context: dict[str, Any] = dict(context or {})

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def _log(
        self,
        level: int,
        message: str,
        context: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        exc_info: Any = None,
    ) -> None:
        fields = {**self.context, **(context or {}), **(data or {})}
        self._logger.log(level, message, extra={"context": fields}, exc_info=exc_info)

    # -------------------------------------------------------------------------
    # Leveled calls
    # -------------------------------------------------------------------------

    def error(
        self,
        error: BaseException,
        context: dict[str, Any] | None = None,
        additional_info: dict[str, Any] | None = None,
    ) -> None:
        """Log an exception with its type name and traceback."""
        data = {"name": type(error).__name__, **(additional_info or {})}
        self._log(logging.ERROR, str(error), context, data, exc_info=error)

    def warn(self, message: str, context: dict[str, Any] | None = None, data: dict[str, Any] | None = None) -> None:
        self._log(logging.WARNING, message, context, data)

    def info(self, message: str, context: dict[str, Any] | None = None, data: dict[str, Any] | None = None) -> None:
        self._log(logging.INFO, message, context, data)

    def debug(self, message: str, context: dict[str, Any] | None = None, data: dict[str, Any] | None = None) -> None:
        self._log(logging.DEBUG, message, context, data)

    # -------------------------------------------------------------------------
    # Specialized records
    # -------------------------------------------------------------------------

    def operation(
        self,
        operation: str,
        status: Literal["success", "failed"],
        duration: float | None = None,
        context: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        """Record the outcome of a service operation."""
        fields = {"operation": operation, "status": status, **(data or {})}
        if duration is not None:
            fields["duration"] = duration
        level = logging.INFO if status == "success" else logging.WARNING
        self._log(level, f"Operation {operation} {status}", context, fields)

    def db(
        self,
        operation: str,
        table: str,
        duration: float,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Record one database call."""
        self._log(
            logging.INFO,
            f"Database operation: {operation} on {table}",
            context,
            {"operation": operation, "table": table, "duration": duration, "type": "database"},
        )

    def http(
        self,
        method: str,
        url: str,
        status_code: int,
        duration: float,
        context: dict[str, Any] | None = None,
    ) -> None:
        """
        Record one HTTP request.

        5xx responses log as errors, 4xx as warnings, everything else as info.
        """
        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        self._log(
            level,
            f"{method} {url} - {status_code}",
            context,
            {
                "method": method,
                "url": url,
                "statusCode": status_code,
                "duration": duration,
                "type": "http",
            },
        )

    def child(self, context: dict[str, Any]) -> LoggerService:
        """Logger sharing this one's output with extra bound fields."""
        return LoggerService(context={**self.context, **context}, logger=self._logger)
