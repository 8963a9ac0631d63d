import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

from core.settings import settings

# Fields bound by LogContext, scoped to the current task
_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


class ContextFilter(logging.Filter):
    """Copies the bound LogContext fields onto every record"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.context = {**_log_context.get(), **getattr(record, "extra_fields", {})}
        return True


class StructuredFormatter(logging.Formatter):
    """One JSON document per record"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
            **getattr(record, "context", {}),
        }
        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }
        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Readable lines with the bound context appended; colored on a terminal"""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, color: bool = False):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.color = color

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        if self.color:
            color = self.COLORS.get(record.levelname, self.RESET)
            line = line.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)
        context = getattr(record, "context", None)
        if context:
            line += " [" + " ".join(f"{key}={value}" for key, value in context.items()) + "]"
        return line


def setup_logging(
    log_level: Optional[str] = None,
    json_logs: Optional[bool] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure the root logger.

    The API logs to stdout; the CLI passes stderr so its output stays
    machine readable.
    """
    log_level = (log_level or settings.LOG_LEVEL).upper()
    if json_logs is None:
        json_logs = settings.JSON_LOGS
    stream = stream or sys.stdout

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setLevel(log_level)
    handler.addFilter(ContextFilter())
    if json_logs:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(ConsoleFormatter(color=stream.isatty()))
    root_logger.addHandler(handler)

    for noisy in ("uvicorn.access", "httpcore", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Logger with ``debug_ctx`` .. ``error_ctx`` methods taking structured fields"""
    logger = logging.getLogger(name)

    def bind(level: int):
        def log_ctx(msg: str, **fields: Any) -> None:
            logger.log(level, msg, extra={"extra_fields": fields} if fields else None, stacklevel=2)
        return log_ctx

    logger.debug_ctx = bind(logging.DEBUG)
    logger.info_ctx = bind(logging.INFO)
    logger.warning_ctx = bind(logging.WARNING)
    logger.error_ctx = bind(logging.ERROR)
    return logger


class LogContext:
    """Bind fields to every record logged inside the block (nesting merges)"""

    def __init__(self, **fields: Any):
        self.fields = fields
        self._token = None

    def __enter__(self) -> "LogContext":
        self._token = _log_context.set({**_log_context.get(), **self.fields})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        _log_context.reset(self._token)
