import sys
from pathlib import Path
from contextvars import ContextVar
from typing import Optional
from loguru import logger
from fastapi import Request
from framework.config import settings

# Current request, so code outside the handler can recover the trace id
_current_request: ContextVar[Optional[Request]] = ContextVar("current_request", default=None)

LOG_DIR = Path(settings.LOG_DIR)
LOG_DIR.mkdir(exist_ok=True)

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<magenta>Trace:{extra[trace_id]}</magenta> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | Trace:{extra[trace_id]} - {message}"


class LogConfig:
    """Global logging configuration using Loguru."""

    @classmethod
    def setup_logging(cls, console_level: str = "INFO"):
        logger.remove()

        logger.add(
            sys.stdout,
            enqueue=True,
            backtrace=True,
            diagnose=settings.DEBUG,
            format=CONSOLE_FORMAT,
            level=console_level,
        )

        logger.add(
            LOG_DIR / "app_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="30 days",
            compression="zip",
            enqueue=True,
            format=FILE_FORMAT,
            level="DEBUG",
        )

        logger.add(
            LOG_DIR / "error_{time:YYYY-MM-DD}.log",
            level="ERROR",
            rotation="100 MB",
            enqueue=True,
            format=FILE_FORMAT,
        )

        logger.configure(extra={"trace_id": "system"})


def get_logger(name: str = None, request: Optional[Request] = None):
    """
    Get a logger bound to a component name.

    The trace id is only pinned when a request is known at call time; module-level
    loggers pick it up from LoggingMiddleware's contextualize() instead.
    """
    bound = {}
    if name:
        bound["name"] = name

    current_request = request or _current_request.get()
    if current_request is not None:
        bound["trace_id"] = getattr(current_request.state, "trace_id", "unknown")

    return logger.bind(**bound)
