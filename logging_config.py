# logging_config.py
"""
Structured logging configuration.

Uses structlog on top of the standard library logging module so that
uvicorn's own loggers and ours end up on the same handler.
"""
import logging
import os
import sys
from typing import Any

import structlog


def setup_logging(level: str = None, fmt: str = None) -> None:
     """
     Configure structlog and the root logger.

     Args:
          level: Log level name, defaults to LOG_LEVEL or INFO
          fmt: "json" (default, LOG_FORMAT) or "console"
     """
     level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
     fmt = (fmt or os.getenv("LOG_FORMAT", "json")).lower()

     renderer = (
          structlog.dev.ConsoleRenderer()
          if fmt == "console"
          else structlog.processors.JSONRenderer()
     )

     structlog.configure(
          processors=[
               structlog.contextvars.merge_contextvars,
               structlog.stdlib.filter_by_level,
               structlog.stdlib.add_logger_name,
               structlog.stdlib.add_log_level,
               structlog.stdlib.PositionalArgumentsFormatter(),
               structlog.processors.TimeStamper(fmt="iso"),
               structlog.processors.StackInfoRenderer(),
               structlog.processors.format_exc_info,
               structlog.processors.UnicodeDecoder(),
               renderer,
          ],
          wrapper_class=structlog.stdlib.BoundLogger,
          context_class=dict,
          logger_factory=structlog.stdlib.LoggerFactory(),
          cache_logger_on_first_use=True,
     )

     root_logger = logging.getLogger()
     root_logger.setLevel(getattr(logging, level, logging.INFO))
     for handler in root_logger.handlers[:]:
          root_logger.removeHandler(handler)
     handler = logging.StreamHandler(sys.stdout)
     handler.setFormatter(logging.Formatter("%(message)s"))
     root_logger.addHandler(handler)

     # Suppress noisy loggers
     logging.getLogger("urllib3").setLevel(logging.WARNING)
     logging.getLogger("websocket").setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
     return structlog.get_logger(name)
