"""
Logging configuration for the demo driver.

Один обработчик на stderr, чтобы stdout оставался чистым для отчёта и JSON.
Повторный вызов заменяет ранее установленный обработчик.
"""

import logging
import sys
import threading
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_config_lock = threading.Lock()
_HANDLER_NAME = "demo-console"


def setup_logging(level: str = "WARNING") -> logging.Handler:
    """Настройка root logger: уровень и единственный console handler."""
    with _config_lock:
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            if handler.get_name() == _HANDLER_NAME:
                root_logger.removeHandler(handler)
                handler.close()

        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        root_logger.addHandler(handler)
        root_logger.setLevel(level.upper())
        return handler
