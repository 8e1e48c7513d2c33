# rotation_scheduler/utils/logging.py

"""
Logging helpers for the rotation scheduler: one-call setup with a structured
single-line format, and a decorator that times scheduling operations.
"""

import functools
import json
import logging
import threading
import time
from collections import defaultdict
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional

from ..config import PACKAGE_LOGGER_NAME, get_logger


class StructuredFormatter(logging.Formatter):
    """Formats records as ``[time] [LEVEL] [logger] message | key=value``."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, "%Y-%m-%dT%H:%M:%S")
        parts = [f"[{timestamp}]", f"[{record.levelname}]", f"[{record.name}]"]
        parts.append(record.getMessage())

        metrics = getattr(record, "metrics", None)
        if metrics:
            parts.append("| " + " | ".join(f"{k}={v}" for k, v in metrics.items()))

        text = " ".join(parts)
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


class OperationTimings:
    """Thread-safe store of how long each named operation took."""

    def __init__(self):
        self._lock = threading.Lock()
        self._durations: Dict[str, List[float]] = defaultdict(list)

    def add(self, operation_name: str, duration: float) -> None:
        with self._lock:
            self._durations[operation_name].append(duration)

    def summary(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            return {
                name: {
                    "count": len(values),
                    "total_seconds": sum(values),
                    "average_seconds": sum(values) / len(values),
                }
                for name, values in self._durations.items()
                if values
            }

    def to_json(self) -> str:
        return json.dumps(self.summary(), indent=2)

    def clear(self) -> None:
        with self._lock:
            self._durations.clear()


timings = OperationTimings()


def setup_logging(level: str = "INFO", stream=None) -> logging.Logger:
    """Attach one structured handler to the package logger."""
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in list(logger.handlers):
        if getattr(handler, "_rotation_scheduler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    handler._rotation_scheduler = True
    logger.addHandler(handler)
    return logger


@contextmanager
def operation_timer(operation_name: str, logger: Optional[logging.Logger] = None):
    """Context manager for timing specific operations"""
    log = logger or get_logger("operations")
    start_time = time.time()
    try:
        yield
    finally:
        duration = time.time() - start_time
        timings.add(operation_name, duration)
        log.info(
            f"Operation {operation_name} completed",
            extra={"metrics": {"duration_seconds": round(duration, 4)}},
        )


# Decorator for automatic operation timing
def log_operation(operation_name: str, logger: Optional[logging.Logger] = None):
    """Decorator to automatically log and time function operations"""

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            with operation_timer(operation_name, logger):
                return func(*args, **kwargs)

        return wrapper

    return decorator
