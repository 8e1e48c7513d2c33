# rotation_scheduler/utils/__init__.py

from .logging import setup_logging, log_operation, operation_timer, timings

__all__ = ["setup_logging", "log_operation", "operation_timer", "timings"]
