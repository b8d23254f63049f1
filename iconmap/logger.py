"""
Structured logging system for iconmap.

Provides centralized logging with console and file outputs, plus
metrics tracking for monitoring icon host probes.
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for existence checks issued against the icon host.
    """

    def __init__(
        self,
        name: str = "iconmap",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()  # Remove existing handlers

        # Probe workers run concurrently
        self._lock = threading.Lock()
        self.metrics = {
            "checks_attempted": 0,
            "checks_found": 0,
            "checks_not_found": 0,
            "platforms_resolved": 0,
            "platforms_unresolved": 0,
            "errors_by_type": {},
            "variants_found": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"iconmap_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(threadName)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_check_attempt(self):
        """Record one existence check issued against the host."""
        with self._lock:
            self.metrics["checks_attempted"] += 1

    def record_check_found(self):
        """Record a check that reported the candidate as present."""
        with self._lock:
            self.metrics["checks_found"] += 1

    def record_variant_found(self, variant: str):
        """Record the variant a platform resolved to."""
        with self._lock:
            found = self.metrics["variants_found"]
            found[variant] = found.get(variant, 0) + 1

    def record_check_not_found(self, error_type: Optional[str] = None):
        """Record a check that reported absence, failed or timed out."""
        with self._lock:
            self.metrics["checks_not_found"] += 1
            if error_type is not None:
                errors = self.metrics["errors_by_type"]
                errors[error_type] = errors.get(error_type, 0) + 1

    def record_resolution(self, resolved: bool):
        """Record the final outcome for one platform."""
        with self._lock:
            key = "platforms_resolved" if resolved else "platforms_unresolved"
            self.metrics[key] += 1

    def get_metrics(self) -> dict:
        """Return a snapshot of current metrics."""
        with self._lock:
            snapshot = dict(self.metrics)
            snapshot["errors_by_type"] = dict(self.metrics["errors_by_type"])
            snapshot["variants_found"] = dict(self.metrics["variants_found"])

        total = snapshot["platforms_resolved"] + snapshot["platforms_unresolved"]
        snapshot["resolution_rate"] = (
            round(snapshot["platforms_resolved"] / total, 3) if total > 0 else 0
        )
        return snapshot

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        resolved = metrics["platforms_resolved"]
        total = resolved + metrics["platforms_unresolved"]
        rate = round(metrics["resolution_rate"] * 100, 1)

        self.info("=== Icon Probe Metrics ===")
        self.info(f"Checks: {metrics['checks_found']}/{metrics['checks_attempted']} found")
        self.info(f"Platforms: {resolved}/{total} resolved ({rate}%)")

        if metrics["variants_found"]:
            self.info("Variants Found:")
            for variant, count in sorted(metrics["variants_found"].items()):
                self.info(f"  {variant}: {count}")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in sorted(metrics["errors_by_type"].items()):
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "iconmap",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
