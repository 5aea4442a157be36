"""
Structured logging system for MatchFeed.

Provides centralized logging with console and file outputs, plus
metrics tracking for backend request health and review decisions.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks per-endpoint request metrics and decision counts.
    """

    def __init__(
        self,
        name: str = "matchfeed",
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
        self.logger.setLevel(logging.DEBUG)
        self.logger.handlers.clear()
        self.logger.propagate = False

        self.metrics = {
            "api_calls": 0,
            "requests_attempted": 0,
            "requests_successful": 0,
            "requests_failed": 0,
            "errors_by_type": {},
            "endpoint_success_rate": {},
            "decisions_by_verdict": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
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

            log_file = log_dir / f"matchfeed_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
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

    def record_api_call(self):
        """Increment API call counter."""
        self.metrics["api_calls"] += 1

    def record_request_attempt(self, endpoint: str):
        """Record a request attempt against a backend endpoint."""
        self.record_api_call()
        self.metrics["requests_attempted"] += 1
        stats = self.metrics["endpoint_success_rate"].setdefault(
            endpoint, {"attempts": 0, "successes": 0}
        )
        stats["attempts"] += 1

    def record_request_success(self, endpoint: str):
        """Record a successful request."""
        self.metrics["requests_successful"] += 1
        if endpoint in self.metrics["endpoint_success_rate"]:
            self.metrics["endpoint_success_rate"][endpoint]["successes"] += 1

    def record_request_failure(self, endpoint: str, error_type: str):
        """Record a failed request."""
        self.metrics["requests_failed"] += 1
        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def record_decision(self, verdict: str):
        """Count a decision accepted by the backend."""
        decisions = self.metrics["decisions_by_verdict"]
        decisions[verdict] = decisions.get(verdict, 0) + 1

    def get_metrics(self) -> dict:
        """Snapshot of the counters, with a success_rate per endpoint."""
        endpoints = {}
        for endpoint, stats in self.metrics["endpoint_success_rate"].items():
            rate = round(stats["successes"] / stats["attempts"], 3) if stats["attempts"] else 0.0
            endpoints[endpoint] = {**stats, "success_rate": rate}
        return {
            **self.metrics,
            "errors_by_type": dict(self.metrics["errors_by_type"]),
            "decisions_by_verdict": dict(self.metrics["decisions_by_verdict"]),
            "endpoint_success_rate": endpoints,
        }

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        total_attempts = metrics["requests_attempted"]
        total_successes = metrics["requests_successful"]
        overall_rate = 0
        if total_attempts > 0:
            overall_rate = round(total_successes / total_attempts * 100, 1)

        self.info("=== Review Session Metrics ===")
        self.info(f"API Calls: {metrics['api_calls']}")
        self.info(f"Requests: {total_successes}/{total_attempts} ({overall_rate}% success)")

        if metrics["endpoint_success_rate"]:
            self.info("Endpoint Success Rates:")
            for endpoint, stats in metrics["endpoint_success_rate"].items():
                rate = stats.get("success_rate", 0) * 100
                self.info(f"  {endpoint}: {stats['successes']}/{stats['attempts']} ({rate:.1f}%)")

        if metrics["decisions_by_verdict"]:
            self.info("Decisions:")
            for verdict, count in metrics["decisions_by_verdict"].items():
                self.info(f"  {verdict}: {count}")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "matchfeed",
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
