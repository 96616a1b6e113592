"""
Logging Configuration for MAXCO.

Provides structured logging with JSON output and performance monitoring.
"""

import logging
import logging.handlers
import json
import sys
from datetime import datetime, timedelta
from typing import Dict, Any, Optional
from pathlib import Path

from ...utils.config_paths import get_logs_dir

# LogRecord attributes that are not user-supplied extras
_RESERVED_ATTRS = frozenset((
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'exc_info', 'exc_text', 'stack_info',
    'taskName', 'message', 'asctime',
))


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        # Add exception info if present
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Add extra fields
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def cleanup_old_logs(log_dir: Path, retention_days: int) -> int:
    """
    Clean up old log files beyond the retention period.

    Args:
        log_dir: Directory containing log files
        retention_days: Number of days to retain log files

    Returns:
        Number of files cleaned up
    """
    cutoff_date = datetime.now() - timedelta(days=retention_days)
    cleaned_count = 0

    # Pattern for rotated log files (both main and error logs)
    for pattern in ('maxco.log-*.log', 'maxco-errors.log-*.log'):
        for log_file in log_dir.glob(pattern):
            try:
                file_mtime = datetime.fromtimestamp(log_file.stat().st_mtime)
                if file_mtime < cutoff_date:
                    log_file.unlink()
                    cleaned_count += 1
            except (OSError, ValueError) as e:
                print(f"Failed to clean up log file {log_file}: {e}")

    if cleaned_count > 0:
        print(f"Log cleanup: removed {cleaned_count} old log file(s)")

    return cleaned_count


def setup_logging(debug: bool = False, log_dir: Optional[str] = None, retention_days: int = 10) -> None:
    """
    Setup logging configuration for MAXCO with daily rotation.

    Args:
        debug: Enable debug level logging
        log_dir: Directory for log files (defaults to user data dir)
        retention_days: Number of days to retain log files (default: 10)
    """
    if log_dir:
        log_dir_path = Path(log_dir)
        log_dir_path.mkdir(parents=True, exist_ok=True)
    else:
        log_dir_path = get_logs_dir()
        log_dir = str(log_dir_path)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    root_logger.handlers.clear()

    # Console handler with simple format
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))
    root_logger.addHandler(console_handler)

    # Daily rotating file handler with JSON format
    file_handler = logging.handlers.TimedRotatingFileHandler(
        str(log_dir_path / 'maxco.log'),
        when='midnight',
        interval=1,
        backupCount=retention_days,
        encoding='utf-8'
    )
    file_handler.suffix = '-%Y-%m-%d.log'
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(file_handler)

    # Daily rotating error file handler
    error_handler = logging.handlers.TimedRotatingFileHandler(
        str(log_dir_path / 'maxco-errors.log'),
        when='midnight',
        interval=1,
        backupCount=retention_days,
        encoding='utf-8'
    )
    error_handler.suffix = '-%Y-%m-%d.log'
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(error_handler)

    cleanup_old_logs(log_dir_path, retention_days)

    # Set specific logger levels
    logging.getLogger("maxco").setLevel(logging.DEBUG if debug else logging.INFO)
    logging.getLogger("PyQt6").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    if not debug:
        from PyQt6.QtCore import QLoggingCategory
        QLoggingCategory.setFilterRules("*.debug=false\nqt.css.warning=false")

    logger = logging.getLogger("maxco.logging")
    logger.info(f"Logging initialized - Debug: {debug}, Log dir: {log_dir}")


def get_performance_logger() -> logging.Logger:
    """Get a logger specifically for performance metrics."""
    return logging.getLogger("maxco.performance")


def log_performance(operation: str, duration: float, metadata: Optional[Dict[str, Any]] = None):
    """
    Log performance metrics.

    Args:
        operation: Name of the operation
        duration: Duration in seconds
        metadata: Additional metadata
    """
    perf_logger = get_performance_logger()
    extra = {
        "operation": operation,
        "duration_ms": round(duration * 1000, 2),
        "metadata": metadata or {}
    }
    perf_logger.info(f"Performance: {operation} took {duration:.3f}s", extra=extra)


def install_qt_message_handler(debug: bool = False) -> None:
    """Route Qt's own messages into the ``maxco.qt`` logger."""
    from PyQt6.QtCore import qInstallMessageHandler, QtMsgType

    qt_logger = logging.getLogger("maxco.qt")
    suppress_keywords = ("Unknown property", "QPixmap::scaled")

    def qt_message_handler(msg_type, context, message):
        if not debug and any(keyword in message for keyword in suppress_keywords):
            return

        if msg_type == QtMsgType.QtDebugMsg:
            if debug:
                qt_logger.debug(f"Qt: {message}")
        elif msg_type == QtMsgType.QtInfoMsg:
            qt_logger.info(f"Qt: {message}")
        elif msg_type == QtMsgType.QtWarningMsg:
            if debug:
                qt_logger.warning(f"Qt: {message}")
        elif msg_type == QtMsgType.QtCriticalMsg:
            qt_logger.error(f"Qt Critical: {message}")
        elif msg_type == QtMsgType.QtFatalMsg:
            qt_logger.critical(f"Qt Fatal: {message}")

    qInstallMessageHandler(qt_message_handler)
    qt_logger.debug("Qt message handler installed")
