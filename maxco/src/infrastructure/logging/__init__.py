"""Logging setup for MAXCO."""

from .logging_config import setup_logging, log_performance, get_performance_logger, install_qt_message_handler

__all__ = ['setup_logging', 'log_performance', 'get_performance_logger', 'install_qt_message_handler']
