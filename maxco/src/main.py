"""
Main Entry Point for the MAXCO Repair AI application.

Initializes the PyQt6 application, sets up logging, and starts the app coordinator.
"""

import sys
import logging
import argparse
import signal
import atexit
from typing import Optional, Sequence
from PyQt6.QtWidgets import QApplication

from ..__version__ import __version__
from .application.app_coordinator import AppCoordinator
from .application.deep_link import resolve_initial_view
from .application.settings_loader import load_app_settings
from .domain.models.app_view import AppView
from .domain.models.settings import LogLevel
from .infrastructure.logging.logging_config import setup_logging, install_qt_message_handler
from .infrastructure.storage.settings_manager import get_settings

logger = logging.getLogger("maxco.main")


class MaxcoApplication:
    """
    Main application class that manages the Qt application lifecycle.
    """

    def __init__(self, initial_view: AppView, debug: bool = False):
        self.app: Optional[QApplication] = None
        self.coordinator: Optional[AppCoordinator] = None
        self.initial_view = initial_view
        self.debug = debug
        self._setup_signal_handlers()

    def setup_qt_application(self) -> QApplication:
        """Setup and configure the Qt application."""
        app = QApplication(sys.argv)
        app.setApplicationName("MAXCO")
        app.setApplicationVersion(__version__)
        app.setOrganizationName("MAXCO")

        install_qt_message_handler(self.debug)

        logger.info("Qt application configured")
        return app

    def _setup_signal_handlers(self):
        """Setup signal handlers for graceful shutdown."""
        def signal_handler(signum, frame):
            logger.info(f"Received signal {signum}, initiating graceful shutdown...")
            if self.coordinator:
                self.coordinator.shutdown()
            sys.exit(0)

        def cleanup_handler():
            if self.coordinator:
                self.coordinator.shutdown()

        signal.signal(signal.SIGTERM, signal_handler)
        signal.signal(signal.SIGINT, signal_handler)
        atexit.register(cleanup_handler)
        logger.debug("Signal handlers registered for graceful shutdown")

    def initialize_coordinator(self) -> bool:
        """Initialize the application coordinator."""
        self.coordinator = AppCoordinator(initial_view=self.initial_view)
        self.coordinator.app_shutdown.connect(self.app.quit)

        if not self.coordinator.initialize():
            logger.error("Failed to initialize app coordinator")
            return False

        logger.info("App coordinator initialized successfully")
        return True

    def run(self) -> int:
        """
        Run the MAXCO application.

        Returns:
            Exit code (0 for success)
        """
        try:
            logger.info("Starting MAXCO application...")
            self.app = self.setup_qt_application()

            if not self.initialize_coordinator():
                logger.error("Failed to initialize application")
                return 1

            self.coordinator.show()

            exit_code = self.app.exec()
            logger.info(f"Application exited with code: {exit_code}")
            return exit_code

        except KeyboardInterrupt:
            logger.info("Application interrupted by user")
            return 0
        except Exception as e:
            logger.error(f"Unhandled exception in main application: {e}", exc_info=True)
            return 1
        finally:
            if self.coordinator:
                self.coordinator.shutdown()


def build_parser() -> argparse.ArgumentParser:
    """Command line interface."""
    parser = argparse.ArgumentParser(description="MAXCO - AI toolkit for device repair technicians")
    parser.add_argument(
        "url",
        nargs="?",
        help="Launch URL, e.g. maxco://open?mode=analysis"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        help="Custom directory for log files"
    )
    parser.add_argument("--mode", help="Deep link: open the Schematic Lab in this mode")
    parser.add_argument("--analysis", help="Deep link: open the Schematic Lab for this analysis")
    parser.add_argument("--prompt", help="Deep link: open the Schematic Lab with this prompt")
    parser.add_argument(
        "--version",
        action="version",
        version=f"MAXCO {__version__}"
    )
    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None):
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def main(argv: Optional[Sequence[str]] = None):
    """Main entry point."""
    args = parse_arguments(argv)

    # Logging options from settings; the CLI wins where both are given
    app_settings = load_app_settings(get_settings())
    advanced = app_settings.advanced
    debug_mode = args.debug or advanced.log_level == LogLevel.DETAILED.value
    final_log_dir = args.log_dir or advanced.log_location.strip() or None

    setup_logging(debug=debug_mode, log_dir=final_log_dir, retention_days=advanced.log_retention_days)

    logger.info("=" * 60)
    logger.info("MAXCO APPLICATION STARTING")
    logger.info("=" * 60)
    logger.info(f"Python version: {sys.version}")
    logger.info(f"Platform: {sys.platform}")
    logger.info(f"Debug mode: {debug_mode} (CLI: {args.debug})")

    initial_view = resolve_initial_view(
        args.url,
        {"mode": args.mode, "analysis": args.analysis, "prompt": args.prompt},
    )

    app = MaxcoApplication(initial_view, debug=debug_mode)
    exit_code = app.run()

    logger.info("=" * 60)
    logger.info("MAXCO APPLICATION SHUTDOWN")
    logger.info("=" * 60)

    sys.exit(exit_code)

