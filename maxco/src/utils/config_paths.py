"""
Configuration paths utilities for MAXCO.

Provides centralized path management for application data.
"""

import os
from pathlib import Path

APP_DIR_NAME = "MAXCO"


def get_user_data_dir() -> Path:
    """
    Get the user data directory for MAXCO.

    Returns:
        Path to the user data directory (AppData/Roaming/MAXCO on Windows)
    """
    override = os.environ.get('MAXCO_DATA_DIR')
    if override:
        return Path(override)

    if os.name == 'nt':  # Windows
        appdata = os.environ.get('APPDATA')
        if appdata:
            return Path(appdata) / APP_DIR_NAME

    # Use XDG standard on Linux/Mac
    xdg_data_home = os.environ.get('XDG_DATA_HOME')
    if xdg_data_home:
        return Path(xdg_data_home) / APP_DIR_NAME.lower()

    return Path.home() / ".local" / "share" / APP_DIR_NAME.lower()


def get_configs_dir() -> Path:
    """Get the configs directory."""
    configs_dir = get_user_data_dir() / "configs"
    configs_dir.mkdir(parents=True, exist_ok=True)
    return configs_dir


def get_logs_dir() -> Path:
    """Get the logs directory."""
    logs_dir = get_user_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir
