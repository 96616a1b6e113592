"""
Settings Manager with encryption support for MAXCO.

Provides storage of application configuration including the Gemini API
key, with dot notation access and automatic encryption of sensitive data.
Only configuration lives here; session state (active view, HUD position,
job notes) is never written to disk.
"""

import os
import copy
import json
import logging
from typing import Any, Dict, Optional
from pathlib import Path
from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
import base64

from ...utils.config_paths import get_configs_dir

logger = logging.getLogger("maxco.settings")


def _deep_merge(defaults: Dict[str, Any], loaded: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in loaded.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class SettingsManager:
    """
    Manages application settings with encryption for sensitive data.

    Features:
    - Dot notation access (``settings.get('voice.language')``)
    - Automatic encryption of sensitive keys (API keys, tokens)
    - Defaults merged into whatever is on disk
    """

    SENSITIVE_KEYS = {
        'api_key',
        'token',
        'password',
        'secret'
    }

    DEFAULT_SETTINGS = {
        'ai': {
            'base_url': 'https://generativelanguage.googleapis.com/v1beta',
            'text_model': 'gemini-2.5-flash',
            'reasoning_model': 'gemini-3-pro-preview',
            'fast_model': 'gemini-2.5-flash-lite-latest',
            'temperature': 0.7,
            'max_output_tokens': 8192,
            'timeout': 60,
            'retry_attempts': 2
        },
        'voice': {
            'language': 'en-US',
            'transcript_clear_delay_ms': 2000,
            'no_speech_timeout_ms': 8000,
            'phrase_time_limit': 10.0
        },
        'routing': {
            'agent_command_delay_ms': 500
        },
        'hud': {
            'visible': True,
            'offset_right': 90,
            'offset_bottom': 150,
            'click_suppression_ms': 50
        },
        'advanced': {
            'log_level': 'Standard',
            'log_retention_days': 10,
            'log_location': ''
        }
    }

    def __init__(self, settings_dir: Optional[Path] = None):
        self.settings_dir = Path(settings_dir) if settings_dir else get_configs_dir()
        self.settings_file = self.settings_dir / "settings.json"
        self.key_file = self.settings_dir / ".key"

        self._settings: Dict[str, Any] = {}
        self._encryption_key: Optional[bytes] = None

        self.settings_dir.mkdir(parents=True, exist_ok=True)
        self._initialize_encryption()
        self.load()
        logger.info(
            "Paths: settings_dir=%s settings_file=%s key_file=%s",
            self.settings_dir,
            self.settings_file,
            self.key_file
        )

    def get_paths(self) -> Dict[str, str]:
        """Return important path locations (for external logging / UI)."""
        return {
            'settings_dir': str(self.settings_dir),
            'settings_file': str(self.settings_file),
            'key_file': str(self.key_file)
        }

    def _initialize_encryption(self):
        """Initialize or load encryption key for sensitive data."""
        if self.key_file.exists():
            with open(self.key_file, 'rb') as f:
                self._encryption_key = f.read()
        else:
            salt = os.urandom(16)
            kdf = PBKDF2HMAC(
                algorithm=hashes.SHA256(),
                length=32,
                salt=salt,
                iterations=100000,
            )
            # Machine-specific entropy for key generation
            password = (str(Path.home()) + str(os.environ.get('USERNAME', os.environ.get('USER', 'user')))).encode()
            key = base64.urlsafe_b64encode(kdf.derive(password))
            self._encryption_key = key

            with open(self.key_file, 'wb') as f:
                f.write(key)

            if os.name == 'nt':
                import ctypes
                ctypes.windll.kernel32.SetFileAttributesW(str(self.key_file), 2)  # Hidden

        logger.debug("Encryption key initialized")

    def _encrypt_value(self, value: str) -> str:
        """Encrypt a sensitive value."""
        fernet = Fernet(self._encryption_key)
        encrypted = fernet.encrypt(str(value).encode())
        return base64.urlsafe_b64encode(encrypted).decode()

    def _decrypt_value(self, encrypted_value: str) -> str:
        """Decrypt a sensitive value; an unreadable value decrypts to ""."""
        try:
            fernet = Fernet(self._encryption_key)
            encrypted_bytes = base64.urlsafe_b64decode(encrypted_value.encode())
            return fernet.decrypt(encrypted_bytes).decode()
        except (InvalidToken, ValueError) as e:
            logger.error(f"Failed to decrypt value: {e}")
            return ""

    def _is_sensitive_key(self, key_path: str) -> bool:
        """Check if a key path contains sensitive data."""
        key_lower = key_path.lower()

        # max_tokens / max_output_tokens contain "token" but are not secrets
        if 'tokens' in key_lower:
            return False

        return any(part in self.SENSITIVE_KEYS for part in key_lower.split('.'))

    def _get_nested_dict(self, data: Dict, path: str, create_missing: bool = False) -> tuple:
        """Navigate nested dictionary structure using dot notation."""
        keys = path.split('.')
        current = data

        for key in keys[:-1]:
            if key not in current or not isinstance(current[key], dict):
                if create_missing:
                    current[key] = {}
                else:
                    return None, keys[-1]
            current = current[key]

        return current, keys[-1]

    def load(self):
        """Load settings from file or create defaults."""
        try:
            if self.settings_file.exists():
                with open(self.settings_file, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
                if not isinstance(loaded, dict):
                    raise ValueError("settings root must be an object")
                self._settings = _deep_merge(self.DEFAULT_SETTINGS, loaded)
                logger.info("Settings loaded successfully")
            else:
                self._settings = copy.deepcopy(self.DEFAULT_SETTINGS)
                self.save()
                logger.info("Default settings created")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load settings: {e}")
            self._settings = copy.deepcopy(self.DEFAULT_SETTINGS)

    def save(self):
        """Save current settings to file."""
        try:
            with open(self.settings_file, 'w', encoding='utf-8') as f:
                json.dump(self._settings, f, indent=2, ensure_ascii=False)
            logger.debug("Settings saved successfully")
        except OSError as e:
            logger.error(f"Failed to save settings: {e}")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get setting value using dot notation.

        Args:
            key_path: Dot-separated path (e.g., 'voice.language')
            default: Default value if key doesn't exist

        Returns:
            Setting value, with automatic decryption for sensitive keys
        """
        parent_dict, final_key = self._get_nested_dict(self._settings, key_path)

        if parent_dict is None or final_key not in parent_dict:
            return default

        value = parent_dict[final_key]

        if self._is_sensitive_key(key_path) and isinstance(value, str) and value.startswith('enc:'):
            return self._decrypt_value(value[4:])

        return value

    def set(self, key_path: str, value: Any):
        """
        Set setting value using dot notation.

        Args:
            key_path: Dot-separated path (e.g., 'ai.api_key')
            value: Value to set, with automatic encryption for sensitive keys
        """
        parent_dict, final_key = self._get_nested_dict(self._settings, key_path, create_missing=True)

        if self._is_sensitive_key(key_path) and value:
            value = f"enc:{self._encrypt_value(str(value))}"

        parent_dict[final_key] = value
        self.save()
        logger.debug(f"Setting '{key_path}' updated")

    def delete(self, key_path: str):
        """Delete a setting using dot notation."""
        parent_dict, final_key = self._get_nested_dict(self._settings, key_path)

        if parent_dict is not None and final_key in parent_dict:
            del parent_dict[final_key]
            self.save()
            logger.debug(f"Setting '{key_path}' deleted")

    def get_all(self) -> Dict[str, Any]:
        """Get all settings (sensitive values remain encrypted)."""
        return copy.deepcopy(self._settings)

    def get_section(self, section: str) -> Dict[str, Any]:
        """A top-level section with sensitive values decrypted."""
        values = self._settings.get(section, {})
        if not isinstance(values, dict):
            return {}
        return {key: self.get(f"{section}.{key}") for key in values}

    def reset_to_defaults(self):
        """Reset all settings to defaults."""
        self._settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.save()
        logger.info("Settings reset to defaults")


_settings_instance: Optional[SettingsManager] = None


def get_settings() -> SettingsManager:
    """Global settings instance, created on first use."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = SettingsManager()
    return _settings_instance
