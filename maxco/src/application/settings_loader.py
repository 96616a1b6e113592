"""Typed settings built from the settings store, plus API key resolution."""

import logging
import os
from typing import Optional, Tuple

from pydantic import ValidationError

from ..domain.models.settings import (
    AIProviderSettings,
    AdvancedSettings,
    HudSettings,
    MaxcoSettings,
    RoutingSettings,
    VoiceSettings,
)
from ..infrastructure.storage.settings_manager import SettingsManager

logger = logging.getLogger("maxco.settings_loader")

API_KEY_ENV_VARS = ("MAXCO_GEMINI_API_KEY", "GEMINI_API_KEY")

SECTION_MODELS = {
    'ai': AIProviderSettings,
    'voice': VoiceSettings,
    'routing': RoutingSettings,
    'hud': HudSettings,
    'advanced': AdvancedSettings,
}


def load_app_settings(manager: SettingsManager) -> MaxcoSettings:
    """
    Validate each stored section into its pydantic model.

    A section that fails validation is replaced by its defaults and the
    problem is logged; one bad value never prevents startup.
    """
    sections = {}
    for name, model in SECTION_MODELS.items():
        raw = manager.get_section(name)
        try:
            sections[name] = model.model_validate(raw)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            logger.warning(f"Invalid '{name}' settings ({fields}); using defaults")
            sections[name] = model()
    return MaxcoSettings(**sections)


def resolve_api_key(manager: Optional[SettingsManager] = None) -> Tuple[str, str]:
    """
    Find the Gemini API key.

    Environment variables win over the stored (encrypted) value.

    Returns:
        (key, source) where source names where the key came from, or
        ("", "") when no key is configured
    """
    for var in API_KEY_ENV_VARS:
        value = os.environ.get(var, "").strip()
        if value:
            return value, var

    if manager is not None:
        stored = manager.get('ai.api_key', "") or ""
        if isinstance(stored, str) and stored.strip():
            return stored.strip(), "settings"

    return "", ""
