"""Launch-time deep links.

A launch URL such as ``maxco://open?mode=analysis`` or the equivalent
``--mode/--analysis/--prompt`` options open the Schematic Lab instead of
the dashboard. The check happens once at startup.
"""

import logging
from typing import Dict, Mapping, Optional
from urllib.parse import parse_qs, urlsplit

from ..domain.models.app_view import AppView, DEFAULT_VIEW

logger = logging.getLogger("maxco.deep_link")

DEEP_LINK_PARAMS = ("mode", "analysis", "prompt")


def parse_launch_url(url: Optional[str]) -> Dict[str, str]:
    """Query parameters of ``url`` (first value of each)."""
    if not url:
        return {}
    query = urlsplit(url).query
    if not query and "?" not in url and "=" in url:
        # Bare "mode=x&prompt=y" strings are accepted too
        query = url
    return {key: values[0] for key, values in parse_qs(query, keep_blank_values=True).items()}


def resolve_initial_view(url: Optional[str] = None,
                         cli_params: Optional[Mapping[str, Optional[str]]] = None) -> AppView:
    """
    View to show at startup.

    The presence of ``mode``, ``analysis`` or ``prompt``, in the launch URL
    or on the command line, selects the Schematic Lab. Values are not
    inspected, so ``?mode=`` and a bare ``?analysis`` count too.
    """
    params: Dict[str, Optional[str]] = dict(parse_launch_url(url))
    for key, value in (cli_params or {}).items():
        if value is not None:
            params[key] = value

    if any(name in params for name in DEEP_LINK_PARAMS):
        logger.info("Deep link detected, opening Schematic Lab")
        return AppView.SCHEMATIC_LAB
    return DEFAULT_VIEW
