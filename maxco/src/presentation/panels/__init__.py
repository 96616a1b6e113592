"""Panels mounted by the view host, one per view."""

from .base_panel import BasePanel, PanelContext, render_markdown
from .registry import PANEL_CLASSES, build_panel_factories

__all__ = ['BasePanel', 'PanelContext', 'render_markdown', 'PANEL_CLASSES', 'build_panel_factories']
