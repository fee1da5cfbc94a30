"""Background shading for terminal views."""

from __future__ import annotations

from textual.color import Color

from termtoggle.engine.config import TermConfig
from termtoggle.engine.models import TERMINAL_CONTENT_TYPE

BASE_BACKGROUND = Color.parse("#1e1e2e")


def should_shade(content_type: str, config: TermConfig) -> bool:
    """Only shade terminals and explicitly allowed content types."""
    if not config.shade_terminals:
        return False
    allowed = [*config.shade_filetypes, TERMINAL_CONTENT_TYPE]
    return (content_type or "none") in allowed


def shade_color(color: Color, percent: int) -> Color:
    """Darken (negative *percent*) or lighten (positive) *color*."""
    amount = min(abs(percent), 100) / 100
    if percent < 0:
        return color.darken(amount)
    return color.lighten(amount)
