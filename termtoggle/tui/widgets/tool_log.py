"""Tool log: collapsible RichLog panel for command results and notices."""

from __future__ import annotations

from textual.widgets import RichLog


class ToolLog(RichLog):
    """Collapsible log of slash-command output."""

    def __init__(self, **kwargs) -> None:
        super().__init__(
            auto_scroll=True,
            wrap=True,
            markup=True,
            highlight=True,
            max_lines=5000,
            **kwargs,
        )

    def toggle(self) -> None:
        self.toggle_class("visible")
