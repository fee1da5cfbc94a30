"""Host implementations of the WindowManager capability interface.

``termtoggle.host.pty_process`` holds the real-shell spawner. Its
callbacks arrive on a reader thread, so pair it only with a host that
marshals them (``termtoggle.tui.host.TextualWindowManager``).
"""
from __future__ import annotations

__all__ = ["LayoutWindowManager"]

from termtoggle.host.layout import LayoutWindowManager
