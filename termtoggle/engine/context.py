"""Terminal context: owns the session registry and wires the engine.

One context per host. The embedding application creates it, calls
``init()`` once the host is ready and ``teardown()`` before the host
goes away. All operations are plain method calls on the context; there
is no module-level state.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from termtoggle.adapters.events import ProcessStarted, ProcessTerminated, WindowEntered

from .config import TermConfig
from .host import WindowManager
from .lifecycle import LifecycleManager
from .locator import WindowLocator
from .models import Session
from .placement import PlacementPolicy
from .reconcile import reconcile
from .registry import SessionRegistry
from .toggle import ToggleController

logger = logging.getLogger(__name__)


class TerminalContext:
    """Entry point for all terminal operations against one host."""

    def __init__(self, host: WindowManager, config: TermConfig | None = None) -> None:
        self.host = host
        self.config = config or TermConfig()
        self.registry = SessionRegistry(cwd_provider=host.getcwd)
        self.locator = WindowLocator(host)
        self.placement = PlacementPolicy(host, self.locator)
        self.lifecycle = LifecycleManager(
            host, self.registry, self.locator, self.placement, self.config,
            toggle_callback=self._toggle_from_mapping,
        )
        self.toggler = ToggleController(host, self.registry, self.locator, self.lifecycle)
        self._unsubscribers: list[Callable[[], None]] = []
        self._mapping: str | None = None

    @property
    def initialized(self) -> bool:
        return bool(self._unsubscribers)

    def init(self, reconcile_windows: bool = True) -> None:
        """Subscribe to host events, register the global mapping, and
        recover any terminal windows that outlived a previous context."""
        if self.initialized:
            logger.debug("TerminalContext.init: already initialized")
            return
        events = self.host.events
        self._unsubscribers = [
            events.subscribe(WindowEntered, self.lifecycle.handle_window_entered),
            events.subscribe(ProcessStarted, self.lifecycle.handle_process_started),
            events.subscribe(ProcessTerminated, self.lifecycle.handle_process_terminated),
        ]
        mapping = self.config.terminal_mapping
        if mapping:
            self.host.set_global_keymap(mapping, self._toggle_from_mapping)
            self._mapping = mapping
        if reconcile_windows:
            self.reconcile()
        logger.info(
            "TerminalContext initialized (mapping=%s, sessions=%d)",
            mapping, len(self.registry),
        )

    def teardown(self) -> None:
        """Unsubscribe from the host and forget every session.

        Windows, buffers and shells are left to the host.
        """
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        if self._mapping:
            self.host.clear_global_keymap(self._mapping)
            self._mapping = None
        count = len(self.registry)
        self.registry.clear()
        logger.info("TerminalContext torn down (%d sessions released)", count)

    def _toggle_from_mapping(self, count: int) -> None:
        self.toggle(count)

    # ── Operations ──────────────────────────────────────────────

    def toggle(self, count: int | None = 1, size: int | None = None) -> None:
        self.toggler.toggle(count, size)

    def open(self, number: int, size: int | None = None) -> Session:
        return self.lifecycle.open(number, size)

    def close(self, number: int) -> bool:
        return self.lifecycle.close(number)

    def delete(self, number: int) -> None:
        self.lifecycle.delete(number)

    def exec(self, cmd: str, number: int = 1, size: int | None = None) -> Session:
        return self.lifecycle.exec(cmd, number, size)

    def reconcile(self) -> list[int]:
        return reconcile(self.host, self.registry, self.locator)

    def introspect(self) -> list[dict[str, Any]]:
        """Snapshot of every session, with live visibility."""
        snapshot = []
        for session in self.registry.all():
            entry = session.to_dict()
            entry["visible"] = self.locator.is_window_alive(session.window)
            snapshot.append(entry)
        return snapshot
