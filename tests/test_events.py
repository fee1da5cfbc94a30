"""Tests for host events and the synchronous event bus."""

from __future__ import annotations

from termtoggle.adapters.event_bus import EventBus
from termtoggle.adapters.events import (
    HostEvent,
    ProcessStarted,
    ProcessTerminated,
    WindowEntered,
)


class TestEvents:
    def test_event_types(self) -> None:
        assert WindowEntered().event_type == "window_entered"
        assert ProcessStarted().event_type == "process_started"
        assert ProcessTerminated(buffer=4, exit_code=1).event_type == "process_terminated"

    def test_events_share_the_base(self) -> None:
        for event in (WindowEntered(), ProcessStarted(), ProcessTerminated()):
            assert isinstance(event, HostEvent)


class TestEventBus:
    def test_publish_reaches_subscribers_by_class(self) -> None:
        bus = EventBus()
        entered, terminated = [], []
        bus.subscribe(WindowEntered, entered.append)
        bus.subscribe(ProcessTerminated, terminated.append)

        bus.publish(WindowEntered(window=1, buffer=2))
        assert len(entered) == 1
        assert entered[0].buffer == 2
        assert terminated == []

    def test_subscribers_run_in_order(self) -> None:
        bus = EventBus()
        calls = []
        bus.subscribe(ProcessStarted, lambda e: calls.append("first"))
        bus.subscribe(ProcessStarted, lambda e: calls.append("second"))
        bus.publish(ProcessStarted(buffer=3))
        assert calls == ["first", "second"]

    def test_unsubscribe(self) -> None:
        bus = EventBus()
        seen = []
        unsubscribe = bus.subscribe(WindowEntered, seen.append)
        unsubscribe()
        unsubscribe()
        bus.publish(WindowEntered())
        assert seen == []

    def test_failing_handler_does_not_stop_others(self, caplog) -> None:
        bus = EventBus()
        seen = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe(WindowEntered, broken)
        bus.subscribe(WindowEntered, seen.append)
        bus.publish(WindowEntered(window=1))
        assert len(seen) == 1
        assert "boom" in caplog.text
