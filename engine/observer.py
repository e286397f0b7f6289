"""
observer.py — Observation Contract
===================================
The core never knows who is watching.  A sink is just a callable that
accepts one StepEvent:

    def render(event): …
    handle.subscribe(render)

EventBus fans every event out to its sinks, in subscription order, in
strict emission order.  A sink that raises is logged and dropped so the
remaining consumers (and the run itself) carry on.
"""

import logging
from typing import Callable, List

from core.events import StepEvent


logger = logging.getLogger(__name__)

Sink = Callable[[StepEvent], None]


class EventBus:
    def __init__(self):
        self._sinks: List[Sink] = []

    def subscribe(self, sink: Sink) -> None:
        if not callable(sink):
            raise TypeError(f"Sink must be callable, got {type(sink).__name__}")
        if sink not in self._sinks:
            self._sinks.append(sink)

    def unsubscribe(self, sink: Sink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def publish(self, event: StepEvent) -> None:
        for sink in list(self._sinks):
            try:
                sink(event)
            except Exception:
                logger.warning("Sink %r raised on %r; unsubscribing it", sink, event, exc_info=True)
                self.unsubscribe(sink)

    def __len__(self) -> int:
        return len(self._sinks)
