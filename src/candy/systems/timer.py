"""Tick-driven scheduler for delayed continuations.

Each pending continuation is an entity carrying a Timer component, so the set
of outstanding handles lives in the world and can be dropped in one sweep.
"""
from __future__ import annotations

import logging
from typing import Callable

from esper import World

from candy.components.timer import Timer
from candy.events.bus import EVENT_TICK, EventBus

logger = logging.getLogger(__name__)

# Absorbs float drift from summing per-frame dt values.
_EPSILON = 1e-9


class TimerSystem:
    """Virtual clock advanced by EVENT_TICK.

    Continuations fire in (due time, scheduling order). While a continuation
    runs, the clock reads its own due time, so delays chained from inside a
    callback compose exactly even when a single tick spans several steps.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.now = 0.0
        self._sequence = 0
        setattr(self.world, "timers", self)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def schedule_after(self, delay: float, callback: Callable[[], None], *, label: str = '') -> int:
        """Run ``callback`` once ``delay`` seconds of ticks have elapsed. Returns a handle."""
        self._sequence += 1
        timer = Timer(due=self.now + max(0.0, float(delay)), sequence=self._sequence,
                      callback=callback, label=label)
        return self.world.create_entity(timer)

    def cancel(self, handle: int) -> bool:
        if not self.world.entity_exists(handle):
            return False
        if self.world.try_component(handle, Timer) is None:
            return False
        self.world.delete_entity(handle, immediate=True)
        return True

    def cancel_all(self) -> int:
        handles = [ent for ent, _ in self.world.get_component(Timer)]
        for ent in handles:
            self.world.delete_entity(ent, immediate=True)
        if handles:
            logger.debug("Cancelled %d pending continuation(s)", len(handles))
        return len(handles)

    def pending(self) -> list[Timer]:
        return sorted((timer for _, timer in self.world.get_component(Timer)),
                      key=lambda t: (t.due, t.sequence))

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1 / 60)
        self.advance(dt)

    def advance(self, dt: float) -> None:
        target = self.now + max(0.0, float(dt))
        while True:
            entry = self._next_due(target)
            if entry is None:
                break
            ent, timer = entry
            self.world.delete_entity(ent, immediate=True)
            self.now = max(self.now, timer.due)
            timer.callback()
        self.now = max(self.now, target)

    def _next_due(self, target: float):
        due = [
            (ent, timer) for ent, timer in self.world.get_component(Timer)
            if timer.due <= target + _EPSILON
        ]
        if not due:
            return None
        return min(due, key=lambda entry: (entry[1].due, entry[1].sequence))
