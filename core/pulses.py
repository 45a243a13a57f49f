"""Timed button pulses on a driven clock

A pulse presses a button now and queues its release for later. Releases are
kept in a heap owned by the scheduler, so a session can enumerate and cancel
whatever is still pending when it shuts down.
"""
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import List

LOG = logging.getLogger("arcpilot.pulses")


@dataclass(order=True)
class PendingRelease:
    due: float
    seq: int
    slot: int = field(compare=False)
    button: int = field(compare=False)


class PulseScheduler:
    def __init__(self):
        self._heap: List[PendingRelease] = []
        self._seq = itertools.count()

    def __len__(self):
        return len(self._heap)

    def pulse(self, registry, slot: int, button: int, now: float, duration_ms: float) -> PendingRelease:
        registry.set_button(slot, button, True)
        release = PendingRelease(now + duration_ms, next(self._seq), slot, button)
        heapq.heappush(self._heap, release)
        LOG.debug("pulse slot %d button %d until %.0fms", slot, button, release.due)
        return release

    def run_due(self, registry, now: float) -> int:
        """Release every button whose pulse ended at or before `now`."""
        applied = 0
        while self._heap and self._heap[0].due <= now:
            release = heapq.heappop(self._heap)
            # a later pulse on the same button keeps it held
            if any(p.slot == release.slot and p.button == release.button for p in self._heap):
                continue
            registry.set_button(release.slot, release.button, False)
            applied += 1
        return applied

    def pending(self) -> List[PendingRelease]:
        return sorted(self._heap)

    def cancel_all(self) -> List[PendingRelease]:
        cancelled = sorted(self._heap)
        self._heap.clear()
        if cancelled:
            LOG.debug("cancelled %d pending releases", len(cancelled))
        return cancelled
