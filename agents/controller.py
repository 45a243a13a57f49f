"""Fixed-rate loop that ticks every agent policy

`AgentController.tick()` is the whole simulation step: advance the driven
clock, release finished pulses, update each policy. Tests call it directly;
`start()` runs it on a background thread at roughly `tick_ms` intervals.
"""
import logging
import random
import threading
from typing import List

from agents.policy import AgentPolicy
from core.pulses import PulseScheduler

LOG = logging.getLogger("arcpilot.controller")


class AgentController:
    def __init__(self, registry, policies: List[AgentPolicy], pulses: PulseScheduler = None, tick_ms: float = 16):
        self.registry = registry
        self.policies = list(policies)
        self.pulses = pulses if pulses is not None else PulseScheduler()
        self.tick_ms = tick_ms
        self.now = 0.0
        self.ticks = 0
        self._t = None
        self._stop = threading.Event()

    @classmethod
    def for_settings(cls, registry, settings, rng=None) -> "AgentController":
        rng = rng if rng is not None else random.Random(settings.seed)
        pulses = PulseScheduler()
        policies = [
            AgentPolicy(p.slot, p.name, pulses, buttons=p.buttons(), timing=settings.timing, rng=rng)
            for p in settings.players
        ]
        return cls(registry, policies, pulses, tick_ms=settings.tick_ms)

    @property
    def running(self) -> bool:
        return self._t is not None

    def tick(self):
        self.now += self.tick_ms
        self.ticks += 1
        self.pulses.run_due(self.registry, self.now)
        for policy in self.policies:
            policy.update(self.registry, self.now)

    def start(self):
        if self.running:
            return
        self._stop.clear()
        self._t = threading.Thread(target=self._loop, name="AgentController", daemon=True)
        self._t.start()
        LOG.info("starting automated players: %s", ", ".join(p.name for p in self.policies))

    def stop(self):
        if not self.running:
            return
        self._stop.set()
        self._t.join(timeout=1.0)
        self._t = None
        cancelled = self.pulses.cancel_all()
        self.registry.reset_all()
        LOG.info("stopped automated players after %d ticks (%d pending releases cancelled)",
                 self.ticks, len(cancelled))

    def _loop(self):
        period = self.tick_ms / 1000.0
        while not self._stop.is_set():
            try:
                self.tick()
            except Exception:
                LOG.exception("error in agent loop")
            self._stop.wait(period)
