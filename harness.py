"""Test harness: inject virtual pads, run the agents, judge the scores

The harness does not launch the game. It expects the game to be running in
this process (reading `devices.host.get_gamepads`) or to be handed the
registry, and to publish its scoreboard through a `TelemetryReader`.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List

from agents.controller import AgentController
from core.reader import TelemetryReader
from core.registry import DeviceRegistry
from core.state import GameTelemetry
from settings import HarnessSettings

LOG = logging.getLogger("arcpilot.harness")


@dataclass
class Verdict:
    scores: Dict[str, int] = field(default_factory=dict)
    min_score: int = 0
    game_over: bool = False
    dry_run: bool = False

    @property
    def failures(self) -> List[str]:
        if self.dry_run:
            return []
        return [
            f"{name} score too low ({score} < {self.min_score})"
            for name, score in self.scores.items()
            if score < self.min_score
        ]

    @property
    def passed(self) -> bool:
        return not self.failures

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1


class Harness:
    def __init__(self, settings: HarnessSettings, telemetry: TelemetryReader = None,
                 registry: DeviceRegistry = None, sleep=time.sleep, clock=time.monotonic,
                 namespace=None):
        self.settings = settings
        self.telemetry = telemetry
        self.registry = registry if registry is not None else DeviceRegistry()
        self.controller = None
        self._sleep = sleep
        self._clock = clock
        self._namespace = namespace

    def run(self) -> Verdict:
        s = self.settings
        s.validate()
        LOG.info("running for up to %.1fs, min score %d per player", s.duration_s, s.min_score)
        with self.registry.injected(self._namespace):
            for p in s.players:
                self.registry.create_device(p.slot, p.label)
            self.controller = AgentController.for_settings(self.registry, s)
            self.controller.start()
            try:
                final, game_over = self._monitor()
            finally:
                self.controller.stop()

        verdict = Verdict(
            scores={p.name: final.score(p.slot) for p in s.players},
            min_score=s.min_score,
            game_over=game_over,
            dry_run=self.telemetry is None,
        )
        self._report(verdict)
        return verdict

    def _monitor(self):
        s = self.settings
        start = self._clock()
        last = GameTelemetry()
        state = last
        while self._clock() - start < s.duration_s:
            self._sleep(s.poll_interval_s)
            if self.telemetry is None:
                continue
            state = self.telemetry.read()
            if (state.score_p1, state.score_p2) != (last.score_p1, last.score_p2):
                LOG.info("scores: %s", " | ".join(f"{p.name}={state.score(p.slot)}" for p in s.players))
            for p in s.players:
                if state.is_dead(p.slot) and not last.is_dead(p.slot):
                    LOG.warning("%s destroyed", p.name)
            last = state
            if state.game_over:
                LOG.info("game over detected")
                return state, True
        LOG.info("test duration reached")
        if self.telemetry is not None:
            state = self.telemetry.read()
        return state, False

    def _report(self, verdict: Verdict):
        for name, score in verdict.scores.items():
            LOG.info("%s final score: %d", name, score)
        if verdict.dry_run:
            LOG.info("dry run finished (no telemetry), agents drove %d ticks", self.controller.ticks)
        elif verdict.passed:
            LOG.info("TEST PASSED: every player reached %d", verdict.min_score)
        else:
            for reason in verdict.failures:
                LOG.error("TEST FAILED: %s", reason)
