"""Scripted player policy

`AgentPolicy` turns ticks into stick and button input for one player. It
cycles through four movement behaviors, switching at random every few
seconds, and fires both weapons on fixed cadences. Time only advances when
the caller ticks it, and all randomness comes from the `rng` it is given, so
a seeded run replays exactly.

Axis convention: axis 0 turns the ship, axis 1 is thrust with negative
meaning forward.
"""
import logging
import random
from dataclasses import dataclass
from enum import Enum

from core.pulses import PulseScheduler

LOG = logging.getLogger("arcpilot.agent")

TURN_AXIS = 0
THRUST_AXIS = 1


class Behavior(Enum):
    EXPLORE = "explore"
    CIRCLE = "circle"
    ZIGZAG = "zigzag"
    AGGRESSIVE = "aggressive"


@dataclass
class PlayerButtons:
    fire: int
    special: int
    strafe_left: int = 5
    strafe_right: int = 6


# Player 1 fires on 9/8, player 2 on 3/2
DEFAULT_BUTTONS = {
    0: PlayerButtons(fire=9, special=8),
    1: PlayerButtons(fire=3, special=2),
}


@dataclass
class PolicyTiming:
    switch_ticks: int = 180      # ~3s at 16ms per tick
    explore_flip_ticks: int = 90
    zigzag_ticks: int = 30
    fire_ticks: int = 15         # ~250ms
    special_ticks: int = 120     # ~2s
    fire_pulse_ms: float = 50
    special_pulse_ms: float = 100
    strafe_pulse_ms: float = 100
    strafe_chance: float = 0.3


class AgentPolicy:
    def __init__(self, slot: int, name: str, pulses: PulseScheduler = None,
                 buttons: PlayerButtons = None, timing: PolicyTiming = None, rng=None):
        self.slot = slot
        self.name = name
        self.pulses = pulses if pulses is not None else PulseScheduler()
        self.buttons = buttons or DEFAULT_BUTTONS.get(slot, DEFAULT_BUTTONS[0])
        self.timing = timing or PolicyTiming()
        self.rng = rng if rng is not None else random.Random()

        self.action_ticks = 0
        self.fire_ticks = 0
        self.special_ticks = 0
        self.move_ticks = 0
        self.behavior = Behavior.EXPLORE
        self.rotation = 1

    def update(self, registry, now: float):
        """Advance one tick at driven time `now` (ms)."""
        self.steer(registry, now)
        self.fire_weapons(registry, now)

    def choose_behavior(self):
        self.behavior = self.rng.choice(list(Behavior))
        self.rotation = self.rng.choice((1, -1))
        LOG.debug("%s switches to %s (rotation %+d)", self.name, self.behavior.value, self.rotation)

    def steer(self, registry, now: float):
        self.action_ticks += 1
        self.move_ticks += 1
        if self.action_ticks >= self.timing.switch_ticks:
            self.action_ticks = 0
            self.choose_behavior()

        if self.behavior is Behavior.EXPLORE:
            self._explore(registry)
        elif self.behavior is Behavior.CIRCLE:
            self._drive(registry, 0.6 * self.rotation, -0.5)
        elif self.behavior is Behavior.ZIGZAG:
            direction = 1 if (self.move_ticks // self.timing.zigzag_ticks) % 2 == 0 else -1
            self._drive(registry, 0.8 * direction, -0.8)
        elif self.behavior is Behavior.AGGRESSIVE:
            self._aggressive(registry, now)

    def fire_weapons(self, registry, now: float):
        self.fire_ticks += 1
        self.special_ticks += 1
        if self.fire_ticks >= self.timing.fire_ticks:
            self.fire_ticks = 0
            self.pulses.pulse(registry, self.slot, self.buttons.fire, now, self.timing.fire_pulse_ms)
        if self.special_ticks >= self.timing.special_ticks:
            self.special_ticks = 0
            self.pulses.pulse(registry, self.slot, self.buttons.special, now, self.timing.special_pulse_ms)

    def _drive(self, registry, turn: float, thrust: float):
        registry.set_axis(self.slot, TURN_AXIS, turn)
        registry.set_axis(self.slot, THRUST_AXIS, thrust)

    def _explore(self, registry):
        self._drive(registry, 0.3 * self.rotation, -0.7)
        if self.move_ticks >= self.timing.explore_flip_ticks:
            self.move_ticks = 0
            self.rotation *= -1

    def _aggressive(self, registry, now: float):
        self._drive(registry, self.rng.uniform(-1.0, 1.0), -1.0)
        chance = self.timing.strafe_chance
        if self.rng.random() < chance:
            self.pulses.pulse(registry, self.slot, self.buttons.strafe_left, now, self.timing.strafe_pulse_ms)
        elif self.rng.random() < chance:
            self.pulses.pulse(registry, self.slot, self.buttons.strafe_right, now, self.timing.strafe_pulse_ms)

    def __repr__(self):
        return f"AgentPolicy(slot={self.slot}, name={self.name!r}, behavior={self.behavior.value})"
