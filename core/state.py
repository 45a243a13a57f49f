"""State models and lightweight DTOs"""
from dataclasses import dataclass
from typing import Any, Mapping, Tuple

MAX_GAMEPADS = 4
NUM_BUTTONS = 16
NUM_AXES = 4


@dataclass(frozen=True)
class ButtonState:
    pressed: bool = False
    touched: bool = False
    value: float = 0.0


RELEASED = ButtonState()
PRESSED = ButtonState(pressed=True, touched=True, value=1.0)


@dataclass(frozen=True)
class GamepadSnapshot:
    """Read-only view of one gamepad, shaped like a browser Gamepad object."""
    index: int
    id: str
    connected: bool
    timestamp: float
    mapping: str
    buttons: Tuple[ButtonState, ...]
    axes: Tuple[float, ...]


@dataclass
class GameTelemetry:
    score_p1: int = 0
    score_p2: int = 0
    game_over: bool = False
    p1_dead: bool = False
    p2_dead: bool = False

    # game-side (camelCase) key -> field name
    KEYS = {
        "scoreP1": "score_p1",
        "scoreP2": "score_p2",
        "gameOver": "game_over",
        "p1Dead": "p1_dead",
        "p2Dead": "p2_dead",
    }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GameTelemetry":
        values = {}
        for key, name in cls.KEYS.items():
            raw = data.get(key, data.get(name))
            if name.startswith("score"):
                values[name] = int(raw or 0)
            else:
                values[name] = bool(raw)
        return cls(**values)

    def score(self, slot: int) -> int:
        return self.score_p1 if slot == 0 else self.score_p2

    def is_dead(self, slot: int) -> bool:
        return self.p1_dead if slot == 0 else self.p2_dead
