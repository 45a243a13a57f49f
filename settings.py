"""Run profiles: load YAML and build HarnessSettings"""
import dataclasses
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import yaml

from agents.policy import DEFAULT_BUTTONS, PlayerButtons, PolicyTiming
from core.state import MAX_GAMEPADS

LOG = logging.getLogger("arcpilot.settings")


class SettingsError(ValueError):
    pass


@dataclass
class PlayerSettings:
    slot: int
    label: str
    name: str
    fire_button: int
    special_button: int
    strafe_left_button: int = 5
    strafe_right_button: int = 6

    def buttons(self) -> PlayerButtons:
        return PlayerButtons(
            fire=self.fire_button,
            special=self.special_button,
            strafe_left=self.strafe_left_button,
            strafe_right=self.strafe_right_button,
        )


def default_players() -> List[PlayerSettings]:
    return [
        PlayerSettings(slot, f"Test Player {slot + 1}", f"Player {slot + 1}",
                       DEFAULT_BUTTONS[slot].fire, DEFAULT_BUTTONS[slot].special)
        for slot in (0, 1)
    ]


@dataclass
class HarnessSettings:
    tick_ms: float = 16
    duration_s: float = 30.0
    poll_interval_s: float = 1.0
    min_score: int = 100
    seed: Optional[int] = None
    players: List[PlayerSettings] = field(default_factory=default_players)
    timing: PolicyTiming = field(default_factory=PolicyTiming)

    @classmethod
    def from_dict(cls, data: dict) -> "HarnessSettings":
        if data is not None and not isinstance(data, dict):
            raise SettingsError(f"profile: expected a mapping, got {type(data).__name__}")
        data = dict(data or {})
        timing = _build(PolicyTiming, data.pop("timing", None) or {}, "timing")
        players = data.pop("players", None)
        if players:
            players = [_player(i, p) for i, p in enumerate(players)]
        else:
            players = default_players()
        settings = _build(cls, data, "profile", players=players, timing=timing)
        settings.validate()
        return settings

    def validate(self):
        for name in ("tick_ms", "duration_s", "poll_interval_s"):
            value = getattr(self, name)
            if not _is_number(value) or value <= 0:
                raise SettingsError(f"{name} must be a positive number, got {value!r}")
        if not _is_int(self.min_score):
            raise SettingsError(f"min_score must be an integer, got {self.min_score!r}")
        if self.seed is not None and not _is_int(self.seed):
            raise SettingsError(f"seed must be an integer or null, got {self.seed!r}")

        timing = self.timing
        for f in dataclasses.fields(timing):
            value = getattr(timing, f.name)
            if f.name.endswith("_ticks") and (not _is_int(value) or value <= 0):
                raise SettingsError(f"timing.{f.name} must be a positive integer, got {value!r}")
            if f.name.endswith("_pulse_ms") and (not _is_number(value) or value < 0):
                raise SettingsError(f"timing.{f.name} must be a number >= 0, got {value!r}")
        if not _is_number(timing.strafe_chance) or not 0.0 <= timing.strafe_chance <= 1.0:
            raise SettingsError(f"timing.strafe_chance must be within [0, 1], got {timing.strafe_chance!r}")

        slots = set()
        names = set()
        for p in self.players:
            if not _is_int(p.slot) or not 0 <= p.slot < MAX_GAMEPADS:
                raise SettingsError(f"player {p.name!r}: slot {p.slot!r} outside 0..{MAX_GAMEPADS - 1}")
            for name in ("fire_button", "special_button", "strafe_left_button", "strafe_right_button"):
                if not _is_int(getattr(p, name)):
                    raise SettingsError(f"player {p.name!r}: {name} must be an integer, got {getattr(p, name)!r}")
            if p.slot in slots:
                raise SettingsError(f"slot {p.slot} assigned to more than one player")
            # scores are reported per player name
            if p.name in names:
                raise SettingsError(f"player name {p.name!r} used more than once")
            slots.add(p.slot)
            names.add(p.name)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _build(cls, values: dict, where: str, **extra):
    if not isinstance(values, dict):
        raise SettingsError(f"{where}: expected a mapping, got {type(values).__name__}")
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise SettingsError(f"{where}: unknown keys {', '.join(unknown)}")
    try:
        return cls(**values, **extra)
    except TypeError as e:
        raise SettingsError(f"{where}: {e}") from e


def _player(position: int, values: dict) -> PlayerSettings:
    if not isinstance(values, dict):
        raise SettingsError(f"players[{position}]: expected a mapping")
    values = dict(values)
    slot = values.setdefault("slot", position)
    defaults = DEFAULT_BUTTONS.get(slot, DEFAULT_BUTTONS[0]) if _is_int(slot) else DEFAULT_BUTTONS[0]
    values.setdefault("label", f"Test Player {position + 1}")
    values.setdefault("name", f"Player {position + 1}")
    values.setdefault("fire_button", defaults.fire)
    values.setdefault("special_button", defaults.special)
    return _build(PlayerSettings, values, f"players[{position}]")


def load_settings(path: str) -> HarnessSettings:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    LOG.debug("loaded profile %s", path)
    return HarnessSettings.from_dict(data)
