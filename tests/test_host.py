import logging

import pytest

from core.state import PRESSED, RELEASED
from devices import host


class FakeJoystick:
    def __init__(self, name, buttons, axes):
        self._name = name
        self._buttons = buttons
        self._axes = axes

    def get_name(self):
        return self._name

    def get_numbuttons(self):
        return len(self._buttons)

    def get_button(self, i):
        return self._buttons[i]

    def get_numaxes(self):
        return len(self._axes)

    def get_axis(self, i):
        return self._axes[i]


def test_snapshot_pads_short_joysticks():
    js = FakeJoystick("Arcade Stick", [1, 0, 1], [0.5, -1.2])
    snap = host.snapshot_from_joystick(js, 2, timestamp=12.0)
    assert snap.index == 2
    assert snap.id == "Arcade Stick"
    assert snap.timestamp == 12.0
    assert len(snap.buttons) == 16
    assert snap.buttons[:3] == (PRESSED, RELEASED, PRESSED)
    assert all(b == RELEASED for b in snap.buttons[3:])
    assert snap.axes == pytest.approx((0.5, -1.0, 0.0, 0.0))


def test_snapshot_truncates_large_joysticks():
    js = FakeJoystick("", [0] * 20, [0.1] * 6)
    snap = host.snapshot_from_joystick(js, 0)
    assert snap.id == "Joystick 0"
    assert len(snap.buttons) == 16
    assert len(snap.axes) == 4


def test_get_gamepads_without_pygame(monkeypatch):
    monkeypatch.setattr(host, "pygame", None)
    assert host.get_gamepads() == [None, None, None, None]


def test_missing_pygame_warns_once(monkeypatch, caplog):
    monkeypatch.setattr(host, "pygame", None)
    monkeypatch.setattr(host, "_warned_no_pygame", False)
    with caplog.at_level(logging.WARNING, logger="arcpilot.host"):
        for _ in range(60):
            host.get_gamepads()
    assert len([r for r in caplog.records if "pygame not available" in r.message]) == 1
