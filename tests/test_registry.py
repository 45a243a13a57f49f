import types

import pytest

from core.registry import DeviceRegistry
from core.state import ButtonState
from devices import host


def fake_host():
    original = lambda: ["real pad", None, None, None]  # noqa: E731
    return types.SimpleNamespace(get_gamepads=original), original


def test_create_device_in_range():
    reg = DeviceRegistry()
    pad = reg.create_device(0, "Test Player 1")
    assert pad is not None
    assert pad.index == 0
    assert pad.id == "Test Player 1"
    assert reg.get_device(0) is pad


@pytest.mark.parametrize("slot", [-1, 4, 10])
def test_create_device_out_of_range_returns_none(slot):
    reg = DeviceRegistry()
    assert reg.create_device(slot, "nope") is None
    assert reg.devices == {}


def test_create_device_replaces_existing_slot():
    reg = DeviceRegistry()
    first = reg.create_device(1, "first")
    second = reg.create_device(1, "second")
    assert first is not second
    assert reg.get_device(1) is second
    assert len(reg.devices) == 1


def test_remove_device_and_missing_remove():
    reg = DeviceRegistry()
    reg.create_device(2)
    reg.remove_device(2)
    assert reg.get_device(2) is None
    reg.remove_device(2)
    reg.remove_device(3)


def test_mutations_delegate_and_ignore_missing_devices():
    reg = DeviceRegistry()
    reg.create_device(0)
    reg.set_axis(0, 1, -2.5)
    reg.set_button(0, 9, True)
    assert reg.get_device(0).axes[1] == -1.0
    assert reg.get_device(0).buttons[9] == ButtonState(True, True, 1.0)

    reg.set_axis(3, 0, 1.0)
    reg.set_button(3, 0, True)
    assert reg.get_device(3) is None


def test_reset_all():
    reg = DeviceRegistry()
    reg.create_device(0)
    reg.create_device(1)
    reg.set_button(0, 9, True)
    reg.set_axis(1, 0, 0.5)
    reg.reset_all()
    for slot in (0, 1):
        pad = reg.get_device(slot)
        assert not any(b.pressed for b in pad.buttons)
        assert pad.axes == [0.0, 0.0, 0.0, 0.0]


def test_enumeration_always_has_four_slots():
    reg = DeviceRegistry()
    assert reg.get_gamepads() == [None, None, None, None]
    reg.create_device(1)
    pads = reg.get_gamepads()
    assert len(pads) == 4
    assert pads[0] is None and pads[2] is None and pads[3] is None
    assert pads[1].index == 1
    assert pads[1].id == "Virtual Gamepad 1"
    reg.remove_device(1)
    assert reg.get_gamepads() == [None, None, None, None]


def test_inject_and_restore_on_namespace():
    ns, original = fake_host()
    reg = DeviceRegistry()
    before = ns.get_gamepads()

    reg.inject(ns)
    assert reg.is_injected
    assert ns.get_gamepads() == [None, None, None, None]
    reg.create_device(1)
    pads = ns.get_gamepads()
    assert pads[1].index == 1 and pads[0] is None

    reg.restore()
    assert not reg.is_injected
    assert ns.get_gamepads is original
    assert ns.get_gamepads() == before


def test_restore_without_inject_is_noop():
    ns, original = fake_host()
    reg = DeviceRegistry()
    reg.restore()
    assert ns.get_gamepads is original


def test_restore_only_once_per_injection():
    ns, original = fake_host()
    reg = DeviceRegistry()
    reg.inject(ns)
    reg.restore()
    replacement = lambda: []  # noqa: E731
    ns.get_gamepads = replacement
    reg.restore()
    assert ns.get_gamepads is replacement


def test_double_inject_loses_original():
    ns, original = fake_host()
    reg = DeviceRegistry()
    reg.inject(ns)
    reg.inject(ns)
    reg.restore()
    assert ns.get_gamepads is not original
    assert ns.get_gamepads() == [None, None, None, None]


def test_injected_context_restores_on_error():
    ns, original = fake_host()
    reg = DeviceRegistry()
    with pytest.raises(RuntimeError):
        with reg.injected(ns):
            assert ns.get_gamepads() == [None, None, None, None]
            raise RuntimeError("boom")
    assert ns.get_gamepads is original


def test_default_injection_targets_host_module():
    original = host.get_gamepads
    reg = DeviceRegistry()
    reg.create_device(0, "Test Player 1")
    with reg.injected():
        pads = host.get_gamepads()
        assert pads[0].id == "Test Player 1"
        assert pads[1:] == [None, None, None]
    assert host.get_gamepads is original


def test_bad_axis_value_through_registry_is_ignored():
    reg = DeviceRegistry()
    reg.create_device(0)
    reg.set_axis(0, 0, None)
    reg.set_axis(0, 0, float("nan"))
    assert reg.get_device(0).axes[0] == 0.0
