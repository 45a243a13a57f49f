"""Virtual gamepad registry and enumeration injector

`DeviceRegistry` owns up to four `VirtualGamepad` slots. A game that accepts
an input-source provider can be handed `registry.get_gamepads` directly. For
games that always call a fixed process-wide entry point, `inject()` swaps
that entry point for the registry and `restore()` puts the original back;
`injected()` wraps the pair as a scoped resource.
"""
import contextlib
import logging
import time
from typing import Dict, List, Optional

from core.gamepad import VirtualGamepad
from core.state import MAX_GAMEPADS, GamepadSnapshot
from devices import host

LOG = logging.getLogger("arcpilot.registry")


class DeviceRegistry:
    def __init__(self, clock=time.monotonic):
        self.devices: Dict[int, VirtualGamepad] = {}
        self._clock = clock
        self._original = None
        self._target = None  # (namespace, attr) the original was taken from

    def create_device(self, slot: int, label: str = None) -> Optional[VirtualGamepad]:
        if not isinstance(slot, int) or not 0 <= slot < MAX_GAMEPADS:
            LOG.debug("ignoring create_device for slot %r", slot)
            return None
        device = VirtualGamepad(slot, label, clock=self._clock)
        self.devices[slot] = device
        LOG.debug("created %r", device)
        return device

    def get_device(self, slot: int) -> Optional[VirtualGamepad]:
        return self.devices.get(slot)

    def remove_device(self, slot: int):
        if self.devices.pop(slot, None) is not None:
            LOG.debug("removed device at slot %d", slot)

    def set_button(self, slot: int, index: int, pressed: bool):
        device = self.devices.get(slot)
        if device is not None:
            device.set_button(index, pressed)

    def set_axis(self, slot: int, index: int, value: float):
        device = self.devices.get(slot)
        if device is not None:
            device.set_axis(index, value)

    def reset_all(self):
        for device in self.devices.values():
            device.reset()

    def get_gamepads(self) -> List[Optional[GamepadSnapshot]]:
        """Return exactly four slots: a snapshot per registered device, else None."""
        result = [None] * MAX_GAMEPADS
        for slot, device in self.devices.items():
            result[slot] = device.snapshot()
        return result

    @property
    def is_injected(self) -> bool:
        return self._target is not None

    def inject(self, namespace=None, attr: str = "get_gamepads"):
        """Replace ``namespace.attr`` with this registry's `get_gamepads`.

        Defaults to the `devices.host` entry point. Calling inject twice
        without an intervening `restore()` captures the registry's own
        function as the "original" and the real one is lost; pairing the
        calls is up to the caller (or use `injected()`).
        """
        target = host if namespace is None else namespace
        self._original = getattr(target, attr)
        self._target = (target, attr)
        setattr(target, attr, self.get_gamepads)
        LOG.info("virtual gamepads injected into %s.%s", getattr(target, "__name__", target), attr)

    def restore(self):
        if self._target is None:
            return
        target, attr = self._target
        setattr(target, attr, self._original)
        self._original = None
        self._target = None
        LOG.info("original %s.%s restored", getattr(target, "__name__", target), attr)

    @contextlib.contextmanager
    def injected(self, namespace=None, attr: str = "get_gamepads"):
        self.inject(namespace, attr)
        try:
            yield self
        finally:
            self.restore()
