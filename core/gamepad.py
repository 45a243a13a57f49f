"""In-memory virtual gamepad

`VirtualGamepad` holds the state a game would read from a standard-mapping
controller: 16 digital buttons and 4 analog axes (left stick X/Y, right
stick X/Y). Out-of-range indices and non-numeric or NaN axis values are
ignored rather than raised so a long-running agent loop never dies on a
sloppy call.
"""
import math
import time

from core.state import NUM_AXES, NUM_BUTTONS, PRESSED, RELEASED, GamepadSnapshot


def _in_range(index, size: int) -> bool:
    return isinstance(index, int) and 0 <= index < size


def _is_axis_value(value) -> bool:
    return isinstance(value, (int, float)) and not math.isnan(value)


class VirtualGamepad:
    def __init__(self, index: int, id: str = None, clock=time.monotonic):
        self.index = index
        self.id = id or f"Virtual Gamepad {index}"
        self.connected = True
        self.mapping = "standard"
        self.buttons = [RELEASED] * NUM_BUTTONS
        self.axes = [0.0] * NUM_AXES
        self._clock = clock
        self.timestamp = clock()

    def _touch(self):
        self.timestamp = self._clock()

    def set_button(self, index, pressed: bool):
        if not _in_range(index, NUM_BUTTONS):
            return
        self.buttons[index] = PRESSED if pressed else RELEASED
        self._touch()

    def set_axis(self, index, value: float):
        if not _in_range(index, NUM_AXES) or not _is_axis_value(value):
            return
        self.axes[index] = max(-1.0, min(1.0, float(value)))
        self._touch()

    def reset(self):
        self.buttons = [RELEASED] * NUM_BUTTONS
        self.axes = [0.0] * NUM_AXES
        self._touch()

    def snapshot(self) -> GamepadSnapshot:
        return GamepadSnapshot(
            index=self.index,
            id=self.id,
            connected=self.connected,
            timestamp=self.timestamp,
            mapping=self.mapping,
            buttons=tuple(self.buttons),
            axes=tuple(self.axes),
        )

    def __repr__(self):
        pressed = [i for i, b in enumerate(self.buttons) if b.pressed]
        return f"VirtualGamepad(index={self.index}, id={self.id!r}, axes={self.axes}, pressed={pressed})"
