"""Host gamepad enumeration via pygame.joystick

`get_gamepads()` is the process-wide entry point games call once per input
poll. Left alone it reports physical controllers; `DeviceRegistry.inject()`
replaces it with the virtual registry for the length of a test run. Callers
must look it up as ``host.get_gamepads`` at call time, not import the name,
or they will keep the original.
"""
import logging
from typing import List, Optional

try:
    import pygame
except Exception:
    pygame = None

from core.state import MAX_GAMEPADS, NUM_AXES, NUM_BUTTONS, PRESSED, RELEASED, GamepadSnapshot

LOG = logging.getLogger("arcpilot.host")

_warned_no_pygame = False


def snapshot_from_joystick(js, index: int, timestamp: float = 0.0) -> GamepadSnapshot:
    buttons = [PRESSED if js.get_button(i) else RELEASED for i in range(min(NUM_BUTTONS, js.get_numbuttons()))]
    buttons += [RELEASED] * (NUM_BUTTONS - len(buttons))
    axes = [max(-1.0, min(1.0, float(js.get_axis(i)))) for i in range(min(NUM_AXES, js.get_numaxes()))]
    axes += [0.0] * (NUM_AXES - len(axes))
    return GamepadSnapshot(
        index=index,
        id=js.get_name() or f"Joystick {index}",
        connected=True,
        timestamp=timestamp,
        mapping="",
        buttons=tuple(buttons),
        axes=tuple(axes),
    )


def get_gamepads() -> List[Optional[GamepadSnapshot]]:
    global _warned_no_pygame
    slots = [None] * MAX_GAMEPADS
    if pygame is None:
        if not _warned_no_pygame:
            LOG.warning("pygame not available, no physical gamepads reported")
            _warned_no_pygame = True
        return slots
    if not pygame.joystick.get_init():
        pygame.joystick.init()
    try:
        pygame.event.pump()
    except pygame.error as e:
        # joystick state is stale without an event pump, but still readable
        LOG.debug("event pump unavailable: %s", e)
    now = pygame.time.get_ticks()
    for i in range(min(MAX_GAMEPADS, pygame.joystick.get_count())):
        js = pygame.joystick.Joystick(i)
        js.init()
        slots[i] = snapshot_from_joystick(js, i, float(now))
    return slots
