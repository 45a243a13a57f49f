"""Game telemetry read from a JSON file

The game under test dumps its scoreboard to a small JSON object, e.g.
``{"scoreP1": 120, "scoreP2": 80, "gameOver": false, "p1Dead": false,
"p2Dead": true}``, as often as it likes. Reads never fail: a missing file is
an empty scoreboard, and a half-written file returns the last good read.
"""
import json
import logging
from pathlib import Path

from core.reader import TelemetryReader
from core.state import GameTelemetry

LOG = logging.getLogger("arcpilot.telemetry")


class JsonTelemetryFile(TelemetryReader):
    def __init__(self, path):
        self.path = Path(path)
        self._last = GameTelemetry()

    def read(self) -> GameTelemetry:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("telemetry must be a JSON object")
            self._last = GameTelemetry.from_mapping(data)
        except FileNotFoundError:
            LOG.debug("telemetry file %s not written yet", self.path)
        except (OSError, ValueError, TypeError) as e:
            LOG.debug("telemetry file %s unreadable (%s), keeping last read", self.path, e)
        return self._last
