"""Base telemetry reader abstraction"""
import abc

from core.state import GameTelemetry


class TelemetryReader(abc.ABC):
    @abc.abstractmethod
    def read(self) -> GameTelemetry:
        raise NotImplementedError
