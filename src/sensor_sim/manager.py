"""
Sensor manager deriving accelerometer and gyroscope events from a simulator
"""

from typing import List, Optional

import numpy as np

from .config import SimulatorConfig
from .simulator import NS_PER_MS, Simulator
from .types import Event, Orientation, Position, SensorType


class SensorManager:
    """Serve sensor events for the window [start, end]

    The internal simulator covers [start - padding, end + padding] so the
    earlier sample of a finite difference near start still has curve data.

    Args:
        start: Start of the visible window in nanoseconds
        end: End of the visible window in nanoseconds
        activity: How eventful the motion is, from 0 (still) to 1
        rng: Random generator used to build the curves
        config: Simulation tunables
    """

    def __init__(self, start: int, end: int, activity: float,
                 rng: Optional[np.random.Generator] = None,
                 config: Optional[SimulatorConfig] = None):
        if config is None:
            config = SimulatorConfig()

        self._start = start
        self._end = end
        self.config = config
        self.step = config.derivation_step_ms * NS_PER_MS

        padding = config.padding_ms * NS_PER_MS
        self.simulator = Simulator(start - padding, end + padding, activity, rng=rng, config=config)

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    def position(self, t: int) -> Position:
        return self.simulator.position(t)

    def orientation(self, t: int) -> Orientation:
        return self.simulator.orientation(t)

    def get(self, sensor_type: SensorType, t: int) -> Event:
        """Derive the event of a sensor at t from two simulator samples, one step apart"""
        try:
            sensor_type = SensorType(sensor_type)
        except ValueError:
            return Event(sensor_type, t)

        if sensor_type == SensorType.ACCELEROMETER:
            pos0 = self.simulator.position(t - self.step)
            pos1 = self.simulator.position(t)
            dt = (pos1.timestamp - pos0.timestamp) / 1e9
            if dt == 0:
                return Event(SensorType.ACCELEROMETER, pos1.timestamp)

            # Displacement over dt squared. This is not a second derivative of
            # position, it is kept as is so generated traces stay comparable.
            scale = self.config.millimetres_per_metre
            acceleration = [
                (p1 - p0) / scale / dt / dt
                for p0, p1 in zip(pos0.values, pos1.values)
            ]
            return Event(SensorType.ACCELEROMETER, pos1.timestamp, acceleration)

        if sensor_type == SensorType.GYROSCOPE:
            ori0 = self.simulator.orientation(t - self.step)
            ori1 = self.simulator.orientation(t)
            dt = (ori1.timestamp - ori0.timestamp) / 1e9
            if dt == 0:
                return Event(SensorType.GYROSCOPE, ori1.timestamp)

            # no wrap correction, a delta across +-pi shows up as a spike
            angular_velocity = [
                (o1 - o0) / dt
                for o0, o1 in zip(ori0.values, ori1.values)
            ]
            return Event(SensorType.GYROSCOPE, ori1.timestamp, angular_velocity)

        # Magnetometer and unknown sensors are not simulated
        return Event(sensor_type, t)

    def sample(self, sensor_type: SensorType, interval_ms: Optional[int] = None) -> List[Event]:
        """Events for t = start, start + interval, ... while t < end"""
        if interval_ms is None:
            interval_ms = self.config.derivation_step_ms
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")

        interval = interval_ms * NS_PER_MS
        events = []
        t = self._start
        while t < self._end:
            events.append(self.get(sensor_type, t))
            t += interval
        return events

    def __repr__(self):
        return f"SensorManager(start={self._start}, end={self._end}, simulator={self.simulator!r})"
