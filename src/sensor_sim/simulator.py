"""
Motion simulator producing device position and orientation over a time window
"""

from typing import List, Optional

import numpy as np

from .config import SimulatorConfig
from .control_points import (
    AxisProfile,
    random_control_points_activity,
    random_control_points_orientation,
    random_control_points_position,
    random_orientation_profile,
    random_position_profile,
)
from .curves import Curve, CurveKind, build_curve
from .math_utils import clamp, wrap_angle
from .types import Orientation, Position


NS_PER_MS = 1_000_000


class Simulator:
    """Simulate the position and orientation of a device

    All curves are built in the constructor from the given random generator.
    Afterwards the simulator is read-only: position() and orientation() are
    pure functions of the timestamp and may be called from several threads.

    Args:
        start: Start of the simulated interval in nanoseconds
        end: End of the simulated interval in nanoseconds
        activity: How eventful the motion is, from 0 (still) to 1
        rng: Random generator used to build the curves (default: fresh, unseeded)
        config: Simulation tunables (default: SimulatorConfig())

    Raises:
        ValueError: If end < start or activity is outside [0, 1]
        CurveError: If a curve cannot be built, e.g. for an empty interval
    """

    def __init__(self, start: int, end: int, activity: float,
                 rng: Optional[np.random.Generator] = None,
                 config: Optional[SimulatorConfig] = None):
        if end < start:
            raise ValueError(f"Simulation end ({end}) is before its start ({start})")
        if not 0.0 <= activity <= 1.0:
            raise ValueError(f"Activity must be within [0, 1], got {activity}")

        if rng is None:
            rng = np.random.default_rng()
        if config is None:
            config = SimulatorConfig()

        self.start = start
        self.end = end
        self.activity = activity
        self.config = config
        self.position_interval = config.position_interval_ms
        self.orientation_interval = config.orientation_interval_ms

        duration_ms = int((end - start) // NS_PER_MS)

        self.activity_curve = build_curve(
            random_control_points_activity(rng, activity, duration_ms, config.activity_step_ms),
            CurveKind.BSPLINE,
        )

        self.position_profiles: List[AxisProfile] = [
            random_position_profile(rng, bounds, config.position_intensity)
            for bounds in config.position_bounds
        ]
        self.position_curves: List[Curve] = [
            build_curve(
                random_control_points_position(
                    rng, self.activity_curve, profile, duration_ms,
                    self.position_interval, config.position_amplitude,
                ),
                CurveKind.CATMULL_ROM,
            )
            for profile in self.position_profiles
        ]

        self.orientation_profiles: List[AxisProfile] = [
            random_orientation_profile(rng, bounds, offsets, config.orientation_intensity)
            for bounds, offsets in zip(config.orientation_bounds, config.orientation_offsets)
        ]
        self.orientation_curves: List[Curve] = [
            build_curve(
                random_control_points_orientation(
                    rng, self.activity_curve, profile, duration_ms,
                    self.orientation_interval, config.orientation_amplitude,
                ),
                CurveKind.CATMULL_ROM,
            )
            for profile in self.orientation_profiles
        ]

    def _sample_index(self, t: int, interval_ms: int) -> float:
        return (t - self.start) / NS_PER_MS / interval_ms

    def position(self, t: int) -> Position:
        """Position at t, with t clamped into [start, end]"""
        t = clamp(t, self.start, self.end)
        i = self._sample_index(t, self.position_interval)
        values = [curve.at(i) for curve in self.position_curves]
        return Position(timestamp=t, values=values)

    def orientation(self, t: int) -> Orientation:
        """Orientation at t, with t clamped into [start, end]"""
        t = clamp(t, self.start, self.end)
        i = self._sample_index(t, self.orientation_interval)
        values = [wrap_angle(curve.at(i)) for curve in self.orientation_curves]
        return Orientation(timestamp=t, values=values)

    def __repr__(self):
        return (f"Simulator(start={self.start}, end={self.end}, activity={self.activity}, "
                f"position_interval={self.position_interval}, "
                f"orientation_interval={self.orientation_interval})")
