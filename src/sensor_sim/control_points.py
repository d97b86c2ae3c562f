"""
Random control-point generators for the activity, position and orientation curves

Every generator draws from the numpy Generator it is given, so a seeded
generator reproduces the same curves.
"""

import math
from typing import List, Tuple

import numpy as np

from .curves import ControlPoint, Curve
from .math_utils import reflect


class AxisProfile:
    """Per-axis parameters drawn once and held for the whole curve

    offset: starting value of the random walk
    delay: phase of the oscillation
    intensity: width of a random-walk jump
    invert: use sine instead of cosine (orientation axes only)
    minimum, maximum: range the generated values are reflected into
    """
    def __init__(self, offset: float, delay: float, intensity: float,
                 minimum: float, maximum: float, invert: bool = False):
        self.offset = offset
        self.delay = delay
        self.intensity = intensity
        self.minimum = minimum
        self.maximum = maximum
        self.invert = invert

    def to_dict(self) -> dict:
        return {
            "offset": self.offset,
            "delay": self.delay,
            "intensity": self.intensity,
            "minimum": self.minimum,
            "maximum": self.maximum,
            "invert": self.invert,
        }

    def __repr__(self):
        return (f"AxisProfile(offset={self.offset}, delay={self.delay}, "
                f"intensity={self.intensity}, bounds=({self.minimum}, {self.maximum}), "
                f"invert={self.invert})")


def random_position_profile(rng: np.random.Generator, bounds: Tuple[float, float],
                            intensity: Tuple[float, float] = (1.0, 5.0),
                            offset: float = 0.0) -> AxisProfile:
    """Draw the parameters of one position axis"""
    delay = rng.random()
    return AxisProfile(
        offset=offset,
        delay=delay,
        intensity=rng.uniform(*intensity),
        minimum=bounds[0],
        maximum=bounds[1],
    )


def random_orientation_profile(rng: np.random.Generator, bounds: Tuple[float, float],
                               offset_range: Tuple[float, float],
                               intensity: Tuple[float, float] = (0.0, 1.0)) -> AxisProfile:
    """Draw the parameters of one orientation axis"""
    offset = rng.uniform(*offset_range)
    delay = rng.random()
    return AxisProfile(
        offset=offset,
        delay=delay,
        intensity=rng.uniform(*intensity),
        minimum=bounds[0],
        maximum=bounds[1],
        invert=bool(rng.random() < 0.5),
    )


def random_control_points_activity(rng: np.random.Generator, activity: float, duration_ms: int,
                                   step_ms: Tuple[int, int] = (10, 1010)) -> List[ControlPoint]:
    """Sparse, irregularly spaced activity levels in [0, activity]

    x is the time in milliseconds since the start of the interval.
    """
    points = []
    i = 0
    while i < duration_ms:
        points.append(ControlPoint(float(i), rng.random() * activity))
        i += int(rng.integers(step_ms[0], step_ms[1]))
    return points


def _random_walk(rng: np.random.Generator, activity_curve: Curve, profile: AxisProfile,
                 duration_ms: int, interval_ms: int, oscillation) -> List[ControlPoint]:
    points = []
    offset = profile.offset
    for i in range(0, duration_ms, interval_ms):
        # jumps happen with the probability given by the activity curve
        if rng.random() < activity_curve.at(i):
            offset += (rng.random() - 0.5) * profile.intensity
        noise = rng.random()
        step = i / interval_ms
        value = oscillation(step, noise) + offset
        points.append(ControlPoint(step, reflect(value, profile.minimum, profile.maximum)))
    return points


def random_control_points_position(rng: np.random.Generator, activity_curve: Curve,
                                   profile: AxisProfile, duration_ms: int, interval_ms: int,
                                   amplitude: float = 0.005) -> List[ControlPoint]:
    """Activity-gated random walk with a small sine ripple for one position axis

    x is the sample index (time / interval_ms).
    """
    def oscillation(step, noise):
        return amplitude * math.sin(step + profile.delay + noise)

    return _random_walk(rng, activity_curve, profile, duration_ms, interval_ms, oscillation)


def random_control_points_orientation(rng: np.random.Generator, activity_curve: Curve,
                                      profile: AxisProfile, duration_ms: int, interval_ms: int,
                                      amplitude: float = 0.0005) -> List[ControlPoint]:
    """Activity-gated random walk with a sine or cosine ripple for one orientation axis

    x is the sample index (time / interval_ms).
    """
    trig = math.sin if profile.invert else math.cos

    def oscillation(step, noise):
        return amplitude * (trig(step + profile.delay) + noise)

    return _random_walk(rng, activity_curve, profile, duration_ms, interval_ms, oscillation)
