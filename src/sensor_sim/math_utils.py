"""
Mathematical utilities for motion simulation
Contains range reflection, angle wrapping and clamping helpers
"""

import math


TWO_PI = 2.0 * math.pi


def reflect(value: float, minimum: float, maximum: float) -> float:
    """Mirror a value back across the bound it crossed.

    This is a single reflection, not a full clamp. A value that overshoots
    either bound by more than ``maximum - minimum`` ends up past the opposite
    bound.
    It is meant for the small-amplitude noise of the control-point generators
    and must stay single-step so generated curves remain reproducible.
    """
    if value < minimum:
        return value + (minimum - value) * 2
    elif value > maximum:
        return value - (value - maximum) * 2
    return value


def wrap_angle(value: float) -> float:
    """Wrap an angle in radians into (-pi, pi]"""
    # fmod is exact, so the result only depends on the final adjustment
    value = math.fmod(value, TWO_PI)
    if value > math.pi:
        value -= TWO_PI
    elif value <= -math.pi:
        value += TWO_PI
    return value


def clamp(value, lower, upper):
    """Clamp a value into [lower, upper]"""
    if value < lower:
        return lower
    if value > upper:
        return upper
    return value
