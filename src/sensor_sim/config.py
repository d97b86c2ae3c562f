"""
Simulator configuration

Every tunable of the motion simulation lives here with its reference default.
Configurations can be loaded from JSON; keys that are absent keep their
defaults.
"""

import json
import math
import os
from typing import List, Optional, Tuple


DEFAULT_POSITION_INTERVAL_MS = 50
DEFAULT_ORIENTATION_INTERVAL_MS = 100
DEFAULT_DERIVATION_STEP_MS = 66
DEFAULT_PADDING_MS = 1000

Range = Tuple[float, float]


class SimulatorConfig:
    """Tunables for curve generation and sensor derivation"""

    def __init__(self,
                 position_interval_ms: int = DEFAULT_POSITION_INTERVAL_MS,
                 orientation_interval_ms: int = DEFAULT_ORIENTATION_INTERVAL_MS,
                 position_bounds: Optional[List[Range]] = None,
                 orientation_bounds: Optional[List[Range]] = None,
                 position_amplitude: float = 0.005,
                 orientation_amplitude: float = 0.0005,
                 position_intensity: Range = (1.0, 5.0),
                 orientation_intensity: Range = (0.0, 1.0),
                 orientation_offsets: Optional[List[Range]] = None,
                 activity_step_ms: Tuple[int, int] = (10, 1010),
                 derivation_step_ms: int = DEFAULT_DERIVATION_STEP_MS,
                 padding_ms: int = DEFAULT_PADDING_MS,
                 millimetres_per_metre: float = 1000.0):
        self.position_interval_ms = position_interval_ms
        self.orientation_interval_ms = orientation_interval_ms
        self.position_bounds = position_bounds if position_bounds is not None else [(-5.0, 5.0)] * 3
        # pitch, roll, yaw
        self.orientation_bounds = orientation_bounds if orientation_bounds is not None else [
            (-0.5 * math.pi, 0.5 * math.pi),
            (-0.25 * math.pi, 0.25 * math.pi),
            (-math.pi, math.pi),
        ]
        self.position_amplitude = position_amplitude
        self.orientation_amplitude = orientation_amplitude
        self.position_intensity = tuple(position_intensity)
        self.orientation_intensity = tuple(orientation_intensity)
        # ranges the initial pitch, roll and yaw offsets are drawn from
        self.orientation_offsets = orientation_offsets if orientation_offsets is not None else [
            (0.0, 1.5),
            (-0.5, 0.5),
            (-0.5 * math.pi, 0.5 * math.pi),
        ]
        self.activity_step_ms = tuple(activity_step_ms)
        self.derivation_step_ms = derivation_step_ms
        self.padding_ms = padding_ms
        self.millimetres_per_metre = millimetres_per_metre
        self.validate()

    def validate(self):
        """Raise ValueError if any setting is unusable"""
        for name in ("position_interval_ms", "orientation_interval_ms", "derivation_step_ms"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

        if self.padding_ms < self.derivation_step_ms:
            raise ValueError(
                f"padding_ms ({self.padding_ms}) must be at least derivation_step_ms "
                f"({self.derivation_step_ms})"
            )

        for name in ("position_bounds", "orientation_bounds", "orientation_offsets"):
            ranges = getattr(self, name)
            if len(ranges) != 3:
                raise ValueError(f"{name} needs one range per axis, got {len(ranges)}")
            setattr(self, name, [_check_range(name, r) for r in ranges])

        _check_range("position_intensity", self.position_intensity)
        _check_range("orientation_intensity", self.orientation_intensity)

        low, high = _check_range("activity_step_ms", self.activity_step_ms)
        if low < 1 or high <= low:
            raise ValueError(f"activity_step_ms must be 1 <= low < high, got {self.activity_step_ms}")

        if self.millimetres_per_metre <= 0:
            raise ValueError("millimetres_per_metre must be positive")

    @classmethod
    def from_dict(cls, data: dict) -> "SimulatorConfig":
        """Create a configuration from a dict, unknown keys are rejected"""
        unknown = set(data) - set(cls().to_dict())
        if unknown:
            raise ValueError(f"Unknown simulator settings: {', '.join(sorted(unknown))}")
        return cls(**data)

    def to_dict(self) -> dict:
        return {
            "position_interval_ms": self.position_interval_ms,
            "orientation_interval_ms": self.orientation_interval_ms,
            "position_bounds": [list(r) for r in self.position_bounds],
            "orientation_bounds": [list(r) for r in self.orientation_bounds],
            "position_amplitude": self.position_amplitude,
            "orientation_amplitude": self.orientation_amplitude,
            "position_intensity": list(self.position_intensity),
            "orientation_intensity": list(self.orientation_intensity),
            "orientation_offsets": [list(r) for r in self.orientation_offsets],
            "activity_step_ms": list(self.activity_step_ms),
            "derivation_step_ms": self.derivation_step_ms,
            "padding_ms": self.padding_ms,
            "millimetres_per_metre": self.millimetres_per_metre,
        }

    def __repr__(self):
        return f"SimulatorConfig({self.to_dict()})"


def _check_range(name: str, value) -> Range:
    if len(value) != 2:
        raise ValueError(f"{name} entries must be [min, max] pairs, got {value!r}")
    low, high = value
    if low > high:
        raise ValueError(f"{name} range has min > max: {value!r}")
    return (low, high)


def load_config(config_file: str) -> SimulatorConfig:
    """Load a simulator configuration JSON file"""
    if not os.path.exists(config_file):
        raise FileNotFoundError(f"Config file '{config_file}' not found")

    with open(config_file, 'r') as f:
        return SimulatorConfig.from_dict(json.load(f))
