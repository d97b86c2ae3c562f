"""
Synthetic motion-sensor telemetry

Builds random activity, position and orientation curves for a virtual device
and derives accelerometer and gyroscope events from them.
"""

from .config import SimulatorConfig, load_config, DEFAULT_DERIVATION_STEP_MS
from .control_points import AxisProfile
from .curves import BSplineCurve, CatmullRomCurve, ControlPoint, Curve, CurveError, CurveKind, build_curve
from .manager import SensorManager
from .math_utils import reflect, wrap_angle
from .recorder import TelemetryRecorder
from .simulator import Simulator
from .types import Event, Orientation, Position, SensorType

__version__ = "1.0.0"

__all__ = [
    'Simulator', 'SensorManager', 'TelemetryRecorder',
    'SimulatorConfig', 'load_config', 'DEFAULT_DERIVATION_STEP_MS',
    'AxisProfile',
    'Curve', 'BSplineCurve', 'CatmullRomCurve', 'ControlPoint', 'CurveError', 'CurveKind', 'build_curve',
    'Event', 'Orientation', 'Position', 'SensorType',
    'reflect', 'wrap_angle',
]
