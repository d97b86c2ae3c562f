"""
Piecewise cubic curves built from control points

Two interchangeable curve kinds are available:
    - BSplineCurve: uniform cubic B-spline, smooths between control points
      without passing through them and never leaves their value range
    - CatmullRomCurve: cubic Hermite spline with Catmull-Rom tangents,
      passes exactly through every control point

Control points do not need to be evenly spaced. Positions outside the
control range clamp to the first or last control point.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np
from scipy.interpolate import BSpline, CubicHermiteSpline


ArrayLike = Union[float, Sequence[float], np.ndarray]


class CurveError(ValueError):
    """Raised when a curve cannot be built from the given control points"""


class CurveKind(Enum):
    """Interpolation family of a curve"""
    BSPLINE = "bspline"
    CATMULL_ROM = "catmull_rom"


class ControlPoint:
    """Single (x, y) control point"""
    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y

    def to_list(self) -> List[float]:
        return [self.x, self.y]

    def __repr__(self):
        return f"ControlPoint({self.x}, {self.y})"


class Curve(ABC):
    """Continuous curve through or near an ordered set of control points"""

    kind: CurveKind

    def __init__(self, points: Iterable[ControlPoint]):
        points = list(points)
        if not points:
            raise CurveError("Cannot build a curve without control points")

        xs = np.array([p.x for p in points], dtype=float)
        ys = np.array([p.y for p in points], dtype=float)

        if not (np.all(np.isfinite(xs)) and np.all(np.isfinite(ys))):
            raise CurveError("Control points must be finite")
        if np.any(np.diff(xs) <= 0):
            raise CurveError("Control point x coordinates must be strictly increasing")

        # Read-only so evaluation can be shared between threads
        xs.setflags(write=False)
        ys.setflags(write=False)
        self.xs = xs
        self.ys = ys
        self._spline = self._build() if len(ys) > 1 else None

    def __len__(self):
        return len(self.xs)

    @property
    def domain(self) -> Tuple[float, float]:
        return float(self.xs[0]), float(self.xs[-1])

    def at(self, x: ArrayLike) -> Union[float, np.ndarray]:
        """Evaluate the curve at x (scalar or array)"""
        x_arr = np.clip(np.asarray(x, dtype=float), self.xs[0], self.xs[-1])
        if self._spline is None:
            result = np.full(x_arr.shape, self.ys[0])
        else:
            result = self._evaluate(x_arr)
        if np.ndim(x) == 0:
            return float(result)
        return result

    @abstractmethod
    def _build(self):
        """Build the underlying spline from xs and ys (at least two points)"""

    @abstractmethod
    def _evaluate(self, x: np.ndarray) -> np.ndarray:
        """Evaluate the spline at x, already clamped into the domain"""

    def __repr__(self):
        return f"{type(self).__name__}(points={len(self)}, domain={self.domain})"


class BSplineCurve(Curve):
    """Uniform cubic B-spline with the control values as coefficients

    The spline runs over the control-point index; a query x is mapped to a
    fractional index by linear interpolation over the control x coordinates.
    """

    kind = CurveKind.BSPLINE

    def _build(self):
        n = len(self.ys)
        # repeat the end values so the spline covers indices [0, n - 1]
        coefficients = np.concatenate(([self.ys[0]], self.ys, [self.ys[-1]]))
        knots = np.arange(-3, n + 3, dtype=float)
        return BSpline(knots, coefficients, 3)

    def _evaluate(self, x):
        u = np.interp(x, self.xs, np.arange(len(self.xs), dtype=float))
        return self._spline(u)


class CatmullRomCurve(Curve):
    """Cubic Hermite spline through every control point

    Tangents are central differences of the neighbouring control values,
    which for evenly spaced points are the Catmull-Rom tangents.
    """

    kind = CurveKind.CATMULL_ROM

    def _build(self):
        return CubicHermiteSpline(self.xs, self.ys, np.gradient(self.ys, self.xs))

    def _evaluate(self, x):
        return self._spline(x)


_CURVE_TYPES = {
    CurveKind.BSPLINE: BSplineCurve,
    CurveKind.CATMULL_ROM: CatmullRomCurve,
}


def build_curve(points: Iterable[ControlPoint], kind: CurveKind) -> Curve:
    """Build a curve of the given kind from control points"""
    try:
        curve_type = _CURVE_TYPES[CurveKind(kind)]
    except ValueError:
        raise CurveError(f"Unknown curve kind: {kind!r}") from None
    return curve_type(points)
