#!/usr/bin/env python3
"""
Tests for the motion simulation module
"""

import unittest
import tempfile
import os
import sys
import json
import math

import numpy as np

# Add the src directory to Python path
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from sensor_sim import (
    SensorManager, SensorType, Simulator, SimulatorConfig, load_config,
    BSplineCurve, CatmullRomCurve, ControlPoint, CurveError, CurveKind, build_curve,
    Position, reflect, wrap_angle
)
from sensor_sim.control_points import (
    random_control_points_activity,
    random_control_points_orientation,
    random_control_points_position,
    random_orientation_profile,
    random_position_profile,
)

SECOND = 1_000_000_000
MS = 1_000_000


def points(values, xs=None):
    if xs is None:
        xs = range(len(values))
    return [ControlPoint(x, y) for x, y in zip(xs, values)]


class TestMathUtils(unittest.TestCase):
    """Test reflection and angle wrapping"""

    def test_reflect_inside_range(self):
        self.assertEqual(reflect(2.0, -5.0, 5.0), 2.0)
        self.assertEqual(reflect(-5.0, -5.0, 5.0), -5.0)

    def test_reflect_mirrors_across_bounds(self):
        self.assertAlmostEqual(reflect(6.0, -5.0, 5.0), 4.0)
        self.assertAlmostEqual(reflect(-7.0, -5.0, 5.0), -3.0)

    def test_reflect_is_single_step(self):
        """A large overshoot lands past the opposite bound"""
        self.assertAlmostEqual(reflect(16.0, -5.0, 5.0), -6.0)
        self.assertAlmostEqual(reflect(-16.0, -5.0, 5.0), 6.0)

    def test_wrap_angle_odd_multiples_of_pi(self):
        self.assertEqual(wrap_angle(3 * math.pi), math.pi)
        self.assertEqual(wrap_angle(-3 * math.pi), math.pi)
        self.assertEqual(wrap_angle(-math.pi), math.pi)
        self.assertEqual(wrap_angle(math.pi), math.pi)

    def test_wrap_angle_range(self):
        for value in np.linspace(-50.0, 50.0, 1001):
            wrapped = wrap_angle(value)
            self.assertGreater(wrapped, -math.pi)
            self.assertLessEqual(wrapped, math.pi)
            self.assertAlmostEqual(math.sin(wrapped), math.sin(value), places=9)
            self.assertAlmostEqual(math.cos(wrapped), math.cos(value), places=9)

    def test_wrap_angle_far_out_of_range(self):
        self.assertAlmostEqual(wrap_angle(1e6 * 2 * math.pi + 0.5), 0.5, places=6)
        self.assertEqual(wrap_angle(0.0), 0.0)


class TestCurves(unittest.TestCase):
    """Test curve construction and evaluation"""

    def test_empty_points_rejected(self):
        with self.assertRaises(CurveError):
            build_curve([], CurveKind.BSPLINE)

    def test_unordered_points_rejected(self):
        with self.assertRaises(CurveError):
            build_curve(points([1.0, 2.0, 3.0], xs=[0, 2, 1]), CurveKind.CATMULL_ROM)
        with self.assertRaises(CurveError):
            build_curve(points([1.0, 2.0], xs=[1, 1]), CurveKind.CATMULL_ROM)

    def test_non_finite_points_rejected(self):
        with self.assertRaises(CurveError):
            build_curve(points([1.0, float("nan")]), CurveKind.BSPLINE)

    def test_unknown_kind_rejected(self):
        with self.assertRaises(CurveError):
            build_curve(points([1.0, 2.0]), "linear")

    def test_kind_selects_implementation(self):
        self.assertIsInstance(build_curve(points([1.0, 2.0]), CurveKind.BSPLINE), BSplineCurve)
        self.assertIsInstance(build_curve(points([1.0, 2.0]), "catmull_rom"), CatmullRomCurve)

    def test_catmull_rom_passes_through_points(self):
        values = [0.0, 1.0, -1.0, 2.0, 0.5]
        curve = build_curve(points(values), CurveKind.CATMULL_ROM)
        for i, y in enumerate(values):
            self.assertAlmostEqual(curve.at(i), y)

    def test_catmull_rom_interior_tangents(self):
        """Between interior points the curve matches the uniform Catmull-Rom polynomial"""
        curve = build_curve(points([0.0, 1.0, -1.0, 2.0, 0.5]), CurveKind.CATMULL_ROM)
        self.assertAlmostEqual(curve.at(1.5), -0.125)

    def test_catmull_rom_uneven_spacing(self):
        curve = build_curve(points([3.0, -2.0, 7.0], xs=[0, 10, 30]), CurveKind.CATMULL_ROM)
        self.assertAlmostEqual(curve.at(10), -2.0)
        self.assertAlmostEqual(curve.at(30), 7.0)

    def test_bspline_smooths_peaks(self):
        curve = build_curve(points([0.0, 0.0, 1.0, 0.0, 0.0]), CurveKind.BSPLINE)
        self.assertAlmostEqual(curve.at(2), 4.0 / 6.0)

    def test_bspline_stays_within_control_values(self):
        rng = np.random.default_rng(3)
        values = rng.random(30) * 0.3
        curve = build_curve(points(values, xs=np.cumsum(rng.integers(10, 1010, 30))), CurveKind.BSPLINE)
        samples = curve.at(np.linspace(curve.domain[0], curve.domain[1], 2000))
        self.assertTrue(np.all(samples >= values.min() - 1e-12))
        self.assertTrue(np.all(samples <= values.max() + 1e-12))

    def test_constant_points_give_constant_curve(self):
        for kind in CurveKind:
            curve = build_curve(points([0.25] * 6), kind)
            np.testing.assert_allclose(curve.at(np.linspace(0, 5, 50)), 0.25)

    def test_single_point_curve(self):
        curve = build_curve([ControlPoint(5.0, 1.5)], CurveKind.CATMULL_ROM)
        self.assertEqual(curve.at(0.0), 1.5)
        self.assertEqual(curve.at(100.0), 1.5)

    def test_queries_clamp_to_domain(self):
        curve = build_curve(points([1.0, 3.0, 2.0, 4.0]), CurveKind.CATMULL_ROM)
        self.assertAlmostEqual(curve.at(-10.0), curve.at(0.0))
        self.assertAlmostEqual(curve.at(50.0), curve.at(3.0))

    def test_array_queries(self):
        curve = build_curve(points([1.0, 3.0, 2.0, 4.0]), CurveKind.BSPLINE)
        x = np.array([0.0, 0.5, 1.5, 3.0])
        result = curve.at(x)
        self.assertIsInstance(result, np.ndarray)
        self.assertEqual(result.shape, x.shape)
        for xi, yi in zip(x, result):
            self.assertAlmostEqual(curve.at(float(xi)), yi)
        self.assertIsInstance(curve.at(1.0), float)


class TestControlPoints(unittest.TestCase):
    """Test the random control-point generators"""

    def setUp(self):
        self.rng = np.random.default_rng(11)
        self.still = build_curve(points([0.0, 0.0], xs=[0, 10000]), CurveKind.BSPLINE)

    def test_activity_points(self):
        result = random_control_points_activity(self.rng, 0.4, 20000)
        xs = [p.x for p in result]
        self.assertEqual(xs[0], 0.0)
        self.assertTrue(all(x < 20000 for x in xs))
        steps = np.diff(xs)
        self.assertTrue(np.all(steps >= 10))
        self.assertTrue(np.all(steps < 1010))
        self.assertTrue(all(0.0 <= p.y <= 0.4 for p in result))

    def test_activity_points_empty_duration(self):
        self.assertEqual(random_control_points_activity(self.rng, 0.4, 0), [])

    def test_position_points_are_indexed_by_sample(self):
        profile = random_position_profile(self.rng, (-5.0, 5.0))
        result = random_control_points_position(self.rng, self.still, profile, 1000, 50)
        self.assertEqual([p.x for p in result], [float(i) for i in range(20)])

    def test_position_without_activity_only_ripples(self):
        profile = random_position_profile(self.rng, (-5.0, 5.0), offset=1.0)
        result = random_control_points_position(self.rng, self.still, profile, 5000, 50)
        for p in result:
            self.assertLessEqual(abs(p.y - 1.0), 0.005 + 1e-12)

    def test_position_walks_with_full_activity(self):
        busy = build_curve(points([1.0, 1.0], xs=[0, 10000]), CurveKind.BSPLINE)
        profile = random_position_profile(self.rng, (-5.0, 5.0))
        result = random_control_points_position(self.rng, busy, profile, 5000, 50)
        self.assertGreater(max(abs(p.y) for p in result), 0.005)

    def test_orientation_without_activity(self):
        profile = random_orientation_profile(self.rng, (-math.pi, math.pi), (0.2, 0.2))
        self.assertEqual(profile.offset, 0.2)
        result = random_control_points_orientation(self.rng, self.still, profile, 5000, 100)
        self.assertEqual(len(result), 50)
        for p in result:
            self.assertLessEqual(abs(p.y - 0.2), 0.001 + 1e-12)

    def test_profiles(self):
        profile = random_position_profile(self.rng, (-2.0, 3.0))
        self.assertEqual((profile.minimum, profile.maximum), (-2.0, 3.0))
        self.assertTrue(1.0 <= profile.intensity <= 5.0)
        self.assertTrue(0.0 <= profile.delay < 1.0)
        self.assertFalse(profile.invert)

        profile = random_orientation_profile(self.rng, (-1.0, 1.0), (0.0, 1.5))
        self.assertTrue(0.0 <= profile.offset <= 1.5)
        self.assertTrue(0.0 <= profile.intensity <= 1.0)
        self.assertIsInstance(profile.invert, bool)


class TestSimulatorConfig(unittest.TestCase):
    """Test configuration defaults, overrides and loading"""

    def test_defaults(self):
        config = SimulatorConfig()
        self.assertEqual(config.position_interval_ms, 50)
        self.assertEqual(config.orientation_interval_ms, 100)
        self.assertEqual(config.derivation_step_ms, 66)
        self.assertEqual(config.position_bounds, [(-5.0, 5.0)] * 3)
        self.assertAlmostEqual(config.orientation_bounds[1][1], math.pi / 4)

    def test_from_dict_overrides(self):
        config = SimulatorConfig.from_dict({"position_interval_ms": 20, "position_bounds": [[-1, 1]] * 3})
        self.assertEqual(config.position_interval_ms, 20)
        self.assertEqual(config.position_bounds, [(-1, 1)] * 3)
        self.assertEqual(config.orientation_interval_ms, 100)

    def test_invalid_settings(self):
        with self.assertRaises(ValueError):
            SimulatorConfig.from_dict({"no_such_setting": 1})
        with self.assertRaises(ValueError):
            SimulatorConfig(position_interval_ms=0)
        with self.assertRaises(ValueError):
            SimulatorConfig(padding_ms=10)
        with self.assertRaises(ValueError):
            SimulatorConfig(position_bounds=[(-5.0, 5.0)] * 2)
        with self.assertRaises(ValueError):
            SimulatorConfig(position_bounds=[])
        with self.assertRaises(ValueError):
            SimulatorConfig(orientation_bounds=[(1.0, -1.0)] * 3)

    def test_load_config(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            json.dump({"orientation_interval_ms": 80}, f)
            config_file = f.name

        try:
            config = load_config(config_file)
            self.assertEqual(config.orientation_interval_ms, 80)
        finally:
            os.unlink(config_file)

    def test_load_missing_config(self):
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/simulator.json")

    def test_round_trip(self):
        config = SimulatorConfig(padding_ms=500)
        self.assertEqual(SimulatorConfig.from_dict(config.to_dict()).to_dict(), config.to_dict())


class TestSimulator(unittest.TestCase):
    """Test position and orientation queries"""

    def setUp(self):
        self.start = 1_700_000_000 * SECOND
        self.end = self.start + 10 * SECOND
        self.simulator = Simulator(self.start, self.end, 0.5, rng=np.random.default_rng(1))

    def timestamps(self, step_ms=33):
        return range(self.start, self.end + 1, step_ms * MS)

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            Simulator(self.end, self.start, 0.5)
        with self.assertRaises(ValueError):
            Simulator(self.start, self.end, 1.5)
        with self.assertRaises(ValueError):
            Simulator(self.start, self.end, -0.1)

    def test_empty_interval_fails(self):
        with self.assertRaises(CurveError):
            Simulator(self.start, self.start, 0.5)

    def test_curves_and_profiles(self):
        self.assertEqual(len(self.simulator.position_curves), 3)
        self.assertEqual(len(self.simulator.orientation_curves), 3)
        self.assertIs(self.simulator.activity_curve.kind, CurveKind.BSPLINE)
        for curve in self.simulator.position_curves + self.simulator.orientation_curves:
            self.assertIs(curve.kind, CurveKind.CATMULL_ROM)
        bounds = [(p.minimum, p.maximum) for p in self.simulator.orientation_profiles]
        self.assertEqual(bounds, SimulatorConfig().orientation_bounds)

    def test_orientation_is_wrapped(self):
        for t in self.timestamps():
            for value in self.simulator.orientation(t).values:
                self.assertGreater(value, -math.pi)
                self.assertLessEqual(value, math.pi)

    def test_position_bounds_without_activity(self):
        simulator = Simulator(self.start, self.end, 0.0, rng=np.random.default_rng(5))
        for t in self.timestamps():
            position = simulator.position(t)
            self.assertEqual(len(position.values), 3)
            for value in position.values:
                self.assertGreaterEqual(value, -5.0)
                self.assertLessEqual(value, 5.0)

    def test_queries_clamp_timestamps(self):
        before = self.start - 5 * SECOND
        after = self.end + 5 * SECOND
        self.assertEqual(self.simulator.position(before), self.simulator.position(self.start))
        self.assertEqual(self.simulator.position(after), self.simulator.position(self.end))
        self.assertEqual(self.simulator.orientation(before), self.simulator.orientation(self.start))
        self.assertEqual(self.simulator.orientation(after), self.simulator.orientation(self.end))
        self.assertEqual(self.simulator.position(after).timestamp, self.end)

    def test_queries_are_order_independent(self):
        t1 = self.start + 1234 * MS
        t2 = self.start + 8765 * MS
        first = self.simulator.position(t1)
        self.simulator.position(t2)
        self.assertEqual(self.simulator.position(t1), first)
        self.assertEqual(self.simulator.orientation(t2), self.simulator.orientation(t2))

    def test_seeded_simulators_are_identical(self):
        a = Simulator(self.start, self.end, 0.3, rng=np.random.default_rng(99))
        b = Simulator(self.start, self.end, 0.3, rng=np.random.default_rng(99))
        for t in self.timestamps(step_ms=97):
            self.assertEqual(a.position(t), b.position(t))
            self.assertEqual(a.orientation(t), b.orientation(t))

    def test_position_matches_control_values_with_full_activity(self):
        """Control values that drifted past a bound are returned unchanged"""
        for seed in range(3):
            simulator = Simulator(0, 30 * SECOND, 1.0, rng=np.random.default_rng(seed))
            for axis, curve in enumerate(simulator.position_curves):
                for k, expected in enumerate(curve.ys):
                    position = simulator.position(k * 50 * MS)
                    self.assertAlmostEqual(position.values[axis], expected)

    def test_position_is_a_catmull_rom_sample(self):
        t = self.start + 2 * 50 * MS
        curve = self.simulator.position_curves[0]
        self.assertAlmostEqual(self.simulator.position(t).values[0], curve.ys[2])


class TestSensorManager(unittest.TestCase):
    """Test derived sensor events"""

    def setUp(self):
        self.start = 0
        self.end = 10 * SECOND
        self.manager = SensorManager(self.start, self.end, 0.3, rng=np.random.default_rng(2024))

    def test_window_and_padding(self):
        self.assertEqual(self.manager.start, self.start)
        self.assertEqual(self.manager.end, self.end)
        self.assertEqual(self.manager.simulator.start, self.start - SECOND)
        self.assertEqual(self.manager.simulator.end, self.end + SECOND)

    def test_pass_through_queries(self):
        t = 4 * SECOND
        self.assertEqual(self.manager.position(t), self.manager.simulator.position(t))
        self.assertEqual(self.manager.orientation(t), self.manager.simulator.orientation(t))

    def test_accelerometer(self):
        t = 3 * SECOND + 17 * MS
        pos0 = self.manager.position(t - 66 * MS)
        pos1 = self.manager.position(t)
        event = self.manager.get(SensorType.ACCELEROMETER, t)
        self.assertEqual(event.sensor, SensorType.ACCELEROMETER)
        self.assertEqual(event.timestamp, t)
        for axis in range(3):
            expected = (pos1.values[axis] - pos0.values[axis]) / 1000 / 0.066 / 0.066
            self.assertAlmostEqual(event.data[axis], expected)

    def test_gyroscope(self):
        t = 7 * SECOND
        ori0 = self.manager.orientation(t - 66 * MS)
        ori1 = self.manager.orientation(t)
        event = self.manager.get(SensorType.GYROSCOPE, t)
        self.assertEqual(event.sensor, SensorType.GYROSCOPE)
        self.assertEqual(event.timestamp, t)
        for axis in range(3):
            self.assertAlmostEqual(event.data[axis], (ori1.values[axis] - ori0.values[axis]) / 0.066)

    def test_magnetometer_is_zero(self):
        for t in (self.start, 5 * SECOND, self.end):
            event = self.manager.get(SensorType.MAGNETOMETER, t)
            self.assertEqual(event.sensor, SensorType.MAGNETOMETER)
            self.assertEqual(event.data, [0.0, 0.0, 0.0])

    def test_fully_clamped_query_gives_zero_event(self):
        event = self.manager.get(SensorType.ACCELEROMETER, self.start - 60 * SECOND)
        self.assertEqual(event.data, [0.0, 0.0, 0.0])
        self.assertEqual(event.timestamp, self.manager.simulator.start)

    def test_unknown_sensor_type_gives_zero_event(self):
        event = self.manager.get(7, SECOND)
        self.assertEqual(event.sensor, 7)
        self.assertEqual(event.timestamp, SECOND)
        self.assertEqual(event.data, [0.0, 0.0, 0.0])

    def test_sensor_type_from_int(self):
        self.assertEqual(self.manager.get(1, SECOND).sensor, SensorType.GYROSCOPE)
        self.assertEqual(str(SensorType.ACCELEROMETER), "Accelerometer")
        self.assertEqual(SensorType.MAGNETOMETER.display_name, "Magnetometer")

    def test_ten_second_window(self):
        """Sample accelerometer and gyroscope every 66 ms over 10 s"""
        acc_events = self.manager.sample(SensorType.ACCELEROMETER)
        gyro_events = self.manager.sample(SensorType.GYROSCOPE, interval_ms=66)

        self.assertGreaterEqual(len(acc_events), 150)
        self.assertLessEqual(len(acc_events), 152)
        self.assertEqual(len(acc_events), len(gyro_events))

        for event in acc_events:
            self.assertGreaterEqual(event.timestamp, self.start)
            self.assertLessEqual(event.timestamp, self.end)
        for event in acc_events + gyro_events:
            self.assertEqual(len(event.data), 3)
            self.assertTrue(all(math.isfinite(v) for v in event.data))

    def test_sample_rejects_bad_interval(self):
        with self.assertRaises(ValueError):
            self.manager.sample(SensorType.ACCELEROMETER, interval_ms=0)

    def test_custom_derivation_step(self):
        config = SimulatorConfig(derivation_step_ms=20, padding_ms=20)
        manager = SensorManager(self.start, self.end, 0.3, rng=np.random.default_rng(4), config=config)
        self.assertEqual(manager.simulator.start, self.start - 20 * MS)
        self.assertEqual(len(manager.sample(SensorType.GYROSCOPE)), 500)

    def test_position_value_type(self):
        self.assertIsInstance(self.manager.position(SECOND), Position)


if __name__ == '__main__':
    unittest.main()
