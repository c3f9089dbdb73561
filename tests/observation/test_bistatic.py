#!/usr/bin/env python3
"""Test suite for bistatic and turn-around range measurements"""

import unittest
import numpy as np

from pyodm.core.constants import CLIGHT
from pyodm.observation.bistatic import BistaticRange, BistaticRangeRate
from pyodm.observation.turn_around_range import TurnAroundRange
from pyodm.propagation.pv_provider import PVCoordinatesProvider

from scenario import (MEASUREMENT_DATE, RotatingScenario, StaticScenario, parameter_derivative,
                      select, state_jacobian)


class RecordingProvider(PVCoordinatesProvider):
    """Provider remembering the dates it is evaluated at"""

    def __init__(self, provider):
        self.provider = provider
        self.dates = []

    def get_pv_coordinates(self, date, frame):
        self.dates.append(date)
        return self.provider.get_pv_coordinates(date, frame)


class TestStaticBistatic(unittest.TestCase):
    """Two fixed stations and a satellite at rest or in uniform motion"""

    def setUp(self):
        self.scenario = StaticScenario(6.4e6)
        self.emitter = self.scenario.station("emitter", 0.0, 0.5)
        self.receiver = self.scenario.station("receiver", 0.0, -0.5)
        self.position = np.array([7.0e6, 3.0e5, 1.0e6])

    def _distance(self, station):
        station_position = station.get_pv_coordinates_provider().get_position(
            MEASUREMENT_DATE, self.scenario.inertial_frame)
        return np.linalg.norm(self.position - station_position)

    def test_bistatic_range(self):
        measurement = BistaticRange(self.emitter, self.receiver, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                                    self.scenario.satellite)
        estimated = measurement.estimate_without_derivatives(0, 0, [self.scenario.state(self.position)])
        expected = self._distance(self.emitter) + self._distance(self.receiver)
        self.assertAlmostEqual(estimated.estimated_value[0], expected, delta=1e-6)
        # receiver, satellite, emitter
        dates = [participant.date for participant in estimated.participants]
        self.assertTrue(dates[0] > dates[1] > dates[2])

    def test_bistatic_range_clocks(self):
        self.receiver.clock_offset_driver.set_value(1.0e-6)
        self.emitter.clock_offset_driver.set_value(3.0e-6)
        measurement = BistaticRange(self.emitter, self.receiver, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                                    self.scenario.satellite)
        estimated = measurement.estimate_without_derivatives(0, 0, [self.scenario.state(self.position)])
        expected = self._distance(self.emitter) + self._distance(self.receiver) - 2.0e-6 * CLIGHT
        self.assertAlmostEqual(estimated.estimated_value[0], expected, delta=1e-6)

    def test_bistatic_range_rate(self):
        velocity = np.array([100.0, -2.0e3, 500.0])
        measurement = BistaticRangeRate(self.emitter, self.receiver, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                                        self.scenario.satellite)
        estimated = measurement.estimate_without_derivatives(
            0, 0, [self.scenario.state(self.position, velocity)])
        receiver, transit, emitter = estimated.participants
        expected = 0.0
        for station in (receiver, emitter):
            direction = station.position - transit.position
            expected += np.dot(direction / np.linalg.norm(direction), -velocity)
        self.assertAlmostEqual(estimated.estimated_value[0], expected, delta=1e-9)

    def test_emitter_coordinates_at_emission_date(self):
        recording = RecordingProvider(self.emitter.get_pv_coordinates_provider())
        self.emitter.get_pv_coordinates_provider = lambda: recording
        measurement = BistaticRange(self.emitter, self.receiver, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                                    self.scenario.satellite)
        estimated = measurement.estimate_without_derivatives(0, 0, [self.scenario.state(self.position)])
        emitter = estimated.participants[2]
        # the emitter is evaluated by its provider at the emission date itself
        self.assertEqual(recording.dates[-1], emitter.date)
        expected = recording.provider.get_pv_coordinates(emitter.date, self.scenario.inertial_frame)
        np.testing.assert_array_equal(emitter.position, expected.position)
        np.testing.assert_array_equal(emitter.velocity, expected.velocity)

    def test_turn_around_range(self):
        measurement = TurnAroundRange(self.emitter, self.receiver, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                                      self.scenario.satellite)
        estimated = measurement.estimate_without_derivatives(0, 0, [self.scenario.state(self.position)])
        expected = self._distance(self.emitter) + self._distance(self.receiver)
        self.assertAlmostEqual(estimated.estimated_value[0], expected, delta=1e-6)

        dates = [participant.date for participant in estimated.participants]
        self.assertEqual(len(dates), 5)
        self.assertTrue(all(np.diff(dates) > 0.0))
        self.assertAlmostEqual(dates[-1], MEASUREMENT_DATE, delta=1e-12)
        self.assertAlmostEqual(estimated.get_time_offset() * CLIGHT, 2.0 * expected, delta=1e-3)


class TestBistaticDerivatives(unittest.TestCase):
    """Analytical derivatives against central finite differences"""

    def setUp(self):
        self.scenario = RotatingScenario()
        self.emitter = self.scenario.station("Emitter", 0.4, 0.1)
        self.receiver = self.scenario.station("Receiver", 0.35, 0.2)
        self.state = self.scenario.state()

    def _check(self, measurement, state_atol, parameters):
        select(*[driver for driver, _, _ in parameters])
        estimated = measurement.estimate(0, 0, [self.state])
        plain = measurement.estimate_without_derivatives(0, 0, [self.state])
        np.testing.assert_allclose(estimated.estimated_value, plain.estimated_value,
                                   rtol=1e-12, atol=state_atol)

        numerical = state_jacobian(measurement, [self.state], 0)
        np.testing.assert_allclose(estimated.get_state_derivatives(0), numerical,
                                   rtol=1e-6, atol=state_atol)

        for driver, step, atol in parameters:
            with self.subTest(driver=driver.name):
                numerical = parameter_derivative(measurement, [self.state], driver, step)
                np.testing.assert_allclose(estimated.get_parameter_derivatives(driver), numerical,
                                           rtol=1e-6, atol=atol)

    def test_bistatic_range(self):
        measurement = BistaticRange(self.emitter, self.receiver, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                                    self.scenario.satellite)
        self._check(measurement, 1e-7, [
            (self.receiver.clock_offset_driver, 1.0e-6, 1e-2),
            (self.emitter.clock_offset_driver, 1.0e-6, 1e-2),
            (self.emitter.east_offset_driver, 1.0, 1e-7),
            (self.receiver.north_offset_driver, 1.0, 1e-7),
            (self.scenario.eop.prime_meridian_offset_driver, 1.0e-7, 1e-2),
        ])

    def test_bistatic_range_rate(self):
        measurement = BistaticRangeRate(self.emitter, self.receiver, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                                        self.scenario.satellite)
        self._check(measurement, 1e-9, [
            (self.receiver.clock_offset_driver, 1.0e-6, 1e-4),
            (self.emitter.east_offset_driver, 1.0, 1e-9),
            (self.scenario.eop.prime_meridian_offset_driver, 1.0e-7, 1e-3),
        ])

    def test_turn_around_range(self):
        measurement = TurnAroundRange(self.emitter, self.receiver, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                                      self.scenario.satellite)
        self._check(measurement, 1e-7, [
            (self.emitter.clock_offset_driver, 1.0e-6, 1e-2),
            (self.receiver.clock_offset_driver, 1.0e-6, 1e-2),
            (self.receiver.east_offset_driver, 1.0, 1e-7),
            (self.scenario.eop.polar_offset_x_driver, 1.0e-7, 1e-2),
        ])


if __name__ == '__main__':
    unittest.main()
