#!/usr/bin/env python3
"""Test suite for time and frequency difference of arrival measurements"""

import unittest
import numpy as np

from pyodm.core.constants import CLIGHT
from pyodm.observation.fdoa import FDOA
from pyodm.observation.tdoa import TDOA

from scenario import (MEASUREMENT_DATE, RotatingScenario, StaticScenario, parameter_derivative,
                      select, state_jacobian)

CENTRE_FREQUENCY = 2.2e9


class TestStaticDifferences(unittest.TestCase):
    """Two stations symmetric with respect to the x-z plane"""

    def setUp(self):
        self.scenario = StaticScenario(6.4e6)
        self.prime = self.scenario.station("prime", 0.0, 0.5)
        self.second = self.scenario.station("second", 0.0, -0.5)

    def _tdoa(self, state):
        measurement = TDOA(self.prime, self.second, MEASUREMENT_DATE, 0.0, 1e-9, 1.0,
                           self.scenario.satellite)
        return measurement.estimate_without_derivatives(0, 0, [state])

    def _fdoa(self, state):
        measurement = FDOA(self.prime, self.second, CENTRE_FREQUENCY, MEASUREMENT_DATE, 0.0, 1.0,
                           1.0, self.scenario.satellite)
        return measurement, measurement.estimate_without_derivatives(0, 0, [state])

    def test_equidistant_stations(self):
        estimated = self._tdoa(self.scenario.state([7.0e6, 0.0, 1.0e6]))
        self.assertAlmostEqual(estimated.estimated_value[0], 0.0, delta=1e-15)

    def test_time_difference(self):
        position = np.array([7.0e6, 3.0e5, 1.0e6])
        estimated = self._tdoa(self.scenario.state(position))
        provider_date = MEASUREMENT_DATE
        prime = self.prime.get_pv_coordinates_provider().get_position(provider_date,
                                                                       self.scenario.inertial_frame)
        second = self.second.get_pv_coordinates_provider().get_position(provider_date,
                                                                         self.scenario.inertial_frame)
        expected = (np.linalg.norm(position - prime) - np.linalg.norm(position - second)) / CLIGHT
        self.assertAlmostEqual(estimated.estimated_value[0], expected, delta=1e-14)

    def test_participants_in_causal_order(self):
        for y in [3.0e5, -3.0e5]:
            with self.subTest(y=y):
                estimated = self._tdoa(self.scenario.state([7.0e6, y, 1.0e6]))
                dates = [participant.date for participant in estimated.participants]
                self.assertEqual(len(dates), 3)
                self.assertTrue(dates[0] < dates[1] < dates[2])

    def test_clock_offsets(self):
        self.prime.clock_offset_driver.set_value(3.0e-6)
        self.second.clock_offset_driver.set_value(1.0e-6)
        estimated = self._tdoa(self.scenario.state([7.0e6, 0.0, 1.0e6]))
        self.assertAlmostEqual(estimated.estimated_value[0], 2.0e-6, delta=1e-15)

    def test_equidistant_frequency_difference(self):
        _, estimated = self._fdoa(self.scenario.state([7.0e6, 0.0, 1.0e6], [1.0e3, 0.0, 0.0]))
        self.assertAlmostEqual(estimated.estimated_value[0], 0.0, delta=1e-8)

    def test_frequency_difference(self):
        velocity = np.array([0.0, 1.0e3, 0.0])
        measurement, estimated = self._fdoa(self.scenario.state([7.0e6, 0.0, 1.0e6], velocity))
        emitter = estimated.participants[0].position
        frame = self.scenario.inertial_frame
        range_rates = []
        for station in (self.prime, self.second):
            position = station.get_pv_coordinates_provider().get_position(MEASUREMENT_DATE, frame)
            direction = (position - emitter) / np.linalg.norm(position - emitter)
            range_rates.append(np.dot(direction, -velocity))
        expected = (range_rates[0] - range_rates[1]) * (-CENTRE_FREQUENCY / CLIGHT)
        self.assertAlmostEqual(measurement.range_rate_to_hz, -CENTRE_FREQUENCY / CLIGHT)
        self.assertAlmostEqual(estimated.estimated_value[0], expected, delta=1e-6)
        # the satellite moves toward the prime station
        self.assertLess(estimated.estimated_value[0] / measurement.range_rate_to_hz, 0.0)


class TestDifferenceDerivatives(unittest.TestCase):
    """Analytical derivatives against central finite differences"""

    def setUp(self):
        self.scenario = RotatingScenario()
        self.prime = self.scenario.station("Prime", 0.4, 0.1)
        self.second = self.scenario.station("Second", 0.35, 0.2)
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

    def test_tdoa(self):
        measurement = TDOA(self.prime, self.second, MEASUREMENT_DATE, 0.0, 1e-9, 1.0,
                           self.scenario.satellite)
        self._check(measurement, 1e-15, [
            (self.prime.clock_offset_driver, 1.0e-6, 1e-9),
            (self.second.clock_offset_driver, 1.0e-6, 1e-9),
            (self.prime.zenith_offset_driver, 1.0, 1e-16),
            (self.second.east_offset_driver, 1.0, 1e-16),
            (self.scenario.eop.prime_meridian_offset_driver, 1.0e-7, 1e-10),
        ])

    def test_tdoa_clock_derivatives(self):
        select(self.prime.clock_offset_driver, self.second.clock_offset_driver)
        measurement = TDOA(self.prime, self.second, MEASUREMENT_DATE, 0.0, 1e-9, 1.0,
                           self.scenario.satellite)
        estimated = measurement.estimate(0, 0, [self.state])
        second = estimated.get_parameter_derivatives(self.second.clock_offset_driver)
        self.assertAlmostEqual(second[0], -1.0, delta=1e-9)

    def test_fdoa(self):
        measurement = FDOA(self.prime, self.second, CENTRE_FREQUENCY, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                           self.scenario.satellite)
        self._check(measurement, 1e-8, [
            (self.prime.clock_offset_driver, 1.0e-6, 1e-3),
            (self.second.clock_offset_driver, 1.0e-6, 1e-3),
            (self.second.east_offset_driver, 1.0, 1e-8),
            (self.scenario.eop.prime_meridian_offset_driver, 1.0e-7, 1e-2),
        ])

    def test_shared_earth_orientation_parameter(self):
        driver = self.scenario.eop.polar_offset_x_driver
        select(driver)
        measurement = TDOA(self.prime, self.second, MEASUREMENT_DATE, 0.0, 1e-9, 1.0,
                           self.scenario.satellite)
        names = [d.name for d in measurement.parameters_drivers]
        self.assertEqual(names.count(driver.name), 1)
        estimated = measurement.estimate(0, 0, [self.state])
        self.assertEqual(estimated.get_derivatives_drivers_names(), [driver.name])


if __name__ == '__main__':
    unittest.main()
