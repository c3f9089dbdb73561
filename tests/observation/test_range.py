#!/usr/bin/env python3
"""Test suite for range measurements"""

import unittest
import numpy as np

from pyodm.core.constants import CLIGHT
from pyodm.observation.range import Range

from scenario import (MEASUREMENT_DATE, RotatingScenario, StaticScenario, parameter_derivative,
                      select, state_jacobian)


class TestStaticRange(unittest.TestCase):
    """Station and satellite at rest 500 km apart"""

    def setUp(self):
        self.scenario = StaticScenario()
        self.station = self.scenario.station()
        self.state = self.scenario.state([7.0e6, 0.0, 5.0e5])

    def _estimate(self, two_way):
        measurement = Range(self.station, two_way, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                            self.scenario.satellite)
        return measurement.estimate_without_derivatives(0, 0, [self.state])

    def test_station_position(self):
        pv = self.station.get_pv_coordinates_provider().get_pv_coordinates(
            MEASUREMENT_DATE, self.scenario.inertial_frame)
        np.testing.assert_allclose(pv.position, [7.0e6, 0.0, 0.0], atol=1e-9)
        np.testing.assert_allclose(pv.velocity, np.zeros(3), atol=1e-12)

    def test_one_way(self):
        estimated = self._estimate(False)
        self.assertAlmostEqual(estimated.estimated_value[0], 500000.0, delta=1e-6)
        # emitter first, receiver last
        self.assertEqual(len(estimated.participants), 2)
        self.assertLess(estimated.participants[0].date, estimated.participants[1].date)

    def test_two_way(self):
        estimated = self._estimate(True)
        # half of the round trip
        self.assertAlmostEqual(estimated.estimated_value[0], 500000.0, delta=1e-6)
        # the signal travelled 1000 km from the station uplink to the reception
        self.assertEqual(len(estimated.participants), 3)
        self.assertAlmostEqual(estimated.get_time_offset() * CLIGHT, 1000000.0, delta=1e-3)
        self.assertAlmostEqual(2.0 * estimated.estimated_value[0], 1000000.0, delta=1e-6)

    def test_one_way_clock_offsets(self):
        self.station.clock_offset_driver.set_value(1.0e-6)
        self.scenario.satellite.clock_offset_driver.set_value(-2.0e-6)
        estimated = self._estimate(False)
        self.assertAlmostEqual(estimated.estimated_value[0], 500000.0 + 3.0e-6 * CLIGHT, delta=1e-6)

    def test_two_way_clock_offsets_cancel(self):
        self.station.clock_offset_driver.set_value(1.0e-3)
        self.scenario.satellite.clock_offset_driver.set_value(-2.0e-3)
        estimated = self._estimate(True)
        self.assertAlmostEqual(estimated.estimated_value[0], 500000.0, delta=1e-6)

    def test_static_derivatives(self):
        measurement = Range(self.station, False, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                            self.scenario.satellite)
        estimated = measurement.estimate(0, 0, [self.state])
        derivatives = estimated.get_state_derivatives(0)
        self.assertEqual(derivatives.shape, (1, 6))
        # line of sight from station to satellite
        np.testing.assert_allclose(derivatives[0, :3], [0.0, 0.0, 1.0], atol=1e-12)
        # the state is propagated back by the travel time
        np.testing.assert_allclose(derivatives[0, 3:], [0.0, 0.0, -5.0e5 / CLIGHT], atol=1e-12)

    def test_value_matches_derivative_path(self):
        measurement = Range(self.station, True, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                            self.scenario.satellite)
        plain = measurement.estimate_without_derivatives(0, 0, [self.state])
        full = measurement.estimate(0, 0, [self.state])
        np.testing.assert_allclose(full.estimated_value, plain.estimated_value, rtol=0, atol=1e-8)


class TestRangeDerivatives(unittest.TestCase):
    """Analytical derivatives against central finite differences"""

    def setUp(self):
        self.scenario = RotatingScenario()
        self.station = self.scenario.station("Kourou", 0.4, 0.1)
        self.state = self.scenario.state()
        eop = self.scenario.eop
        self.parameters = [
            (self.station.clock_offset_driver, 1.0e-6, 1e-2),
            (self.scenario.satellite.clock_offset_driver, 1.0e-6, 1e-2),
            (self.station.east_offset_driver, 1.0, 1e-7),
            (self.station.zenith_offset_driver, 1.0, 1e-7),
            (eop.prime_meridian_offset_driver, 1.0e-7, 1e-2),
            (eop.polar_offset_x_driver, 1.0e-7, 1e-2),
            (eop.prime_meridian_drift_driver, 1.0e-10, 10.0),
        ]
        select(*[driver for driver, _, _ in self.parameters])

    def _check(self, two_way):
        measurement = Range(self.station, two_way, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                            self.scenario.satellite)
        estimated = measurement.estimate(0, 0, [self.state])

        numerical = state_jacobian(measurement, [self.state], 0)
        np.testing.assert_allclose(estimated.get_state_derivatives(0), numerical,
                                   rtol=1e-6, atol=1e-7)

        for driver, step, atol in self.parameters:
            with self.subTest(driver=driver.name):
                numerical = parameter_derivative(measurement, [self.state], driver, step)
                np.testing.assert_allclose(estimated.get_parameter_derivatives(driver), numerical,
                                           rtol=1e-6, atol=atol)

    def test_one_way(self):
        self._check(False)

    def test_two_way(self):
        self._check(True)

    def test_two_way_clock_derivatives_vanish(self):
        measurement = Range(self.station, True, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                            self.scenario.satellite)
        estimated = measurement.estimate(0, 0, [self.state])
        satellite_clock = estimated.get_parameter_derivatives(self.scenario.satellite.clock_offset_driver)
        self.assertEqual(satellite_clock[0], 0.0)

    def test_one_way_satellite_clock_derivative(self):
        measurement = Range(self.station, False, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                            self.scenario.satellite)
        estimated = measurement.estimate(0, 0, [self.state])
        derivative = estimated.get_parameter_derivatives(self.scenario.satellite.clock_offset_driver)
        self.assertAlmostEqual(derivative[0], -CLIGHT, delta=1e-6)

    def test_unselected_parameter(self):
        measurement = Range(self.station, False, MEASUREMENT_DATE, 0.0, 1.0, 1.0,
                            self.scenario.satellite)
        estimated = measurement.estimate(0, 0, [self.state])
        with self.assertRaises(ValueError):
            estimated.get_parameter_derivatives(self.station.north_offset_driver)

    def test_estimation_fields(self):
        measurement = Range(self.station, False, MEASUREMENT_DATE, 7.5e5, 2.0, 1.0,
                            self.scenario.satellite)
        estimated = measurement.estimate(3, 7, [self.state])
        self.assertEqual(estimated.iteration, 3)
        self.assertEqual(estimated.count, 7)
        self.assertEqual(estimated.date, MEASUREMENT_DATE)
        np.testing.assert_allclose(estimated.residuals,
                                   measurement.observed_value - estimated.estimated_value)
        # the transit state is at the emission date
        self.assertAlmostEqual(estimated.states[0].date, estimated.participants[0].date, delta=1e-9)


if __name__ == '__main__':
    unittest.main()
