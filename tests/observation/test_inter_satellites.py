#!/usr/bin/env python3
"""Test suite for inter-satellite and one-way GNSS range measurements"""

import unittest
import numpy as np

from pyodm.core.constants import CLIGHT, MU_EARTH
from pyodm.observation.inter_satellites import InterSatellitesRange, OneWayGNSSRange
from pyodm.observation.measurement_object import ObservableSatellite
from pyodm.observation.observer import ObserverSatellite
from pyodm.propagation.ephemeris import TabulatedEphemeris
from pyodm.propagation.pv_provider import AbsolutePVCoordinates

from scenario import (MEASUREMENT_DATE, RotatingScenario, StaticScenario, parameter_derivative,
                      select, state_jacobian)

TAU = 5.0e5 / CLIGHT


def circular_ephemeris(frame, radius=2.656e7, inclination=0.96, phase=0.4):
    """Circular orbit sampled every 20 s around the measurement date"""
    dates = np.arange(MEASUREMENT_DATE - 200.0, MEASUREMENT_DATE + 200.0 + 1.0, 20.0)
    n = np.sqrt(MU_EARTH / radius ** 3)
    angle = phase + n * dates
    ci, si = np.cos(inclination), np.sin(inclination)
    positions = radius * np.column_stack([np.cos(angle), ci * np.sin(angle), si * np.sin(angle)])
    velocities = radius * n * np.column_stack([-np.sin(angle), ci * np.cos(angle), si * np.cos(angle)])
    return TabulatedEphemeris(frame, dates, positions, velocities)


class TestStaticInterSatellites(unittest.TestCase):
    """Two satellites at rest 500 km apart"""

    def setUp(self):
        self.scenario = StaticScenario()
        self.local = ObservableSatellite(0)
        self.remote = ObservableSatellite(1)
        self.states = [self.scenario.state([7.0e6, 0.0, 0.0]),
                       self.scenario.state([7.0e6, 0.0, 5.0e5])]

    def _measurement(self, two_way):
        return InterSatellitesRange(self.local, self.remote, two_way, MEASUREMENT_DATE, 0.0, 1.0, 1.0)

    def test_one_way(self):
        estimated = self._measurement(False).estimate_without_derivatives(0, 0, self.states)
        self.assertAlmostEqual(estimated.estimated_value[0], 500000.0, delta=1e-6)
        self.assertEqual(len(estimated.states), 2)
        self.assertAlmostEqual(estimated.states[1].date, MEASUREMENT_DATE - TAU, delta=1e-12)

    def test_two_way(self):
        estimated = self._measurement(True).estimate_without_derivatives(0, 0, self.states)
        self.assertAlmostEqual(estimated.estimated_value[0], 500000.0, delta=1e-6)
        self.assertAlmostEqual(estimated.get_time_offset() * CLIGHT, 1000000.0, delta=1e-3)

    def test_one_way_clocks(self):
        self.local.clock_offset_driver.set_value(1.0e-6)
        self.remote.clock_offset_driver.set_value(-1.0e-6)
        estimated = self._measurement(False).estimate_without_derivatives(0, 0, self.states)
        self.assertAlmostEqual(estimated.estimated_value[0], 500000.0 + 2.0e-6 * CLIGHT, delta=1e-6)

    def test_state_derivatives(self):
        estimated = self._measurement(False).estimate(0, 0, self.states)
        local = estimated.get_state_derivatives(0)
        remote = estimated.get_state_derivatives(1)
        np.testing.assert_allclose(local[0], [0.0, 0.0, -1.0, 0.0, 0.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(remote[0], [0.0, 0.0, 1.0, 0.0, 0.0, -TAU], atol=1e-12)

    def test_one_way_gnss_range(self):
        emitter = ObserverSatellite("G01", AbsolutePVCoordinates(self.scenario.inertial_frame,
                                                                 self.states[1].pv))
        measurement = OneWayGNSSRange(emitter, MEASUREMENT_DATE, 0.0, 1.0, 1.0, self.local)
        estimated = measurement.estimate_without_derivatives(0, 0, self.states[:1])
        self.assertAlmostEqual(estimated.estimated_value[0], 500000.0, delta=1e-6)
        # emitter first, receiver last
        self.assertAlmostEqual(estimated.participants[0].date, MEASUREMENT_DATE - TAU, delta=1e-12)
        self.assertAlmostEqual(estimated.participants[1].date, MEASUREMENT_DATE, delta=1e-12)


class TestInterSatellitesDerivatives(unittest.TestCase):
    """Analytical derivatives against central finite differences"""

    def setUp(self):
        self.scenario = RotatingScenario()
        self.local = ObservableSatellite(0)
        self.remote = ObservableSatellite(1)
        self.states = [self.scenario.state(),
                       self.scenario.state(latitude=0.2, longitude=0.7, radius=7.3e6)]
        self.parameters = [
            (self.local.clock_offset_driver, 1.0e-6, 1e-2),
            (self.remote.clock_offset_driver, 1.0e-6, 1e-2),
        ]
        select(*[driver for driver, _, _ in self.parameters])

    def _check(self, measurement, states):
        estimated = measurement.estimate(0, 0, states)
        plain = measurement.estimate_without_derivatives(0, 0, states)
        np.testing.assert_allclose(estimated.estimated_value, plain.estimated_value, atol=1e-7)

        for k in range(len(states)):
            with self.subTest(state=k):
                numerical = state_jacobian(measurement, states, k)
                np.testing.assert_allclose(estimated.get_state_derivatives(k), numerical,
                                           rtol=1e-6, atol=1e-7)

        for driver, step, atol in self.parameters:
            with self.subTest(driver=driver.name):
                numerical = parameter_derivative(measurement, states, driver, step)
                np.testing.assert_allclose(estimated.get_parameter_derivatives(driver), numerical,
                                           rtol=1e-6, atol=atol)
        return estimated

    def test_one_way(self):
        measurement = InterSatellitesRange(self.local, self.remote, False, MEASUREMENT_DATE, 0.0,
                                           1.0, 1.0)
        estimated = self._check(measurement, self.states)
        remote_clock = estimated.get_parameter_derivatives(self.remote.clock_offset_driver)
        self.assertAlmostEqual(remote_clock[0], -CLIGHT, delta=1e-6)

    def test_two_way(self):
        measurement = InterSatellitesRange(self.local, self.remote, True, MEASUREMENT_DATE, 0.0,
                                           1.0, 1.0)
        self._check(measurement, self.states)

    def test_one_way_gnss_range(self):
        emitter = ObserverSatellite("G05", circular_ephemeris(self.scenario.inertial_frame))
        self.parameters = [
            (self.local.clock_offset_driver, 1.0e-6, 1e-2),
            (emitter.clock_offset_driver, 1.0e-6, 1e-2),
        ]
        select(emitter.clock_offset_driver)
        measurement = OneWayGNSSRange(emitter, MEASUREMENT_DATE, 0.0, 1.0, 1.0, self.local)
        estimated = self._check(measurement, self.states[:1])
        emitter_clock = estimated.get_parameter_derivatives(emitter.clock_offset_driver)
        self.assertAlmostEqual(emitter_clock[0], -CLIGHT, delta=1e-6)


if __name__ == '__main__':
    unittest.main()
