#!/usr/bin/env python3
"""Shared geometry and finite difference helpers for measurement tests"""

import numpy as np

from pyodm.coordinate.frames import EarthFixedFrame
from pyodm.coordinate.geodesy import GeodeticPoint, OneAxisEllipsoid, TopocentricFrame
from pyodm.core.constants import MU_EARTH, OMGE
from pyodm.core.data_structures import SpacecraftState, TimeStampedPV
from pyodm.observation.ground_station import EarthOrientationDrivers, GroundStation
from pyodm.observation.measurement_object import ObservableSatellite

MEASUREMENT_DATE = 1000.0


class StaticScenario:
    """Non-rotating spherical Earth with a station under a fixed satellite

    The station sits at (7e6, 0, 0) and the satellite at (7e6, 0, 5e5), both
    at rest in the inertial frame, so every delay is exactly 5e5 / c.
    """

    def __init__(self, radius=7.0e6):
        self.earth_frame = EarthFixedFrame(rotation_rate=0.0)
        self.inertial_frame = self.earth_frame.parent
        self.earth = OneAxisEllipsoid(radius, 0.0, self.earth_frame)
        self.eop = EarthOrientationDrivers()
        self.satellite = ObservableSatellite(0)

    def station(self, name="station", latitude=0.0, longitude=0.0):
        base = TopocentricFrame(self.earth, GeodeticPoint(latitude, longitude, 0.0), name)
        return GroundStation(base, self.eop)

    def state(self, position, velocity=(0.0, 0.0, 0.0), date=MEASUREMENT_DATE):
        pv = TimeStampedPV(date, np.array(position, dtype=float), np.array(velocity, dtype=float))
        return SpacecraftState(pv, self.inertial_frame)


class RotatingScenario:
    """WGS84 Earth rotating at the nominal rate with a LEO satellite overhead"""

    def __init__(self):
        self.earth_frame = EarthFixedFrame(rotation_rate=OMGE, era0=0.3)
        self.inertial_frame = self.earth_frame.parent
        self.earth = OneAxisEllipsoid(body_frame=self.earth_frame)
        self.eop = EarthOrientationDrivers(reference_date=0.0)
        self.satellite = ObservableSatellite(0)

    def station(self, name, latitude, longitude, altitude=100.0):
        base = TopocentricFrame(self.earth, GeodeticPoint(latitude, longitude, altitude), name)
        return GroundStation(base, self.eop)

    def state(self, latitude=0.45, longitude=0.5, radius=7.0e6, date=MEASUREMENT_DATE - 5.0):
        position = radius * np.array([np.cos(latitude) * np.cos(longitude),
                                      np.cos(latitude) * np.sin(longitude),
                                      np.sin(latitude)])
        velocity = np.array([-4.0e3, 5.0e3, 3.5e3])
        acceleration = -MU_EARTH * position / radius ** 3
        return SpacecraftState(TimeStampedPV(date, position, velocity, acceleration),
                               self.inertial_frame)


def perturbed(state, index, step):
    """State with position/velocity component ``index`` moved by ``step``"""
    pv = state.pv
    delta = np.zeros(6)
    delta[index] = step
    return SpacecraftState(TimeStampedPV(pv.date, pv.position + delta[:3], pv.velocity + delta[3:],
                                         pv.acceleration), state.frame)


def evaluate(measurement, states):
    return measurement.estimate_without_derivatives(0, 0, states).estimated_value


def state_jacobian(measurement, states, k, position_step=1.0, velocity_step=1.0):
    """Central differences of the measurement with respect to state ``k``"""
    jacobian = np.zeros((measurement.dimension, 6))
    for j in range(6):
        step = position_step if j < 3 else velocity_step
        plus = list(states)
        minus = list(states)
        plus[k] = perturbed(states[k], j, step)
        minus[k] = perturbed(states[k], j, -step)
        jacobian[:, j] = (evaluate(measurement, plus) - evaluate(measurement, minus)) / (2.0 * step)
    return jacobian


def parameter_derivative(measurement, states, driver, step):
    """Central difference of the measurement with respect to a driver value"""
    reference = driver.get_value()
    driver.set_value(reference + step)
    plus = evaluate(measurement, states)
    driver.set_value(reference - step)
    minus = evaluate(measurement, states)
    driver.set_value(reference)
    return (plus - minus) / (2.0 * step)


def select(*drivers):
    for driver in drivers:
        driver.set_selected(True)
