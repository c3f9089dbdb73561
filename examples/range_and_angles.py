# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Range and azimuth/elevation of a LEO satellite seen from a ground station"""

import numpy as np

from pyodm.coordinate.frames import EarthFixedFrame
from pyodm.coordinate.geodesy import GeodeticPoint, OneAxisEllipsoid, TopocentricFrame
from pyodm.core.constants import MU_EARTH
from pyodm.core.data_structures import SpacecraftState
from pyodm.logger import setup_logger
from pyodm.observation.angular import AngularAzEl
from pyodm.observation.ground_station import GroundStation
from pyodm.observation.measurement_object import ObservableSatellite
from pyodm.observation.range import Range
from pyodm.propagation.ephemeris import TabulatedEphemeris

MEASUREMENT_DATE = 1000.0
ORBIT_RADIUS = 7.0e6


def build_station():
    """Station on a rotating WGS84 Earth"""
    earth_frame = EarthFixedFrame()
    earth = OneAxisEllipsoid(body_frame=earth_frame)
    point = GeodeticPoint(np.radians(35.7), np.radians(139.7), 40.0)
    return GroundStation(TopocentricFrame(earth, point, "tokyo"))


def build_ephemeris(station, inertial_frame):
    """Circular orbit passing over the station at the measurement date"""
    provider = station.get_pv_coordinates_provider()
    u = provider.get_position(MEASUREMENT_DATE, inertial_frame)
    u = u / np.linalg.norm(u)
    v = np.cross([0.0, 0.0, 1.0], u)
    v = v / np.linalg.norm(v)
    rate = np.sqrt(MU_EARTH / ORBIT_RADIUS ** 3)

    dates = np.arange(MEASUREMENT_DATE - 600.0, MEASUREMENT_DATE + 601.0, 30.0)
    angles = rate * (dates - MEASUREMENT_DATE)
    positions = [ORBIT_RADIUS * (np.cos(a) * u + np.sin(a) * v) for a in angles]
    velocities = [ORBIT_RADIUS * rate * (-np.sin(a) * u + np.cos(a) * v) for a in angles]
    return TabulatedEphemeris(inertial_frame, dates, positions, velocities)


def main():
    setup_logger("pyodm", "INFO")

    station = build_station()
    inertial_frame = station.base_frame.parent_shape.body_frame.parent
    ephemeris = build_ephemeris(station, inertial_frame)
    satellite = ObservableSatellite(0)

    # state given at the measurement date, the evaluators shift it to the emission date
    state = SpacecraftState(ephemeris.get_pv_coordinates(MEASUREMENT_DATE, inertial_frame),
                            inertial_frame)
    height = ORBIT_RADIUS - np.linalg.norm(
        station.get_pv_coordinates_provider().get_position(MEASUREMENT_DATE, inertial_frame))
    print(f"Satellite about {height / 1e3:.1f} km above the station")

    print("\n=== Range ===")
    for two_way in (False, True):
        measurement = Range(station, two_way, MEASUREMENT_DATE, height, 1.0, 1.0, satellite)
        estimated = measurement.estimate(0, 0, [state])
        print(f"two_way={two_way}: range {estimated.estimated_value[0]:.3f} m, "
              f"residual {estimated.residuals[0]:.3f} m")
        print(f"  derivatives wrt state: {np.round(estimated.get_state_derivatives(0)[0], 6)}")

    print("\n=== Azimuth / elevation ===")
    measurement = AngularAzEl(station, MEASUREMENT_DATE, [0.0, 0.5 * np.pi], [1e-4, 1e-4],
                              [1.0, 1.0], satellite)
    estimated = measurement.estimate(0, 0, [state])
    azimuth, elevation = np.degrees(estimated.estimated_value)
    print(f"azimuth {azimuth:.4f} deg, elevation {elevation:.4f} deg")
    print(f"emission date {estimated.participants[0].date:.9f} s")


if __name__ == "__main__":
    main()
