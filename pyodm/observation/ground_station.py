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

"""Ground stations with estimable position and Earth orientation corrections.

The inertial position of a station is obtained from its nominal position
on the ellipsoid by:

1. adding the estimated east/north/zenith displacement,
2. applying the estimated polar motion (small rotations about the x and y
   axes, each an offset plus a linear drift),
3. rotating about the pole by the Earth rotation angle corrected by the
   estimated prime meridian offset and drift.

All steps accept plain values or Gradients, so the same code gives the
value-only coordinates and the differentiated ones.
"""

import logging
from typing import Dict, List, Optional

from ..core.constants import (
    EAST_SUFFIX,
    EOP_SCALE,
    NORTH_SUFFIX,
    OFFSET_SCALE,
    POLAR_DRIFT_X,
    POLAR_DRIFT_Y,
    POLAR_OFFSET_X,
    POLAR_OFFSET_Y,
    PRIME_MERIDIAN_DRIFT,
    PRIME_MERIDIAN_OFFSET,
    ZENITH_SUFFIX,
)
from ..core.data_structures import ObserverType, TimeStampedPV
from ..core.field_math import components, real, vector
from ..coordinate.geodesy import TopocentricFrame
from ..coordinate.rotation import rotate_x, rotate_y, rotate_z
from ..parameters.clock import QuadraticClockModel
from ..parameters.parameter_driver import ParameterDriver
from ..propagation.pv_provider import PVCoordinatesProvider
from .observer import OffsetTransform, Observer

logger = logging.getLogger(__name__)


class EarthOrientationDrivers:
    """Estimable corrections to the Earth orientation

    Stations sharing an instance (or drivers with the same names) share the
    same parameters in the measurement derivatives.

    Parameters
    ----------
    reference_date : float
        Reference date of the drift parameters (s)
    """

    def __init__(self, reference_date: float = 0.0):
        self.reference_date = reference_date
        self.prime_meridian_offset_driver = ParameterDriver(PRIME_MERIDIAN_OFFSET, 0.0, EOP_SCALE)
        self.prime_meridian_drift_driver = ParameterDriver(PRIME_MERIDIAN_DRIFT, 0.0, EOP_SCALE)
        self.polar_offset_x_driver = ParameterDriver(POLAR_OFFSET_X, 0.0, EOP_SCALE)
        self.polar_drift_x_driver = ParameterDriver(POLAR_DRIFT_X, 0.0, EOP_SCALE)
        self.polar_offset_y_driver = ParameterDriver(POLAR_OFFSET_Y, 0.0, EOP_SCALE)
        self.polar_drift_y_driver = ParameterDriver(POLAR_DRIFT_Y, 0.0, EOP_SCALE)
        for driver in self.parameters_drivers:
            driver.reference_date = reference_date

    @property
    def parameters_drivers(self) -> List[ParameterDriver]:
        return [self.prime_meridian_offset_driver, self.prime_meridian_drift_driver,
                self.polar_offset_x_driver, self.polar_drift_x_driver,
                self.polar_offset_y_driver, self.polar_drift_y_driver]


class _StationProvider(PVCoordinatesProvider):
    """Station coordinates provider, differentiated when indices are given"""

    def __init__(self, station: "GroundStation", free_parameters: Optional[int] = None,
                 indices: Optional[Dict[str, int]] = None):
        self.station = station
        self.free_parameters = free_parameters
        self.indices = indices

    def get_pv_coordinates(self, date, frame) -> TimeStampedPV:
        if self.indices is None:
            values = self.station._parameter_values(real(date))
        else:
            values = self.station._parameter_gradients(self.free_parameters, self.indices, real(date))
        return self.station._inertial_pv(date, values, frame)


class GroundStation(Observer):
    """Ground station with estimable displacement, clock and Earth orientation

    Parameters
    ----------
    base_frame : TopocentricFrame
        Nominal topocentric frame of the station, its name is the station name
    earth_orientation : EarthOrientationDrivers, optional
        Earth orientation corrections, shared between stations to estimate
        them jointly
    clock_model : QuadraticClockModel, optional
        Station clock
    """

    observer_type = ObserverType.GROUND

    def __init__(self, base_frame: TopocentricFrame,
                 earth_orientation: Optional[EarthOrientationDrivers] = None,
                 clock_model: Optional[QuadraticClockModel] = None):
        super().__init__(base_frame.name, clock_model)
        self.base_frame = base_frame
        self.earth_orientation = (earth_orientation if earth_orientation is not None
                                  else EarthOrientationDrivers())
        self.east_offset_driver = self._add_parameter_driver(
            ParameterDriver(self.name + EAST_SUFFIX, 0.0, OFFSET_SCALE))
        self.north_offset_driver = self._add_parameter_driver(
            ParameterDriver(self.name + NORTH_SUFFIX, 0.0, OFFSET_SCALE))
        self.zenith_offset_driver = self._add_parameter_driver(
            ParameterDriver(self.name + ZENITH_SUFFIX, 0.0, OFFSET_SCALE))
        for driver in self.earth_orientation.parameters_drivers:
            self._add_parameter_driver(driver)

    @property
    def body_frame(self):
        return self.base_frame.parent_shape.body_frame

    def _geometry_drivers(self) -> List[ParameterDriver]:
        eop = self.earth_orientation
        return [self.east_offset_driver, self.north_offset_driver, self.zenith_offset_driver,
                eop.prime_meridian_offset_driver, eop.prime_meridian_drift_driver,
                eop.polar_offset_x_driver, eop.polar_drift_x_driver,
                eop.polar_offset_y_driver, eop.polar_drift_y_driver]

    def _parameter_values(self, date: float):
        return [driver.get_value(date) for driver in self._geometry_drivers()]

    def _parameter_gradients(self, free_parameters: int, indices: Dict[str, int], date: float):
        return [driver.get_value_gradient(free_parameters, indices, date)
                for driver in self._geometry_drivers()]

    def _to_parent(self, body_vector, date, values):
        """Rotate a body-fixed vector to the body frame's parent axes"""
        _, _, _, pm_offset, pm_drift, xp0, xp_dot, yp0, yp_dot = values
        dt = date - self.earth_orientation.reference_date
        polar = rotate_y(rotate_x(body_vector, yp0 + yp_dot * dt), xp0 + xp_dot * dt)
        theta = self.body_frame.rotation_angle(date) + pm_offset + pm_drift * dt
        return rotate_z(polar, theta)

    def _inertial_pv(self, date, values, frame) -> TimeStampedPV:
        east, north, zenith, _, pm_drift = values[:5]
        base = self.base_frame
        displaced = base.origin + base.east * east + base.north * north + base.zenith * zenith
        position = self._to_parent(displaced, date, values)

        omega = self.body_frame.rotation_rate + pm_drift
        x, y, _ = components(position)
        velocity = vector(-omega * y, omega * x, 0.0)
        acceleration = vector(-omega * omega * x, -omega * omega * y, 0.0)
        pv = TimeStampedPV(date, position, velocity, acceleration)
        return self.body_frame.parent.transform_pv_to(pv, frame)

    def get_pv_coordinates_provider(self) -> PVCoordinatesProvider:
        return _StationProvider(self)

    def get_field_pv_coordinates_provider(self, free_parameters: int,
                                          indices: Dict[str, int]) -> PVCoordinatesProvider:
        return _StationProvider(self, free_parameters, indices)

    def _axes(self, date, values, frame) -> tuple:
        parent = self.body_frame.parent
        return tuple(parent.transform_vector_to(self._to_parent(axis, date, values), date, frame)
                     for axis in (self.base_frame.east, self.base_frame.north, self.base_frame.zenith))

    def get_offset_to_inertial(self, inertial_frame, date: float,
                               clock_offset_already_applied: bool) -> OffsetTransform:
        offset_date = self._compensated_date(date, clock_offset_already_applied)
        values = self._parameter_values(offset_date)
        return OffsetTransform(offset_date,
                               self._inertial_pv(offset_date, values, inertial_frame),
                               self._axes(offset_date, values, inertial_frame))

    def get_field_offset_to_inertial(self, inertial_frame, date, free_parameters: int,
                                     indices: Dict[str, int],
                                     clock_offset_already_applied: bool = False) -> OffsetTransform:
        offset_date = self._field_compensated_date(date, free_parameters, indices,
                                                   clock_offset_already_applied)
        values = self._parameter_gradients(free_parameters, indices, real(offset_date))
        return OffsetTransform(offset_date,
                               self._inertial_pv(offset_date, values, inertial_frame),
                               self._axes(offset_date, values, inertial_frame))
