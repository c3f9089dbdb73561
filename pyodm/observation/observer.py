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

"""Measurement observers.

An observer is the non-estimated end of a measurement: a ground station or
a satellite whose trajectory is known. It has a clock and a
position/velocity provider, and gives the transform from its offset frame
(the frame where its measurement point sits) to an inertial frame at the
clock-compensated measurement date.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

from ..core.data_structures import ObserverType, TimeStampedPV
from ..core.field_math import as_gradient, components, real
from ..parameters.clock import QuadraticClockModel
from ..propagation.pv_provider import PVCoordinatesProvider
from .measurement_object import MeasurementObject


@dataclass(frozen=True, eq=False)
class OffsetTransform:
    """Transform from an observer offset frame to an inertial frame

    Attributes
    ----------
    date : float or Gradient
        Clock-compensated date of the transform
    origin : TimeStampedPV
        Offset frame origin coordinates in the inertial frame
    axes : tuple
        Offset frame axes expressed in the inertial frame
    """
    date: Any
    origin: TimeStampedPV
    axes: tuple = (np.array([1.0, 0.0, 0.0]), np.array([0.0, 1.0, 0.0]), np.array([0.0, 0.0, 1.0]))

    def transform_position(self, position):
        """Inertial position of a point given in the offset frame"""
        x, y, z = components(position)
        return self.origin.position + self.axes[0] * x + self.axes[1] * y + self.axes[2] * z


class Observer(MeasurementObject, ABC):
    """Base class of measurement observers"""

    observer_type: ObserverType = None

    @abstractmethod
    def get_pv_coordinates_provider(self) -> PVCoordinatesProvider:
        """Plain position/velocity provider of the observer"""

    @abstractmethod
    def get_field_pv_coordinates_provider(self, free_parameters: int,
                                          indices: Dict[str, int]) -> PVCoordinatesProvider:
        """Provider whose coordinates carry the derivatives with respect to
        the observer's selected parameters"""

    @abstractmethod
    def get_offset_to_inertial(self, inertial_frame, date: float,
                               clock_offset_already_applied: bool) -> OffsetTransform:
        """Offset frame to inertial transform at the clock-compensated date"""

    @abstractmethod
    def get_field_offset_to_inertial(self, inertial_frame, date, free_parameters: int,
                                     indices: Dict[str, int],
                                     clock_offset_already_applied: bool = False) -> OffsetTransform:
        """Differentiated offset frame to inertial transform"""

    def _compensated_date(self, date: float, clock_offset_already_applied: bool) -> float:
        if clock_offset_already_applied:
            return date
        return date - self.quadratic_clock_model.get_offset(date).offset

    def _field_compensated_date(self, date, free_parameters: int, indices: Dict[str, int],
                                clock_offset_already_applied: bool):
        if clock_offset_already_applied:
            return as_gradient(date, free_parameters)
        clock = self.get_quadratic_field_clock_model(free_parameters, indices, real(date))
        return date - clock.get_offset(date).offset


class ObserverSatellite(Observer):
    """Satellite with a known trajectory acting as observer

    Parameters
    ----------
    name : str
        Satellite name
    pv_provider : PVCoordinatesProvider
        Known trajectory of the satellite
    clock_model : QuadraticClockModel, optional
        Satellite clock
    """

    observer_type = ObserverType.SATELLITE

    def __init__(self, name: str, pv_provider: PVCoordinatesProvider,
                 clock_model: Optional[QuadraticClockModel] = None):
        super().__init__(name, clock_model)
        self.pv_provider = pv_provider

    def get_pv_coordinates_provider(self) -> PVCoordinatesProvider:
        return self.pv_provider

    def get_field_pv_coordinates_provider(self, free_parameters: int,
                                          indices: Dict[str, int]) -> PVCoordinatesProvider:
        # the trajectory has no estimated parameters, only date derivatives remain
        return self.pv_provider

    def get_offset_to_inertial(self, inertial_frame, date: float,
                               clock_offset_already_applied: bool) -> OffsetTransform:
        offset_date = self._compensated_date(date, clock_offset_already_applied)
        return OffsetTransform(offset_date,
                               self.pv_provider.get_pv_coordinates(offset_date, inertial_frame))

    def get_field_offset_to_inertial(self, inertial_frame, date, free_parameters: int,
                                     indices: Dict[str, int],
                                     clock_offset_already_applied: bool = False) -> OffsetTransform:
        offset_date = self._field_compensated_date(date, free_parameters, indices,
                                                   clock_offset_already_applied)
        return OffsetTransform(offset_date,
                               self.pv_provider.get_pv_coordinates(offset_date, inertial_frame))
