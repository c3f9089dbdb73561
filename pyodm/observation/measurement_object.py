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

"""Objects involved in measurements: observed satellites and observers"""

from typing import Dict, List, Optional

from ..core.constants import (
    ACCELERATION_SUFFIX,
    CLOCK_OFFSET_SCALE,
    CLOCK_SUFFIX,
    DRIFT_SUFFIX,
    OFFSET_SUFFIX,
)
from ..core.data_structures import SpacecraftState, TimeStampedPV
from ..parameters.clock import QuadraticClockModel, QuadraticFieldClockModel
from ..parameters.parameter_driver import ParameterDriver
from ..propagation.pv_provider import AbsolutePVCoordinates, PVCoordinatesProvider


def create_clock_model(name: str) -> QuadraticClockModel:
    """Quadratic clock model with drivers named after ``name``"""
    prefix = name + CLOCK_SUFFIX
    return QuadraticClockModel(
        ParameterDriver(prefix + OFFSET_SUFFIX, 0.0, CLOCK_OFFSET_SCALE),
        ParameterDriver(prefix + DRIFT_SUFFIX, 0.0, CLOCK_OFFSET_SCALE),
        ParameterDriver(prefix + ACCELERATION_SUFFIX, 0.0, CLOCK_OFFSET_SCALE),
    )


class MeasurementObject:
    """Named object with a clock and estimable parameters

    Parameters
    ----------
    name : str
        Object name, used as prefix of its parameter drivers
    clock_model : QuadraticClockModel, optional
        Clock model, a zero quadratic model with drivers
        ``<name>-clock-offset``, ``<name>-clock-drift`` and
        ``<name>-clock-acceleration`` is created if omitted
    """

    def __init__(self, name: str, clock_model: Optional[QuadraticClockModel] = None):
        self.name = name
        self.quadratic_clock_model = clock_model if clock_model is not None else create_clock_model(name)
        self._drivers: List[ParameterDriver] = []
        self._add_parameter_driver(self.clock_offset_driver)
        self._add_parameter_driver(self.clock_drift_driver)
        self._add_parameter_driver(self.clock_acceleration_driver)

    def _add_parameter_driver(self, driver: ParameterDriver) -> ParameterDriver:
        self._drivers.append(driver)
        return driver

    @property
    def parameters_drivers(self) -> List[ParameterDriver]:
        return list(self._drivers)

    @property
    def clock_offset_driver(self) -> ParameterDriver:
        return self.quadratic_clock_model.a0

    @property
    def clock_drift_driver(self) -> ParameterDriver:
        return self.quadratic_clock_model.a1

    @property
    def clock_acceleration_driver(self) -> ParameterDriver:
        return self.quadratic_clock_model.a2

    def get_quadratic_field_clock_model(self, free_parameters: int, indices: Dict[str, int],
                                        date: float) -> QuadraticFieldClockModel:
        return self.quadratic_clock_model.to_gradient_model(free_parameters, indices, date)

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class ObservableSatellite(MeasurementObject):
    """Satellite whose state is estimated from the measurements

    Parameters
    ----------
    propagator_index : int
        Index of the satellite in the list of states given to measurements
    name : str, optional
        Satellite name, ``sat-<index>`` by default
    """

    def __init__(self, propagator_index: int, name: Optional[str] = None):
        super().__init__(name if name is not None else f"sat-{propagator_index}")
        self.propagator_index = propagator_index

    @staticmethod
    def extract_pv_coordinates_provider(state: SpacecraftState,
                                        pv: TimeStampedPV) -> PVCoordinatesProvider:
        """Provider shifting ``pv`` (plain or differentiated) in the state's frame"""
        return AbsolutePVCoordinates(state.frame, pv)
