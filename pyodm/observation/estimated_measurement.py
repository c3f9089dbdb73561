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

"""Theoretical values of measurements"""

from typing import Dict, List, Optional, Sequence

import numpy as np

from ..core.data_structures import MeasurementStatus, SpacecraftState, TimeStampedPV
from ..parameters.parameter_driver import ParameterDriver


class EstimatedMeasurementBase:
    """Theoretical value of a measurement, without derivatives

    Parameters
    ----------
    observed_measurement : AbstractMeasurement
        Measurement the estimate refers to
    iteration : int
        Estimator iteration number
    count : int
        Evaluation counter
    states : sequence of SpacecraftState
        States of the spacecraft at signal transit
    participants : sequence of TimeStampedPV
        Coordinates of the participants along the signal path, in
        causal order
    """

    def __init__(self, observed_measurement, iteration: int, count: int,
                 states: Sequence[SpacecraftState], participants: Sequence[TimeStampedPV]):
        self.observed_measurement = observed_measurement
        self.iteration = iteration
        self.count = count
        self.states = list(states)
        self.participants = [participant.to_plain() for participant in participants]
        self._estimated_value = np.zeros(observed_measurement.dimension)
        self.status = MeasurementStatus.PROCESSED

    @property
    def date(self) -> float:
        return self.observed_measurement.date

    @property
    def observed_value(self) -> np.ndarray:
        return self.observed_measurement.observed_value

    @property
    def estimated_value(self) -> np.ndarray:
        return self._estimated_value.copy()

    @estimated_value.setter
    def estimated_value(self, value):
        value = np.atleast_1d(np.asarray(value, dtype=float))
        if value.shape != self._estimated_value.shape:
            raise ValueError(f"Estimated value dimension {value.shape[0]} does not match "
                             f"measurement dimension {self._estimated_value.shape[0]}")
        self._estimated_value = value.copy()

    @property
    def residuals(self) -> np.ndarray:
        """Observed minus estimated value"""
        return self.observed_value - self._estimated_value

    def get_time_offset(self) -> float:
        """Time offset from the first participant to the measurement date"""
        return self.date - self.participants[0].date

    def __repr__(self):
        return (f"{type(self).__name__}({type(self.observed_measurement).__name__}, "
                f"date={self.date}, value={self._estimated_value})")


class EstimatedMeasurement(EstimatedMeasurementBase):
    """Theoretical value of a measurement with its partial derivatives

    State derivatives are stored per state as a ``dimension x 6`` array
    (position then velocity, in the state's inertial frame). Parameter
    derivatives are stored per parameter span name.
    """

    def __init__(self, observed_measurement, iteration: int, count: int,
                 states: Sequence[SpacecraftState], participants: Sequence[TimeStampedPV]):
        super().__init__(observed_measurement, iteration, count, states, participants)
        dimension = observed_measurement.dimension
        self._state_derivatives: List[np.ndarray] = [np.zeros((dimension, 6)) for _ in states]
        self._parameter_derivatives: Dict[str, np.ndarray] = {}

    def get_state_derivatives(self, index: int) -> np.ndarray:
        return self._state_derivatives[index].copy()

    def set_state_derivatives(self, index: int, derivatives):
        derivatives = np.asarray(derivatives, dtype=float).reshape(self._state_derivatives[index].shape)
        self._state_derivatives[index] = derivatives.copy()

    def get_derivatives_drivers_names(self) -> List[str]:
        return list(self._parameter_derivatives)

    def set_parameter_derivatives(self, driver: ParameterDriver, date: Optional[float],
                                  derivatives):
        name = driver.get_name_span(date)
        self._parameter_derivatives[name] = np.atleast_1d(np.asarray(derivatives, dtype=float)).copy()

    def get_parameter_derivatives(self, driver: ParameterDriver,
                                  date: Optional[float] = None) -> np.ndarray:
        """Derivatives with respect to the span of ``driver`` active at date

        Raises
        ------
        ValueError
            If the derivatives of this span were not computed (parameter not
            selected or not involved in the measurement)
        """
        name = driver.get_name_span(date)
        try:
            return self._parameter_derivatives[name].copy()
        except KeyError:
            raise ValueError(f"No derivatives computed for parameter {name}") from None
