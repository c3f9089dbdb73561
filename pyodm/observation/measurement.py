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

"""Base class of orbit determination measurements.

A measurement holds an observed value with its standard deviation and
weight, the satellites and observers involved, and the parameter drivers
they bring. It evaluates its theoretical value from spacecraft states,
either alone (fast path) or with the partial derivatives with respect to
the states and the selected parameters.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..core.constants import STATE_DIMENSION
from ..core.data_structures import SpacecraftState
from ..core.field_math import as_gradient
from ..parameters.parameter_driver import ParameterDriver
from ..signal.model import SignalTravelTimeModel
from .common_parameters import get_coordinates
from .estimated_measurement import EstimatedMeasurement, EstimatedMeasurementBase
from .modifiers import EstimationModifier

logger = logging.getLogger(__name__)


class AbstractMeasurement(ABC):
    """Base class for measurements

    Parameters
    ----------
    date : float
        Measurement date (s)
    observed : float or array_like
        Observed value(s)
    sigma : float or array_like
        Theoretical standard deviation(s)
    base_weight : float or array_like
        Base weight(s)
    satellites : sequence of ObservableSatellite
        Satellites whose states are estimated, in the order of the states
        given to the evaluation methods
    two_way : bool
        True for two-way measurements
    signal_travel_time_model : SignalTravelTimeModel, optional
        Signal travel time settings
    """

    measurement_type = "Measurement"

    def __init__(self, date: float, observed, sigma, base_weight, satellites: Sequence,
                 two_way: bool = False,
                 signal_travel_time_model: Optional[SignalTravelTimeModel] = None):
        self.date = float(date)
        self._observed = np.atleast_1d(np.asarray(observed, dtype=float)).copy()
        dimension = self._observed.shape[0]
        self._sigma = np.broadcast_to(np.asarray(sigma, dtype=float), (dimension,)).copy()
        self._base_weight = np.broadcast_to(np.asarray(base_weight, dtype=float), (dimension,)).copy()
        self.satellites = list(satellites)
        self.two_way = two_way
        self.signal_travel_time_model = (signal_travel_time_model if signal_travel_time_model is not None
                                         else SignalTravelTimeModel())
        self.modifiers: List[EstimationModifier] = []
        self.enabled = True
        self._drivers: List[ParameterDriver] = []
        for satellite in self.satellites:
            self._add_parameters_drivers(satellite.parameters_drivers)

    def _add_parameters_drivers(self, drivers: Sequence[ParameterDriver]):
        for driver in drivers:
            if not any(driver is known for known in self._drivers):
                self._drivers.append(driver)

    @property
    def parameters_drivers(self) -> List[ParameterDriver]:
        return list(self._drivers)

    @property
    def dimension(self) -> int:
        return self._observed.shape[0]

    @property
    def observed_value(self) -> np.ndarray:
        return self._observed.copy()

    @observed_value.setter
    def observed_value(self, value):
        value = np.atleast_1d(np.asarray(value, dtype=float))
        if value.shape != self._observed.shape:
            raise ValueError(f"Observed value dimension {value.shape[0]} does not match "
                             f"measurement dimension {self.dimension}")
        self._observed = value.copy()

    @property
    def theoretical_standard_deviation(self) -> np.ndarray:
        return self._sigma.copy()

    @property
    def base_weight(self) -> np.ndarray:
        return self._base_weight.copy()

    def is_two_way(self) -> bool:
        return self.two_way

    def add_modifier(self, modifier: EstimationModifier):
        self.modifiers.append(modifier)
        self._add_parameters_drivers(modifier.parameters_drivers)

    def estimate_without_derivatives(self, iteration: int, evaluation: int,
                                     states: Sequence[SpacecraftState]) -> EstimatedMeasurementBase:
        """Theoretical value of the measurement, modifiers applied"""
        estimated = self._theoretical_evaluation_without_derivatives(iteration, evaluation, states)
        for modifier in self.modifiers:
            modifier.modify_without_derivatives(estimated)
        return estimated

    def estimate(self, iteration: int, evaluation: int,
                 states: Sequence[SpacecraftState]) -> EstimatedMeasurement:
        """Theoretical value and derivatives of the measurement, modifiers applied"""
        estimated = self._theoretical_evaluation(iteration, evaluation, states)
        for modifier in self.modifiers:
            modifier.modify(estimated)
        logger.debug(f"{self.measurement_type} at {self.date}: estimated "
                     f"{estimated.estimated_value}, observed {self._observed}")
        return estimated

    @abstractmethod
    def _theoretical_evaluation_without_derivatives(self, iteration: int, evaluation: int,
                                                    states: Sequence[SpacecraftState]
                                                    ) -> EstimatedMeasurementBase:
        """Value-only theoretical evaluation"""

    @abstractmethod
    def _theoretical_evaluation(self, iteration: int, evaluation: int,
                                states: Sequence[SpacecraftState]) -> EstimatedMeasurement:
        """Theoretical evaluation with derivatives"""

    @staticmethod
    def get_coordinates(state: SpacecraftState, first_derivative: int, free_parameters: int):
        return get_coordinates(state, first_derivative, free_parameters)

    def _fill_estimated(self, estimated: EstimatedMeasurement, values: Sequence,
                        indices: Dict[str, int], nb_states: int, free_parameters: int):
        """Store values and derivatives of the measurement components

        State derivatives are read positionally from the first
        ``6 * nb_states`` gradient components, parameter derivatives by
        looking up each selected driver span in ``indices``.
        """
        gradients = [as_gradient(value, free_parameters) for value in values]
        estimated.estimated_value = [gradient.value for gradient in gradients]
        derivatives = np.array([gradient.grad for gradient in gradients])

        for k in range(nb_states):
            estimated.set_state_derivatives(
                k, derivatives[:, STATE_DIMENSION * k:STATE_DIMENSION * (k + 1)])

        for driver in self._drivers:
            if not driver.is_selected():
                continue
            for span in driver.names_span_map:
                index = indices.get(span.name)
                if index is not None:
                    estimated.set_parameter_derivatives(driver, span.start, derivatives[:, index])

    def __repr__(self):
        return f"{type(self).__name__}(date={self.date}, observed={self._observed})"
