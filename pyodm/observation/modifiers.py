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

"""Modifiers applied to theoretical measurements"""

import math
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import numpy as np

from ..parameters.parameter_driver import ParameterDriver


class EstimationModifier(ABC):
    """Correction applied to a theoretical measurement after evaluation"""

    @property
    def parameters_drivers(self) -> List[ParameterDriver]:
        return []

    @abstractmethod
    def modify_without_derivatives(self, estimated):
        """Apply the correction to a value-only estimate"""

    @abstractmethod
    def modify(self, estimated):
        """Apply the correction to an estimate with derivatives"""


class Bias(EstimationModifier):
    """Constant estimable bias added to each measurement component

    Parameters
    ----------
    names : sequence of str
        Bias parameter names, one per measurement component
    biases : sequence of float
        Initial bias values
    scales : sequence of float, optional
        Scaling factors of the bias parameters
    min_values, max_values : sequence of float, optional
        Allowed ranges of the bias parameters
    """

    def __init__(self, names: Sequence[str], biases: Sequence[float],
                 scales: Optional[Sequence[float]] = None,
                 min_values: Optional[Sequence[float]] = None,
                 max_values: Optional[Sequence[float]] = None):
        n = len(names)
        if len(biases) != n:
            raise ValueError(f"Expected {n} bias values, got {len(biases)}")
        scales = scales if scales is not None else [1.0] * n
        min_values = min_values if min_values is not None else [-math.inf] * n
        max_values = max_values if max_values is not None else [math.inf] * n
        self._drivers = [ParameterDriver(names[i], biases[i], scales[i], min_values[i], max_values[i])
                         for i in range(n)]

    @property
    def parameters_drivers(self) -> List[ParameterDriver]:
        return list(self._drivers)

    def _check_dimension(self, estimated):
        if len(self._drivers) != estimated.observed_measurement.dimension:
            raise ValueError(f"Bias dimension {len(self._drivers)} does not match measurement "
                             f"dimension {estimated.observed_measurement.dimension}")

    def modify_without_derivatives(self, estimated):
        self._check_dimension(estimated)
        date = estimated.date
        bias = np.array([driver.get_value(date) for driver in self._drivers])
        estimated.estimated_value = estimated.estimated_value + bias

    def modify(self, estimated):
        self.modify_without_derivatives(estimated)
        date = estimated.date
        for i, driver in enumerate(self._drivers):
            if driver.is_selected():
                derivatives = np.zeros(len(self._drivers))
                derivatives[i] = 1.0
                estimated.set_parameter_derivatives(driver, date, derivatives)
