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

"""Quadratic clock models"""

from dataclasses import dataclass
from typing import Any, Dict

from ..core.field_math import real
from .parameter_driver import ParameterDriver


@dataclass(frozen=True)
class ClockOffset:
    """Clock offset and its time derivatives at a date

    Attributes
    ----------
    date : float or Gradient
        Date of the offset
    offset : float or Gradient
        Clock offset (s)
    rate : float or Gradient
        Clock rate (s/s)
    acceleration : float or Gradient
        Clock acceleration (s/s^2)
    """
    date: Any
    offset: Any
    rate: Any = 0.0
    acceleration: Any = 0.0

    def add(self, other: "ClockOffset") -> "ClockOffset":
        return ClockOffset(self.date, self.offset + other.offset,
                           self.rate + other.rate,
                           self.acceleration + other.acceleration)

    def subtract(self, other: "ClockOffset") -> "ClockOffset":
        return ClockOffset(self.date, self.offset - other.offset,
                           self.rate - other.rate,
                           self.acceleration - other.acceleration)


class QuadraticClockModel:
    """Clock offset modelled as a second order polynomial

    offset(t) = a0 + a1 * dt + a2 * dt^2, with dt = t - t_ref

    The reference date is the reference date of the offset driver, or the
    evaluation date itself when the driver has none.

    Parameters
    ----------
    a0 : ParameterDriver
        Constant term driver (s)
    a1 : ParameterDriver
        Linear term driver (s/s)
    a2 : ParameterDriver
        Quadratic term driver (s/s^2)
    """

    def __init__(self, a0: ParameterDriver, a1: ParameterDriver, a2: ParameterDriver):
        self.a0 = a0
        self.a1 = a1
        self.a2 = a2

    def _dt(self, date) -> Any:
        reference = self.a0.reference_date
        return 0.0 * date if reference is None else date - reference

    def get_offset(self, date: float) -> ClockOffset:
        dt = self._dt(date)
        c0 = self.a0.get_value(date)
        c1 = self.a1.get_value(date)
        c2 = self.a2.get_value(date)
        return ClockOffset(date, (c2 * dt + c1) * dt + c0, 2 * c2 * dt + c1, 2 * c2)

    def to_gradient_model(self, free_parameters: int, indices: Dict[str, int],
                          date: float) -> "QuadraticFieldClockModel":
        """Differentiated clock model with coefficients taken at ``date``"""
        date = real(date)
        return QuadraticFieldClockModel(
            self.a0.get_value_gradient(free_parameters, indices, date),
            self.a1.get_value_gradient(free_parameters, indices, date),
            self.a2.get_value_gradient(free_parameters, indices, date),
            self.a0.reference_date,
        )


class QuadraticFieldClockModel:
    """Quadratic clock model with differentiated coefficients"""

    def __init__(self, a0, a1, a2, reference_date=None):
        self.a0 = a0
        self.a1 = a1
        self.a2 = a2
        self.reference_date = reference_date

    def get_offset(self, date) -> ClockOffset:
        dt = 0.0 * date if self.reference_date is None else date - self.reference_date
        return ClockOffset(date,
                           (self.a2 * dt + self.a1) * dt + self.a0,
                           self.a2 * dt * 2 + self.a1,
                           self.a2 * 2)
