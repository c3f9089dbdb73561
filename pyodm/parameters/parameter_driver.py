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

"""Estimable parameter drivers.

A :class:`ParameterDriver` holds the current value of a model parameter
(clock offset, station displacement, Earth orientation correction, bias)
and whether it is selected for estimation. The validity of a driver can be
split into successive time spans, each span having its own name and value
and contributing its own column in the derivatives of a measurement.
"""

import logging
import math
from bisect import bisect_right
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..core.gradient import Gradient

logger = logging.getLogger(__name__)


@dataclass
class Span:
    """Validity span of a parameter driver

    Attributes
    ----------
    start : float
        Start date of the span (-inf for the first span)
    name : str
        Name of the span, used as key in the parameter index maps
    value : float
        Parameter value over the span
    """
    start: float
    name: str
    value: float


class ParameterDriver:
    """Driver for a single estimable parameter

    Parameters
    ----------
    name : str
        Parameter name
    reference_value : float
        Reference (initial) value
    scale : float
        Scaling factor used to normalise the parameter in estimation
    min_value : float
        Minimum allowed value
    max_value : float
        Maximum allowed value
    """

    def __init__(self, name: str, reference_value: float = 0.0, scale: float = 1.0,
                 min_value: float = -math.inf, max_value: float = math.inf):
        if scale == 0.0:
            raise ValueError(f"Parameter {name} cannot have a zero scale")
        if min_value > max_value:
            raise ValueError(f"Parameter {name}: min value {min_value} > max value {max_value}")
        self.name = name
        self.reference_value = reference_value
        self.scale = scale
        self.min_value = min_value
        self.max_value = max_value
        self.selected = False
        self.reference_date: Optional[float] = None
        self._spans: List[Span] = [Span(-math.inf, name, self._clamp(reference_value))]

    def _clamp(self, value: float) -> float:
        return max(self.min_value, min(self.max_value, float(value)))

    def is_selected(self) -> bool:
        return self.selected

    def set_selected(self, selected: bool):
        self.selected = selected

    def add_span_at_date(self, date: float) -> str:
        """Split the span containing ``date`` and return the new span name

        The new span starts at ``date`` and inherits the current value.
        """
        index = self._span_index(date)
        span = self._spans[index]
        if span.start == date:
            return span.name
        name = f"Span{self.name}{date:.3f}"
        self._spans.insert(index + 1, Span(date, name, span.value))
        logger.debug(f"Parameter {self.name}: new span {name} at date {date}")
        return name

    def _span_index(self, date: Optional[float]) -> int:
        if date is None:
            return 0
        starts = [span.start for span in self._spans]
        return bisect_right(starts, date) - 1

    @property
    def names_span_map(self) -> List[Span]:
        """Spans of the driver, ordered by start date"""
        return list(self._spans)

    def get_nb_of_values(self) -> int:
        return len(self._spans)

    def get_name_span(self, date: Optional[float] = None) -> str:
        return self._spans[self._span_index(date)].name

    def get_value(self, date: Optional[float] = None) -> float:
        """Value of the parameter at date (first span if date is None)"""
        return self._spans[self._span_index(date)].value

    def set_value(self, value: float, date: Optional[float] = None):
        """Set the value of the span active at date (all spans if date is None)"""
        if date is None:
            for span in self._spans:
                span.value = self._clamp(value)
        else:
            self._spans[self._span_index(date)].value = self._clamp(value)

    @property
    def value(self) -> float:
        return self.get_value()

    @value.setter
    def value(self, value: float):
        self.set_value(value)

    def get_normalized_value(self, date: Optional[float] = None) -> float:
        return (self.get_value(date) - self.reference_value) / self.scale

    def set_normalized_value(self, normalized: float, date: Optional[float] = None):
        self.set_value(self.reference_value + normalized * self.scale, date)

    def get_value_gradient(self, free_parameters: int, indices: Dict[str, int],
                           date: Optional[float] = None) -> Gradient:
        """Value of the parameter at date as a Gradient

        The result is a free variable if the name of the active span is
        present in ``indices``, and a constant otherwise.
        """
        span = self._spans[self._span_index(date)]
        index = indices.get(span.name)
        if index is None:
            return Gradient.constant(free_parameters, span.value)
        return Gradient.variable(free_parameters, index, span.value)

    def __repr__(self):
        return (f"ParameterDriver(name={self.name!r}, value={self.get_value()!r}, "
                f"selected={self.selected!r})")
