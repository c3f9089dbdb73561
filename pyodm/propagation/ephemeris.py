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

"""Tabulated ephemeris with Hermite interpolation"""

import logging
from typing import Sequence

import numpy as np
from scipy import interpolate

from ..core.data_structures import SpacecraftState, TimeStampedPV
from ..core.field_math import is_field, real
from .pv_provider import PVCoordinatesProvider

logger = logging.getLogger(__name__)


class TabulatedEphemeris(PVCoordinatesProvider):
    """Ephemeris interpolating tabulated positions and velocities

    Positions are interpolated with piecewise cubic Hermite polynomials
    matching both the tabulated positions and velocities; velocity and
    acceleration are the first and second derivatives of the interpolant.

    Parameters
    ----------
    frame : Frame
        Frame of the tabulated samples
    dates : array_like, shape (n,)
        Strictly increasing sample dates (s)
    positions : array_like, shape (n, 3)
        Sample positions (m)
    velocities : array_like, shape (n, 3)
        Sample velocities (m/s)

    Notes
    -----
    With a Gradient date the interpolated sample is Taylor-shifted by the
    (zero valued) derivative part of the date, so that the returned
    coordinates carry the partial derivatives with respect to the date.
    """

    def __init__(self, frame, dates: Sequence[float], positions, velocities):
        dates = np.asarray(dates, dtype=float)
        positions = np.asarray(positions, dtype=float)
        velocities = np.asarray(velocities, dtype=float)
        if dates.ndim != 1 or dates.size < 2:
            raise ValueError("At least two ephemeris samples are required")
        if positions.shape != (dates.size, 3) or velocities.shape != (dates.size, 3):
            raise ValueError("Positions and velocities must have shape (n, 3)")
        if np.any(np.diff(dates) <= 0.0):
            raise ValueError("Ephemeris dates must be strictly increasing")

        self.frame = frame
        self.min_date = dates[0]
        self.max_date = dates[-1]
        self._position = interpolate.CubicHermiteSpline(dates, positions, velocities, axis=0)
        self._velocity = self._position.derivative(1)
        self._acceleration = self._position.derivative(2)
        logger.debug(f"Tabulated ephemeris with {dates.size} samples "
                     f"over [{self.min_date}, {self.max_date}]")

    @classmethod
    def from_states(cls, states: Sequence[SpacecraftState]) -> "TabulatedEphemeris":
        """Build an ephemeris from spacecraft states sharing a frame"""
        if not states:
            raise ValueError("Empty states sequence")
        frame = states[0].frame
        if any(state.frame is not frame for state in states):
            raise ValueError("All states must be expressed in the same frame")
        return cls(frame,
                   [state.date for state in states],
                   [state.position for state in states],
                   [state.velocity for state in states])

    def get_pv_coordinates(self, date, frame) -> TimeStampedPV:
        t = real(date)
        if t < self.min_date or t > self.max_date:
            raise ValueError(f"Date {t} is outside ephemeris range "
                             f"[{self.min_date}, {self.max_date}]")
        pv = TimeStampedPV(t,
                           np.asarray(self._position(t), dtype=float),
                           np.asarray(self._velocity(t), dtype=float),
                           np.asarray(self._acceleration(t), dtype=float))
        if is_field(date):
            pv = pv.shifted_by(date - t)
        return self.frame.transform_pv_to(pv, frame)
