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


"""Core data structures for orbit determination measurements"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from .field_math import real


def _zero_vector():
    return np.zeros(3)


@dataclass(frozen=True, eq=False)
class TimeStampedPV:
    """Position, velocity and acceleration at a given date.

    Components are either plain (float date, numpy vectors) or
    differentiated (Gradient date, GradientVector components); the same
    shifting code serves both.

    Attributes
    ----------
    date : float or Gradient
        Date in seconds since the reference epoch
    position : np.ndarray or GradientVector
        Position (m)
    velocity : np.ndarray or GradientVector
        Velocity (m/s)
    acceleration : np.ndarray or GradientVector
        Acceleration (m/s^2)
    """
    date: Any
    position: Any
    velocity: Any
    acceleration: Any = field(default_factory=_zero_vector)

    def shifted_by(self, dt) -> "TimeStampedPV":
        """Shift by a time interval using a second order Taylor expansion

        Not a replacement for proper propagation, only valid for small
        shifts such as signal travel times.
        """
        return TimeStampedPV(
            self.date + dt,
            self.position + self.velocity * dt + self.acceleration * (0.5 * dt * dt),
            self.velocity + self.acceleration * dt,
            self.acceleration,
        )

    def to_plain(self) -> "TimeStampedPV":
        """Drop the partial derivatives"""
        return TimeStampedPV(real(self.date), real(self.position),
                             real(self.velocity), real(self.acceleration))


@dataclass(frozen=True, eq=False)
class SpacecraftState:
    """Spacecraft position and velocity in a frame at a date

    Attributes
    ----------
    pv : TimeStampedPV
        Plain position/velocity/acceleration, the date of the state being
        ``pv.date``
    frame : Frame
        Frame in which ``pv`` is expressed
    """
    pv: TimeStampedPV
    frame: Any

    @property
    def date(self) -> float:
        return self.pv.date

    @property
    def position(self) -> np.ndarray:
        return self.pv.position

    @property
    def velocity(self) -> np.ndarray:
        return self.pv.velocity

    def get_pv_coordinates(self, frame=None) -> TimeStampedPV:
        if frame is None or frame is self.frame:
            return self.pv
        return self.frame.transform_pv_to(self.pv, frame)

    def shifted_by(self, dt: float) -> "SpacecraftState":
        return SpacecraftState(self.pv.shifted_by(dt), self.frame)


class ObserverType(Enum):
    """Kind of measurement observer"""
    GROUND = 1
    SATELLITE = 2


class MeasurementStatus(Enum):
    """Status of an estimated measurement"""
    PROCESSED = 0
    REJECTED = 1
