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

"""Position/velocity providers"""

from abc import ABC, abstractmethod

from ..core.data_structures import SpacecraftState, TimeStampedPV


class PVCoordinatesProvider(ABC):
    """Anything able to give its position and velocity at a date in a frame

    Dates may be plain floats or Gradients; with a Gradient date the
    returned coordinates carry partial derivatives.
    """

    @abstractmethod
    def get_pv_coordinates(self, date, frame) -> TimeStampedPV:
        """Position/velocity/acceleration at ``date`` in ``frame``"""

    def get_position(self, date, frame):
        return self.get_pv_coordinates(date, frame).position


class AbsolutePVCoordinates(PVCoordinatesProvider):
    """Provider shifting a single PV sample with a Taylor expansion

    Parameters
    ----------
    frame : Frame
        Frame of the sample
    pv : TimeStampedPV
        Sample, plain or differentiated
    """

    def __init__(self, frame, pv: TimeStampedPV):
        self.frame = frame
        self.pv = pv

    @classmethod
    def from_state(cls, state: SpacecraftState) -> "AbsolutePVCoordinates":
        return cls(state.frame, state.pv)

    def get_pv_coordinates(self, date, frame) -> TimeStampedPV:
        shifted = self.pv.shifted_by(date - self.pv.date)
        return self.frame.transform_pv_to(shifted, frame)
