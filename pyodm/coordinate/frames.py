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

"""Reference frames tree.

Frames are organised as a tree whose root is an inertial frame. Each child
frame knows how to rotate vectors to and from its parent and its angular
velocity with respect to the parent; transforms between any two frames go
up to the root and back down. All frames share the same origin (the
Earth's centre of mass).

Dates may be plain floats or Gradients, in which case the transformed
vectors carry the partial derivatives of the frame orientation.
"""

from typing import List, Optional

import numpy as np

from ..core.constants import OMGE
from ..core.data_structures import TimeStampedPV
from ..core.field_math import apply_matrix, cross, vector
from .rotation import rotate_z


class Frame:
    """Base reference frame

    Parameters
    ----------
    name : str
        Frame name
    parent : Frame, optional
        Parent frame, None for the root frame
    pseudo_inertial : bool
        True if the frame can be used for inertial computations
    """

    def __init__(self, name: str, parent: Optional["Frame"] = None,
                 pseudo_inertial: bool = True):
        self.name = name
        self.parent = parent
        self.pseudo_inertial = pseudo_inertial

    def is_pseudo_inertial(self) -> bool:
        return self.pseudo_inertial

    def _vector_to_parent(self, v, date):
        return v

    def _vector_from_parent(self, v, date):
        return v

    def _angular_velocity(self, date):
        """Rotation rate of this frame with respect to its parent, in parent axes"""
        return np.zeros(3)

    def _path_to_root(self) -> List["Frame"]:
        path = []
        frame = self
        while frame.parent is not None:
            path.append(frame)
            frame = frame.parent
        path.append(frame)
        return path

    def _check_common_root(self, destination: "Frame"):
        if self._path_to_root()[-1] is not destination._path_to_root()[-1]:
            raise ValueError(f"Frames {self.name} and {destination.name} share no common root")

    def transform_vector_to(self, v, date, destination: "Frame"):
        """Rotate a free vector from this frame to ``destination``"""
        if destination is self:
            return v
        self._check_common_root(destination)
        for frame in self._path_to_root()[:-1]:
            v = frame._vector_to_parent(v, date)
        for frame in reversed(destination._path_to_root()[:-1]):
            v = frame._vector_from_parent(v, date)
        return v

    def transform_position_to(self, position, date, destination: "Frame"):
        """Transform a position from this frame to ``destination``"""
        # all frames share the same origin
        return self.transform_vector_to(position, date, destination)

    def transform_pv_to(self, pv: TimeStampedPV, destination: "Frame") -> TimeStampedPV:
        """Transform position, velocity and acceleration to ``destination``"""
        if destination is self:
            return pv
        self._check_common_root(destination)
        for frame in self._path_to_root()[:-1]:
            pv = frame._pv_to_parent(pv)
        for frame in reversed(destination._path_to_root()[:-1]):
            pv = frame._pv_from_parent(pv)
        return pv

    def _pv_to_parent(self, pv: TimeStampedPV) -> TimeStampedPV:
        date = pv.date
        omega = self._angular_velocity(date)
        p = self._vector_to_parent(pv.position, date)
        rv = self._vector_to_parent(pv.velocity, date)
        ra = self._vector_to_parent(pv.acceleration, date)
        v = rv + cross(omega, p)
        a = ra + 2.0 * cross(omega, rv) + cross(omega, cross(omega, p))
        return TimeStampedPV(date, p, v, a)

    def _pv_from_parent(self, pv: TimeStampedPV) -> TimeStampedPV:
        date = pv.date
        omega = self._angular_velocity(date)
        p = pv.position
        rv = pv.velocity - cross(omega, p)
        ra = pv.acceleration - 2.0 * cross(omega, rv) - cross(omega, cross(omega, p))
        return TimeStampedPV(date,
                             self._vector_from_parent(p, date),
                             self._vector_from_parent(rv, date),
                             self._vector_from_parent(ra, date))

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class InertialFrame(Frame):
    """Root inertial frame (GCRF-like)"""

    def __init__(self, name: str = "GCRF"):
        super().__init__(name, None, True)


class FixedRotationFrame(Frame):
    """Frame obtained from its parent by a constant rotation

    Parameters
    ----------
    name : str
        Frame name
    parent : Frame
        Parent frame
    rotation : np.ndarray
        3x3 rotation matrix transforming vectors from this frame to the parent
    """

    def __init__(self, name: str, parent: Frame, rotation: np.ndarray):
        super().__init__(name, parent, parent.is_pseudo_inertial())
        rotation = np.asarray(rotation, dtype=float)
        if rotation.shape != (3, 3) or not np.allclose(rotation @ rotation.T, np.eye(3), atol=1e-12):
            raise ValueError("Frame rotation must be a 3x3 orthonormal matrix")
        self.rotation = rotation

    def _vector_to_parent(self, v, date):
        return apply_matrix(self.rotation, v)

    def _vector_from_parent(self, v, date):
        return apply_matrix(self.rotation.T, v)


class EarthFixedFrame(Frame):
    """Earth-fixed frame rotating uniformly about the parent z axis

    The rotation angle from the parent frame is
    ``theta(t) = era0 + rotation_rate * t``.

    Parameters
    ----------
    name : str
        Frame name
    parent : Frame
        Inertial parent frame
    rotation_rate : float
        Earth rotation rate (rad/s)
    era0 : float
        Rotation angle at date 0 (rad)
    """

    def __init__(self, name: str = "ITRF", parent: Optional[Frame] = None,
                 rotation_rate: float = OMGE, era0: float = 0.0):
        super().__init__(name, parent if parent is not None else InertialFrame(), False)
        self.rotation_rate = rotation_rate
        self.era0 = era0

    def rotation_angle(self, date):
        """Rotation angle of the frame at date, plain or differentiated"""
        return self.rotation_rate * date + self.era0

    def _vector_to_parent(self, v, date):
        return rotate_z(v, self.rotation_angle(date))

    def _vector_from_parent(self, v, date):
        return rotate_z(v, -self.rotation_angle(date))

    def _angular_velocity(self, date):
        return vector(0.0, 0.0, self.rotation_rate)
