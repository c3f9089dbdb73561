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


"""Angle normalization helpers"""

import numpy as np
from numba import njit

TWO_PI = 2 * np.pi


@njit(cache=True, fastmath=True)
def normalize_angle(angle, center):
    """
    Normalize an angle in a 2π wide interval around a center value.

    Parameters
    ----------
    angle : float
        Angle to normalize (rad)
    center : float
        Center of the desired interval (rad)

    Returns
    -------
    float
        Angle in [center - π, center + π) equal to ``angle`` modulo 2π
    """
    return angle - TWO_PI * np.floor((angle + np.pi - center) / TWO_PI)


@njit(cache=True, fastmath=True)
def wrap_to_2pi(angle):
    """
    Wrap an angle to the [0, 2π) range.

    Parameters
    ----------
    angle : float
        Angle in radians

    Returns
    -------
    float
        Normalized angle in radians
    """
    return normalize_angle(angle, np.pi)


@njit(cache=True, fastmath=True)
def wrap_to_pi(angle):
    """Wrap an angle to the [-π, π) range."""
    return normalize_angle(angle, 0.0)
