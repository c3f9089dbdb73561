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


"""Reference frames, rotations and body shapes

Frames form a tree rooted at an inertial frame; every transform accepts
plain or differentiated dates and vectors.
"""

from .frames import EarthFixedFrame, FixedRotationFrame, Frame, InertialFrame
from .geodesy import GeodeticPoint, OneAxisEllipsoid, TopocentricFrame, ecef2llh, llh2ecef
from .rotation import rotate_x, rotate_y, rotate_z

__all__ = [
    'Frame', 'InertialFrame', 'FixedRotationFrame', 'EarthFixedFrame',
    'GeodeticPoint', 'OneAxisEllipsoid', 'TopocentricFrame', 'ecef2llh', 'llh2ecef',
    'rotate_x', 'rotate_y', 'rotate_z'
]
