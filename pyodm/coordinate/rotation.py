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


"""Elementary rotations of plain or differentiated vectors"""

from ..core.field_math import components, cos, sin, vector


def rotate_x(v, angle):
    """Rotate a vector by ``angle`` (rad) about the x axis (right hand rule)"""
    x, y, z = components(v)
    c, s = cos(angle), sin(angle)
    return vector(x, c * y - s * z, s * y + c * z)


def rotate_y(v, angle):
    """Rotate a vector by ``angle`` (rad) about the y axis (right hand rule)"""
    x, y, z = components(v)
    c, s = cos(angle), sin(angle)
    return vector(c * x + s * z, y, -s * x + c * z)


def rotate_z(v, angle):
    """Rotate a vector by ``angle`` (rad) about the z axis (right hand rule)"""
    x, y, z = components(v)
    c, s = cos(angle), sin(angle)
    return vector(c * x - s * y, s * x + c * y, z)
