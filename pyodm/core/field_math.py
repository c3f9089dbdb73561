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


"""Elementary functions accepting plain values or gradients.

Geometric computations in this package are written once against these
helpers and evaluate either on floats and numpy vectors (value-only path)
or on :class:`Gradient` and :class:`GradientVector` (differentiated path).
"""

import math
from numbers import Real

import numpy as np

from .gradient import Gradient, GradientVector


def is_field(x) -> bool:
    """Check whether a value carries partial derivatives"""
    return isinstance(x, (Gradient, GradientVector))


def real(x):
    """Real part of a scalar or vector

    Returns a float for scalars and a numpy array for vectors, dropping
    any partial derivatives.
    """
    if isinstance(x, Gradient):
        return x.value
    if isinstance(x, GradientVector):
        return x.value.copy()
    if isinstance(x, np.ndarray):
        return np.asarray(x, dtype=float)
    return float(x)


def ulp(x) -> float:
    """Unit in the last place of the real part of ``x``"""
    return float(np.spacing(abs(real(x))))


def sqrt(x):
    if isinstance(x, Gradient):
        return x.sqrt()
    return math.sqrt(x)


def sin(x):
    if isinstance(x, Gradient):
        return x.sin()
    return math.sin(x)


def cos(x):
    if isinstance(x, Gradient):
        return x.cos()
    return math.cos(x)


def asin(x):
    if isinstance(x, Gradient):
        return x.asin()
    return math.asin(x)


def atan2(y, x):
    if isinstance(y, Gradient):
        return y.atan2(x)
    if isinstance(x, Gradient):
        return Gradient.constant(x.free_parameters, y).atan2(x)
    return math.atan2(y, x)


def components(v):
    """Split a vector into three scalars (floats or gradients)"""
    if isinstance(v, GradientVector):
        return v[0], v[1], v[2]
    return float(v[0]), float(v[1]), float(v[2])


def vector(x, y, z):
    """Assemble a vector, differentiated if any component is a Gradient"""
    if isinstance(x, Gradient) or isinstance(y, Gradient) or isinstance(z, Gradient):
        return GradientVector.of(x, y, z)
    return np.array([x, y, z], dtype=float)


def dot(a, b):
    if isinstance(a, GradientVector):
        return a.dot(b)
    if isinstance(b, GradientVector):
        return b.dot(a)
    return float(np.dot(a, b))


def cross(a, b):
    if isinstance(a, GradientVector):
        return a.cross(b)
    if isinstance(b, GradientVector):
        return -b.cross(a)
    return np.cross(a, b)


def norm(v):
    if isinstance(v, GradientVector):
        return v.norm()
    return float(np.linalg.norm(v))


def normalize(v):
    if isinstance(v, GradientVector):
        return v.normalize()
    return v / np.linalg.norm(v)


def distance(a, b):
    """Euclidean distance between two points"""
    return norm(a - b)


def apply_matrix(matrix: np.ndarray, v):
    """Multiply a vector by a constant 3x3 matrix"""
    if isinstance(v, GradientVector):
        return GradientVector(matrix @ v.value, matrix @ v.jacobian)
    return matrix @ v


def as_gradient(x, free_parameters: int) -> Gradient:
    """Promote a plain scalar to a constant Gradient"""
    if isinstance(x, Gradient):
        return x
    if isinstance(x, Real):
        return Gradient.constant(free_parameters, x)
    raise ValueError(f"Cannot convert {type(x).__name__} to Gradient")
