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


"""Forward-mode automatic differentiation with first-order gradients.

A :class:`Gradient` carries a real value together with the partial
derivatives of that value with respect to a fixed set of free parameters.
A :class:`GradientVector` is the three-dimensional counterpart holding a
value vector and its ``3 x n`` Jacobian.

Both types interoperate with plain floats and numpy vectors, which are
treated as constants, so that geometric routines can be written once and
evaluated either on plain values or on gradients.

Examples
--------
>>> x = Gradient.variable(2, 0, 3.0)
>>> y = Gradient.variable(2, 1, 4.0)
>>> r = (x * x + y * y).sqrt()
>>> r.value, r.grad
(5.0, array([0.6, 0.8]))
"""

import math
from numbers import Real

import numpy as np


class Gradient:
    """Scalar value with first-order partial derivatives

    Parameters
    ----------
    value : float
        Value of the function
    grad : array_like
        Partial derivatives with respect to the free parameters
    """

    __slots__ = ("value", "grad")

    # make numpy defer to the reflected operators defined here
    __array_ufunc__ = None

    def __init__(self, value, grad):
        self.value = float(value)
        self.grad = np.asarray(grad, dtype=float)

    @classmethod
    def constant(cls, free_parameters: int, value: float) -> "Gradient":
        """Create a gradient with all partial derivatives set to zero"""
        return cls(value, np.zeros(free_parameters))

    @classmethod
    def variable(cls, free_parameters: int, index: int, value: float) -> "Gradient":
        """Create a gradient representing the free parameter at ``index``"""
        grad = np.zeros(free_parameters)
        grad[index] = 1.0
        return cls(value, grad)

    @property
    def free_parameters(self) -> int:
        return self.grad.shape[0]

    def get_gradient(self) -> np.ndarray:
        return self.grad.copy()

    def get_partial_derivative(self, index: int) -> float:
        return float(self.grad[index])

    def _check(self, other: "Gradient"):
        if other.grad.shape != self.grad.shape:
            raise ValueError(
                f"Gradient dimension mismatch: {self.free_parameters} != {other.free_parameters}")

    def __add__(self, other):
        if isinstance(other, Gradient):
            self._check(other)
            return Gradient(self.value + other.value, self.grad + other.grad)
        if isinstance(other, Real):
            return Gradient(self.value + other, self.grad)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Gradient):
            self._check(other)
            return Gradient(self.value - other.value, self.grad - other.grad)
        if isinstance(other, Real):
            return Gradient(self.value - other, self.grad)
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, Real):
            return Gradient(other - self.value, -self.grad)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Gradient):
            self._check(other)
            return Gradient(self.value * other.value,
                            self.grad * other.value + other.grad * self.value)
        if isinstance(other, Real):
            return Gradient(self.value * other, self.grad * other)
        if isinstance(other, np.ndarray) and other.shape == (3,):
            vector = np.asarray(other, dtype=float)
            return GradientVector(vector * self.value, np.outer(vector, self.grad))
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Gradient):
            self._check(other)
            inv = 1.0 / other.value
            value = self.value * inv
            return Gradient(value, (self.grad - other.grad * value) * inv)
        if isinstance(other, Real):
            return Gradient(self.value / other, self.grad / other)
        return NotImplemented

    def __rtruediv__(self, other):
        if isinstance(other, Real):
            value = other / self.value
            return Gradient(value, self.grad * (-value / self.value))
        return NotImplemented

    def __pow__(self, exponent):
        if not isinstance(exponent, Real):
            return NotImplemented
        if exponent == 2:
            return self.square()
        return Gradient(self.value ** exponent,
                        self.grad * (exponent * self.value ** (exponent - 1)))

    def __neg__(self):
        return Gradient(-self.value, -self.grad)

    def __pos__(self):
        return self

    def __abs__(self):
        return -self if self.value < 0.0 else self

    def square(self) -> "Gradient":
        return Gradient(self.value * self.value, self.grad * (2.0 * self.value))

    def sqrt(self) -> "Gradient":
        root = math.sqrt(self.value)
        return Gradient(root, self.grad * (0.5 / root))

    def sin(self) -> "Gradient":
        return Gradient(math.sin(self.value), self.grad * math.cos(self.value))

    def cos(self) -> "Gradient":
        return Gradient(math.cos(self.value), self.grad * -math.sin(self.value))

    def asin(self) -> "Gradient":
        return Gradient(math.asin(self.value),
                        self.grad / math.sqrt(1.0 - self.value * self.value))

    def atan2(self, x) -> "Gradient":
        """Two-argument arc tangent with ``self`` as the ordinate"""
        if isinstance(x, Gradient):
            self._check(x)
            x_value, x_grad = x.value, x.grad
        else:
            x_value, x_grad = float(x), 0.0
        r2 = x_value * x_value + self.value * self.value
        return Gradient(math.atan2(self.value, x_value),
                        (self.grad * x_value - x_grad * self.value) / r2)

    def __repr__(self):
        return f"Gradient(value={self.value!r}, grad={self.grad!r})"


class GradientVector:
    """Three-dimensional vector with first-order partial derivatives

    Parameters
    ----------
    value : array_like, shape (3,)
        Vector value
    jacobian : array_like, shape (3, n)
        Partial derivatives of each component with respect to the
        free parameters
    """

    __slots__ = ("value", "jacobian")

    __array_ufunc__ = None

    def __init__(self, value, jacobian):
        self.value = np.asarray(value, dtype=float)
        self.jacobian = np.asarray(jacobian, dtype=float)

    @classmethod
    def constant(cls, free_parameters: int, vector) -> "GradientVector":
        return cls(vector, np.zeros((3, free_parameters)))

    @classmethod
    def variable(cls, free_parameters: int, first_index: int, vector) -> "GradientVector":
        """Create a vector whose components are the free parameters
        ``first_index``, ``first_index + 1`` and ``first_index + 2``"""
        jacobian = np.zeros((3, free_parameters))
        jacobian[0, first_index] = 1.0
        jacobian[1, first_index + 1] = 1.0
        jacobian[2, first_index + 2] = 1.0
        return cls(vector, jacobian)

    @classmethod
    def of(cls, x, y, z) -> "GradientVector":
        """Build a vector from three components, at least one being a Gradient"""
        components = (x, y, z)
        n = next(c.free_parameters for c in components if isinstance(c, Gradient))
        value = np.empty(3)
        jacobian = np.zeros((3, n))
        for i, c in enumerate(components):
            if isinstance(c, Gradient):
                if c.free_parameters != n:
                    raise ValueError(
                        f"Gradient dimension mismatch: {n} != {c.free_parameters}")
                value[i] = c.value
                jacobian[i] = c.grad
            else:
                value[i] = c
        return cls(value, jacobian)

    @property
    def free_parameters(self) -> int:
        return self.jacobian.shape[1]

    @property
    def x(self) -> Gradient:
        return self[0]

    @property
    def y(self) -> Gradient:
        return self[1]

    @property
    def z(self) -> Gradient:
        return self[2]

    def __getitem__(self, index) -> Gradient:
        return Gradient(self.value[index], self.jacobian[index])

    def __len__(self):
        return 3

    def _check(self, other):
        if other.free_parameters != self.free_parameters:
            raise ValueError(
                f"Gradient dimension mismatch: {self.free_parameters} != {other.free_parameters}")

    def __add__(self, other):
        if isinstance(other, GradientVector):
            self._check(other)
            return GradientVector(self.value + other.value, self.jacobian + other.jacobian)
        if isinstance(other, np.ndarray):
            return GradientVector(self.value + other, self.jacobian)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, GradientVector):
            self._check(other)
            return GradientVector(self.value - other.value, self.jacobian - other.jacobian)
        if isinstance(other, np.ndarray):
            return GradientVector(self.value - other, self.jacobian)
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, np.ndarray):
            return GradientVector(other - self.value, -self.jacobian)
        return NotImplemented

    def __neg__(self):
        return GradientVector(-self.value, -self.jacobian)

    def __mul__(self, other):
        if isinstance(other, Gradient):
            self._check(other)
            return GradientVector(self.value * other.value,
                                  self.jacobian * other.value + np.outer(self.value, other.grad))
        if isinstance(other, Real):
            return GradientVector(self.value * other, self.jacobian * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Gradient):
            return self * (1.0 / other)
        if isinstance(other, Real):
            return GradientVector(self.value / other, self.jacobian / other)
        return NotImplemented

    def dot(self, other) -> Gradient:
        if isinstance(other, GradientVector):
            self._check(other)
            return Gradient(float(np.dot(self.value, other.value)),
                            other.value @ self.jacobian + self.value @ other.jacobian)
        other = np.asarray(other, dtype=float)
        return Gradient(float(np.dot(self.value, other)), other @ self.jacobian)

    def cross(self, other) -> "GradientVector":
        if isinstance(other, GradientVector):
            self._check(other)
            b_value, b_jacobian = other.value, other.jacobian
        else:
            b_value = np.asarray(other, dtype=float)
            b_jacobian = np.zeros_like(self.jacobian)
        a, b = self.value, b_value
        ja, jb = self.jacobian, b_jacobian
        value = np.cross(a, b)
        jacobian = np.array([
            a[1] * jb[2] + ja[1] * b[2] - a[2] * jb[1] - ja[2] * b[1],
            a[2] * jb[0] + ja[2] * b[0] - a[0] * jb[2] - ja[0] * b[2],
            a[0] * jb[1] + ja[0] * b[1] - a[1] * jb[0] - ja[1] * b[0],
        ])
        return GradientVector(value, jacobian)

    def norm(self) -> Gradient:
        return self.dot(self).sqrt()

    def normalize(self) -> "GradientVector":
        return self / self.norm()

    def to_array(self) -> np.ndarray:
        return self.value.copy()

    def __repr__(self):
        return f"GradientVector(value={self.value!r}, jacobian={self.jacobian!r})"
