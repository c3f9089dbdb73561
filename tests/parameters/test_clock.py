#!/usr/bin/env python3
"""Test suite for quadratic clock models"""

import unittest
import numpy as np

from pyodm.core.gradient import Gradient
from pyodm.parameters.clock import ClockOffset, QuadraticClockModel
from pyodm.parameters.parameter_driver import ParameterDriver


class TestQuadraticClockModel(unittest.TestCase):
    """Test clock offsets, rates and their gradients"""

    def setUp(self):
        self.a0 = ParameterDriver("clk-offset", 1.0e-6)
        self.a1 = ParameterDriver("clk-drift", 2.0e-9)
        self.a2 = ParameterDriver("clk-acceleration", 4.0e-12)
        self.model = QuadraticClockModel(self.a0, self.a1, self.a2)

    def test_without_reference_date(self):
        offset = self.model.get_offset(500.0)
        self.assertEqual(offset.date, 500.0)
        self.assertEqual(offset.offset, 1.0e-6)
        self.assertEqual(offset.rate, 2.0e-9)
        self.assertEqual(offset.acceleration, 8.0e-12)

    def test_with_reference_date(self):
        self.a0.reference_date = 400.0
        offset = self.model.get_offset(500.0)
        self.assertAlmostEqual(offset.offset, 1.0e-6 + 2.0e-7 + 4.0e-8, delta=1e-20)
        self.assertAlmostEqual(offset.rate, 2.0e-9 + 8.0e-10, delta=1e-22)

    def test_gradient_model(self):
        self.a0.reference_date = 400.0
        self.a0.set_selected(True)
        self.a1.set_selected(True)
        indices = {"clk-offset": 0, "clk-drift": 1}
        field = self.model.to_gradient_model(3, indices, Gradient.variable(3, 2, 500.0))
        offset = field.get_offset(Gradient.variable(3, 2, 500.0))
        plain = self.model.get_offset(500.0)
        self.assertAlmostEqual(offset.offset.value, plain.offset, delta=1e-20)
        # d/da0 = 1, d/da1 = dt, d/dt = rate
        np.testing.assert_allclose(offset.offset.grad, [1.0, 100.0, plain.rate])
        np.testing.assert_allclose(offset.rate.grad, [0.0, 1.0, 8.0e-12])

    def test_clock_offset_arithmetic(self):
        first = ClockOffset(10.0, 1.0e-6, 1.0e-9, 1.0e-12)
        second = ClockOffset(20.0, 4.0e-6, 3.0e-9)
        total = first.add(second)
        self.assertEqual(total.date, 10.0)
        self.assertAlmostEqual(total.offset, 5.0e-6, delta=1e-20)
        self.assertAlmostEqual(total.rate, 4.0e-9, delta=1e-22)
        self.assertEqual(total.acceleration, 1.0e-12)
        difference = first.subtract(second)
        self.assertAlmostEqual(difference.offset, -3.0e-6, delta=1e-20)
        self.assertAlmostEqual(difference.rate, -2.0e-9, delta=1e-22)


if __name__ == '__main__':
    unittest.main()
