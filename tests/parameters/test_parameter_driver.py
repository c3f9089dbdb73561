#!/usr/bin/env python3
"""Test suite for parameter drivers"""

import unittest
import numpy as np

from pyodm.parameters.parameter_driver import ParameterDriver


class TestParameterDriver(unittest.TestCase):
    """Test values, spans and gradients of drivers"""

    def setUp(self):
        self.driver = ParameterDriver("station-clock", 1.0e-6, 2.0 ** -10, -1.0e-3, 1.0e-3)

    def test_invalid_construction(self):
        with self.assertRaises(ValueError):
            ParameterDriver("zero-scale", 0.0, 0.0)
        with self.assertRaises(ValueError):
            ParameterDriver("inverted", 0.0, 1.0, 1.0, -1.0)

    def test_defaults(self):
        self.assertEqual(self.driver.get_value(), 1.0e-6)
        self.assertEqual(self.driver.value, 1.0e-6)
        self.assertFalse(self.driver.is_selected())
        self.driver.set_selected(True)
        self.assertTrue(self.driver.is_selected())
        self.assertEqual(self.driver.get_nb_of_values(), 1)
        self.assertEqual(self.driver.get_name_span(), "station-clock")

    def test_clamped_values(self):
        self.driver.set_value(1.0)
        self.assertEqual(self.driver.get_value(), 1.0e-3)
        self.driver.value = -1.0
        self.assertEqual(self.driver.get_value(), -1.0e-3)
        clamped = ParameterDriver("clamped", 10.0, 1.0, -5.0, 5.0)
        self.assertEqual(clamped.get_value(), 5.0)

    def test_normalized_value(self):
        self.driver.set_value(1.0e-6 + 2.0 ** -12)
        self.assertAlmostEqual(self.driver.get_normalized_value(), 0.25)
        self.driver.set_normalized_value(-0.5)
        self.assertAlmostEqual(self.driver.get_value(), 1.0e-6 - 2.0 ** -11)

    def test_spans(self):
        name = self.driver.add_span_at_date(100.0)
        self.assertEqual(name, "Spanstation-clock100.000")
        self.assertEqual(self.driver.add_span_at_date(100.0), name)
        self.assertEqual(self.driver.get_nb_of_values(), 2)
        self.assertEqual(self.driver.get_name_span(50.0), "station-clock")
        self.assertEqual(self.driver.get_name_span(100.0), name)
        self.assertEqual([span.name for span in self.driver.names_span_map],
                         ["station-clock", name])

        self.driver.set_value(2.0e-6, 150.0)
        self.assertEqual(self.driver.get_value(150.0), 2.0e-6)
        self.assertEqual(self.driver.get_value(50.0), 1.0e-6)
        # without a date every span is set
        self.driver.set_value(3.0e-6)
        self.assertEqual(self.driver.get_value(150.0), 3.0e-6)
        self.assertEqual(self.driver.get_value(), 3.0e-6)

    def test_value_gradient(self):
        span = self.driver.add_span_at_date(100.0)
        indices = {span: 7}
        early = self.driver.get_value_gradient(8, indices, 50.0)
        np.testing.assert_array_equal(early.grad, np.zeros(8))
        self.assertEqual(early.value, 1.0e-6)
        late = self.driver.get_value_gradient(8, indices, 120.0)
        self.assertEqual(late.get_partial_derivative(7), 1.0)
        self.assertEqual(late.free_parameters, 8)


if __name__ == '__main__':
    unittest.main()
