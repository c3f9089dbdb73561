#!/usr/bin/env python3
"""Test suite for angle normalization helpers"""

import unittest
import numpy as np

from pyodm.utils.angles import normalize_angle, wrap_to_2pi, wrap_to_pi


class TestAngles(unittest.TestCase):
    """Test angle wrapping"""

    def test_normalize_angle(self):
        self.assertAlmostEqual(normalize_angle(0.1, 0.0), 0.1)
        self.assertAlmostEqual(normalize_angle(0.1 + 4 * np.pi, 0.0), 0.1, delta=1e-14)
        self.assertAlmostEqual(normalize_angle(-0.1, 2 * np.pi), 2 * np.pi - 0.1, delta=1e-14)
        self.assertAlmostEqual(normalize_angle(6.2, 0.0), 6.2 - 2 * np.pi, delta=1e-14)

    def test_interval(self):
        for center in (-3.0, 0.0, 1.0, 2 * np.pi - 0.01):
            for angle in np.linspace(-20.0, 20.0, 41):
                normalized = normalize_angle(angle, center)
                self.assertGreaterEqual(normalized, center - np.pi - 1e-12)
                self.assertLess(normalized, center + np.pi + 1e-12)
                # same angle modulo 2 pi
                self.assertAlmostEqual(np.sin(normalized), np.sin(angle), delta=1e-12)
                self.assertAlmostEqual(np.cos(normalized), np.cos(angle), delta=1e-12)

    def test_idempotent(self):
        once = normalize_angle(9.0, 0.5)
        self.assertAlmostEqual(normalize_angle(once, 0.5), once, delta=1e-15)

    def test_wrap_to_2pi(self):
        self.assertAlmostEqual(wrap_to_2pi(-0.5), 2 * np.pi - 0.5, delta=1e-14)
        self.assertAlmostEqual(wrap_to_2pi(7.0), 7.0 - 2 * np.pi, delta=1e-14)
        self.assertAlmostEqual(wrap_to_2pi(1.0), 1.0)

    def test_wrap_to_pi(self):
        self.assertAlmostEqual(wrap_to_pi(4.0), 4.0 - 2 * np.pi, delta=1e-14)
        self.assertAlmostEqual(wrap_to_pi(-4.0), 2 * np.pi - 4.0, delta=1e-14)
        self.assertAlmostEqual(wrap_to_pi(-1.0), -1.0)


if __name__ == '__main__':
    unittest.main()
