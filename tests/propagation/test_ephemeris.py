#!/usr/bin/env python3
"""Test suite for position/velocity providers"""

import unittest
import numpy as np

from pyodm.coordinate.frames import EarthFixedFrame
from pyodm.core.data_structures import SpacecraftState, TimeStampedPV
from pyodm.core.gradient import Gradient, GradientVector
from pyodm.propagation.ephemeris import TabulatedEphemeris
from pyodm.propagation.pv_provider import AbsolutePVCoordinates


P0 = np.array([2.0e7, -1.0e7, 5.0e6])
V0 = np.array([1.0e3, 2.5e3, -3.0e3])
A0 = np.array([-0.4, 0.2, 0.1])


def quadratic_motion(t):
    return P0 + V0 * t + 0.5 * A0 * t * t, V0 + A0 * t


class TestTabulatedEphemeris(unittest.TestCase):
    """Test Hermite interpolation of tabulated states"""

    def setUp(self):
        self.frame = EarthFixedFrame().parent
        self.dates = np.arange(0.0, 301.0, 60.0)
        samples = [quadratic_motion(t) for t in self.dates]
        self.ephemeris = TabulatedEphemeris(self.frame, self.dates,
                                            [p for p, _ in samples], [v for _, v in samples])

    def test_samples_reproduced(self):
        pv = self.ephemeris.get_pv_coordinates(120.0, self.frame)
        position, velocity = quadratic_motion(120.0)
        np.testing.assert_allclose(pv.position, position, atol=1e-6)
        np.testing.assert_allclose(pv.velocity, velocity, atol=1e-9)

    def test_quadratic_motion_is_exact(self):
        # cubic Hermite interpolation reproduces polynomials up to degree three
        for t in (0.0, 17.5, 151.0, 299.9, 300.0):
            pv = self.ephemeris.get_pv_coordinates(t, self.frame)
            position, velocity = quadratic_motion(t)
            self.assertEqual(pv.date, t)
            np.testing.assert_allclose(pv.position, position, atol=1e-6)
            np.testing.assert_allclose(pv.velocity, velocity, atol=1e-8)
            np.testing.assert_allclose(pv.acceleration, A0, atol=1e-8)
        np.testing.assert_allclose(self.ephemeris.get_position(17.5, self.frame),
                                   quadratic_motion(17.5)[0], atol=1e-6)

    def test_out_of_range(self):
        with self.assertRaises(ValueError):
            self.ephemeris.get_pv_coordinates(-1.0, self.frame)
        with self.assertRaises(ValueError):
            self.ephemeris.get_pv_coordinates(300.5, self.frame)

    def test_invalid_samples(self):
        with self.assertRaises(ValueError):
            TabulatedEphemeris(self.frame, [0.0], [P0], [V0])
        with self.assertRaises(ValueError):
            TabulatedEphemeris(self.frame, [0.0, 1.0], [P0, P0], [V0])
        with self.assertRaises(ValueError):
            TabulatedEphemeris(self.frame, [1.0, 0.0], [P0, P0], [V0, V0])
        with self.assertRaises(ValueError):
            TabulatedEphemeris.from_states([])

    def test_gradient_date(self):
        date = Gradient.variable(1, 0, 75.0)
        pv = self.ephemeris.get_pv_coordinates(date, self.frame)
        self.assertIsInstance(pv.position, GradientVector)
        position, velocity = quadratic_motion(75.0)
        np.testing.assert_allclose(pv.position.value, position, atol=1e-6)
        np.testing.assert_allclose(pv.position.jacobian[:, 0], velocity, atol=1e-8)
        np.testing.assert_allclose(pv.velocity.jacobian[:, 0], A0, atol=1e-8)

    def test_other_frame(self):
        earth = EarthFixedFrame(rotation_rate=0.0, era0=np.pi / 2)
        ephemeris = TabulatedEphemeris(earth.parent, self.dates,
                                       [quadratic_motion(t)[0] for t in self.dates],
                                       [quadratic_motion(t)[1] for t in self.dates])
        pv = ephemeris.get_pv_coordinates(0.0, earth)
        np.testing.assert_allclose(pv.position, [P0[1], -P0[0], P0[2]], atol=1e-6)

    def test_from_states(self):
        states = [SpacecraftState(TimeStampedPV(t, *quadratic_motion(t)), self.frame)
                  for t in self.dates]
        ephemeris = TabulatedEphemeris.from_states(states)
        self.assertIs(ephemeris.frame, self.frame)
        np.testing.assert_allclose(ephemeris.get_position(90.0, self.frame),
                                   quadratic_motion(90.0)[0], atol=1e-6)
        mixed = states[:2] + [SpacecraftState(states[2].pv, EarthFixedFrame())]
        with self.assertRaises(ValueError):
            TabulatedEphemeris.from_states(mixed)


class TestAbsolutePVCoordinates(unittest.TestCase):
    """Test Taylor-shifted single sample providers"""

    def test_shift(self):
        frame = EarthFixedFrame().parent
        provider = AbsolutePVCoordinates(frame, TimeStampedPV(10.0, P0, V0, A0))
        pv = provider.get_pv_coordinates(12.0, frame)
        position, velocity = quadratic_motion(2.0)
        self.assertEqual(pv.date, 12.0)
        np.testing.assert_allclose(pv.position, position, atol=1e-8)
        np.testing.assert_allclose(pv.velocity, velocity, atol=1e-12)

    def test_from_state(self):
        frame = EarthFixedFrame().parent
        state = SpacecraftState(TimeStampedPV(0.0, P0, V0), frame)
        provider = AbsolutePVCoordinates.from_state(state)
        self.assertIs(provider.frame, frame)
        self.assertIs(provider.pv, state.pv)


if __name__ == '__main__':
    unittest.main()
