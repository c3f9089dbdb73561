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

"""Signal travel time between a moving point and a fixed point.

The delay ``tau`` between a moving end (emitter or receiver, given by a
position provider) and a fixed end is the solution of the light-time
equation

    tau = |P_fixed - P_moving(t_guess + shift(offset, tau))| / c

solved by fixed-point iteration. ``offset`` is the time between the
guessed date and the fixed end's date, so the shift brings the moving end
to its emission date (adjustable emitter) or reception date (adjustable
receiver).

The same solver handles plain values and Gradients: with Gradient inputs
the delay carries the partial derivatives of the solution.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable

import numpy as np

from ..core.constants import C_RECIPROCAL, CONVERGENCE_ULP_FACTOR, DEFAULT_MAX_ITER
from ..core.data_structures import SpacecraftState
from ..core.field_math import distance, real
from ..logger import LogLevel
from ..propagation.pv_provider import AbsolutePVCoordinates, PVCoordinatesProvider

logger = logging.getLogger(__name__)

# (iteration, previous delay, current delay) -> converged
ConvergenceChecker = Callable[[int, object, object], bool]


class DefaultConvergenceChecker:
    """Stop when the delay is stable to a few ulps or after a maximum count

    Comparisons are made on real parts, so the same checker works for
    plain and differentiated delays.

    Parameters
    ----------
    max_iterations : int
        Iteration cap, the last iterate is returned when it is reached
    ulp_factor : float
        Convergence threshold in units in the last place of the delay
    """

    def __init__(self, max_iterations: int = DEFAULT_MAX_ITER,
                 ulp_factor: float = CONVERGENCE_ULP_FACTOR):
        self.max_iterations = max_iterations
        self.ulp_factor = ulp_factor

    def __call__(self, iteration: int, previous, current) -> bool:
        if iteration == 0:
            return False
        if iteration > self.max_iterations:
            return True
        current = real(current)
        return abs(real(previous) - current) <= self.ulp_factor * np.spacing(abs(current))

    def __repr__(self):
        return (f"DefaultConvergenceChecker(max_iterations={self.max_iterations}, "
                f"ulp_factor={self.ulp_factor})")


def instantaneous_checker(iteration: int, previous, current) -> bool:
    """Converge immediately, returning the initial offset as the delay

    Used to model an instantaneous signal assumption.
    """
    return True


class AbstractSignalTravelTime(ABC):
    """Fixed-point light-time solver around a moving end

    Parameters
    ----------
    provider : PVCoordinatesProvider
        Position provider of the moving end
    convergence_checker : callable, optional
        Predicate ``(iteration, previous, current) -> bool``, defaults to
        :class:`DefaultConvergenceChecker`
    """

    def __init__(self, provider: PVCoordinatesProvider,
                 convergence_checker: ConvergenceChecker = None):
        self.provider = provider
        self.convergence_checker = (convergence_checker if convergence_checker is not None
                                    else DefaultConvergenceChecker())

    @abstractmethod
    def _compute_shift(self, offset, delay):
        """Shift from the guess date to the moving end's date"""

    def _compute(self, offset, fixed_position, guess_date, frame):
        """Iterate the light-time equation

        Parameters
        ----------
        offset : float or Gradient
            Initial delay guess, time between the guess date and the fixed end
        fixed_position : np.ndarray or GradientVector
            Position of the fixed end in ``frame``
        guess_date : float or Gradient
            Guessed date of the moving end
        frame : Frame
            Frame of the computation

        Returns
        -------
        float or Gradient
            Signal travel time (s)
        """
        delay = offset
        previous = 0.0
        count = 0
        while not self.convergence_checker(count, previous, delay):
            previous = delay
            shift = self._compute_shift(offset, delay)
            moving_position = self.provider.get_position(guess_date + shift, frame)
            delay = distance(fixed_position, moving_position) * C_RECIPROCAL
            count += 1

        if count > 0:
            residual = abs(real(delay) - real(previous))
            if residual > CONVERGENCE_ULP_FACTOR * np.spacing(abs(real(delay))):
                logger.debug(f"Signal travel time not converged after {count} iterations "
                             f"(last correction {residual:.3e} s, delay {real(delay):.12e} s)")
            else:
                logger.log(LogLevel.TRACE.value, f"Signal travel time converged in {count} iterations")
        return delay


class SignalTravelTimeAdjustableEmitter(AbstractSignalTravelTime):
    """Travel time of a signal from a moving emitter to a fixed receiver"""

    @classmethod
    def from_state(cls, state: SpacecraftState,
                   convergence_checker: ConvergenceChecker = None):
        return cls(AbsolutePVCoordinates.from_state(state), convergence_checker)

    def _compute_shift(self, offset, delay):
        return offset - delay

    def compute_delay(self, receiver_position, signal_arrival_date, frame,
                      approx_emission_date=None):
        """Compute the propagation delay from emitter to receiver

        Parameters
        ----------
        receiver_position : np.ndarray or GradientVector
            Fixed receiver position at signal arrival date, in ``frame``
        signal_arrival_date : float or Gradient
            Date at which the signal arrives to the receiver
        frame : Frame
            Frame in which the receiver position is defined
        approx_emission_date : float or Gradient, optional
            Approximate emission date; when omitted, the emitter position
            at the arrival date gives a zeroth order guess

        Returns
        -------
        float or Gradient
            Delay (s) so that the emitter at ``arrival - delay`` is at
            ``c * delay`` from the receiver
        """
        if approx_emission_date is None:
            emitter_position = self.provider.get_position(signal_arrival_date, frame)
            approx_emission_date = (signal_arrival_date
                                    - distance(receiver_position, emitter_position) * C_RECIPROCAL)
        offset = signal_arrival_date - approx_emission_date
        return self._compute(offset, receiver_position, approx_emission_date, frame)


class SignalTravelTimeAdjustableReceiver(AbstractSignalTravelTime):
    """Travel time of a signal from a fixed emitter to a moving receiver"""

    @classmethod
    def from_state(cls, state: SpacecraftState,
                   convergence_checker: ConvergenceChecker = None):
        return cls(AbsolutePVCoordinates.from_state(state), convergence_checker)

    def _compute_shift(self, offset, delay):
        return delay - offset

    def compute_delay(self, emitter_position, signal_emission_date, frame,
                      approx_reception_date=None):
        """Compute the propagation delay from emitter to receiver

        Parameters
        ----------
        emitter_position : np.ndarray or GradientVector
            Fixed emitter position at signal emission date, in ``frame``
        signal_emission_date : float or Gradient
            Date at which the signal leaves the emitter
        frame : Frame
            Frame in which the emitter position is defined
        approx_reception_date : float or Gradient, optional
            Approximate reception date; when omitted, the receiver position
            at the emission date gives a zeroth order guess

        Returns
        -------
        float or Gradient
            Delay (s) so that the receiver at ``emission + delay`` is at
            ``c * delay`` from the emitter
        """
        if approx_reception_date is None:
            receiver_position = self.provider.get_position(signal_emission_date, frame)
            approx_reception_date = (signal_emission_date
                                     + distance(emitter_position, receiver_position) * C_RECIPROCAL)
        offset = approx_reception_date - signal_emission_date
        return self._compute(offset, emitter_position, approx_reception_date, frame)
