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

"""Factory of signal travel time computers"""

from ..propagation.pv_provider import PVCoordinatesProvider
from .travel_time import (
    ConvergenceChecker,
    DefaultConvergenceChecker,
    SignalTravelTimeAdjustableEmitter,
    SignalTravelTimeAdjustableReceiver,
)


class SignalTravelTimeModel:
    """Signal travel time settings shared by the measurements

    Parameters
    ----------
    convergence_checker : callable, optional
        Convergence predicate used for plain evaluations
    gradient_convergence_checker : callable, optional
        Convergence predicate used for differentiated evaluations
    """

    def __init__(self, convergence_checker: ConvergenceChecker = None,
                 gradient_convergence_checker: ConvergenceChecker = None):
        self.convergence_checker = (convergence_checker if convergence_checker is not None
                                    else DefaultConvergenceChecker())
        self.gradient_convergence_checker = (gradient_convergence_checker
                                             if gradient_convergence_checker is not None
                                             else DefaultConvergenceChecker())

    def get_adjustable_emitter_computer(self, provider: PVCoordinatesProvider):
        return SignalTravelTimeAdjustableEmitter(provider, self.convergence_checker)

    def get_field_adjustable_emitter_computer(self, provider: PVCoordinatesProvider):
        return SignalTravelTimeAdjustableEmitter(provider, self.gradient_convergence_checker)

    def get_adjustable_receiver_computer(self, provider: PVCoordinatesProvider):
        return SignalTravelTimeAdjustableReceiver(provider, self.convergence_checker)

    def get_field_adjustable_receiver_computer(self, provider: PVCoordinatesProvider):
        return SignalTravelTimeAdjustableReceiver(provider, self.gradient_convergence_checker)

    def __repr__(self):
        return (f"SignalTravelTimeModel({self.convergence_checker!r}, "
                f"{self.gradient_convergence_checker!r})")
