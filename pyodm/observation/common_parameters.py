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

"""Parameters shared by the measurements between a satellite and an observer.

Two configurations are supported:

- remote: the observed satellite emits and the observer receives
  (ground station tracking, ranging from a known satellite),
- local: the observer emits and the observed satellite receives
  (GNSS-like one-way signals received on board).

Each comes in a value-only form and a differentiated form. The
differentiated form works on a gradient axis made of the position and
velocity of every state followed by the selected parameter spans.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from ..core.constants import STATE_DIMENSION
from ..core.data_structures import SpacecraftState, TimeStampedPV
from ..core.field_math import real
from ..core.gradient import Gradient, GradientVector
from ..parameters.clock import ClockOffset
from ..parameters.parameter_driver import ParameterDriver
from ..propagation.pv_provider import AbsolutePVCoordinates
from ..signal.model import SignalTravelTimeModel
from .measurement_object import ObservableSatellite
from .observer import Observer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class CommonParametersWithoutDerivatives:
    """Value-only parameters of a satellite/observer signal leg

    Attributes
    ----------
    state : SpacecraftState
        Spacecraft state the measurement was evaluated from
    tau_d : float
        Downlink delay (s)
    local_offset : ClockOffset
        Clock offset of the observed satellite
    remote_offset : ClockOffset
        Clock offset of the observer
    transit_state : SpacecraftState
        Spacecraft state at signal transit (emission or reception) date
    transit_pv : TimeStampedPV
        Spacecraft coordinates at transit date
    remote_pv : TimeStampedPV
        Observer coordinates at the other end of the leg
    """
    state: SpacecraftState
    tau_d: float
    local_offset: ClockOffset
    remote_offset: ClockOffset
    transit_state: SpacecraftState
    transit_pv: TimeStampedPV
    remote_pv: TimeStampedPV


@dataclass(frozen=True, eq=False)
class CommonParametersWithDerivatives:
    """Differentiated parameters of a satellite/observer signal leg

    Same content as :class:`CommonParametersWithoutDerivatives` with
    Gradient values, plus the parameter index map they refer to.
    """
    state: SpacecraftState
    indices: Dict[str, int]
    tau_d: Gradient
    local_offset: ClockOffset
    remote_offset: ClockOffset
    transit_state: SpacecraftState
    transit_pv: TimeStampedPV
    remote_pv: TimeStampedPV

    @property
    def free_parameters(self) -> int:
        return self.tau_d.free_parameters


def parameter_indices(states: Sequence[SpacecraftState],
                      drivers: Sequence[ParameterDriver]) -> Dict[str, int]:
    """Map selected parameter span names to gradient indices

    Indices ``0 .. 6 * len(states) - 1`` are the position and velocity of
    each state, in state order. Each span of each selected driver then gets
    the next index, names already present keeping their first index so that
    drivers shared between measurement participants appear only once.
    """
    indices: Dict[str, int] = {}
    nb = STATE_DIMENSION * len(states)
    for driver in drivers:
        if driver.is_selected():
            for span in driver.names_span_map:
                if span.name not in indices:
                    indices[span.name] = nb
                    nb += 1
    logger.debug(f"Parameter indices for {len(states)} state(s): {indices}")
    return indices


def free_parameters_count(states: Sequence[SpacecraftState], indices: Dict[str, int]) -> int:
    return STATE_DIMENSION * len(states) + len(indices)


def get_coordinates(state: SpacecraftState, first_derivative: int,
                    free_parameters: int) -> TimeStampedPV:
    """Differentiated coordinates of a state

    Position and velocity are free variables at indices
    ``first_derivative .. first_derivative + 5``; acceleration is constant.
    """
    return TimeStampedPV(
        state.date,
        GradientVector.variable(free_parameters, first_derivative, state.position),
        GradientVector.variable(free_parameters, first_derivative + 3, state.velocity),
        GradientVector.constant(free_parameters, state.pv.acceleration),
    )


def _model(model: SignalTravelTimeModel) -> SignalTravelTimeModel:
    return model if model is not None else SignalTravelTimeModel()


def remote_parameters_without_derivatives(
        observer: Observer, states: Sequence[SpacecraftState], local_sat: ObservableSatellite,
        measurement_date: float, receiver_clock_offset_already_applied: bool = False,
        model: SignalTravelTimeModel = None) -> CommonParametersWithoutDerivatives:
    """Signal emitted by the observed satellite and received by the observer

    Parameters
    ----------
    observer : Observer
        Receiving observer
    states : sequence of SpacecraftState
        States of all measured spacecraft, the first one is the emitter
    local_sat : ObservableSatellite
        Satellite whose state is estimated
    measurement_date : float
        Measurement date, as read by the observer clock unless
        ``receiver_clock_offset_already_applied``
    receiver_clock_offset_already_applied : bool
        True if ``measurement_date`` is already a physical date
    model : SignalTravelTimeModel, optional
        Signal travel time settings

    Returns
    -------
    CommonParametersWithoutDerivatives
        Downlink delay, clocks, transit state and observer coordinates
    """
    state = states[0]
    frame = state.frame
    pva = state.pv

    offset_to_inertial = observer.get_offset_to_inertial(frame, measurement_date,
                                                         receiver_clock_offset_already_applied)
    downlink_date = offset_to_inertial.date
    local_offset = local_sat.quadratic_clock_model.get_offset(measurement_date)

    # observer coordinates at reception
    observer_downlink = offset_to_inertial.origin

    # downlink delay
    emitter = AbsolutePVCoordinates(frame, pva)
    tau_d = _model(model).get_adjustable_emitter_computer(emitter).compute_delay(
        observer_downlink.position, downlink_date, frame, approx_emission_date=pva.date)

    # transit state
    delta = downlink_date - state.date
    transit_state = state.shifted_by(delta - tau_d)

    remote_offset = observer.quadratic_clock_model.get_offset(measurement_date)

    return CommonParametersWithoutDerivatives(state, tau_d, local_offset, remote_offset,
                                              transit_state, transit_state.pv, observer_downlink)


def remote_parameters_with_derivatives(
        observer: Observer, states: Sequence[SpacecraftState], local_sat: ObservableSatellite,
        measurement_date: float, receiver_clock_offset_already_applied: bool,
        drivers: List[ParameterDriver],
        model: SignalTravelTimeModel = None) -> CommonParametersWithDerivatives:
    """Differentiated version of :func:`remote_parameters_without_derivatives`

    The gradient axis is built from ``states`` and the selected ``drivers``.
    """
    state = states[0]
    frame = state.frame
    indices = parameter_indices(states, drivers)
    nb_params = free_parameters_count(states, indices)

    pva = get_coordinates(state, 0, nb_params)

    offset_to_inertial = observer.get_field_offset_to_inertial(
        frame, measurement_date, nb_params, indices, receiver_clock_offset_already_applied)
    downlink_date = offset_to_inertial.date

    local_clock = local_sat.get_quadratic_field_clock_model(nb_params, indices, measurement_date)
    local_offset = local_clock.get_offset(downlink_date)

    # observer coordinates at reception
    observer_downlink = offset_to_inertial.origin

    # downlink delay
    emitter = AbsolutePVCoordinates(frame, pva)
    tau_d = _model(model).get_field_adjustable_emitter_computer(emitter).compute_delay(
        observer_downlink.position, downlink_date, frame, approx_emission_date=pva.date)

    # transit state, plain and differentiated
    delta_m_tau_d = downlink_date - state.date - tau_d
    transit_state = state.shifted_by(real(delta_m_tau_d))
    transit_pv = emitter.get_pv_coordinates(state.date + delta_m_tau_d, frame)

    remote_clock = observer.get_quadratic_field_clock_model(nb_params, indices, real(downlink_date))
    remote_offset = remote_clock.get_offset(downlink_date)

    return CommonParametersWithDerivatives(state, indices, tau_d, local_offset, remote_offset,
                                           transit_state, transit_pv, observer_downlink)


def local_parameters_without_derivatives(
        observer: Observer, states: Sequence[SpacecraftState], local_sat: ObservableSatellite,
        measurement_date: float, receiver_clock_offset_already_applied: bool = False,
        model: SignalTravelTimeModel = None) -> CommonParametersWithoutDerivatives:
    """Signal emitted by the observer and received by the observed satellite

    Parameters
    ----------
    observer : Observer
        Emitting observer
    states : sequence of SpacecraftState
        States of all measured spacecraft, the first one is the receiver
    local_sat : ObservableSatellite
        Receiving satellite whose state is estimated
    measurement_date : float
        Measurement date, as read by the satellite clock unless
        ``receiver_clock_offset_already_applied``
    receiver_clock_offset_already_applied : bool
        True if ``measurement_date`` is already a physical date
    model : SignalTravelTimeModel, optional
        Signal travel time settings

    Returns
    -------
    CommonParametersWithoutDerivatives
        Delay, clocks, state at reception and observer coordinates at emission
    """
    state = states[0]
    frame = state.frame
    pva_local = state.pv

    local_offset = local_sat.quadratic_clock_model.get_offset(measurement_date)
    arrival_date = (measurement_date if receiver_clock_offset_already_applied
                    else measurement_date - local_offset.offset)

    remote_provider = observer.get_pv_coordinates_provider()

    # downlink delay
    delta_t = arrival_date - state.date
    pva_downlink = pva_local.shifted_by(delta_t)
    tau_d = _model(model).get_adjustable_emitter_computer(remote_provider).compute_delay(
        pva_downlink.position, arrival_date, frame, approx_emission_date=arrival_date)

    # observer at emission
    emission_date = arrival_date - tau_d
    remote_offset = observer.quadratic_clock_model.get_offset(emission_date)

    return CommonParametersWithoutDerivatives(state, tau_d, local_offset, remote_offset,
                                              state.shifted_by(delta_t), pva_downlink,
                                              remote_provider.get_pv_coordinates(emission_date, frame))


def local_parameters_with_derivatives(
        observer: Observer, states: Sequence[SpacecraftState], local_sat: ObservableSatellite,
        measurement_date: float, receiver_clock_offset_already_applied: bool,
        drivers: List[ParameterDriver],
        model: SignalTravelTimeModel = None) -> CommonParametersWithDerivatives:
    """Differentiated version of :func:`local_parameters_without_derivatives`"""
    state = states[0]
    frame = state.frame
    indices = parameter_indices(states, drivers)
    nb_params = free_parameters_count(states, indices)

    date = Gradient.constant(nb_params, measurement_date)

    pva_local = get_coordinates(state, 0, nb_params)
    local_clock = local_sat.get_quadratic_field_clock_model(nb_params, indices, measurement_date)
    local_offset = local_clock.get_offset(date)

    arrival_date = date if receiver_clock_offset_already_applied else date - local_offset.offset

    remote_provider = observer.get_field_pv_coordinates_provider(nb_params, indices)

    # downlink delay
    delta_t = arrival_date - state.date
    pva_downlink = pva_local.shifted_by(delta_t)
    tau_d = _model(model).get_field_adjustable_emitter_computer(remote_provider).compute_delay(
        pva_downlink.position, arrival_date, frame, approx_emission_date=arrival_date)

    # observer at emission
    emission_date = arrival_date - tau_d
    remote_clock = observer.get_quadratic_field_clock_model(nb_params, indices, real(emission_date))
    remote_offset = remote_clock.get_offset(emission_date)

    return CommonParametersWithDerivatives(state, indices, tau_d, local_offset, remote_offset,
                                           state.shifted_by(real(delta_t)), pva_downlink,
                                           remote_provider.get_pv_coordinates(emission_date, frame))
