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


"""Range measurements between two satellites.

Two families are supported:

- :class:`InterSatellitesRange`, where both satellites are estimated: the
  local satellite receives the signal emitted (or transponded) by the
  remote one, and the derivatives cover both states;
- :class:`OneWayGNSSRange`, where the emitter is a navigation satellite
  with a known trajectory and clock, only the receiver being estimated.
"""

from typing import Optional

from ..core.constants import CLIGHT
from ..core.field_math import real
from ..core.gradient import Gradient
from ..propagation.pv_provider import AbsolutePVCoordinates, PVCoordinatesProvider
from .common_parameters import (
    CommonParametersWithDerivatives,
    CommonParametersWithoutDerivatives,
    free_parameters_count,
    get_coordinates,
    local_parameters_with_derivatives,
    local_parameters_without_derivatives,
    parameter_indices,
)
from .estimated_measurement import EstimatedMeasurement, EstimatedMeasurementBase
from .measurement import AbstractMeasurement


class AbstractInterSatellitesMeasurement(AbstractMeasurement):
    """Base class of measurements between a local and a remote satellite

    The states given to the evaluation methods are ``[local, remote]``.

    Parameters
    ----------
    date : float
        Reception date as read by the local satellite clock (s)
    observed : float
        Observed value
    sigma : float
        Theoretical standard deviation
    base_weight : float
        Base weight
    local : ObservableSatellite
        Satellite receiving the signal
    remote : ObservableSatellite
        Satellite emitting the signal
    two_way : bool
        True if the local satellite also emitted the signal
    signal_travel_time_model : SignalTravelTimeModel, optional
        Signal travel time settings
    """

    def __init__(self, date: float, observed: float, sigma: float, base_weight: float,
                 local, remote, two_way: bool = False, signal_travel_time_model=None):
        super().__init__(date, observed, sigma, base_weight, [local, remote], two_way,
                         signal_travel_time_model)

    @property
    def remote_clock(self):
        return self.satellites[1].quadratic_clock_model

    def get_remote_clock(self, free_parameters: int, indices):
        return self.satellites[1].get_quadratic_field_clock_model(free_parameters, indices, self.date)

    @staticmethod
    def get_remote_pv(state, free_parameters: Optional[int] = None) -> PVCoordinatesProvider:
        """Remote satellite provider, its coordinates being free variables
        at indices 6 to 11 when ``free_parameters`` is given"""
        if free_parameters is None:
            return AbsolutePVCoordinates(state.frame, state.pv)
        return AbsolutePVCoordinates(state.frame, get_coordinates(state, 6, free_parameters))

    def compute_common_parameters_without(self, states, clock_offset_already_applied: bool = False
                                          ) -> CommonParametersWithoutDerivatives:
        local_state = states[0]
        frame = local_state.frame
        local_clock = self.satellites[0].quadratic_clock_model.get_offset(self.date)
        remote_pv = self.get_remote_pv(states[1])

        arrival_date = self.date if clock_offset_already_applied else self.date - local_clock.offset
        delta_t = arrival_date - local_state.date
        pva_downlink = local_state.pv.shifted_by(delta_t)
        tau_d = self.signal_travel_time_model.get_adjustable_emitter_computer(remote_pv).compute_delay(
            pva_downlink.position, arrival_date, frame, approx_emission_date=arrival_date)

        emission_date = arrival_date - tau_d
        remote_clock = self.remote_clock.get_offset(emission_date)
        return CommonParametersWithoutDerivatives(local_state, tau_d, local_clock, remote_clock,
                                                  local_state.shifted_by(delta_t), pva_downlink,
                                                  remote_pv.get_pv_coordinates(emission_date, frame))

    def compute_common_parameters_with(self, states, clock_offset_already_applied: bool = False
                                       ) -> CommonParametersWithDerivatives:
        local_state = states[0]
        frame = local_state.frame
        indices = parameter_indices(states, self.parameters_drivers)
        nb_params = free_parameters_count(states, indices)

        date = Gradient.constant(nb_params, self.date)
        pva_local = get_coordinates(local_state, 0, nb_params)
        local_clock = self.satellites[0].get_quadratic_field_clock_model(nb_params, indices, self.date)
        local_offset = local_clock.get_offset(date)
        remote_pv = self.get_remote_pv(states[1], nb_params)

        arrival_date = date if clock_offset_already_applied else date - local_offset.offset
        delta_t = arrival_date - local_state.date
        pva_downlink = pva_local.shifted_by(delta_t)
        computer = self.signal_travel_time_model.get_field_adjustable_emitter_computer(remote_pv)
        tau_d = computer.compute_delay(pva_downlink.position, arrival_date, frame,
                                       approx_emission_date=arrival_date)

        emission_date = arrival_date - tau_d
        remote_offset = self.get_remote_clock(nb_params, indices).get_offset(emission_date)
        return CommonParametersWithDerivatives(local_state, indices, tau_d, local_offset, remote_offset,
                                               local_state.shifted_by(real(delta_t)), pva_downlink,
                                               remote_pv.get_pv_coordinates(emission_date, frame))


class InterSatellitesRange(AbstractInterSatellitesMeasurement):
    """Range between two estimated satellites

    One-way: ``(tau_d + dt_local - dt_remote) * c``, the remote satellite
    emitting. Two-way: the local satellite emits, the remote one
    transponds, ``(tau_u + tau_d) * c / 2``.

    Parameters
    ----------
    local : ObservableSatellite
        Satellite receiving the signal
    remote : ObservableSatellite
        Satellite emitting or transponding the signal
    two_way : bool
        True for two-way ranging
    date : float
        Reception date as read by the local clock (s)
    range_value : float
        Observed range (m)
    sigma : float
        Theoretical standard deviation (m)
    base_weight : float
        Base weight
    signal_travel_time_model : SignalTravelTimeModel, optional
        Signal travel time settings
    """

    measurement_type = "InterSatellitesRange"

    def __init__(self, local, remote, two_way: bool, date: float, range_value: float, sigma: float,
                 base_weight: float, signal_travel_time_model=None):
        super().__init__(date, range_value, sigma, base_weight, local, remote, two_way,
                         signal_travel_time_model)

    def _uplink(self, common, field: bool):
        """Travel time from the local satellite to the remote one"""
        frame = common.state.frame
        local = AbsolutePVCoordinates(frame, common.transit_pv)
        model = self.signal_travel_time_model
        computer = (model.get_field_adjustable_emitter_computer(local) if field
                    else model.get_adjustable_emitter_computer(local))
        return computer.compute_delay(common.remote_pv.position, common.remote_pv.date, frame,
                                      approx_emission_date=common.remote_pv.date)

    def _value(self, common, field: bool):
        if self.two_way:
            tau_u = self._uplink(common, field)
            local_emission = common.transit_pv.shifted_by(-common.tau_d - tau_u)
            participants = [local_emission, common.remote_pv, common.transit_pv]
            value = (common.tau_d + tau_u) * (0.5 * CLIGHT)
        else:
            participants = [common.remote_pv, common.transit_pv]
            value = (common.tau_d + common.local_offset.offset - common.remote_offset.offset) * CLIGHT
        return value, participants

    def _supporting_states(self, states, common):
        remote_shift = real(common.remote_pv.date) - states[1].date
        return [common.transit_state, states[1].shifted_by(remote_shift)]

    def _theoretical_evaluation_without_derivatives(self, iteration, evaluation, states):
        common = self.compute_common_parameters_without(states)
        value, participants = self._value(common, False)
        estimated = EstimatedMeasurementBase(self, iteration, evaluation,
                                             self._supporting_states(states, common), participants)
        estimated.estimated_value = value
        return estimated

    def _theoretical_evaluation(self, iteration, evaluation, states):
        common = self.compute_common_parameters_with(states)
        value, participants = self._value(common, True)
        estimated = EstimatedMeasurement(self, iteration, evaluation,
                                         self._supporting_states(states, common), participants)
        self._fill_estimated(estimated, [value], common.indices, 2, common.free_parameters)
        return estimated


class OneWayGNSSRange(AbstractMeasurement):
    """One-way range from a navigation satellite to an estimated satellite

    The emitter trajectory and clock are known, the signal is received by
    the estimated satellite: ``(tau_d + dt_local - dt_remote) * c``.

    Parameters
    ----------
    remote : ObserverSatellite
        Emitting navigation satellite
    date : float
        Reception date as read by the local clock (s)
    range_value : float
        Observed range (m)
    sigma : float
        Theoretical standard deviation (m)
    base_weight : float
        Base weight
    local : ObservableSatellite
        Receiving satellite
    signal_travel_time_model : SignalTravelTimeModel, optional
        Signal travel time settings
    """

    measurement_type = "OneWayGNSSRange"

    def __init__(self, remote, date: float, range_value: float, sigma: float, base_weight: float,
                 local, signal_travel_time_model=None):
        super().__init__(date, range_value, sigma, base_weight, [local], False,
                         signal_travel_time_model)
        self.remote = remote
        self._add_parameters_drivers(remote.parameters_drivers)

    def _theoretical_evaluation_without_derivatives(self, iteration, evaluation, states):
        common = local_parameters_without_derivatives(self.remote, states, self.satellites[0],
                                                      self.date, False, self.signal_travel_time_model)
        estimated = EstimatedMeasurementBase(self, iteration, evaluation, [common.transit_state],
                                             [common.remote_pv, common.transit_pv])
        estimated.estimated_value = (common.tau_d + common.local_offset.offset
                                     - common.remote_offset.offset) * CLIGHT
        return estimated

    def _theoretical_evaluation(self, iteration, evaluation, states):
        common = local_parameters_with_derivatives(self.remote, states, self.satellites[0], self.date,
                                                   False, self.parameters_drivers,
                                                   self.signal_travel_time_model)
        estimated = EstimatedMeasurement(self, iteration, evaluation, [common.transit_state],
                                         [common.remote_pv, common.transit_pv])
        value = (common.tau_d + common.local_offset.offset - common.remote_offset.offset) * CLIGHT
        self._fill_estimated(estimated, [value], common.indices, 1, common.free_parameters)
        return estimated
