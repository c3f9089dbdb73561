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


"""Bistatic measurements.

A ground station emits a signal, the satellite reflects or transponds it
and a second ground station receives it. The measurement date is the
reception date at the receiver station.
"""

from abc import abstractmethod

from ..core.constants import CLIGHT
from ..core.field_math import dot, normalize
from .common_parameters import (
    remote_parameters_with_derivatives,
    remote_parameters_without_derivatives,
)
from .estimated_measurement import EstimatedMeasurement, EstimatedMeasurementBase
from .measurement import AbstractMeasurement


class _BistaticMeasurement(AbstractMeasurement):
    """Common geometry of the bistatic measurements

    The downlink leg (satellite to receiver) comes from the remote
    parameters builder, the uplink leg is solved from the emitter station
    to the satellite transit point.
    """

    def __init__(self, emitter, receiver, date: float, observed: float, sigma: float,
                 base_weight: float, satellite, signal_travel_time_model=None):
        super().__init__(date, observed, sigma, base_weight, [satellite], True,
                         signal_travel_time_model)
        self.emitter_station = emitter
        self.receiver_station = receiver

    def _common(self, states, field: bool):
        if field:
            return remote_parameters_with_derivatives(self.receiver_station, states, self.satellites[0],
                                                      self.date, False, self.parameters_drivers,
                                                      self.signal_travel_time_model)
        return remote_parameters_without_derivatives(self.receiver_station, states, self.satellites[0],
                                                     self.date, False, self.signal_travel_time_model)

    def _uplink(self, common, field: bool):
        """Uplink travel time and emitter station coordinates at emission"""
        frame = common.state.frame
        transit_pv = common.transit_pv
        model = self.signal_travel_time_model
        if field:
            provider = self.emitter_station.get_field_pv_coordinates_provider(common.free_parameters,
                                                                              common.indices)
            computer = model.get_field_adjustable_emitter_computer(provider)
        else:
            provider = self.emitter_station.get_pv_coordinates_provider()
            computer = model.get_adjustable_emitter_computer(provider)
        tau_u = computer.compute_delay(transit_pv.position, transit_pv.date, frame)
        emitter_pv = provider.get_pv_coordinates(transit_pv.date - tau_u, frame)
        return tau_u, emitter_pv

    @abstractmethod
    def _evaluate(self, common, tau_u, emitter_pv, field: bool):
        """Theoretical value from the two legs"""

    def _theoretical_evaluation_without_derivatives(self, iteration, evaluation, states):
        common = self._common(states, False)
        tau_u, emitter_pv = self._uplink(common, False)
        estimated = EstimatedMeasurementBase(self, iteration, evaluation, [common.transit_state],
                                             [common.remote_pv, common.transit_pv, emitter_pv])
        estimated.estimated_value = self._evaluate(common, tau_u, emitter_pv, False)
        return estimated

    def _theoretical_evaluation(self, iteration, evaluation, states):
        common = self._common(states, True)
        tau_u, emitter_pv = self._uplink(common, True)
        estimated = EstimatedMeasurement(self, iteration, evaluation, [common.transit_state],
                                         [common.remote_pv, common.transit_pv, emitter_pv])
        value = self._evaluate(common, tau_u, emitter_pv, True)
        self._fill_estimated(estimated, [value], common.indices, 1, common.free_parameters)
        return estimated


class BistaticRange(_BistaticMeasurement):
    """Bistatic range measurement

    ``range = (tau_u + tau_d + dt_receiver - dt_emitter) * c``

    Parameters
    ----------
    emitter : GroundStation
        Emitting station
    receiver : GroundStation
        Receiving station
    date : float
        Reception date as read by the receiver clock (s)
    range_value : float
        Observed bistatic range (m)
    sigma : float
        Theoretical standard deviation (m)
    base_weight : float
        Base weight
    satellite : ObservableSatellite
        Satellite on the signal path
    signal_travel_time_model : SignalTravelTimeModel, optional
        Signal travel time settings
    """

    measurement_type = "BistaticRange"

    def __init__(self, emitter, receiver, date: float, range_value: float, sigma: float,
                 base_weight: float, satellite, signal_travel_time_model=None):
        super().__init__(emitter, receiver, date, range_value, sigma, base_weight, satellite,
                         signal_travel_time_model)
        self._add_parameters_drivers(receiver.parameters_drivers)
        self._add_parameters_drivers(emitter.parameters_drivers)

    def _evaluate(self, common, tau_u, emitter_pv, field):
        date = common.state.date
        if field:
            dte = self.emitter_station.clock_offset_driver.get_value_gradient(
                common.free_parameters, common.indices, date)
            dtr = self.receiver_station.clock_offset_driver.get_value_gradient(
                common.free_parameters, common.indices, date)
        else:
            dte = self.emitter_station.clock_offset_driver.get_value(date)
            dtr = self.receiver_station.clock_offset_driver.get_value(date)
        return (common.tau_d + tau_u + dtr - dte) * CLIGHT


class BistaticRangeRate(_BistaticMeasurement):
    """Bistatic range-rate measurement

    Sum of the range-rates of the uplink (emitter station to satellite) and
    downlink (satellite to receiver station) legs.

    Parameters
    ----------
    emitter : GroundStation
        Emitting station
    receiver : GroundStation
        Receiving station
    date : float
        Reception date as read by the receiver clock (s)
    range_rate : float
        Observed bistatic range-rate (m/s)
    sigma : float
        Theoretical standard deviation (m/s)
    base_weight : float
        Base weight
    satellite : ObservableSatellite
        Satellite on the signal path
    signal_travel_time_model : SignalTravelTimeModel, optional
        Signal travel time settings
    """

    measurement_type = "BistaticRangeRate"

    def __init__(self, emitter, receiver, date: float, range_rate: float, sigma: float,
                 base_weight: float, satellite, signal_travel_time_model=None):
        super().__init__(emitter, receiver, date, range_rate, sigma, base_weight, satellite,
                         signal_travel_time_model)
        self._add_parameters_drivers(emitter.parameters_drivers)
        self._add_parameters_drivers(receiver.parameters_drivers)

    def _evaluate(self, common, tau_u, emitter_pv, field):
        transit_pv = common.transit_pv
        receiver_direction = normalize(common.remote_pv.position - transit_pv.position)
        emitter_direction = normalize(emitter_pv.position - transit_pv.position)
        receiver_velocity = common.remote_pv.velocity - transit_pv.velocity
        emitter_velocity = emitter_pv.velocity - transit_pv.velocity
        return dot(receiver_direction, receiver_velocity) + dot(emitter_direction, emitter_velocity)
