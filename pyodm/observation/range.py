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

"""Range measurement between a ground station and a satellite.

One-way range (satellite emits, station receives) includes both clock
offsets:

    rho = (tau_d + dtg - dts) * c

Two-way range (station emits, satellite transponds, station receives) is
half the round trip; clock offsets cancel:

    rho = (tau_u + tau_d) * c / 2

The date of the measurement is the reception date at the station, as read
by the station clock.
"""

from ..core.constants import CLIGHT
from ..propagation.pv_provider import AbsolutePVCoordinates
from .common_parameters import (
    remote_parameters_with_derivatives,
    remote_parameters_without_derivatives,
)
from .estimated_measurement import EstimatedMeasurement, EstimatedMeasurementBase
from .measurement import AbstractMeasurement


class Range(AbstractMeasurement):
    """Range measurement

    Parameters
    ----------
    station : Observer
        Ground station (or other observer) receiving the signal
    two_way : bool
        True for two-way ranging
    date : float
        Reception date as read by the station clock (s)
    range_value : float
        Observed range (m)
    sigma : float
        Theoretical standard deviation (m)
    base_weight : float
        Base weight
    satellite : ObservableSatellite
        Ranged satellite
    signal_travel_time_model : SignalTravelTimeModel, optional
        Signal travel time settings
    """

    measurement_type = "Range"

    def __init__(self, station, two_way: bool, date: float, range_value: float,
                 sigma: float, base_weight: float, satellite, signal_travel_time_model=None):
        super().__init__(date, range_value, sigma, base_weight, [satellite], two_way,
                         signal_travel_time_model)
        self.station = station
        self._add_parameters_drivers(station.parameters_drivers)

    def _theoretical_evaluation_without_derivatives(self, iteration, evaluation, states):
        satellite = self.satellites[0]
        model = self.signal_travel_time_model
        common = remote_parameters_without_derivatives(self.station, states, satellite,
                                                       self.date, False, model)
        frame = common.state.frame
        transit_pv = common.transit_pv

        if self.two_way:
            station_at_transit = common.remote_pv.shifted_by(-common.tau_d)
            uplink = model.get_adjustable_emitter_computer(
                AbsolutePVCoordinates(frame, station_at_transit))
            tau_u = uplink.compute_delay(transit_pv.position, transit_pv.date, frame,
                                         approx_emission_date=station_at_transit.date)
            station_uplink = common.remote_pv.shifted_by(-common.tau_d - tau_u)
            participants = [station_uplink, transit_pv, common.remote_pv]
            range_value = (common.tau_d + tau_u) * (0.5 * CLIGHT)
        else:
            participants = [transit_pv, common.remote_pv]
            dts = satellite.clock_offset_driver.get_value(common.state.date)
            dtg = self.station.clock_offset_driver.get_value(common.state.date)
            range_value = (common.tau_d + dtg - dts) * CLIGHT

        estimated = EstimatedMeasurementBase(self, iteration, evaluation,
                                             [common.transit_state], participants)
        estimated.estimated_value = range_value
        return estimated

    def _theoretical_evaluation(self, iteration, evaluation, states):
        satellite = self.satellites[0]
        model = self.signal_travel_time_model
        common = remote_parameters_with_derivatives(self.station, states, satellite, self.date,
                                                    False, self.parameters_drivers, model)
        nb_params = common.free_parameters
        frame = common.state.frame
        transit_pv = common.transit_pv

        if self.two_way:
            station_at_transit = common.remote_pv.shifted_by(-common.tau_d)
            uplink = model.get_field_adjustable_emitter_computer(
                AbsolutePVCoordinates(frame, station_at_transit))
            tau_u = uplink.compute_delay(transit_pv.position, transit_pv.date, frame,
                                         approx_emission_date=station_at_transit.date)
            station_uplink = common.remote_pv.shifted_by(-common.tau_d.value - tau_u.value)
            participants = [station_uplink, transit_pv, common.remote_pv]
            range_value = (common.tau_d + tau_u) * (0.5 * CLIGHT)
        else:
            participants = [transit_pv, common.remote_pv]
            date = common.state.date
            dts = satellite.clock_offset_driver.get_value_gradient(nb_params, common.indices, date)
            dtg = self.station.clock_offset_driver.get_value_gradient(nb_params, common.indices, date)
            range_value = (common.tau_d + dtg - dts) * CLIGHT

        estimated = EstimatedMeasurement(self, iteration, evaluation,
                                         [common.transit_state], participants)
        self._fill_estimated(estimated, [range_value], common.indices, 1, nb_params)
        return estimated
