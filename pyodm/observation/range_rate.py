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

"""Range-rate (Doppler) measurement between a ground station and a satellite"""

from ..core.constants import CLIGHT
from ..core.data_structures import TimeStampedPV
from ..core.field_math import dot, normalize
from ..propagation.pv_provider import AbsolutePVCoordinates
from .common_parameters import (
    remote_parameters_with_derivatives,
    remote_parameters_without_derivatives,
)
from .estimated_measurement import EstimatedMeasurement, EstimatedMeasurementBase
from .measurement import AbstractMeasurement


def radial_velocity(station_pv: TimeStampedPV, transit_pv: TimeStampedPV):
    """Rate of change of the station/satellite distance along the line of sight

    Positive when the satellite moves away from the station.
    """
    relative_position = station_pv.position - transit_pv.position
    relative_velocity = station_pv.velocity - transit_pv.velocity
    return dot(relative_velocity, normalize(relative_position))


class RangeRate(AbstractMeasurement):
    """Range-rate measurement

    One-way range-rate is the radial velocity along the downlink line of
    sight, corrected by the difference of the clock drifts. Two-way
    range-rate averages the downlink and uplink radial velocities.

    Parameters
    ----------
    station : Observer
        Ground station (or other observer) receiving the signal
    date : float
        Reception date as read by the station clock (s)
    range_rate : float
        Observed range-rate (m/s)
    sigma : float
        Theoretical standard deviation (m/s)
    base_weight : float
        Base weight
    two_way : bool
        True for two-way Doppler
    satellite : ObservableSatellite
        Observed satellite
    signal_travel_time_model : SignalTravelTimeModel, optional
        Signal travel time settings
    """

    measurement_type = "RangeRate"

    def __init__(self, station, date: float, range_rate: float, sigma: float,
                 base_weight: float, two_way: bool, satellite, signal_travel_time_model=None):
        super().__init__(date, range_rate, sigma, base_weight, [satellite], two_way,
                         signal_travel_time_model)
        self.station = station
        self._add_parameters_drivers(station.parameters_drivers)

    def _uplink_station(self, common, field: bool):
        """Station coordinates at uplink emission for two-way measurements"""
        frame = common.state.frame
        model = self.signal_travel_time_model
        station_at_transit = common.remote_pv.shifted_by(-common.tau_d)
        provider = AbsolutePVCoordinates(frame, station_at_transit)
        computer = (model.get_field_adjustable_emitter_computer(provider) if field
                    else model.get_adjustable_emitter_computer(provider))
        tau_u = computer.compute_delay(common.transit_pv.position, common.transit_pv.date, frame,
                                       approx_emission_date=station_at_transit.date)
        return common.remote_pv.shifted_by(-common.tau_d - tau_u)

    def _theoretical_evaluation_without_derivatives(self, iteration, evaluation, states):
        satellite = self.satellites[0]
        common = remote_parameters_without_derivatives(self.station, states, satellite, self.date,
                                                       False, self.signal_travel_time_model)
        downlink = radial_velocity(common.remote_pv, common.transit_pv)

        if self.two_way:
            station_uplink = self._uplink_station(common, False)
            participants = [station_uplink, common.transit_pv, common.remote_pv]
            value = 0.5 * (downlink + radial_velocity(station_uplink, common.transit_pv))
        else:
            participants = [common.transit_pv, common.remote_pv]
            date = common.state.date
            dts_dot = satellite.clock_drift_driver.get_value(date)
            dtg_dot = self.station.clock_drift_driver.get_value(date)
            value = downlink + (dtg_dot - dts_dot) * CLIGHT

        estimated = EstimatedMeasurementBase(self, iteration, evaluation,
                                             [common.transit_state], participants)
        estimated.estimated_value = value
        return estimated

    def _theoretical_evaluation(self, iteration, evaluation, states):
        satellite = self.satellites[0]
        common = remote_parameters_with_derivatives(self.station, states, satellite, self.date,
                                                    False, self.parameters_drivers,
                                                    self.signal_travel_time_model)
        nb_params = common.free_parameters
        downlink = radial_velocity(common.remote_pv, common.transit_pv)

        if self.two_way:
            station_uplink = self._uplink_station(common, True)
            participants = [station_uplink, common.transit_pv, common.remote_pv]
            value = (downlink + radial_velocity(station_uplink, common.transit_pv)) * 0.5
        else:
            participants = [common.transit_pv, common.remote_pv]
            date = common.state.date
            dts_dot = satellite.clock_drift_driver.get_value_gradient(nb_params, common.indices, date)
            dtg_dot = self.station.clock_drift_driver.get_value_gradient(nb_params, common.indices, date)
            value = downlink + (dtg_dot - dts_dot) * CLIGHT

        estimated = EstimatedMeasurement(self, iteration, evaluation,
                                         [common.transit_state], participants)
        self._fill_estimated(estimated, [value], common.indices, 1, nb_params)
        return estimated
