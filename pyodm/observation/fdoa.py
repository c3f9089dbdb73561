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


"""Frequency difference of arrival between two ground stations.

The Doppler shifts of a carrier received at two stations differ by

    fdoa = -(f0 / c) * (rr_1 - rr_2)

where ``rr_i`` is the range-rate between the satellite at emission and
station ``i`` at reception, and ``f0`` the carrier centre frequency.
"""

from ..core.constants import CLIGHT
from ..core.field_math import dot, normalize, real
from .common_parameters import (
    remote_parameters_with_derivatives,
    remote_parameters_without_derivatives,
)
from .estimated_measurement import EstimatedMeasurement, EstimatedMeasurementBase
from .measurement import AbstractMeasurement
from .tdoa import ordered_participants, second_station_leg


def _range_rate(receiver_pv, emitter_pv):
    direction = normalize(receiver_pv.position - emitter_pv.position)
    return dot(direction, receiver_pv.velocity - emitter_pv.velocity)


class FDOA(AbstractMeasurement):
    """Frequency difference of arrival measurement

    Parameters
    ----------
    prime_station : GroundStation
        Station whose reception date is the measurement date
    second_station : GroundStation
        Other receiving station
    centre_frequency : float
        Carrier centre frequency (Hz)
    date : float
        Reception date at the prime station (s)
    fdoa : float
        Observed frequency difference (Hz)
    sigma : float
        Theoretical standard deviation (Hz)
    base_weight : float
        Base weight
    satellite : ObservableSatellite
        Emitting satellite
    signal_travel_time_model : SignalTravelTimeModel, optional
        Signal travel time settings
    """

    measurement_type = "FDOA"

    def __init__(self, prime_station, second_station, centre_frequency: float, date: float,
                 fdoa: float, sigma: float, base_weight: float, satellite,
                 signal_travel_time_model=None):
        super().__init__(date, fdoa, sigma, base_weight, [satellite], False, signal_travel_time_model)
        self.prime_station = prime_station
        self.second_station = second_station
        self.centre_frequency = centre_frequency
        self._add_parameters_drivers(prime_station.parameters_drivers)
        self._add_parameters_drivers(second_station.parameters_drivers)

    @property
    def range_rate_to_hz(self) -> float:
        return -self.centre_frequency / CLIGHT

    def _theoretical_evaluation_without_derivatives(self, iteration, evaluation, states):
        common = remote_parameters_without_derivatives(self.prime_station, states, self.satellites[0],
                                                       self.date, False, self.signal_travel_time_model)
        emitter_pv = common.transit_pv
        tau2, second_pv = second_station_leg(self, common)

        offset1 = self.prime_station.clock_offset_driver.get_value(emitter_pv.date)
        offset2 = self.second_station.clock_offset_driver.get_value(emitter_pv.date)
        tdoa = (common.tau_d + offset1) - (tau2 + offset2)

        estimated = EstimatedMeasurementBase(
            self, iteration, evaluation, [common.transit_state],
            ordered_participants(emitter_pv, common.remote_pv, second_pv, tdoa))
        difference = _range_rate(common.remote_pv, emitter_pv) - _range_rate(second_pv, emitter_pv)
        estimated.estimated_value = difference * self.range_rate_to_hz
        return estimated

    def _theoretical_evaluation(self, iteration, evaluation, states):
        common = remote_parameters_with_derivatives(self.prime_station, states, self.satellites[0],
                                                    self.date, False, self.parameters_drivers,
                                                    self.signal_travel_time_model)
        nb_params = common.free_parameters
        emitter_pv = common.transit_pv
        tau2, second_pv = second_station_leg(self, common, True)

        emitter_date = real(emitter_pv.date)
        offset1 = self.prime_station.clock_offset_driver.get_value(emitter_date)
        offset2 = self.second_station.clock_offset_driver.get_value(emitter_date)
        tdoa = (real(common.tau_d) + offset1) - (real(tau2) + offset2)

        estimated = EstimatedMeasurement(
            self, iteration, evaluation, [common.transit_state],
            ordered_participants(emitter_pv, common.remote_pv, second_pv, tdoa))
        difference = _range_rate(common.remote_pv, emitter_pv) - _range_rate(second_pv, emitter_pv)
        self._fill_estimated(estimated, [difference * self.range_rate_to_hz], common.indices, 1,
                             nb_params)
        return estimated
