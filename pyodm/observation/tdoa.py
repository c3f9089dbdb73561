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


"""Time difference of arrival between two ground stations.

The satellite emits a signal received by a prime and a second station:

    tdoa = (tau_1 + dt_1) - (tau_2 + dt_2)

where ``tau_i`` is the travel time to station ``i`` and ``dt_i`` its clock
offset. The measurement date is the reception date at the prime station.
"""

from ..core.field_math import real
from .common_parameters import (
    remote_parameters_with_derivatives,
    remote_parameters_without_derivatives,
)
from .estimated_measurement import EstimatedMeasurement, EstimatedMeasurementBase
from .measurement import AbstractMeasurement


def second_station_leg(measurement, common, field: bool = False):
    """Travel time and coordinates of the second station

    The signal leaves the satellite at the transit date found for the prime
    station and reaches the second station ``tau_2`` later.

    Returns
    -------
    tuple
        (tau_2, second station PV at reception)
    """
    frame = common.state.frame
    emitter_pv = common.transit_pv
    model = measurement.signal_travel_time_model
    if field:
        provider = measurement.second_station.get_field_pv_coordinates_provider(
            common.free_parameters, common.indices)
        computer = model.get_field_adjustable_receiver_computer(provider)
        tau2 = computer.compute_delay(emitter_pv.position, emitter_pv.date, frame,
                                      approx_reception_date=emitter_pv.date)
    else:
        provider = measurement.second_station.get_pv_coordinates_provider()
        computer = model.get_adjustable_receiver_computer(provider)
        tau2 = computer.compute_delay(emitter_pv.position, emitter_pv.date, frame)
    return tau2, provider.get_pv_coordinates(emitter_pv.date + tau2, frame)


def ordered_participants(emitter_pv, prime_pv, second_pv, difference):
    """Participants in causal order: emitter, first receiver, last receiver"""
    if real(difference) > 0.0:
        return [emitter_pv, second_pv, prime_pv]
    return [emitter_pv, prime_pv, second_pv]


class TDOA(AbstractMeasurement):
    """Time difference of arrival measurement

    Parameters
    ----------
    prime_station : GroundStation
        Station whose reception date is the measurement date
    second_station : GroundStation
        Other receiving station
    date : float
        Reception date at the prime station (s)
    tdoa : float
        Observed time difference (s)
    sigma : float
        Theoretical standard deviation (s)
    base_weight : float
        Base weight
    satellite : ObservableSatellite
        Emitting satellite
    signal_travel_time_model : SignalTravelTimeModel, optional
        Signal travel time settings
    """

    measurement_type = "TDOA"

    def __init__(self, prime_station, second_station, date: float, tdoa: float, sigma: float,
                 base_weight: float, satellite, signal_travel_time_model=None):
        super().__init__(date, tdoa, sigma, base_weight, [satellite], False, signal_travel_time_model)
        self.prime_station = prime_station
        self.second_station = second_station
        self._add_parameters_drivers(prime_station.parameters_drivers)
        self._add_parameters_drivers(second_station.parameters_drivers)

    def _theoretical_evaluation_without_derivatives(self, iteration, evaluation, states):
        common = remote_parameters_without_derivatives(self.prime_station, states, self.satellites[0],
                                                       self.date, False, self.signal_travel_time_model)
        emitter_date = common.transit_pv.date
        tau2, second_pv = second_station_leg(self, common)

        offset1 = self.prime_station.clock_offset_driver.get_value(emitter_date)
        offset2 = self.second_station.clock_offset_driver.get_value(emitter_date)
        tdoa = (common.tau_d + offset1) - (tau2 + offset2)

        estimated = EstimatedMeasurementBase(
            self, iteration, evaluation, [common.transit_state],
            ordered_participants(common.transit_pv, common.remote_pv, second_pv, tdoa))
        estimated.estimated_value = tdoa
        return estimated

    def _theoretical_evaluation(self, iteration, evaluation, states):
        common = remote_parameters_with_derivatives(self.prime_station, states, self.satellites[0],
                                                    self.date, False, self.parameters_drivers,
                                                    self.signal_travel_time_model)
        nb_params = common.free_parameters
        emitter_date = real(common.transit_pv.date)
        tau2, second_pv = second_station_leg(self, common, True)

        offset1 = self.prime_station.clock_offset_driver.get_value_gradient(
            nb_params, common.indices, emitter_date)
        offset2 = self.second_station.clock_offset_driver.get_value_gradient(
            nb_params, common.indices, emitter_date)
        tdoa = (common.tau_d + offset1) - (tau2 + offset2)

        estimated = EstimatedMeasurement(
            self, iteration, evaluation, [common.transit_state],
            ordered_participants(common.transit_pv, common.remote_pv, second_pv, tdoa))
        self._fill_estimated(estimated, [tdoa], common.indices, 1, nb_params)
        return estimated
