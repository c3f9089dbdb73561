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


"""Turn-around range between two ground stations.

The primary station emits a signal, the satellite relays it to the
secondary station, which sends it back through the satellite to the
primary station. The four legs are solved backward from the reception
date at the primary station:

1. satellite to primary station (primary downlink),
2. secondary station to satellite (secondary uplink),
3. satellite to secondary station (secondary downlink),
4. primary station to satellite (primary uplink).

The measurement is half the total travel time times the speed of light.
"""

import logging

from ..core.constants import CLIGHT
from ..core.field_math import real
from ..core.gradient import Gradient
from ..propagation.pv_provider import AbsolutePVCoordinates
from .common_parameters import free_parameters_count, get_coordinates, parameter_indices
from .estimated_measurement import EstimatedMeasurement, EstimatedMeasurementBase
from .measurement import AbstractMeasurement

logger = logging.getLogger(__name__)


class TurnAroundRange(AbstractMeasurement):
    """Turn-around range measurement

    Parameters
    ----------
    primary_station : GroundStation
        Station emitting and finally receiving the signal
    secondary_station : GroundStation
        Station sending the signal back
    date : float
        Reception date as read by the primary station clock (s)
    turn_around_range : float
        Observed turn-around range (m)
    sigma : float
        Theoretical standard deviation (m)
    base_weight : float
        Base weight
    satellite : ObservableSatellite
        Relaying satellite
    signal_travel_time_model : SignalTravelTimeModel, optional
        Signal travel time settings
    """

    measurement_type = "TurnAroundRange"

    def __init__(self, primary_station, secondary_station, date: float, turn_around_range: float,
                 sigma: float, base_weight: float, satellite, signal_travel_time_model=None):
        super().__init__(date, turn_around_range, sigma, base_weight, [satellite], True,
                         signal_travel_time_model)
        self.primary_station = primary_station
        self.secondary_station = secondary_station
        self._add_parameters_drivers(primary_station.parameters_drivers)
        self._add_parameters_drivers(secondary_station.parameters_drivers)

    def _legs(self, state, pva, measurement_date, primary, secondary, field: bool):
        """Solve the four legs, plain or differentiated

        Parameters
        ----------
        state : SpacecraftState
            Relaying spacecraft state
        pva : TimeStampedPV
            Coordinates of ``state``, plain or differentiated
        measurement_date : float or Gradient
            Clock-compensated reception date at the primary station
        primary, secondary : PVCoordinatesProvider
            Station coordinate providers

        Returns
        -------
        tuple
            (value, supporting state, participants)
        """
        frame = state.frame
        model = self.signal_travel_time_model
        computer = (model.get_field_adjustable_emitter_computer if field
                    else model.get_adjustable_emitter_computer)

        # leg 1: satellite to primary station
        primary_arrival = primary.get_pv_coordinates(measurement_date, frame)
        primary_tau_d = computer(AbsolutePVCoordinates(frame, pva)).compute_delay(
            primary_arrival.position, measurement_date, frame, approx_emission_date=pva.date)
        dt_leg2 = (measurement_date - state.date) - primary_tau_d
        transit_leg2_pv = pva.shifted_by(dt_leg2)

        # leg 2: secondary station to satellite
        secondary_tau_u = computer(secondary).compute_delay(transit_leg2_pv.position,
                                                            transit_leg2_pv.date, frame)
        rebound_date = measurement_date - (primary_tau_d + secondary_tau_u)
        secondary_rebound = secondary.get_pv_coordinates(rebound_date, frame)

        # leg 3: satellite to secondary station
        secondary_tau_d = computer(AbsolutePVCoordinates(frame, transit_leg2_pv)).compute_delay(
            secondary_rebound.position, rebound_date, frame,
            approx_emission_date=transit_leg2_pv.date)
        dt_leg1 = dt_leg2 - secondary_tau_u - secondary_tau_d
        transit_leg1_pv = pva.shifted_by(dt_leg1)

        # leg 4: primary station to satellite
        primary_tau_u = computer(primary).compute_delay(transit_leg1_pv.position,
                                                        transit_leg1_pv.date, frame)
        primary_departure = primary.get_pv_coordinates(transit_leg1_pv.date - primary_tau_u, frame)

        logger.debug(f"Turn-around legs: {real(primary_tau_d):.9e}, {real(secondary_tau_u):.9e}, "
                     f"{real(secondary_tau_d):.9e}, {real(primary_tau_u):.9e} s")

        value = (primary_tau_d + secondary_tau_u + secondary_tau_d + primary_tau_u) * (0.5 * CLIGHT)
        transit_state = state.shifted_by(real(dt_leg2))
        participants = [primary_departure, transit_leg1_pv, secondary_rebound,
                        transit_state.pv, primary_arrival]
        return value, transit_state.shifted_by(-real(secondary_tau_u)), participants

    def _theoretical_evaluation_without_derivatives(self, iteration, evaluation, states):
        state = states[0]
        offset = self.primary_station.quadratic_clock_model.get_offset(self.date).offset
        value, supporting, participants = self._legs(
            state, state.pv, self.date - offset,
            self.primary_station.get_pv_coordinates_provider(),
            self.secondary_station.get_pv_coordinates_provider(), False)
        estimated = EstimatedMeasurementBase(self, iteration, evaluation, [supporting], participants)
        estimated.estimated_value = value
        return estimated

    def _theoretical_evaluation(self, iteration, evaluation, states):
        state = states[0]
        indices = parameter_indices([state], self.parameters_drivers)
        nb_params = free_parameters_count([state], indices)
        pva = get_coordinates(state, 0, nb_params)

        date = Gradient.constant(nb_params, self.date)
        clock = self.primary_station.get_quadratic_field_clock_model(nb_params, indices, self.date)
        measurement_date = date - clock.get_offset(date).offset

        value, supporting, participants = self._legs(
            state, pva, measurement_date,
            self.primary_station.get_field_pv_coordinates_provider(nb_params, indices),
            self.secondary_station.get_field_pv_coordinates_provider(nb_params, indices), True)
        estimated = EstimatedMeasurement(self, iteration, evaluation, [supporting], participants)
        self._fill_estimated(estimated, [value], indices, 1, nb_params)
        return estimated
