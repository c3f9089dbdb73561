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


"""Angular measurements from ground stations.

Two kinds of angles are supported:

- azimuth/elevation in the topocentric frame of the station
  (:class:`AngularAzEl`),
- right ascension/declination in an inertial reference frame
  (:class:`AngularRaDec`).

Both are apparent directions: the line of sight goes from the station at
reception date to the satellite at the light-time corrected emission date.
The first angle is wrapped to the 2π interval centred on its observed
value so that residuals never jump by a full turn.
"""

import math
from typing import Dict

from ..core.field_math import asin, atan2, components, cos, dot, norm, normalize, real, sin, vector
from ..core.gradient import Gradient
from ..coordinate.frames import Frame
from ..coordinate.geodesy import GeodeticPoint, OneAxisEllipsoid
from ..signal.model import SignalTravelTimeModel
from ..utils.angles import normalize_angle
from .common_parameters import free_parameters_count, get_coordinates, parameter_indices
from .estimated_measurement import EstimatedMeasurement, EstimatedMeasurementBase
from .measurement import AbstractMeasurement
from .measurement_object import ObservableSatellite


def _check_pseudo_inertial(frame: Frame):
    if not frame.is_pseudo_inertial():
        raise ValueError(f"Frame {frame.name} is not pseudo-inertial")


class AbstractAngularMeasurementModel:
    """Common part of the angular measurement models

    Parameters
    ----------
    signal_travel_time_model : SignalTravelTimeModel
        Signal travel time settings
    """

    def __init__(self, signal_travel_time_model: SignalTravelTimeModel):
        self.signal_travel_time_model = signal_travel_time_model

    def _emitter_to_receiver_vector(self, frame, receiver_position, reception_date, emitter,
                                    approx_emission_date):
        """Vector from the receiver to the emitter at its emission date"""
        model = self.signal_travel_time_model
        if isinstance(reception_date, Gradient):
            computer = model.get_field_adjustable_emitter_computer(emitter)
        else:
            computer = model.get_adjustable_emitter_computer(emitter)
        delay = computer.compute_delay(receiver_position, reception_date, frame,
                                       approx_emission_date=approx_emission_date)
        observed_position = emitter.get_position(reception_date - delay, frame)
        return observed_position - receiver_position


class TopocentricAzElModel(AbstractAngularMeasurementModel):
    """Azimuth and elevation of an emitter seen from a point on a body

    Azimuth is counted clockwise from north, elevation from the local
    horizontal plane.

    Parameters
    ----------
    inertial_frame : Frame
        Pseudo-inertial frame in which the line of sight is computed
    body_shape : OneAxisEllipsoid
        Body the receiver lies on
    signal_travel_time_model : SignalTravelTimeModel
        Signal travel time settings

    Raises
    ------
    ValueError
        If ``inertial_frame`` is not pseudo-inertial
    """

    def __init__(self, inertial_frame: Frame, body_shape: OneAxisEllipsoid,
                 signal_travel_time_model: SignalTravelTimeModel):
        super().__init__(signal_travel_time_model)
        _check_pseudo_inertial(inertial_frame)
        self.inertial_frame = inertial_frame
        self.body_shape = body_shape

    def value(self, receiver: GeodeticPoint, reception_date, emitter, approx_emission_date):
        """Azimuth and elevation of the emitter

        Parameters
        ----------
        receiver : GeodeticPoint
            Receiver location, plain or differentiated
        reception_date : float or Gradient
            Signal reception date
        emitter : PVCoordinatesProvider
            Emitter trajectory
        approx_emission_date : float or Gradient
            Approximate emission date

        Returns
        -------
        tuple
            (azimuth, elevation) in radians
        """
        body_frame = self.body_shape.body_frame
        body_position = self.body_shape.transform_to_cartesian(receiver)
        receiver_position = body_frame.transform_position_to(body_position, reception_date,
                                                             self.inertial_frame)
        line_of_sight = normalize(self._emitter_to_receiver_vector(
            self.inertial_frame, receiver_position, reception_date, emitter, approx_emission_date))

        east, north, zenith = (body_frame.transform_vector_to(axis, reception_date, self.inertial_frame)
                               for axis in (receiver.east, receiver.north, receiver.zenith))
        azimuth = atan2(dot(line_of_sight, east), dot(line_of_sight, north))
        elevation = asin(dot(line_of_sight, zenith) / norm(line_of_sight))
        return azimuth, elevation


class RaDecModel(AbstractAngularMeasurementModel):
    """Right ascension and declination of an emitter in a reference frame

    Parameters
    ----------
    reference_frame : Frame
        Pseudo-inertial frame the angles are expressed in
    signal_travel_time_model : SignalTravelTimeModel
        Signal travel time settings

    Raises
    ------
    ValueError
        If ``reference_frame`` is not pseudo-inertial
    """

    def __init__(self, reference_frame: Frame, signal_travel_time_model: SignalTravelTimeModel):
        super().__init__(signal_travel_time_model)
        _check_pseudo_inertial(reference_frame)
        self.reference_frame = reference_frame

    def value(self, frame: Frame, receiver_position, reception_date, emitter, approx_emission_date):
        """Right ascension and declination of the emitter

        Returns
        -------
        tuple
            (right ascension, declination) in radians
        """
        line_of_sight = normalize(self._emitter_to_receiver_vector(
            frame, receiver_position, reception_date, emitter, approx_emission_date))
        line_of_sight = frame.transform_vector_to(line_of_sight, reception_date, self.reference_frame)
        x, y, z = components(line_of_sight)
        return atan2(y, x), asin(z / norm(line_of_sight))


def _direction(alpha: float, delta: float):
    """Unit vector of spherical angles, alpha from the x axis toward y"""
    return vector(cos(delta) * cos(alpha), cos(delta) * sin(alpha), sin(delta))


class GroundBasedAngularMeasurement(AbstractMeasurement):
    """Base class of two-angle measurements from a ground station

    Parameters
    ----------
    station : GroundStation
        Receiving ground station
    date : float
        Reception date as read by the station clock (s)
    angular : array_like, shape (2,)
        Observed angles (rad)
    sigma : array_like, shape (2,)
        Theoretical standard deviations (rad)
    base_weight : array_like, shape (2,)
        Base weights
    satellite : ObservableSatellite
        Observed satellite
    signal_travel_time_model : SignalTravelTimeModel, optional
        Signal travel time settings
    """

    def __init__(self, station, date: float, angular, sigma, base_weight, satellite,
                 signal_travel_time_model=None):
        super().__init__(date, angular, sigma, base_weight, [satellite], False,
                         signal_travel_time_model)
        if self.dimension != 2:
            raise ValueError(f"Angular measurements need 2 angles, got {self.dimension}")
        self.station = station
        self._add_parameters_drivers(station.parameters_drivers)

    def _corrected_reception_date(self) -> float:
        """Reception date corrected for the station clock offset"""
        return self.date - self.station.quadratic_clock_model.get_offset(self.date).offset

    def _field_corrected_reception_date(self, free_parameters: int, indices: Dict[str, int]):
        clock = self.station.get_quadratic_field_clock_model(free_parameters, indices, self.date)
        date = Gradient.constant(free_parameters, self.date)
        return date - clock.get_offset(date).offset

    def _compute_emission_date(self, frame, receiver, reception_date, emitter):
        """Emission date of the signal received at ``reception_date``"""
        model = self.signal_travel_time_model
        if isinstance(reception_date, Gradient):
            computer = model.get_field_adjustable_emitter_computer(emitter)
        else:
            computer = model.get_adjustable_emitter_computer(emitter)
        delay = computer.compute_delay(receiver.get_position(reception_date, frame), reception_date,
                                       frame, approx_emission_date=reception_date)
        return reception_date - delay

    def wrap_first_angle(self, base_angle):
        """Shift the first angle by whole turns next to its observed value"""
        base = real(base_angle)
        return base_angle + (normalize_angle(base, self._observed[0]) - base)

    def _indices(self, states):
        indices = parameter_indices(states, self.parameters_drivers)
        return indices, free_parameters_count(states, indices)

    def _fill_angles(self, estimated: EstimatedMeasurement, first_angle, second_angle,
                     indices: Dict[str, int], free_parameters: int):
        self._fill_estimated(estimated, [self.wrap_first_angle(first_angle), second_angle],
                             indices, 1, free_parameters)


class AngularAzEl(GroundBasedAngularMeasurement):
    """Azimuth/elevation measurement

    The observed value is ``[azimuth, elevation]`` in radians, azimuth
    counted clockwise from north.
    """

    measurement_type = "AngularAzEl"

    def _theoretical_evaluation_without_derivatives(self, iteration, evaluation, states):
        reception_date = self._corrected_reception_date()
        receiver_provider = self.station.get_pv_coordinates_provider()
        state = states[0]
        frame = state.frame
        emitter = ObservableSatellite.extract_pv_coordinates_provider(state, state.pv)
        emission_date = self._compute_emission_date(frame, receiver_provider, reception_date, emitter)

        body_shape = self.station.base_frame.parent_shape
        receiver_pv = receiver_provider.get_pv_coordinates(reception_date, frame)
        geodetic_point = body_shape.transform_to_geodetic(receiver_pv.position, frame, reception_date)
        model = TopocentricAzElModel(frame, body_shape, self.signal_travel_time_model)
        azimuth, elevation = model.value(geodetic_point, reception_date, emitter, emission_date)

        shifted_state = state.shifted_by(emission_date - state.date)
        estimated = EstimatedMeasurementBase(self, iteration, evaluation, [shifted_state],
                                             [shifted_state.pv, receiver_pv])
        estimated.estimated_value = [self.wrap_first_angle(azimuth), elevation]
        return estimated

    def _theoretical_evaluation(self, iteration, evaluation, states):
        indices, nb_params = self._indices(states)
        state = states[0]
        frame = state.frame
        pva = get_coordinates(state, 0, nb_params)
        receiver_provider = self.station.get_field_pv_coordinates_provider(nb_params, indices)

        reception_date = self._field_corrected_reception_date(nb_params, indices)
        receiver_pv = receiver_provider.get_pv_coordinates(reception_date, frame)
        emitter = ObservableSatellite.extract_pv_coordinates_provider(state, pva)
        emission_date = self._compute_emission_date(frame, receiver_provider, reception_date, emitter)

        body_shape = self.station.base_frame.parent_shape
        geodetic_point = body_shape.transform_to_geodetic(receiver_pv.position, frame, reception_date)
        model = TopocentricAzElModel(frame, body_shape, self.signal_travel_time_model)
        azimuth, elevation = model.value(geodetic_point, reception_date, emitter, emission_date)

        shifted_state = state.shifted_by(real(emission_date) - state.date)
        estimated = EstimatedMeasurement(self, iteration, evaluation, [shifted_state],
                                         [shifted_state.pv, receiver_pv])
        self._fill_angles(estimated, azimuth, elevation, indices, nb_params)
        return estimated

    def get_observed_line_of_sight(self, output_frame: Frame):
        """Observed line of sight as a unit vector in ``output_frame``"""
        azimuth, elevation = self._observed
        base_frame = self.station.base_frame
        body_vector = base_frame.to_body(_direction(0.5 * math.pi - azimuth, elevation))
        return base_frame.parent_shape.body_frame.transform_vector_to(body_vector, self.date, output_frame)


class AngularRaDec(GroundBasedAngularMeasurement):
    """Right ascension/declination measurement

    Parameters
    ----------
    station : GroundStation
        Receiving ground station
    reference_frame : Frame
        Pseudo-inertial frame the observed angles are expressed in
    date : float
        Reception date as read by the station clock (s)
    angular : array_like, shape (2,)
        Observed right ascension and declination (rad)
    sigma, base_weight : array_like, shape (2,)
        Standard deviations and base weights
    satellite : ObservableSatellite
        Observed satellite
    signal_travel_time_model : SignalTravelTimeModel, optional
        Signal travel time settings
    """

    measurement_type = "AngularRaDec"

    def __init__(self, station, reference_frame: Frame, date: float, angular, sigma, base_weight,
                 satellite, signal_travel_time_model=None):
        super().__init__(station, date, angular, sigma, base_weight, satellite,
                         signal_travel_time_model)
        self.reference_frame = reference_frame
        self.model = RaDecModel(reference_frame, self.signal_travel_time_model)

    def _theoretical_evaluation_without_derivatives(self, iteration, evaluation, states):
        reception_date = self._corrected_reception_date()
        receiver = self.station.get_pv_coordinates_provider()
        state = states[0]
        emitter = ObservableSatellite.extract_pv_coordinates_provider(state, state.pv)
        emission_date = self._compute_emission_date(self.reference_frame, receiver, reception_date,
                                                    emitter)

        frame = state.frame
        receiver_pv = receiver.get_pv_coordinates(reception_date, frame)
        ra, dec = self.model.value(frame, receiver_pv.position, reception_date, emitter, emission_date)

        shifted_state = state.shifted_by(emission_date - state.date)
        estimated = EstimatedMeasurementBase(self, iteration, evaluation, [shifted_state],
                                             [shifted_state.pv, receiver_pv])
        estimated.estimated_value = [self.wrap_first_angle(ra), dec]
        return estimated

    def _theoretical_evaluation(self, iteration, evaluation, states):
        indices, nb_params = self._indices(states)
        state = states[0]
        pva = get_coordinates(state, 0, nb_params)
        reception_date = self._field_corrected_reception_date(nb_params, indices)
        receiver = self.station.get_field_pv_coordinates_provider(nb_params, indices)
        emitter = ObservableSatellite.extract_pv_coordinates_provider(state, pva)
        emission_date = self._compute_emission_date(self.reference_frame, receiver, reception_date,
                                                    emitter)

        frame = state.frame
        receiver_pv = receiver.get_pv_coordinates(reception_date, frame)
        ra, dec = self.model.value(frame, receiver_pv.position, reception_date, emitter, emission_date)

        shifted_state = state.shifted_by(real(emission_date) - state.date)
        estimated = EstimatedMeasurement(self, iteration, evaluation, [shifted_state],
                                         [shifted_state.pv, receiver_pv])
        self._fill_angles(estimated, ra, dec, indices, nb_params)
        return estimated

    def get_observed_line_of_sight(self, output_frame: Frame):
        """Observed line of sight as a unit vector in ``output_frame``"""
        ra, dec = self._observed
        return self.reference_frame.transform_vector_to(_direction(ra, dec), self.date, output_frame)
