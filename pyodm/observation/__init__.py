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


"""Orbit determination measurements

This module provides the theoretical models of:
- Range and range-rate between a ground station and a satellite
- Azimuth/elevation and right ascension/declination angles
- Time and frequency differences of arrival (TDOA, FDOA)
- Bistatic range and range-rate
- Turn-around range between two stations
- Inter-satellite and one-way GNSS ranges

Each measurement gives its value alone or with its derivatives with
respect to the spacecraft states and the selected parameters.
"""

from .angular import AngularAzEl, AngularRaDec, RaDecModel, TopocentricAzElModel
from .bistatic import BistaticRange, BistaticRangeRate
from .common_parameters import (
    CommonParametersWithDerivatives,
    CommonParametersWithoutDerivatives,
    local_parameters_with_derivatives,
    local_parameters_without_derivatives,
    parameter_indices,
    remote_parameters_with_derivatives,
    remote_parameters_without_derivatives,
)
from .diagnostics import estimations_to_dataframe, residual_statistics
from .estimated_measurement import EstimatedMeasurement, EstimatedMeasurementBase
from .fdoa import FDOA
from .ground_station import EarthOrientationDrivers, GroundStation
from .inter_satellites import InterSatellitesRange, OneWayGNSSRange
from .measurement import AbstractMeasurement
from .measurement_object import MeasurementObject, ObservableSatellite
from .modifiers import Bias, EstimationModifier
from .observer import Observer, ObserverSatellite
from .range import Range
from .range_rate import RangeRate
from .tdoa import TDOA
from .turn_around_range import TurnAroundRange

__all__ = [
    'AbstractMeasurement', 'EstimatedMeasurement', 'EstimatedMeasurementBase',
    'MeasurementObject', 'ObservableSatellite', 'Observer', 'ObserverSatellite',
    'GroundStation', 'EarthOrientationDrivers',
    'CommonParametersWithDerivatives', 'CommonParametersWithoutDerivatives',
    'parameter_indices',
    'remote_parameters_with_derivatives', 'remote_parameters_without_derivatives',
    'local_parameters_with_derivatives', 'local_parameters_without_derivatives',
    'Range', 'RangeRate', 'AngularAzEl', 'AngularRaDec', 'TopocentricAzElModel', 'RaDecModel',
    'TDOA', 'FDOA', 'BistaticRange', 'BistaticRangeRate', 'TurnAroundRange',
    'InterSatellitesRange', 'OneWayGNSSRange',
    'Bias', 'EstimationModifier',
    'estimations_to_dataframe', 'residual_statistics'
]
