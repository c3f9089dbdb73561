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


"""Core data types: constants, dual numbers and time-stamped coordinates"""

from .constants import CLIGHT, C_RECIPROCAL, FE_WGS84, MU_EARTH, OMGE, RE_WGS84
from .data_structures import MeasurementStatus, ObserverType, SpacecraftState, TimeStampedPV
from .gradient import Gradient, GradientVector

__all__ = [
    'CLIGHT', 'C_RECIPROCAL', 'FE_WGS84', 'MU_EARTH', 'OMGE', 'RE_WGS84',
    'MeasurementStatus', 'ObserverType', 'SpacecraftState', 'TimeStampedPV',
    'Gradient', 'GradientVector'
]
