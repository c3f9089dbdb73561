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


"""
PyODM - Signal Travel Time and Measurement Modeling for Orbit Determination

A Python library computing light-time delays between moving emitters and
receivers, and the theoretical values of orbit determination measurements
(range, range-rate, angles, time and frequency differences) together with
their first-order derivatives with respect to spacecraft state and
estimated parameters.
"""

__version__ = "1.0.0"
__author__ = "PyODM Development Team"
__title__ = "pyodm"
__description__ = "Signal travel time and measurement modeling for orbit determination"

from .core import *
from .coordinate import *
from .parameters import *
from .propagation import *
from .signal import *
from .observation import *
from .utils import *
