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


"""Physical constants and numerical settings for orbit determination"""

# Physical Constants
CLIGHT = 299792458.0  # speed of light (m/s)
C_RECIPROCAL = 1.0 / CLIGHT  # inverse of the speed of light (s/m)
MU_EARTH = 3.986004418E14  # Earth gravitational parameter (m^3/s^2)

# Earth Parameters
RE_WGS84 = 6378137.0  # earth semimajor axis (WGS84) (m)
FE_WGS84 = 1.0 / 298.257223563  # earth flattening (WGS84)
OMGE = 7.2921151467E-5  # earth angular velocity (IS-GPS) (rad/s)

# Signal travel time iteration
DEFAULT_MAX_ITER = 10  # maximum number of fixed-point iterations
CONVERGENCE_ULP_FACTOR = 2.0  # convergence threshold in units in the last place

# Parameter drivers
CLOCK_OFFSET_SCALE = 2.0 ** -10  # scaling factor for clock parameters
OFFSET_SCALE = 0.25  # scaling factor for station position offsets (m)
EOP_SCALE = 2.0 ** -30  # scaling factor for Earth orientation angles (rad)

# Parameter driver name suffixes
CLOCK_SUFFIX = "-clock"
OFFSET_SUFFIX = "-offset"
DRIFT_SUFFIX = "-drift"
ACCELERATION_SUFFIX = "-acceleration"
EAST_SUFFIX = "-offset-East"
NORTH_SUFFIX = "-offset-North"
ZENITH_SUFFIX = "-offset-Zenith"

# Earth orientation parameter names (shared by all ground stations)
PRIME_MERIDIAN_OFFSET = "prime-meridian-offset"
PRIME_MERIDIAN_DRIFT = "prime-meridian-drift"
POLAR_OFFSET_X = "polar-offset-X"
POLAR_DRIFT_X = "polar-drift-X"
POLAR_OFFSET_Y = "polar-offset-Y"
POLAR_DRIFT_Y = "polar-drift-Y"

# Number of derivative columns per spacecraft state (position and velocity)
STATE_DIMENSION = 6
