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

"""Ellipsoidal Earth model and topocentric frames"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from ..core.constants import FE_WGS84, RE_WGS84
from ..core.field_math import atan2, components, cos, sin, sqrt, vector
from .frames import EarthFixedFrame, Frame

# Number of latitude refinement iterations in Cartesian to geodetic conversion
GEODETIC_ITERATIONS = 6


def ecef2llh(xyz, ae: float = RE_WGS84, f: float = FE_WGS84):
    """Convert body-fixed Cartesian coordinates to geodetic coordinates

    Iterative algorithm working on plain values or gradients.

    Parameters
    ----------
    xyz : np.ndarray or GradientVector
        Body-fixed coordinates [x, y, z] in meters
    ae : float
        Equatorial radius (m)
    f : float
        Flattening

    Returns
    -------
    tuple
        (lat, lon, height) in radians and meters

    Notes
    -----
    Points on the polar axis are not supported.
    """
    x, y, z = components(xyz)
    e2 = f * (2.0 - f)

    lon = atan2(y, x)

    p = sqrt(x * x + y * y)
    lat = atan2(z, p * (1.0 - f))

    h = 0.0
    for _ in range(GEODETIC_ITERATIONS):
        sin_lat = sin(lat)
        N = ae / sqrt(1.0 - e2 * sin_lat * sin_lat)
        h = p / cos(lat) - N
        lat = atan2(z, p * (1.0 - e2 * N / (N + h)))

    return lat, lon, h


def llh2ecef(lat, lon, h, ae: float = RE_WGS84, f: float = FE_WGS84):
    """Convert geodetic coordinates to body-fixed Cartesian coordinates

    Parameters
    ----------
    lat, lon : float or Gradient
        Geodetic latitude and longitude (rad)
    h : float or Gradient
        Height above the ellipsoid (m)
    ae : float
        Equatorial radius (m)
    f : float
        Flattening

    Returns
    -------
    np.ndarray or GradientVector
        Cartesian coordinates [x, y, z] in meters
    """
    e2 = f * (2.0 - f)
    sin_lat = sin(lat)
    cos_lat = cos(lat)
    N = ae / sqrt(1.0 - e2 * sin_lat * sin_lat)
    return vector((N + h) * cos_lat * cos(lon),
                  (N + h) * cos_lat * sin(lon),
                  (N * (1.0 - e2) + h) * sin_lat)


@dataclass(frozen=True)
class GeodeticPoint:
    """Point defined by geodetic latitude, longitude and altitude

    Attributes
    ----------
    latitude : float or Gradient
        Geodetic latitude (rad)
    longitude : float or Gradient
        Longitude (rad)
    altitude : float or Gradient
        Height above the ellipsoid (m)
    """
    latitude: Any
    longitude: Any
    altitude: Any = 0.0

    @property
    def east(self):
        """Local east direction in body-fixed axes"""
        return vector(-sin(self.longitude), cos(self.longitude), 0.0)

    @property
    def north(self):
        """Local north direction in body-fixed axes"""
        sin_lat, cos_lat = sin(self.latitude), cos(self.latitude)
        return vector(-sin_lat * cos(self.longitude), -sin_lat * sin(self.longitude), cos_lat)

    @property
    def zenith(self):
        """Local zenith direction in body-fixed axes"""
        cos_lat = cos(self.latitude)
        return vector(cos_lat * cos(self.longitude), cos_lat * sin(self.longitude),
                      sin(self.latitude))


class OneAxisEllipsoid:
    """Ellipsoid of revolution attached to a body-fixed frame

    Parameters
    ----------
    ae : float
        Equatorial radius (m)
    f : float
        Flattening
    body_frame : EarthFixedFrame
        Frame the ellipsoid is attached to
    """

    def __init__(self, ae: float = RE_WGS84, f: float = FE_WGS84,
                 body_frame: EarthFixedFrame = None):
        self.ae = ae
        self.f = f
        self.body_frame = body_frame if body_frame is not None else EarthFixedFrame()

    def transform_to_geodetic(self, point, frame: Frame, date) -> GeodeticPoint:
        """Convert a Cartesian point expressed in ``frame`` at ``date``"""
        body_point = frame.transform_position_to(point, date, self.body_frame)
        lat, lon, h = ecef2llh(body_point, self.ae, self.f)
        return GeodeticPoint(lat, lon, h)

    def transform_to_cartesian(self, point: GeodeticPoint):
        """Cartesian coordinates of a geodetic point in the body frame"""
        return llh2ecef(point.latitude, point.longitude, point.altitude, self.ae, self.f)


class TopocentricFrame:
    """Local east/north/zenith frame at a point on an ellipsoid

    Parameters
    ----------
    parent_shape : OneAxisEllipsoid
        Body shape the point belongs to
    point : GeodeticPoint
        Frame origin
    name : str
        Frame name
    """

    def __init__(self, parent_shape: OneAxisEllipsoid, point: GeodeticPoint, name: str):
        self.parent_shape = parent_shape
        self.point = point
        self.name = name
        self.origin = np.asarray(parent_shape.transform_to_cartesian(point), dtype=float)
        self.east = point.east
        self.north = point.north
        self.zenith = point.zenith

    def to_body(self, topocentric):
        """Body-fixed vector of a topocentric (east, north, zenith) vector"""
        e, n, z = components(topocentric)
        return self.east * e + self.north * n + self.zenith * z
