"""
Reference ellipsoids and the geocentric translation (3-parameter Helmert) datum shift.

All functions accept either floats or numpy arrays of equal shape; angles are in
decimal degrees and distances in meters.
"""

__all__ = [
    'CLARKE_1880_MOD', 'CLARKE_1880_RGS', 'Ellipsoid', 'HelmertShift', 'WGS84',
    'ARC_1960_SHIFT', 'geocentric_to_geodetic', 'geodetic_to_geocentric', 'shift_datum',
]

from dataclasses import dataclass
from functools import cached_property
from typing import Tuple

import numpy as np

from arc1960._const import (
    ARC_1960_TOWGS84,
    CLARKE_1880_MOD_A, CLARKE_1880_MOD_RF,
    CLARKE_1880_RGS_A, CLARKE_1880_RGS_RF,
    GEODETIC_MAX_ITER, GEODETIC_TOLERANCE_RAD,
    WGS84_A, WGS84_RF,
)
from arc1960.exceptions import ProjectionFailure


@dataclass(frozen=True)
class Ellipsoid:
    """A reference ellipsoid defined by its semi-major axis and inverse flattening"""
    name: str
    a: float
    inverse_flattening: float

    @cached_property
    def f(self) -> float:
        """Flattening"""
        return 1 / self.inverse_flattening

    @cached_property
    def b(self) -> float:
        """Semi-minor axis (meters)"""
        return self.a * (1 - self.f)

    @cached_property
    def e2(self) -> float:
        """First eccentricity squared"""
        return self.f * (2 - self.f)

    @cached_property
    def ep2(self) -> float:
        """Second eccentricity squared"""
        return self.e2 / (1 - self.e2)


@dataclass(frozen=True)
class HelmertShift:
    """
    A geocentric translation between two datums, in meters.

    Parameters follow the PROJ +towgs84 convention: they carry a point from the
    local datum onto WGS84, i.e. X_wgs84 = X_local + dx.
    """
    dx: float
    dy: float
    dz: float

    def inverse(self) -> 'HelmertShift':
        """The translation carrying points back the other way"""
        return HelmertShift(-self.dx, -self.dy, -self.dz)

    def apply(self, x, y, z):
        """Translates geocentric cartesian coordinates"""
        return x + self.dx, y + self.dy, z + self.dz


WGS84 = Ellipsoid('WGS 84', WGS84_A, WGS84_RF)
CLARKE_1880_RGS = Ellipsoid('Clarke 1880 (RGS)', CLARKE_1880_RGS_A, CLARKE_1880_RGS_RF)
CLARKE_1880_MOD = Ellipsoid('Clarke 1880 (mod.)', CLARKE_1880_MOD_A, CLARKE_1880_MOD_RF)

ARC_1960_SHIFT = HelmertShift(*ARC_1960_TOWGS84)


def geodetic_to_geocentric(latitude, longitude, height, ellipsoid: Ellipsoid):
    """
    Converts geodetic coordinates to earth-centered, earth-fixed cartesian coordinates.

    Args:
        latitude:
            Latitude in degrees

        longitude:
            Longitude in degrees

        height:
            Ellipsoidal height in meters

        ellipsoid:
            The ellipsoid the geodetic coordinates are referenced to

    Returns:
        (x, y, z) in meters
    """
    lat = np.radians(latitude)
    lon = np.radians(longitude)
    sin_lat, cos_lat = np.sin(lat), np.cos(lat)

    # Prime vertical radius of curvature
    n = ellipsoid.a / np.sqrt(1 - ellipsoid.e2 * sin_lat ** 2)

    x = (n + height) * cos_lat * np.cos(lon)
    y = (n + height) * cos_lat * np.sin(lon)
    z = (n * (1 - ellipsoid.e2) + height) * sin_lat
    return x, y, z


def geocentric_to_geodetic(x, y, z, ellipsoid: Ellipsoid):
    """
    Converts earth-centered, earth-fixed cartesian coordinates to geodetic coordinates
    by fixed-point iteration on the latitude.

    The iteration stops once every latitude moves by less than 1e-11 radians; if that
    doesn't happen within 10 iterations (or a value turns non-finite) a
    ProjectionFailure is raised.

    Args:
        x, y, z:
            Geocentric coordinates in meters

        ellipsoid:
            The ellipsoid to express the result on

    Returns:
        (latitude, longitude, height) in degrees, degrees, meters
    """
    a, e2 = ellipsoid.a, ellipsoid.e2
    p = np.hypot(x, y)
    lon = np.arctan2(y, x)

    # Exact for points on the ellipsoid surface
    lat = np.arctan2(z, p * (1 - e2))
    for _ in range(GEODETIC_MAX_ITER):
        sin_lat = np.sin(lat)
        n = a / np.sqrt(1 - e2 * sin_lat ** 2)
        lat_next = np.arctan2(z + e2 * n * sin_lat, p)
        delta = np.max(np.abs(lat_next - lat))
        lat = lat_next
        if delta < GEODETIC_TOLERANCE_RAD:
            break
    else:
        raise ProjectionFailure(
            f'Geodetic latitude did not converge within {GEODETIC_MAX_ITER} iterations '
            f'on the {ellipsoid.name} ellipsoid'
        )

    sin_lat = np.sin(lat)
    height = p * np.cos(lat) + z * sin_lat - a * np.sqrt(1 - e2 * sin_lat ** 2)
    return np.degrees(lat), np.degrees(lon), height


def shift_datum(
    latitude,
    longitude,
    source: Ellipsoid,
    target: Ellipsoid,
    shift: HelmertShift,
    height=0.0,
) -> Tuple:
    """
    Moves geodetic coordinates from one datum to another through geocentric space.

    Args:
        latitude:
            Latitude in degrees on the source datum

        longitude:
            Longitude in degrees on the source datum

        source:
            The source datum's ellipsoid

        target:
            The target datum's ellipsoid

        shift:
            The geocentric translation carrying source points onto the target datum

        height:
            (Default 0.0) Ellipsoidal height on the source datum, in meters

    Returns:
        (latitude, longitude, height) on the target datum
    """
    x, y, z = shift.apply(*geodetic_to_geocentric(latitude, longitude, height, source))
    return geocentric_to_geodetic(x, y, z, target)
