"""
UTM zone definitions and the Transverse Mercator projection.

The forward and inverse formulas are the series from Snyder, "Map Projections - A
Working Manual" (USGS Professional Paper 1395), equations 8-9/8-10 and 8-12 to 8-18,
with the latitude of origin at the equator. They are accurate to the millimeter
within a UTM zone and degrade with distance from the central meridian.
"""

__all__ = [
    'UTMZone', 'compute_utm_zone_label', 'transverse_mercator_forward',
    'transverse_mercator_inverse', 'utm_zone_for',
]

from dataclasses import dataclass
import math

import numpy as np

from arc1960._const import (
    UTM_FALSE_EASTING, UTM_FALSE_NORTHING_SOUTH, UTM_SCALE_FACTOR, UTM_ZONE_WIDTH
)
from arc1960.coordinates import validate_geodetic
from arc1960.datum import Ellipsoid
from arc1960.exceptions import InvalidInput


@dataclass(frozen=True)
class UTMZone:
    """A UTM zone number (1-60) and hemisphere ('N' or 'S')"""
    number: int
    hemisphere: str

    def __post_init__(self):
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise InvalidInput(f'UTM zone number must be an integer, got {self.number!r}')
        if not 1 <= self.number <= 60:
            raise InvalidInput(f'UTM zone number must be between 1 and 60, got {self.number}')
        if self.hemisphere not in ('N', 'S'):
            raise InvalidInput(f"UTM hemisphere must be 'N' or 'S', got {self.hemisphere!r}")

    @classmethod
    def from_label(cls, label: str) -> 'UTMZone':
        """
        Creates a UTMZone from a label such as '37S'

        Args:
            label:
                The zone number immediately followed by the hemisphere letter

        Returns:
            UTMZone
        """
        label = label.strip().upper()
        if len(label) < 2 or not label[:-1].isdigit():
            raise InvalidInput(f'Unrecognized UTM zone label: {label!r}')

        return cls(int(label[:-1]), label[-1])

    @property
    def central_meridian(self) -> float:
        """Longitude of the zone's central meridian, in degrees"""
        return -183.0 + UTM_ZONE_WIDTH * self.number

    @property
    def false_easting(self) -> float:
        return UTM_FALSE_EASTING

    @property
    def false_northing(self) -> float:
        return UTM_FALSE_NORTHING_SOUTH if self.is_south else 0.0

    @property
    def scale_factor(self) -> float:
        return UTM_SCALE_FACTOR

    @property
    def is_south(self) -> bool:
        return self.hemisphere == 'S'

    @property
    def label(self) -> str:
        return f'{self.number}{self.hemisphere}'

    def contains(self, latitude: float, longitude: float) -> bool:
        """
        Test whether a coordinate lies within this zone's 6 degree band and hemisphere.

        Args:
            latitude:
                Latitude in degrees

            longitude:
                Longitude in degrees

        Returns:
            bool
        """
        return utm_zone_for(latitude, longitude) == self


def utm_zone_for(latitude: float, longitude: float) -> UTMZone:
    """
    Determines the UTM zone a WGS84 coordinate falls in. Longitude 180 is placed in
    zone 60; latitude 0 is treated as northern.

    Args:
        latitude:
            Latitude in degrees, within [-90, 90]

        longitude:
            Longitude in degrees, within [-180, 180]

    Raises:
        InvalidInput: if the coordinate is non-finite or out of range

    Returns:
        UTMZone
    """
    lat, lon = validate_geodetic(latitude, longitude)
    number = int(math.floor((lon + 180) / UTM_ZONE_WIDTH)) + 1
    number = min(max(number, 1), 60)
    return UTMZone(number, 'N' if lat >= 0 else 'S')


def compute_utm_zone_label(latitude: float, longitude: float) -> str:
    """
    Computes the UTM zone label for a WGS84 coordinate, e.g. '37S'.

    Args:
        latitude:
            Latitude in degrees, within [-90, 90]

        longitude:
            Longitude in degrees, within [-180, 180]

    Raises:
        InvalidInput: if the coordinate is non-finite or out of range

    Returns:
        str
    """
    return utm_zone_for(latitude, longitude).label


def _meridian_arc(phi, ellipsoid: Ellipsoid):
    """Distance along the meridian from the equator to latitude phi (radians)"""
    e2 = ellipsoid.e2
    e4, e6 = e2 ** 2, e2 ** 3
    return ellipsoid.a * (
        (1 - e2 / 4 - 3 * e4 / 64 - 5 * e6 / 256) * phi
        - (3 * e2 / 8 + 3 * e4 / 32 + 45 * e6 / 1024) * np.sin(2 * phi)
        + (15 * e4 / 256 + 45 * e6 / 1024) * np.sin(4 * phi)
        - (35 * e6 / 3072) * np.sin(6 * phi)
    )


def transverse_mercator_forward(latitude, longitude, ellipsoid: Ellipsoid, zone: UTMZone):
    """
    Projects geodetic coordinates onto a UTM zone's plane.

    Args:
        latitude:
            Latitude in degrees on the ellipsoid

        longitude:
            Longitude in degrees on the ellipsoid

        ellipsoid:
            The ellipsoid the coordinates are referenced to

        zone:
            The UTM zone to project into

    Returns:
        (easting, northing) in meters
    """
    e2, ep2 = ellipsoid.e2, ellipsoid.ep2
    k0 = zone.scale_factor

    phi = np.radians(latitude)
    # Longitude difference from the central meridian, wrapped to [-180, 180)
    dlon = (np.asarray(longitude) - zone.central_meridian + 180.0) % 360.0 - 180.0
    dlam = np.radians(dlon)

    sin_phi, cos_phi, tan_phi = np.sin(phi), np.cos(phi), np.tan(phi)
    n = ellipsoid.a / np.sqrt(1 - e2 * sin_phi ** 2)
    t = tan_phi ** 2
    c = ep2 * cos_phi ** 2
    a_ = dlam * cos_phi
    m = _meridian_arc(phi, ellipsoid)

    x = k0 * n * (
        a_
        + (1 - t + c) * a_ ** 3 / 6
        + (5 - 18 * t + t ** 2 + 72 * c - 58 * ep2) * a_ ** 5 / 120
    )
    y = k0 * (
        m + n * tan_phi * (
            a_ ** 2 / 2
            + (5 - t + 9 * c + 4 * c ** 2) * a_ ** 4 / 24
            + (61 - 58 * t + t ** 2 + 600 * c - 330 * ep2) * a_ ** 6 / 720
        )
    )
    return x + zone.false_easting, y + zone.false_northing


def transverse_mercator_inverse(easting, northing, ellipsoid: Ellipsoid, zone: UTMZone):
    """
    Recovers geodetic coordinates from a UTM zone's plane.

    Args:
        easting:
            Easting in meters

        northing:
            Northing in meters

        ellipsoid:
            The ellipsoid to express the result on

        zone:
            The UTM zone the coordinates are projected in

    Returns:
        (latitude, longitude) in degrees
    """
    e2, ep2 = ellipsoid.e2, ellipsoid.ep2
    e4, e6 = e2 ** 2, e2 ** 3
    k0 = zone.scale_factor

    x = np.asarray(easting) - zone.false_easting
    m = (np.asarray(northing) - zone.false_northing) / k0

    # Footpoint latitude
    mu = m / (ellipsoid.a * (1 - e2 / 4 - 3 * e4 / 64 - 5 * e6 / 256))
    e1 = (1 - math.sqrt(1 - e2)) / (1 + math.sqrt(1 - e2))
    phi1 = (
        mu
        + (3 * e1 / 2 - 27 * e1 ** 3 / 32) * np.sin(2 * mu)
        + (21 * e1 ** 2 / 16 - 55 * e1 ** 4 / 32) * np.sin(4 * mu)
        + (151 * e1 ** 3 / 96) * np.sin(6 * mu)
        + (1097 * e1 ** 4 / 512) * np.sin(8 * mu)
    )

    sin_phi1, cos_phi1, tan_phi1 = np.sin(phi1), np.cos(phi1), np.tan(phi1)
    c1 = ep2 * cos_phi1 ** 2
    t1 = tan_phi1 ** 2
    n1 = ellipsoid.a / np.sqrt(1 - e2 * sin_phi1 ** 2)
    r1 = ellipsoid.a * (1 - e2) / (1 - e2 * sin_phi1 ** 2) ** 1.5
    d = x / (n1 * k0)

    phi = phi1 - (n1 * tan_phi1 / r1) * (
        d ** 2 / 2
        - (5 + 3 * t1 + 10 * c1 - 4 * c1 ** 2 - 9 * ep2) * d ** 4 / 24
        + (61 + 90 * t1 + 298 * c1 + 45 * t1 ** 2 - 252 * ep2 - 3 * c1 ** 2) * d ** 6 / 720
    )
    dlam = (
        d
        - (1 + 2 * t1 + c1) * d ** 3 / 6
        + (5 - 2 * c1 + 28 * t1 - 3 * c1 ** 2 + 8 * ep2 + 24 * t1 ** 2) * d ** 5 / 120
    ) / cos_phi1

    longitude = (zone.central_meridian + np.degrees(dlam) + 180.0) % 360.0 - 180.0
    return np.degrees(phi), longitude
