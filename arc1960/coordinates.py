"""
Geodetic and projected coordinate value types
"""

__all__ = ['GeodeticCoordinate', 'ProjectedCoordinate', 'validate_geodetic']

from dataclasses import dataclass
from typing import Tuple

from arc1960.exceptions import InvalidInput
from arc1960.utils.functions import is_finite, round_half_up


def validate_geodetic(latitude: float, longitude: float) -> Tuple[float, float]:
    """
    Checks a latitude/longitude pair in decimal degrees and returns it as floats.

    Args:
        latitude:
            Latitude, expected within [-90, 90]

        longitude:
            Longitude, expected within [-180, 180]

    Raises:
        InvalidInput: if either value is non-finite or out of range

    Returns:
        Tuple of (latitude, longitude)
    """
    if not is_finite(latitude, longitude):
        raise InvalidInput(
            f'Latitude and longitude must be finite numbers, got ({latitude!r}, {longitude!r})'
        )

    lat, lon = float(latitude), float(longitude)
    if not -90 <= lat <= 90:
        raise InvalidInput(f'Latitude must be between -90 and 90, got {lat}')
    if not -180 <= lon <= 180:
        raise InvalidInput(f'Longitude must be between -180 and 180, got {lon}')

    return lat, lon


@dataclass(frozen=True)
class GeodeticCoordinate:
    """A latitude/longitude pair in decimal degrees"""
    latitude: float
    longitude: float

    def __post_init__(self):
        lat, lon = validate_geodetic(self.latitude, self.longitude)
        object.__setattr__(self, 'latitude', lat)
        object.__setattr__(self, 'longitude', lon)

    def to_dms(self) -> Tuple[Tuple[int, int, float, str], Tuple[int, int, float, str]]:
        """
        Convert the coordinate to degrees, minutes, seconds, hemisphere.

        Returns:
            ((lat degrees, minutes, seconds, 'N'/'S'), (lon degrees, minutes, seconds, 'E'/'W'))
        """
        def convert(dd: float) -> Tuple[int, int, float]:
            """Converts a Decimal Degree to Degrees Minutes Seconds"""
            minutes, seconds = divmod(abs(dd) * 3600, 60)
            degrees, minutes = divmod(minutes, 60)
            return int(degrees), int(minutes), round_half_up(seconds, 5)

        return (
            (*convert(self.latitude), 'N' if self.latitude >= 0 else 'S'),
            (*convert(self.longitude), 'E' if self.longitude >= 0 else 'W'),
        )

    def to_float(self) -> Tuple[float, float]:
        """Returns (latitude, longitude)"""
        return self.latitude, self.longitude

    def to_str(self) -> Tuple[str, str]:
        """Renders (latitude, longitude) to 6 decimal places with a degree mark"""
        return f'{self.latitude:.6f}°', f'{self.longitude:.6f}°'


@dataclass(frozen=True)
class ProjectedCoordinate:
    """An easting/northing pair in meters on a projected plane"""
    easting: float
    northing: float

    def to_float(self) -> Tuple[float, float]:
        """Returns (easting, northing)"""
        return self.easting, self.northing

    def to_str(self) -> Tuple[str, str]:
        """Renders (easting, northing) to 2 decimal places in meters"""
        return f'{self.easting:.2f} m', f'{self.northing:.2f} m'
