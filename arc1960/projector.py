"""
Datum shift + UTM projection pipelines and the named Arc 1960 presets
"""

__all__ = [
    'ARC_1960_UTM_37S', 'PROJECTORS', 'CoordinateProjector', 'get_projector',
    'wgs84_to_arc1960_utm37s',
]

from typing import Dict, Optional, Tuple

import numpy as np

from arc1960._const import UTM_MAX_MERIDIAN_OFFSET
from arc1960.coordinates import GeodeticCoordinate, ProjectedCoordinate, validate_geodetic
from arc1960.datum import (
    ARC_1960_SHIFT, CLARKE_1880_RGS, WGS84, Ellipsoid, HelmertShift, shift_datum
)
from arc1960.exceptions import InvalidInput, ProjectionError, ProjectionFailure
from arc1960.projection import (
    UTMZone, transverse_mercator_forward, transverse_mercator_inverse, utm_zone_for
)
from arc1960.utils.functions import is_finite
from arc1960.utils.mixins import LoggingMixin


class CoordinateProjector(LoggingMixin):
    """
    Converts WGS84 geodetic coordinates to a UTM grid on another datum.

    The pipeline is: WGS84 geodetic -> geocentric, geocentric translation onto the
    target datum, geocentric -> geodetic on the target ellipsoid, then the Transverse
    Mercator projection of the target UTM zone. The projector holds no mutable state
    and may be shared between threads.

    Args:
        zone:
            The target UTM zone

        target:
            (Default Clarke 1880 (RGS)) The target datum's ellipsoid

        shift:
            (Default Arc 1960) Geocentric translation from the target datum to WGS84,
            in the PROJ +towgs84 convention

        source:
            (Default WGS84) The ellipsoid of incoming geodetic coordinates

        name:
            Optional human-readable name, e.g. 'Arc 1960 / UTM zone 37S'
    """

    def __init__(
        self,
        zone: UTMZone,
        target: Ellipsoid = CLARKE_1880_RGS,
        shift: HelmertShift = ARC_1960_SHIFT,
        source: Ellipsoid = WGS84,
        name: Optional[str] = None,
    ):
        super().__init__()
        self._zone = zone
        self._target = target
        self._shift = shift
        self._source = source
        self._name = name or f'{target.name} / UTM zone {zone.label}'

    def __repr__(self):
        return f'<CoordinateProjector({self._name})>'

    @property
    def name(self) -> str:
        return self._name

    @property
    def zone(self) -> UTMZone:
        return self._zone

    @property
    def source(self) -> Ellipsoid:
        return self._source

    @property
    def target(self) -> Ellipsoid:
        return self._target

    @property
    def shift(self) -> HelmertShift:
        return self._shift

    @property
    def proj4(self) -> str:
        """The equivalent PROJ definition of the target CRS"""
        south = ' +south' if self._zone.is_south else ''
        towgs84 = f'{self._shift.dx},{self._shift.dy},{self._shift.dz},0,0,0,0'
        return (
            f'+proj=utm +zone={self._zone.number}{south} '
            f'+a={self._target.a} +rf={self._target.inverse_flattening} '
            f'+towgs84={towgs84} +units=m +no_defs'
        )

    def _forward(self, latitude, longitude):
        """Runs the datum shift and projection on validated floats or arrays"""
        with np.errstate(all='ignore'):
            lat, lon, _ = shift_datum(
                latitude, longitude, self._source, self._target, self._shift.inverse()
            )
            dlon = (np.asarray(lon) - self._zone.central_meridian + 180.0) % 360.0 - 180.0
            if np.any(np.abs(dlon) > UTM_MAX_MERIDIAN_OFFSET):
                raise ProjectionFailure(
                    f'Transverse Mercator series is only valid within '
                    f'{UTM_MAX_MERIDIAN_OFFSET:g} degrees of the central meridian of '
                    f'UTM zone {self._zone.label}'
                )
            easting, northing = transverse_mercator_forward(lat, lon, self._target, self._zone)

        if not (np.all(np.isfinite(easting)) and np.all(np.isfinite(northing))):
            raise ProjectionFailure(
                f'Projection onto {self._name} produced a non-finite result'
            )

        return easting, northing

    def _warn_out_of_zone(self, latitude: float, longitude: float) -> None:
        if not self._zone.contains(latitude, longitude):
            self.warn_once(
                f'Coordinates outside UTM zone {self._zone.label} are projected with '
                'increasing distortion (this warning will not repeat)'
            )

    def project(self, latitude: float, longitude: float) -> ProjectedCoordinate:
        """
        Projects a WGS84 coordinate onto this projector's grid.

        Points outside the zone's 6 degree band or hemisphere are still projected, but a
        warning is logged the first time it happens for each zone. Points more than 6
        degrees from the central meridian raise ProjectionFailure.

        Args:
            latitude:
                WGS84 latitude in degrees

            longitude:
                WGS84 longitude in degrees

        Raises:
            InvalidInput: if the coordinate is non-finite or out of range
            ProjectionFailure: if the datum shift or projection has no defined result

        Returns:
            ProjectedCoordinate
        """
        lat, lon = validate_geodetic(latitude, longitude)
        self._warn_out_of_zone(lat, lon)

        easting, northing = self._forward(lat, lon)
        result = ProjectedCoordinate(float(easting), float(northing))
        self.logger.debug('Projected (%s, %s) to %s on %s', lat, lon, result, self._name)
        return result

    def try_project(self, latitude: float, longitude: float) -> Optional[ProjectedCoordinate]:
        """
        Same as .project(), but logs the failure and returns None instead of raising.
        """
        try:
            return self.project(latitude, longitude)
        except ProjectionError as exc:
            self.logger.warning('Could not project (%s, %s): %s', latitude, longitude, exc)
            return None

    def project_many(self, latitudes, longitudes) -> Tuple[np.ndarray, np.ndarray]:
        """
        Projects arrays of WGS84 coordinates at once.

        Args:
            latitudes:
                Array-like of latitudes in degrees

            longitudes:
                Array-like of longitudes in degrees, the same shape as latitudes

        Raises:
            InvalidInput: if the shapes differ or any coordinate is non-finite or out of range
            ProjectionFailure: if any coordinate has no defined projection

        Returns:
            Tuple of numpy arrays (eastings, northings)
        """
        try:
            lats = np.asarray(latitudes, dtype=float)
            lons = np.asarray(longitudes, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f'Coordinates must be numeric: {exc}') from exc

        if lats.shape != lons.shape:
            raise InvalidInput(
                f'Latitudes and longitudes must have the same shape, got {lats.shape} '
                f'and {lons.shape}'
            )
        if not (np.all(np.isfinite(lats)) and np.all(np.isfinite(lons))):
            raise InvalidInput('Latitudes and longitudes must all be finite numbers')
        if np.any(np.abs(lats) > 90) or np.any(np.abs(lons) > 180):
            raise InvalidInput(
                'Latitudes must be within [-90, 90] and longitudes within [-180, 180]'
            )

        for lat, lon in zip(lats.flat, lons.flat):
            if utm_zone_for(lat, lon) != self._zone:
                self._warn_out_of_zone(lat, lon)
                break

        eastings, northings = self._forward(lats, lons)
        return np.asarray(eastings, dtype=float), np.asarray(northings, dtype=float)

    def unproject(self, easting: float, northing: float) -> GeodeticCoordinate:
        """
        Converts grid coordinates on this projector's grid back to WGS84.

        Args:
            easting:
                Easting in meters

            northing:
                Northing in meters

        Raises:
            InvalidInput: if either value is non-finite
            ProjectionFailure: if the inverse has no defined result

        Returns:
            GeodeticCoordinate
        """
        if not is_finite(easting, northing):
            raise InvalidInput(
                f'Easting and northing must be finite numbers, got ({easting!r}, {northing!r})'
            )

        with np.errstate(all='ignore'):
            lat, lon = transverse_mercator_inverse(
                float(easting), float(northing), self._target, self._zone
            )
            lat, lon, _ = shift_datum(lat, lon, self._target, self._source, self._shift)

        try:
            return GeodeticCoordinate(float(lat), float(lon))
        except InvalidInput as exc:
            raise ProjectionFailure(
                f'Grid coordinates ({easting}, {northing}) have no position on {self._name}'
            ) from exc

    def to_pyproj(self):
        """
        Builds the equivalent pyproj Transformer (WGS84 -> this grid, x/y order).

        Requires the optional 'proj' extra.
        """
        from pyproj import Transformer  # pylint: disable=import-outside-toplevel
        return Transformer.from_crs('EPSG:4326', self.proj4, always_xy=True)


def _arc1960(label: str) -> CoordinateProjector:
    zone = UTMZone.from_label(label)
    return CoordinateProjector(zone, name=f'Arc 1960 / UTM zone {zone.label}')


PROJECTORS: Dict[str, CoordinateProjector] = {
    f'arc1960-utm{label.lower()}': _arc1960(label)
    for label in ('35N', '36N', '37N', '35S', '36S', '37S')
}

ARC_1960_UTM_37S = PROJECTORS['arc1960-utm37s']


def get_projector(name: str) -> CoordinateProjector:
    """
    Look up a preset projector by name, e.g. 'arc1960-utm37s'.

    Args:
        name: The preset name

    Returns:
        CoordinateProjector
    """
    key = name.lower()
    if key not in PROJECTORS:
        raise ValueError(f"Unknown projector '{name}'. Options: {list(PROJECTORS.keys())}")

    return PROJECTORS[key]


def wgs84_to_arc1960_utm37s(latitude: float, longitude: float) -> ProjectedCoordinate:
    """
    Converts a WGS84 coordinate to Arc 1960 / UTM zone 37S.

    Raises:
        InvalidInput: if the coordinate is non-finite or out of range
        ProjectionFailure: if the datum shift or projection has no defined result
    """
    return ARC_1960_UTM_37S.project(latitude, longitude)
