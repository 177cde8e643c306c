"""
Display formatting for a location fix: WGS84 position, UTM zone and the projected
grid coordinates, each with an accuracy note.
"""

__all__ = [
    'CoordinateReport', 'LocationFix', 'ReportRow', 'format_accuracy',
    'format_altitude', 'format_degrees', 'format_meters',
]

from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Optional

from arc1960.coordinates import ProjectedCoordinate, validate_geodetic
from arc1960.exceptions import ProjectionError
from arc1960.projection import compute_utm_zone_label
from arc1960.projector import ARC_1960_UTM_37S, CoordinateProjector
from arc1960.utils.functions import round_half_up
from arc1960.utils.logging import LOGGER

# Projected accuracy is estimated as the horizontal accuracy scaled by this factor
PROJECTED_ACCURACY_FACTOR = 1.5


@dataclass(frozen=True)
class LocationFix:
    """
    A single position reported by a location provider. Accuracies are 1-sigma radii
    in meters; absent values are None.
    """
    latitude: float
    longitude: float
    altitude: Optional[float] = None
    accuracy: Optional[float] = None
    vertical_accuracy: Optional[float] = None

    def __post_init__(self):
        lat, lon = validate_geodetic(self.latitude, self.longitude)
        object.__setattr__(self, 'latitude', lat)
        object.__setattr__(self, 'longitude', lon)


class ReportRow(NamedTuple):
    label: str
    value: str
    detail: Optional[str] = None


def format_degrees(value: float) -> str:
    """Decimal degrees to 6 places, e.g. '-1.292100°'"""
    return f'{value:.6f}°'


def format_meters(value: float) -> str:
    """Meters to 2 places, e.g. '257300.25 m'"""
    return f'{value:.2f} m'


def format_altitude(value: Optional[float]) -> str:
    """Altitude rounded to the nearest whole meter, e.g. '1661 m'"""
    if value is None:
        return 'Unknown'
    return f'{int(round_half_up(value, 0))} m'


def format_accuracy(value: Optional[float]) -> str:
    """Accuracy radius truncated to whole meters, e.g. '±5 m'"""
    if value is None:
        return 'Unknown'
    return f'±{int(value)} m'


class CoordinateReport:
    """
    The rows shown for one location fix. If the projection fails the grid rows are
    left out and .error holds the reason.
    """

    def __init__(
        self,
        fix: LocationFix,
        rows: List[ReportRow],
        projected: Optional[ProjectedCoordinate] = None,
        error: Optional[str] = None,
    ):
        self.fix = fix
        self.rows = rows
        self.projected = projected
        self.error = error

    def __repr__(self):
        return f'<CoordinateReport({self.fix.latitude}, {self.fix.longitude})>'

    @classmethod
    def from_fix(
        cls,
        fix: LocationFix,
        projector: CoordinateProjector = ARC_1960_UTM_37S,
    ) -> 'CoordinateReport':
        """
        Builds the report for a location fix.

        Args:
            fix:
                The location fix to describe

            projector:
                (Default Arc 1960 / UTM zone 37S) The grid to express the fix on

        Returns:
            CoordinateReport
        """
        accuracy = format_accuracy(fix.accuracy)
        zone_label = compute_utm_zone_label(fix.latitude, fix.longitude)
        rows = [
            ReportRow(
                'Latitude (WGS84)',
                format_degrees(fix.latitude),
                f'Horizontal Accuracy: {accuracy}'
            ),
            ReportRow(
                'Longitude (WGS84)',
                format_degrees(fix.longitude),
                f'Horizontal Accuracy: {accuracy}'
            ),
            ReportRow(
                'Altitude',
                format_altitude(fix.altitude),
                f'Vertical Accuracy: {format_accuracy(fix.vertical_accuracy)}'
            ),
            ReportRow('UTM Zone', zone_label, 'Calculated from WGS84 coordinates'),
        ]

        try:
            projected = projector.project(fix.latitude, fix.longitude)
        except ProjectionError as exc:
            LOGGER.warning('Grid coordinates unavailable on %s: %s', projector.name, exc)
            return cls(fix, rows, error=str(exc))

        grid_accuracy = format_accuracy(
            None if fix.accuracy is None else fix.accuracy * PROJECTED_ACCURACY_FACTOR
        )
        rows.extend([
            ReportRow(
                f'Easting ({projector.name})',
                format_meters(projected.easting),
                f'Estimated Accuracy: {grid_accuracy}'
            ),
            ReportRow(
                f'Northing ({projector.name})',
                format_meters(projected.northing),
                f'Estimated Accuracy: {grid_accuracy}'
            ),
        ])
        return cls(fix, rows, projected=projected)

    def as_dict(self) -> Dict[str, str]:
        """Maps each row label to its rendered value"""
        return {row.label: row.value for row in self.rows}
