
import sys

from arc1960._version import __version__  # noqa: F401
from arc1960.utils.logging import LOGGER
from arc1960.coordinates import GeodeticCoordinate, ProjectedCoordinate
from arc1960.datum import CLARKE_1880_MOD, CLARKE_1880_RGS, WGS84, Ellipsoid, HelmertShift
from arc1960.exceptions import InvalidInput, ProjectionError, ProjectionFailure
from arc1960.projection import UTMZone, compute_utm_zone_label
from arc1960.projector import (
    ARC_1960_UTM_37S, CoordinateProjector, get_projector, wgs84_to_arc1960_utm37s
)
from arc1960.report import CoordinateReport, LocationFix
from arc1960.utils.conditional_imports import ConditionalPackageInterceptor


ConditionalPackageInterceptor.permit_packages(
    {
        'pyproj': 'arc1960[proj]',
    }
)
sys.meta_path.append(ConditionalPackageInterceptor)  # type: ignore

__all__ = [
    'ARC_1960_UTM_37S',
    'CLARKE_1880_MOD',
    'CLARKE_1880_RGS',
    'CoordinateProjector',
    'CoordinateReport',
    'Ellipsoid',
    'GeodeticCoordinate',
    'HelmertShift',
    'InvalidInput',
    'LocationFix',
    'ProjectedCoordinate',
    'ProjectionError',
    'ProjectionFailure',
    'UTMZone',
    'WGS84',
    'compute_utm_zone_label',
    'get_projector',
    'wgs84_to_arc1960_utm37s',
    'LOGGER',
]
