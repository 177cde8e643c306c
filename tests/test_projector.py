import numpy as np
import pytest
from pytest import approx

from arc1960 import (
    ARC_1960_UTM_37S, CLARKE_1880_MOD, CoordinateProjector, GeodeticCoordinate,
    InvalidInput, ProjectedCoordinate, ProjectionError, ProjectionFailure, UTMZone,
    get_projector, wgs84_to_arc1960_utm37s
)
from arc1960.projector import PROJECTORS
from arc1960.utils.mixins import LoggingMixin

from tests.functions import assert_geodetic_equal, assert_projected_equal

NAIROBI = (-1.2921, 36.8219)
DAR_ES_SALAAM = (-6.7924, 39.2083)
MOMBASA = (-4.0435, 39.6682)

# The Arc 1960 / UTM zone 37S definition as a PROJ string, on the clrk80 ellipsoid
CLRK80_PROJ_STRING = (
    '+proj=utm +zone=37 +south +ellps=clrk80 '
    '+towgs84=-169.5,-19.4,-99.4,0,0,0,0 +units=m +no_defs'
)


@pytest.fixture(autouse=True)
def reset_warnings(monkeypatch):
    monkeypatch.setattr(LoggingMixin, 'WARNED_ONCE', set())


def test_wgs84_to_arc1960_utm37s_against_proj():
    from pyproj import Transformer
    transformer = Transformer.from_crs('EPSG:4326', CLRK80_PROJ_STRING, always_xy=True)

    for lat, lon in (NAIROBI, DAR_ES_SALAAM, MOMBASA):
        easting, northing = transformer.transform(lon, lat)
        assert_projected_equal(
            wgs84_to_arc1960_utm37s(lat, lon),
            ProjectedCoordinate(easting, northing),
            abs_tol=1.0
        )


def test_projector_matches_own_proj_definition():
    transformer = ARC_1960_UTM_37S.to_pyproj()

    for lat, lon in (NAIROBI, DAR_ES_SALAAM, MOMBASA):
        easting, northing = transformer.transform(lon, lat)
        assert_projected_equal(
            ARC_1960_UTM_37S.project(lat, lon),
            ProjectedCoordinate(easting, northing),
            abs_tol=0.1
        )


def test_nairobi_plausible():
    result = wgs84_to_arc1960_utm37s(*NAIROBI)
    assert isinstance(result, ProjectedCoordinate)
    # West of the central meridian, a little south of the equator
    assert 250_000. < result.easting < 270_000.
    assert 9_850_000. < result.northing < 9_865_000.


def test_deterministic():
    first = wgs84_to_arc1960_utm37s(*NAIROBI)
    second = wgs84_to_arc1960_utm37s(*NAIROBI)
    assert first == second
    assert first.to_float() == second.to_float()


def test_monotonic():
    lat, lon = NAIROBI
    eastings = [wgs84_to_arc1960_utm37s(lat, lon + d).easting for d in (0., 1e-5, 0.1, 1.)]
    assert eastings == sorted(eastings)
    assert len(set(eastings)) == len(eastings)

    northings = [wgs84_to_arc1960_utm37s(lat + d, lon).northing for d in (-1., 0., 1e-5, 0.5)]
    assert northings == sorted(northings)
    assert len(set(northings)) == len(northings)


@pytest.mark.parametrize('lat, lon', [
    (float('nan'), 36.8),
    (-1.3, float('nan')),
    (float('inf'), 36.8),
    (-1.3, float('-inf')),
    (-91., 36.8),
    (-1.3, 181.),
    ('-1.3', 36.8),
    (None, 36.8),
])
def test_invalid_input(lat, lon):
    with pytest.raises(InvalidInput):
        wgs84_to_arc1960_utm37s(lat, lon)


def test_projection_failure():
    # Beyond 6 degrees from the central meridian the series is no longer trusted
    with pytest.raises(ProjectionFailure):
        wgs84_to_arc1960_utm37s(0., 128.9)

    with pytest.raises(ProjectionFailure):
        wgs84_to_arc1960_utm37s(-1., 45.1)

    with pytest.raises(ProjectionFailure):
        wgs84_to_arc1960_utm37s(-1., 32.9)

    with pytest.raises(ProjectionFailure):
        wgs84_to_arc1960_utm37s(0., 150.)

    with pytest.raises(ProjectionFailure):
        wgs84_to_arc1960_utm37s(-10., -141.)



def test_meridian_offset_limit():
    from pyproj import Transformer
    transformer = Transformer.from_crs('EPSG:4326', CLRK80_PROJ_STRING, always_xy=True)

    # Just inside the limit the result is still accurate
    for lat, lon in ((-1., 44.9), (-1., 33.1)):
        easting, northing = transformer.transform(lon, lat)
        assert_projected_equal(
            wgs84_to_arc1960_utm37s(lat, lon),
            ProjectedCoordinate(easting, northing),
            abs_tol=1.0
        )

    with pytest.raises(ProjectionFailure):
        wgs84_to_arc1960_utm37s(-1., 45.1)

def test_error_taxonomy():
    assert issubclass(InvalidInput, ProjectionError)
    assert issubclass(ProjectionFailure, ProjectionError)
    assert issubclass(ProjectionError, ValueError)
    assert not issubclass(InvalidInput, ProjectionFailure)


def test_out_of_zone_warning(caplog):
    ARC_1960_UTM_37S.project(*NAIROBI)
    assert 'outside UTM zone' not in caplog.text

    # Northern hemisphere, still projected
    result = ARC_1960_UTM_37S.project(1.0, 37.0)
    assert result.northing > 10_000_000.
    assert 'outside UTM zone 37S' in caplog.text

    ARC_1960_UTM_37S.project(2.0, 34.0)
    assert caplog.text.count('outside UTM zone') == 1


def test_out_of_zone_warning_per_zone(caplog):
    ARC_1960_UTM_37S.project(1.0, 37.0)
    get_projector('arc1960-utm36n').project(-1.0, 35.0)
    assert 'outside UTM zone 37S' in caplog.text
    assert 'outside UTM zone 36N' in caplog.text

    get_projector('arc1960-utm36n').project(-2.0, 35.5)
    assert caplog.text.count('outside UTM zone 36N') == 1


def test_try_project(caplog):
    assert ARC_1960_UTM_37S.try_project(*NAIROBI) == ARC_1960_UTM_37S.project(*NAIROBI)

    assert ARC_1960_UTM_37S.try_project(float('nan'), 36.8) is None
    assert 'Could not project' in caplog.text


def test_project_many():
    lats = [NAIROBI[0], DAR_ES_SALAAM[0], MOMBASA[0]]
    lons = [NAIROBI[1], DAR_ES_SALAAM[1], MOMBASA[1]]
    eastings, northings = ARC_1960_UTM_37S.project_many(lats, lons)
    assert isinstance(eastings, np.ndarray)
    assert eastings.shape == (3,)

    for lat, lon, e, n in zip(lats, lons, eastings, northings):
        assert_projected_equal(
            ProjectedCoordinate(e, n),
            ARC_1960_UTM_37S.project(lat, lon),
            abs_tol=1e-6
        )


def test_project_many_invalid():
    with pytest.raises(InvalidInput):
        ARC_1960_UTM_37S.project_many([-1., -2.], [36.])

    with pytest.raises(InvalidInput):
        ARC_1960_UTM_37S.project_many([-1., float('nan')], [36., 37.])

    with pytest.raises(InvalidInput):
        ARC_1960_UTM_37S.project_many([-1., -95.], [36., 37.])

    with pytest.raises(InvalidInput):
        ARC_1960_UTM_37S.project_many(['a'], [36.])

    with pytest.raises(ProjectionFailure):
        ARC_1960_UTM_37S.project_many([-1., 0.], [36., 150.])


def test_unproject_round_trip():
    for lat, lon in (NAIROBI, DAR_ES_SALAAM, MOMBASA):
        projected = ARC_1960_UTM_37S.project(lat, lon)
        assert_geodetic_equal(
            ARC_1960_UTM_37S.unproject(*projected.to_float()),
            GeodeticCoordinate(lat, lon),
            abs_tol=1e-6
        )


def test_unproject_invalid():
    with pytest.raises(InvalidInput):
        ARC_1960_UTM_37S.unproject(float('nan'), 9_857_000.)

    with pytest.raises(InvalidInput):
        ARC_1960_UTM_37S.unproject(257_000., float('inf'))


def test_presets():
    assert get_projector('arc1960-utm37s') is ARC_1960_UTM_37S
    assert get_projector('ARC1960-UTM36S').zone == UTMZone(36, 'S')
    assert len(PROJECTORS) == 6
    assert ARC_1960_UTM_37S.name == 'Arc 1960 / UTM zone 37S'
    assert repr(ARC_1960_UTM_37S) == '<CoordinateProjector(Arc 1960 / UTM zone 37S)>'

    with pytest.raises(ValueError):
        get_projector('wgs84-utm37s')


def test_neighbouring_zone_preset():
    # Kampala lies in zone 36N
    result = get_projector('arc1960-utm36n').project(0.3476, 32.5825)
    assert 440_000. < result.easting < 460_000.
    assert 30_000. < result.northing < 45_000.


def test_custom_projector():
    projector = CoordinateProjector(UTMZone(37, 'S'), target=CLARKE_1880_MOD)
    assert projector.name == 'Clarke 1880 (mod.) / UTM zone 37S'

    # The two Clarke 1880 flattenings differ by well under a meter here
    assert_projected_equal(
        projector.project(*NAIROBI),
        ARC_1960_UTM_37S.project(*NAIROBI),
        abs_tol=1.0
    )


def test_proj4():
    assert ARC_1960_UTM_37S.proj4 == (
        '+proj=utm +zone=37 +south +a=6378249.145 +rf=293.465 '
        '+towgs84=-169.5,-19.4,-99.4,0,0,0,0 +units=m +no_defs'
    )
    assert '+south' not in get_projector('arc1960-utm37n').proj4
