"""
Constants declarations for arc1960
"""

# WGS84 Ellipsoid Constants
WGS84_A = 6378137.0  # Major axis (meters)
WGS84_RF = 298.257223563  # Inverse flattening

# Clarke 1880 (RGS), the ellipsoid of the EPSG Arc 1960 datum
CLARKE_1880_RGS_A = 6378249.145
CLARKE_1880_RGS_RF = 293.465

# Clarke 1880 (mod.), PROJ's "clrk80"
CLARKE_1880_MOD_A = 6378249.145
CLARKE_1880_MOD_RF = 293.4663

# Arc 1960 -> WGS84 geocentric translation (meters), PROJ +towgs84 convention
ARC_1960_TOWGS84 = (-169.5, -19.4, -99.4)

# UTM
UTM_SCALE_FACTOR = 0.9996
UTM_FALSE_EASTING = 500_000.0
UTM_FALSE_NORTHING_SOUTH = 10_000_000.0
UTM_ZONE_WIDTH = 6.0

# Widest longitude offset from the central meridian the Transverse Mercator series is
# used for: the zone itself plus half a zone either side
UTM_MAX_MERIDIAN_OFFSET = 6.0

# Geocentric -> geodetic iteration bounds
GEODETIC_TOLERANCE_RAD = 1e-11
GEODETIC_MAX_ITER = 10
