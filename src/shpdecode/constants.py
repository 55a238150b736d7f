from __future__ import annotations

from types import MappingProxyType

# Module settings
VERBOSE = True

# Default transform applied to every decoded point:
# X = raw_x * POINT_SCALE + POINT_X_OFFSET, Y = raw_y * POINT_SCALE + POINT_Y_OFFSET
# These values come from the dataset this library was first used with and are
# not part of the shapefile format. Pass IDENTITY_TRANSFORM for raw coordinates.
POINT_SCALE = 13.0
POINT_X_OFFSET = 1500.0
POINT_Y_OFFSET = -400.0

# Constants for shape types
NULL = 0
POINT = 1
POLYLINE = 3
POLYGON = 5
MULTIPOINT = 8
POINTZ = 11
POLYLINEZ = 13
POLYGONZ = 15
MULTIPOINTZ = 18
POINTM = 21
POLYLINEM = 23
POLYGONM = 25
MULTIPOINTM = 28
MULTIPATCH = 31

SHAPETYPE_LOOKUP = MappingProxyType(
    {
        NULL: "Null Shape",
        POINT: "Point",
        POLYLINE: "PolyLine",
        POLYGON: "Polygon",
        MULTIPOINT: "MultiPoint",
        POINTZ: "PointZ",
        POLYLINEZ: "PolyLineZ",
        POLYGONZ: "PolygonZ",
        MULTIPOINTZ: "MultiPointZ",
        POINTM: "PointM",
        POLYLINEM: "PolyLineM",
        POLYGONM: "PolygonM",
        MULTIPOINTM: "MultiPointM",
        MULTIPATCH: "MultiPatch",
    }
)

# Record layouts made of bbox, nParts, nPoints, parts and 2D points only.
# PolyLineZ/M and PolygonZ/M records append z and m arrays after the points.
Polygon_layout_shapeTypes = frozenset([POLYLINE, POLYGON])
Polyline_shapeTypes = frozenset([POLYLINE, POLYLINEM, POLYLINEZ])

FILE_CODE = 9994
HEADER_LENGTH = 100
RECORD_HEADER_LENGTH = 8
# shapeType + bbox + nParts + nPoints
RECORD_FIXED_LENGTH = 44
PART_INDEX_LENGTH = 4
POINT_LENGTH = 16

NODATA = -10e38  # as per the ESRI shapefile format, only used for m-values.
