"""
shpdecode
Decodes the geometry records of polygon layout ESRI Shapefiles (.shp)
from a readable binary stream.
Compatible with Python versions >=3.9
"""

from __future__ import annotations

import logging

from .__version__ import __version__
from .constants import (
    FILE_CODE,
    MULTIPATCH,
    MULTIPOINT,
    MULTIPOINTM,
    MULTIPOINTZ,
    NULL,
    POINT,
    POINTM,
    POINTZ,
    POLYGON,
    POLYGONM,
    POLYGONZ,
    POLYLINE,
    POLYLINEM,
    POLYLINEZ,
    SHAPETYPE_LOOKUP,
)
from .decoder import END_OF_RECORDS, Decoder
from .exceptions import (
    MalformedRecordError,
    RingSamplingError,
    ShapefileException,
    TruncatedInputError,
)
from .geometric_calculations import (
    bbox_contains,
    bbox_overlap,
    is_cw,
    organize_polygon_rings,
    ring_bbox,
    ring_contains_point,
    ring_sample,
    signed_area,
)
from .header import Header, read_header
from .shapes import (
    DEFAULT_TRANSFORM,
    IDENTITY_TRANSFORM,
    BoundingBox,
    CoordinateTransform,
    Point,
    PolygonBoundingBox,
    PolygonRecord,
    RecordHeader,
    decode_points,
)
from .types import BBox, MBox, Point2D, Points2D, ReadableBinStream, ZBox

__all__ = [
    "__version__",
    "NULL",
    "POINT",
    "POLYLINE",
    "POLYGON",
    "MULTIPOINT",
    "POINTZ",
    "POLYLINEZ",
    "POLYGONZ",
    "MULTIPOINTZ",
    "POINTM",
    "POLYLINEM",
    "POLYGONM",
    "MULTIPOINTM",
    "MULTIPATCH",
    "SHAPETYPE_LOOKUP",
    "FILE_CODE",
    "Decoder",
    "END_OF_RECORDS",
    "Header",
    "read_header",
    "BoundingBox",
    "PolygonBoundingBox",
    "RecordHeader",
    "Point",
    "PolygonRecord",
    "CoordinateTransform",
    "DEFAULT_TRANSFORM",
    "IDENTITY_TRANSFORM",
    "decode_points",
    "organize_polygon_rings",
    "signed_area",
    "is_cw",
    "ring_bbox",
    "ring_contains_point",
    "ring_sample",
    "bbox_contains",
    "bbox_overlap",
    "BBox",
    "MBox",
    "ZBox",
    "Point2D",
    "Points2D",
    "ReadableBinStream",
    "ShapefileException",
    "TruncatedInputError",
    "MalformedRecordError",
    "RingSamplingError",
]

logger = logging.getLogger(__name__)
