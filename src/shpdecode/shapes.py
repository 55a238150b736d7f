from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, NamedTuple, Optional

from . import constants
from .constants import (
    NULL,
    POINT_LENGTH,
    POINT_SCALE,
    POINT_X_OFFSET,
    POINT_Y_OFFSET,
    SHAPETYPE_LOOKUP,
    Polyline_shapeTypes,
)
from .geometric_calculations import organize_polygon_rings
from .helpers import iter_unpack_2_double_le

logger = logging.getLogger(__name__)


class Point(NamedTuple):
    X: float
    Y: float


class BoundingBox(NamedTuple):
    """The file-wide extent from the .shp header, including the
    Z and M ranges, which are zero when the shape type has none."""

    Xmin: float
    Ymin: float
    Xmax: float
    Ymax: float
    Zmin: float
    Zmax: float
    Mmin: float
    Mmax: float


class PolygonBoundingBox(NamedTuple):
    XMin: float
    YMin: float
    XMax: float
    YMax: float


class RecordHeader(NamedTuple):
    recordNumber: int
    # In 16-bit words, excluding the 8 byte record header itself
    contentLength: int


class CoordinateTransform(NamedTuple):
    scale: float
    x_offset: float
    y_offset: float

    def apply(self, x: float, y: float) -> Point:
        return Point(x * self.scale + self.x_offset, y * self.scale + self.y_offset)


DEFAULT_TRANSFORM = CoordinateTransform(POINT_SCALE, POINT_X_OFFSET, POINT_Y_OFFSET)
IDENTITY_TRANSFORM = CoordinateTransform(1.0, 0.0, 0.0)

EMPTY_BBOX = PolygonBoundingBox(0.0, 0.0, 0.0, 0.0)


def decode_points(
    data: bytes, transform: CoordinateTransform = DEFAULT_TRANSFORM
) -> list[Point]:
    """Decodes a buffer of consecutive little endian (x, y) float64 pairs
    into Points, passing each through transform. Trailing bytes that do
    not make up a whole 16 byte pair are ignored.
    """
    usable = len(data) - len(data) % POINT_LENGTH
    apply = transform.apply
    return [apply(x, y) for x, y in iter_unpack_2_double_le(memoryview(data)[:usable])]


class PolygonRecord:
    def __init__(
        self,
        header: RecordHeader,
        shapeType: int,
        bbox: PolygonBoundingBox = EMPTY_BBOX,
        parts: Optional[Sequence[int]] = None,
        points: Optional[Sequence[Point]] = None,
        oid: Optional[int] = None,
    ):
        """One decoded record of a polygon layout .shp file. Parts are
        designated by their starting index in the flat points list, so
        part i spans points[parts[i]:parts[i + 1]] and the last part
        runs to the end of the points.
        """
        self.header = header
        self.shapeType = shapeType
        self.bbox = bbox
        self.parts: list[int] = list(parts or [])
        self.points: list[Point] = list(points or [])
        self.__oid: int = -1 if oid is None else oid

    @property
    def numParts(self) -> int:
        return len(self.parts)

    @property
    def numPoints(self) -> int:
        return len(self.points)

    @property
    def oid(self) -> int:
        """The index position of the record in the original shapefile"""
        return self.__oid

    @property
    def shapeTypeName(self) -> Optional[str]:
        return SHAPETYPE_LOOKUP.get(self.shapeType)

    @property
    def rings(self) -> list[list[Point]]:
        """The points of each part, in part order."""
        rings = []
        for i, start in enumerate(self.parts):
            try:
                end = self.parts[i + 1]
            except IndexError:
                end = len(self.points)
            rings.append(self.points[start:end])
        return rings

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        if self.shapeType in Polyline_shapeTypes:
            if not self.parts:
                return {"type": "LineString", "coordinates": []}

            lines = [[tuple(p) for p in line] for line in self.rings]
            if len(lines) == 1:
                return {"type": "LineString", "coordinates": lines[0]}

            return {"type": "MultiLineString", "coordinates": lines}

        if self.shapeType == NULL or not self.parts:
            # GeoJSON has no null geometry, an empty Polygon stands in for one
            return {"type": "Polygon", "coordinates": []}

        errors: dict[str, int] = {}
        polys = organize_polygon_rings(self.rings, errors)

        if constants.VERBOSE and errors:
            header = f"Possible issue encountered when converting Record #{self.oid} to GeoJSON: "
            orphans = errors.get("polygon_orphaned_holes")
            if orphans:
                logger.warning(
                    header
                    + f"{orphans} hole(s) (counter-clockwise rings) were not contained "
                    "by any exterior ring. They were encoded as exteriors instead."
                )
            only_holes = errors.get("polygon_only_holes")
            if only_holes:
                logger.warning(
                    header
                    + "the record is made up entirely of holes (counter-clockwise rings). "
                    "They were encoded as exteriors instead."
                )

        coords = [[[tuple(p) for p in ring] for ring in poly] for poly in polys]
        if len(coords) == 1:
            return {"type": "Polygon", "coordinates": coords[0]}

        return {"type": "MultiPolygon", "coordinates": coords}

    def _astuple(self) -> tuple[Any, ...]:
        return (
            self.header,
            self.shapeType,
            self.bbox,
            self.parts,
            self.points,
            self.__oid,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PolygonRecord):
            return NotImplemented
        return self._astuple() == other._astuple()

    def __repr__(self) -> str:
        return f"PolygonRecord #{self.__oid}"

