from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from struct import unpack_from
from typing import Final, Optional, Union, cast

from . import constants
from .constants import (
    HEADER_LENGTH,
    NULL,
    PART_INDEX_LENGTH,
    POINT_LENGTH,
    Polygon_layout_shapeTypes,
    RECORD_FIXED_LENGTH,
    RECORD_HEADER_LENGTH,
    SHAPETYPE_LOOKUP,
)
from .exceptions import MalformedRecordError
from .geometric_calculations import bbox_overlap
from .header import Header, read_header
from .helpers import (
    read_exactly,
    unpack_2_uint32_be,
    unpack_2_uint32_le,
    unpack_4_double_le,
    unpack_uint32_le,
)
from .shapes import (
    DEFAULT_TRANSFORM,
    BoundingBox,
    CoordinateTransform,
    PolygonBoundingBox,
    PolygonRecord,
    RecordHeader,
    decode_points,
)
from .types import ReadableBinStream

logger = logging.getLogger(__name__)


class _EndOfRecordsSentinel:
    """Returned by Decoder.decodeNextRecord once the file length declared
    in the header has been consumed. Not an error."""

    def __repr__(self) -> str:
        return "END_OF_RECORDS"

    def __bool__(self) -> bool:
        return False


END_OF_RECORDS: Final = _EndOfRecordsSentinel()


class Decoder:
    """Decodes the records of a polygon layout .shp file from a stream,
    one at a time and in file order.

    The stream must be readable and positioned at the start of the file.
    It is borrowed: the Decoder reads from it but never seeks or closes it,
    and nothing else may read from it while the Decoder is in use. The
    header is read on construction.

    Records are framed by the file length in the header. Once that many
    bytes have been consumed decodeNextRecord returns END_OF_RECORDS.
    Any exception leaves the Decoder unusable.
    """

    def __init__(
        self,
        stream: ReadableBinStream,
        *,
        transform: CoordinateTransform = DEFAULT_TRANSFORM,
    ):
        self.stream = stream
        self.transform = transform
        self._bytesConsumed = 0
        self._numRecords = 0
        self.header: Header = read_header(stream)
        self._bytesConsumed += HEADER_LENGTH

    def __str__(self) -> str:
        return "\n".join(
            [
                "shapefile Decoder",
                f"    type '{self.shapeTypeName}', {self.header.fileLengthBytes} bytes",
                f"    {self._numRecords} records decoded",
            ]
        )

    def __iter__(self) -> Iterator[PolygonRecord]:
        """Iterates through the remaining records in the stream."""
        yield from self.iterRecords()

    @property
    def shapeType(self) -> int:
        return self.header.shapeType

    @property
    def shapeTypeName(self) -> Optional[str]:
        return self.header.shapeTypeName

    @property
    def bbox(self) -> BoundingBox:
        return self.header.bbox

    @property
    def bytesConsumed(self) -> int:
        """Bytes read from the stream so far, header included."""
        return self._bytesConsumed

    def decodeNextRecord(self) -> Union[PolygonRecord, _EndOfRecordsSentinel]:
        """Reads and decodes the next record, or returns END_OF_RECORDS
        when the file length declared in the header has been reached."""
        if self._bytesConsumed >= self.header.fileLengthBytes:
            return END_OF_RECORDS

        oid = self._numRecords
        recNum, recLength = unpack_2_uint32_be(
            read_exactly(self.stream, RECORD_HEADER_LENGTH, f"record header #{oid}")
        )
        # Convert from num of 16 bit words, to 8 bit bytes
        recLength_bytes = 2 * recLength
        body = read_exactly(self.stream, recLength_bytes, f"record #{oid}")
        self._bytesConsumed += RECORD_HEADER_LENGTH + recLength_bytes
        self._numRecords += 1

        if recNum != oid + 1 and constants.VERBOSE:
            logger.warning(
                "Record #%d has record number %d, expected %d.", oid, recNum, oid + 1
            )

        record = self._decode_record_body(RecordHeader(recNum, recLength), body, oid)
        logger.debug(
            "Decoded record #%d: %d parts, %d points",
            oid,
            record.numParts,
            record.numPoints,
        )
        return record

    def _decode_record_body(
        self, recHeader: RecordHeader, body: bytes, oid: int
    ) -> PolygonRecord:
        if len(body) < 4:
            raise MalformedRecordError(
                f"Record #{oid} body is {len(body)} bytes, too short for a shape type."
            )
        (shapeType,) = unpack_uint32_le(body, 0)

        if shapeType != self.header.shapeType and constants.VERBOSE:
            logger.warning(
                "Record #%d has shape type %d (%s) but the file declares %d (%s).",
                oid,
                shapeType,
                SHAPETYPE_LOOKUP.get(shapeType),
                self.header.shapeType,
                self.header.shapeTypeName,
            )

        if shapeType == NULL:
            return PolygonRecord(recHeader, shapeType, oid=oid)

        if len(body) < RECORD_FIXED_LENGTH:
            raise MalformedRecordError(
                f"Record #{oid} body is {len(body)} bytes, "
                f"shorter than the {RECORD_FIXED_LENGTH} byte fixed part."
            )

        bbox = PolygonBoundingBox(*unpack_4_double_le(body, 4))
        nParts, nPoints = unpack_2_uint32_le(body, 36)

        points_start = RECORD_FIXED_LENGTH + PART_INDEX_LENGTH * nParts
        points_end = points_start + POINT_LENGTH * nPoints
        if points_start > len(body):
            raise MalformedRecordError(
                f"Record #{oid} declares {nParts} parts, needing {points_start} bytes, "
                f"but its body is only {len(body)} bytes."
            )
        if points_end > len(body):
            raise MalformedRecordError(
                f"Record #{oid} declares {nParts} parts and {nPoints} points, "
                f"needing {points_end} bytes, but its body is only {len(body)} bytes."
            )
        if points_end < len(body) and shapeType in Polygon_layout_shapeTypes:
            raise MalformedRecordError(
                f"Record #{oid} declares {nParts} parts and {nPoints} points, "
                f"needing {points_end} bytes, but its body is {len(body)} bytes."
            )
        # Any remaining bytes hold the z and m arrays of the Z/M variants

        parts = list(unpack_from(f"<{nParts}I", body, RECORD_FIXED_LENGTH))
        points = decode_points(body[points_start:points_end], self.transform)

        return PolygonRecord(
            recHeader, shapeType, bbox=bbox, parts=parts, points=points, oid=oid
        )

    def iterRecords(
        self, bbox: Optional[Sequence[float]] = None
    ) -> Iterator[PolygonRecord]:
        """Returns a generator of the remaining records. Useful for
        handling large shapefiles.
        To only get records within a given spatial region, specify the 'bbox'
        arg as a list or tuple of xmin,ymin,xmax,ymax. Records outside it
        are still read from the stream, then skipped. The filter is tested
        against the record bounding boxes as stored in the file, before
        any point transform.
        """
        while True:
            record = self.decodeNextRecord()
            if record is END_OF_RECORDS:
                return
            record = cast(PolygonRecord, record)
            if bbox is not None and not _record_overlaps(record, bbox):
                continue
            yield record

    def records(self, bbox: Optional[Sequence[float]] = None) -> list[PolygonRecord]:
        """Returns all remaining records in a list."""
        return list(self.iterRecords(bbox=bbox))


def _record_overlaps(record: PolygonRecord, bbox: Sequence[float]) -> bool:
    if record.shapeType == NULL:
        return False
    return bbox_overlap(bbox, record.bbox)

