from __future__ import annotations

import logging
from typing import NamedTuple, Optional

from . import constants
from .constants import FILE_CODE, HEADER_LENGTH, NODATA, SHAPETYPE_LOOKUP
from .helpers import (
    read_exactly,
    unpack_8_double_le,
    unpack_uint16_le,
    unpack_uint32_be,
)
from .shapes import BoundingBox
from .types import MBox, ReadableBinStream, ZBox

logger = logging.getLogger(__name__)


class Header(NamedTuple):
    fileCode: int
    # File length in 16-bit words, header included
    fileLength: int
    version: int
    shapeType: int
    bbox: BoundingBox

    @property
    def fileLengthBytes(self) -> int:
        return self.fileLength * 2

    @property
    def shapeTypeName(self) -> Optional[str]:
        return SHAPETYPE_LOOKUP.get(self.shapeType)

    @property
    def zbox(self) -> ZBox:
        return self.bbox.Zmin, self.bbox.Zmax

    @property
    def mbox(self) -> MBox:
        # Measure values less than -10e38 are nodata values in the ESRI format
        mmin, mmax = (
            m_bound if m_bound >= NODATA else None
            for m_bound in (self.bbox.Mmin, self.bbox.Mmax)
        )
        return mmin, mmax


def read_header(stream: ReadableBinStream) -> Header:
    """Reads the 100 byte main file header from the current position of
    stream, which must be the start of a .shp file.

    The file code and file length are big endian, everything after them is
    little endian. Version and shape type occupy 4 bytes each but only their
    low 16 bits are used.
    """
    b = read_exactly(stream, HEADER_LENGTH, "the main file header")

    (fileCode,) = unpack_uint32_be(b, 0)
    # Bytes 4-23 are unused
    (fileLength,) = unpack_uint32_be(b, 24)
    (version,) = unpack_uint16_le(b, 28)
    (shapeType,) = unpack_uint16_le(b, 32)
    bbox = BoundingBox(*unpack_8_double_le(b, 36))

    if fileCode != FILE_CODE and constants.VERBOSE:
        logger.warning(
            "Unexpected file code %d (expected %d), the stream may not be a .shp file.",
            fileCode,
            FILE_CODE,
        )

    header = Header(fileCode, fileLength, version, shapeType, bbox)
    logger.debug(
        "Read header: shape type %s (%s), file length %d words",
        shapeType,
        header.shapeTypeName,
        fileLength,
    )
    return header
