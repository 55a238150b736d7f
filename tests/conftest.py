"""
Fixtures that build synthetic .shp file bytes for the tests.
"""

import io
from struct import pack

import pytest

import shpdecode


def _header_bytes(
    fileLength,
    shapeType=shpdecode.POLYGON,
    bbox=(0.0,) * 8,
    fileCode=shpdecode.FILE_CODE,
    version=1000,
):
    return (
        pack(">I", fileCode)
        + b"\x00" * 20
        + pack(">I", fileLength)
        + pack("<I", version)
        + pack("<I", shapeType)
        + pack("<8d", *bbox)
    )


def _record_body(
    parts, points, shapeType=shpdecode.POLYGON, bbox=None, trailing=b""
):
    if bbox is None:
        if points:
            xs = [p[0] for p in points]
            ys = [p[1] for p in points]
            bbox = (min(xs), min(ys), max(xs), max(ys))
        else:
            bbox = (0.0, 0.0, 0.0, 0.0)
    flat = [c for p in points for c in p]
    return (
        pack("<I", shapeType)
        + pack("<4d", *bbox)
        + pack("<2I", len(parts), len(points))
        + pack(f"<{len(parts)}I", *parts)
        + pack(f"<{len(flat)}d", *flat)
        + trailing
    )


def _shp_bytes(bodies, shapeType=shpdecode.POLYGON, recNums=None, **header_kwargs):
    if recNums is None:
        recNums = range(1, len(bodies) + 1)
    records = b"".join(
        pack(">2I", recNum, len(body) // 2) + body
        for recNum, body in zip(recNums, bodies)
    )
    fileLength = (100 + len(records)) // 2
    return _header_bytes(fileLength, shapeType=shapeType, **header_kwargs) + records


@pytest.fixture
def header_bytes():
    """Returns a function building a 100 byte main file header."""
    return _header_bytes


@pytest.fixture
def record_body():
    """Returns a function building the content of a polygon record."""
    return _record_body


@pytest.fixture
def shp_bytes():
    """Returns a function building a whole .shp file from record bodies,
    with a header file length matching the records."""
    return _shp_bytes


@pytest.fixture
def square():
    # clockwise, i.e. an exterior ring
    return [(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0), (0.0, 0.0)]


@pytest.fixture
def hole():
    # counter-clockwise, inside square
    return [(2.0, 2.0), (4.0, 2.0), (4.0, 4.0), (2.0, 4.0), (2.0, 2.0)]


@pytest.fixture
def decoder_for():
    """Returns a function building a Decoder over in-memory file bytes."""

    def _decoder_for(data, **kwargs):
        return shpdecode.Decoder(io.BytesIO(data), **kwargs)

    return _decoder_for
