"""
This module tests decoding of point buffers.
"""

from struct import pack

import pytest

import shpdecode


@pytest.mark.parametrize(
    "raw,expected",
    [
        ((0.0, 0.0), (1500.0, -400.0)),
        ((1.0, 1.0), (1513.0, -387.0)),
        ((-2.0, 0.5), (1474.0, -393.5)),
    ],
)
def test_default_transform(raw, expected):
    points = shpdecode.decode_points(pack("<2d", *raw))
    assert points == [shpdecode.Point(*expected)]
    assert points[0].X == expected[0]
    assert points[0].Y == expected[1]


def test_identity_transform():
    points = shpdecode.decode_points(
        pack("<4d", 1.5, 2.5, -3.0, 4.0), shpdecode.IDENTITY_TRANSFORM
    )
    assert points == [(1.5, 2.5), (-3.0, 4.0)]


def test_custom_transform():
    transform = shpdecode.CoordinateTransform(scale=2.0, x_offset=1.0, y_offset=-1.0)
    points = shpdecode.decode_points(pack("<2d", 3.0, 4.0), transform)
    assert points == [(7.0, 7.0)]


def test_empty_buffer():
    assert shpdecode.decode_points(b"") == []


def test_trailing_bytes_ignored():
    """
    Assert that bytes not making up a whole point are
    silently ignored.
    """
    data = pack("<4d", 0.0, 0.0, 1.0, 1.0) + b"\x01" * 15
    points = shpdecode.decode_points(data, shpdecode.IDENTITY_TRANSFORM)
    assert points == [(0.0, 0.0), (1.0, 1.0)]
    assert shpdecode.decode_points(b"\x00" * 15) == []


def test_points_order_preserved():
    raw = [(float(i), float(-i)) for i in range(10)]
    flat = [c for p in raw for c in p]
    points = shpdecode.decode_points(
        pack(f"<{len(flat)}d", *flat), shpdecode.IDENTITY_TRANSFORM
    )
    assert points == raw
