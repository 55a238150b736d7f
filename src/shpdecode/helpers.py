from __future__ import annotations

from struct import Struct

from .exceptions import TruncatedInputError
from .types import ReadableBinStream

# Helpers

unpack_uint32_be = Struct(">I").unpack_from
unpack_2_uint32_be = Struct(">2I").unpack_from
unpack_uint16_le = Struct("<H").unpack_from
unpack_uint32_le = Struct("<I").unpack_from
unpack_2_uint32_le = Struct("<2I").unpack_from
unpack_4_double_le = Struct("<4d").unpack_from
unpack_8_double_le = Struct("<8d").unpack_from
iter_unpack_2_double_le = Struct("<2d").iter_unpack

# Upper bound on a single read() call, so a corrupt length field cannot
# make the stream allocate a huge buffer up front
READ_CHUNK_SIZE = 65536


def read_exactly(stream: ReadableBinStream, size: int, what: str = "data") -> bytes:
    """Reads exactly size bytes from stream, calling read() again on short
    reads, as raw and socket backed streams may return fewer bytes than
    asked for. Raises TruncatedInputError if the stream is exhausted first.
    """
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(min(remaining, READ_CHUNK_SIZE))
        if not chunk:
            got = size - remaining
            raise TruncatedInputError(
                f"Unexpected end of stream while reading {what}: "
                f"expected {size} bytes, got {got}"
            )
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)
