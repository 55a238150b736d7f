class ShapefileException(Exception):
    """An exception to handle shapefile specific problems."""


class TruncatedInputError(ShapefileException):
    """The stream ended before a fixed-size field or a declared-length
    record body could be read in full."""


class MalformedRecordError(ShapefileException):
    """A record's declared part or point counts do not fit its body."""


class RingSamplingError(ShapefileException):
    """No point strictly inside a ring could be found."""
