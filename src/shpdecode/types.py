from typing import Optional, Protocol

## Custom type variables

Point2D = tuple[float, float]
Points2D = list[Point2D]

BBox = tuple[float, float, float, float]
MBox = tuple[Optional[float], Optional[float]]
ZBox = tuple[float, float]


class ReadableBinStream(Protocol):
    def read(self, size: int = -1) -> bytes: ...
