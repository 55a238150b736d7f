from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from .exceptions import RingSamplingError
from .types import BBox, Point2D


def signed_area(
    coords: Sequence[Point2D],
    fast: bool = False,
) -> float:
    """Return the signed area enclosed by a ring using the linear time
    algorithm. A value >= 0 indicates a counter-clockwise oriented ring.
    A faster version is possible by setting 'fast' to True, which returns
    2x the area, e.g. if you're only interested in the sign of the area.
    Rings of fewer than three points enclose nothing and return 0.
    """
    if len(coords) < 3:
        return 0.0
    xs = [p[0] for p in coords]
    ys = [p[1] for p in coords]
    xs.append(xs[1])
    ys.append(ys[1])
    area2: float = sum(xs[i] * (ys[i + 1] - ys[i - 1]) for i in range(1, len(coords)))
    if fast:
        return area2

    return area2 / 2.0


def is_cw(coords: Sequence[Point2D]) -> bool:
    """Returns True if a polygon ring has clockwise orientation, determined
    by a negatively signed area.
    """
    area2 = signed_area(coords, fast=True)
    return area2 < 0


def ring_bbox(coords: Sequence[Point2D]) -> BBox:
    """Calculates and returns the bounding box of a ring."""
    xs = [p[0] for p in coords]
    ys = [p[1] for p in coords]
    return min(xs), min(ys), max(xs), max(ys)


def bbox_overlap(bbox1: Sequence[float], bbox2: Sequence[float]) -> bool:
    """Tests whether two bounding boxes overlap."""
    xmin1, ymin1, xmax1, ymax1 = bbox1
    xmin2, ymin2, xmax2, ymax2 = bbox2
    overlap = xmin1 <= xmax2 and xmin2 <= xmax1 and ymin1 <= ymax2 and ymin2 <= ymax1
    return overlap


def ring_contains_point(coords: Sequence[Point2D], p: Point2D) -> bool:
    """Point-in-ring test, shooting a ray along +X from p and counting
    the ring edges it crosses. Edges entirely above or below the ray
    are skipped without computing an intersection.
    """
    tx, ty = p

    vtx0 = coords[0]
    yflag0 = vtx0[1] >= ty

    inside_flag = False
    for vtx1 in coords[1:]:
        yflag1 = vtx1[1] >= ty
        # endpoints straddle the ray, so the edge may cross it
        if yflag0 != yflag1:
            xflag0 = vtx0[0] >= tx
            if xflag0 == (vtx1[0] >= tx):
                # both endpoints on one side of p, crossing only if right of it
                if xflag0:
                    inside_flag = not inside_flag
            else:
                if (
                    vtx1[0] - (vtx1[1] - ty) * (vtx0[0] - vtx1[0]) / (vtx0[1] - vtx1[1])
                ) >= tx:
                    inside_flag = not inside_flag

        yflag0 = yflag1
        vtx0 = vtx1

    return inside_flag


def bbox_contains(bbox1: Sequence[float], bbox2: Sequence[float]) -> bool:
    """Tests whether bbox1 fully contains bbox2."""
    xmin1, ymin1, xmax1, ymax1 = bbox1
    xmin2, ymin2, xmax2, ymax2 = bbox2
    contains = xmin1 < xmin2 and xmax2 < xmax1 and ymin1 < ymin2 and ymax2 < ymax1
    return contains


def ring_sample(coords: Sequence[Point2D], ccw: bool = False) -> Point2D:
    """Return a sample point guaranteed to be within a ring, by finding the
    first centroid of a coordinate triplet whose orientation matches the
    orientation of the ring and passes the point-in-ring test.
    The orientation of the ring is assumed to be clockwise, unless ccw
    (counter-clockwise) is set to True.
    """
    triplet: list[Point2D] = []

    def itercoords() -> Iterator[Point2D]:
        yield from coords
        # wrap around to the second coordinate so the last triplet is checked
        yield coords[1]

    for p in itercoords():
        if p not in triplet:
            triplet.append(p)

        if len(triplet) == 3:
            is_straight_line = (triplet[0][1] - triplet[1][1]) * (
                triplet[0][0] - triplet[2][0]
            ) == (triplet[0][1] - triplet[2][1]) * (triplet[0][0] - triplet[1][0])
            if not is_straight_line:
                closed_triplet = triplet + [triplet[0]]
                triplet_ccw = not is_cw(closed_triplet)
                # same orientation as the ring means the triangle is inside it
                if ccw == triplet_ccw:
                    xs, ys = zip(*triplet)
                    xmean, ymean = sum(xs) / 3.0, sum(ys) / 3.0
                    if ring_contains_point(coords, (xmean, ymean)):
                        return xmean, ymean

            triplet.pop(0)

    raise RingSamplingError(
        f"Unable to find a sample point inside the ring: {list(coords)}. "
        "The ring may enclose no area."
    )


def organize_polygon_rings(
    rings: Iterable[Sequence[Point2D]], return_errors: dict[str, int] | None = None
) -> list[list[Sequence[Point2D]]]:
    """Organize a list of rings into one or more polygons, each made of a
    single exterior ring followed by its holes. Exteriors run clockwise and
    holes counter-clockwise, which is all the structure the shapefile
    format stores. If a return_errors dict is given, counts of orphaned
    holes ("polygon_orphaned_holes") or of a record made only of holes
    ("polygon_only_holes") are added to it. Empty rings are dropped.
    """
    exteriors = []
    holes = []
    for ring in rings:
        if not ring:
            continue
        if is_cw(ring):
            exteriors.append(ring)
        else:
            holes.append(ring)

    # a single exterior owns every hole
    if len(exteriors) == 1:
        return [[exteriors[0]] + holes]

    if len(exteriors) > 1:
        if not holes:
            return [[ext] for ext in exteriors]

        # candidate exteriors of each hole, by bbox containment first
        hole_exteriors: dict[int, list[int]] = {
            hole_i: [] for hole_i in range(len(holes))
        }
        exterior_bboxes = [ring_bbox(ring) for ring in exteriors]
        for hole_i in hole_exteriors.keys():
            hole_bbox = ring_bbox(holes[hole_i])
            for ext_i, ext_bbox in enumerate(exterior_bboxes):
                if bbox_contains(ext_bbox, hole_bbox):
                    hole_exteriors[hole_i].append(ext_i)

        # then by a point sampled inside the hole
        for hole_i, exterior_candidates in hole_exteriors.items():
            if len(exterior_candidates) > 1:
                ccw = not is_cw(holes[hole_i])
                hole_sample = ring_sample(holes[hole_i], ccw=ccw)
                hole_exteriors[hole_i] = [
                    ext_i
                    for ext_i in exterior_candidates
                    if ring_contains_point(exteriors[ext_i], hole_sample)
                ]

        # a hole still inside several exteriors sits in an island within
        # another exterior's hole, its parent is the smallest of them
        for hole_i, exterior_candidates in hole_exteriors.items():
            if len(exterior_candidates) > 1:
                ext_i = min(
                    exterior_candidates,
                    key=lambda x: abs(signed_area(exteriors[x], fast=True)),
                )
                hole_exteriors[hole_i] = [ext_i]

        orphan_holes = [
            hole_i
            for hole_i, exterior_candidates in hole_exteriors.items()
            if not exterior_candidates
        ]

        polys: list[list[Sequence[Point2D]]] = []
        for ext_i, ext in enumerate(exteriors):
            poly = [ext]
            for hole_i, exterior_candidates in hole_exteriors.items():
                if exterior_candidates and exterior_candidates[0] == ext_i:
                    poly.append(holes[hole_i])
            polys.append(poly)

        # orphaned holes become exteriors without holes
        for hole_i in orphan_holes:
            polys.append([holes[hole_i]])

        if orphan_holes and return_errors is not None:
            return_errors["polygon_orphaned_holes"] = len(orphan_holes)

        return polys

    # no exteriors, assume the winding order is wrong
    if return_errors is not None:
        return_errors["polygon_only_holes"] = len(holes)
    return [[hole] for hole in holes]
