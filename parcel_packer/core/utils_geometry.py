"""
Geometry helper utilities shared across the packing engine and presentation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from parcel_packer.models.item import Item


Orientation = Tuple[float, float, float]
AxisPermutation = Tuple[int, int, int]
Point = Tuple[float, float, float]

EPSILON = 1e-9

# Fixed order keeps orientation search deterministic.
AXIS_PERMUTATIONS: Tuple[AxisPermutation, ...] = (
    (0, 1, 2),
    (0, 2, 1),
    (1, 0, 2),
    (1, 2, 0),
    (2, 0, 1),
    (2, 1, 0),
)


def _orient(dimensions: Sequence[float], permutation: AxisPermutation) -> Orientation:
    return (
        float(dimensions[permutation[0]]),
        float(dimensions[permutation[1]]),
        float(dimensions[permutation[2]]),
    )


def _distinct(
    dimensions: Sequence[float],
    permutations: Sequence[AxisPermutation],
) -> List[Tuple[AxisPermutation, Orientation]]:
    seen: set[Orientation] = set()
    result: List[Tuple[AxisPermutation, Orientation]] = []
    for permutation in permutations:
        oriented = _orient(dimensions, permutation)
        if oriented in seen:
            continue
        seen.add(oriented)
        result.append((permutation, oriented))
    return result


def generate_axis_orientations(
    dimensions: Sequence[float],
) -> List[Tuple[AxisPermutation, Orientation]]:
    """
    Return every distinct axis-aligned orientation of a rectangular item.

    Each entry pairs the permutation (item edge index placed on box axis
    0, 1, 2) with the resulting extents along the box axes.
    """
    return _distinct(dimensions, AXIS_PERMUTATIONS)


def length_locked_orientations(
    dimensions: Sequence[float],
) -> List[Tuple[AxisPermutation, Orientation]]:
    """
    Return the orientations that keep the item length on the box length axis.

    The two remaining edges may swap between the cross axes.
    """
    return _distinct(
        dimensions,
        [permutation for permutation in AXIS_PERMUTATIONS if permutation[0] == 0],
    )


def rects_overlap_1d(a_start: float, a_len: float, b_start: float, b_len: float) -> bool:
    """
    Determine if two segments on the same axis overlap (touching ends do not).
    """
    return not (
        a_start + a_len <= b_start + EPSILON or b_start + b_len <= a_start + EPSILON
    )


def boxes_overlap(
    a_origin: Point,
    a_dims: Orientation,
    b_origin: Point,
    b_dims: Orientation,
) -> bool:
    """
    Check whether two axis-aligned cuboids intersect with positive volume.
    """
    return (
        rects_overlap_1d(a_origin[0], a_dims[0], b_origin[0], b_dims[0])
        and rects_overlap_1d(a_origin[1], a_dims[1], b_origin[1], b_dims[1])
        and rects_overlap_1d(a_origin[2], a_dims[2], b_origin[2], b_dims[2])
    )


def fits_within(origin: Point, dims: Orientation, bounds: Sequence[float]) -> bool:
    """Check that a cuboid lies inside ``[0, bounds]`` on every axis."""
    return all(
        origin[axis] >= -EPSILON and origin[axis] + dims[axis] <= bounds[axis] + EPSILON
        for axis in range(3)
    )


@dataclass(frozen=True)
class Placement:
    """
    Represents the placement of an item within a box.

    ``x, y, z`` is the item corner nearest the box origin and ``orientation``
    holds the item extents along the box axes.
    """

    item: Item
    x: float
    y: float
    z: float
    orientation: Orientation
    axes: AxisPermutation = (0, 1, 2)

    @property
    def position(self) -> Point:
        return self.x, self.y, self.z

    @property
    def far_corner(self) -> Point:
        return (
            self.x + self.orientation[0],
            self.y + self.orientation[1],
            self.z + self.orientation[2],
        )

    def overlaps(self, other: "Placement") -> bool:
        return boxes_overlap(self.position, self.orientation, other.position, other.orientation)

    def as_dict(self) -> Dict[str, object]:
        return {
            "item_id": self.item.id,
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "orientation": self.orientation,
            "axes": self.axes,
        }


def bounding_dimensions(placements: Sequence[Placement]) -> Orientation:
    """Return the tightest (L, W, H) that contains every placement."""
    if not placements:
        return 0.0, 0.0, 0.0
    corners = [placement.far_corner for placement in placements]
    return (
        max(corner[0] for corner in corners),
        max(corner[1] for corner in corners),
        max(corner[2] for corner in corners),
    )


def volume_utilization(used_volume: float, container_volume: float) -> float:
    """
    Simple volume utilisation metric expressed as a percentage (0.0 - 100.0).
    """
    if container_volume <= 0:
        return 0.0
    return float(used_volume) / float(container_volume) * 100.0


def footprint_coverage(
    placements: Sequence[Placement],
    container_length: float,
    container_width: float,
) -> float:
    """
    Compute the percentage of the box floor covered in the XY plane.

    Only placements resting on the floor (z == 0) count.
    """
    container_area = float(container_length * container_width)
    if not placements or container_area <= 0:
        return 0.0

    # Axis-aligned rectangle union via plane sweep.
    rects: List[Tuple[float, float, float, float]] = []
    x_edges: List[float] = []
    for placement in placements:
        if placement.z > EPSILON:
            continue
        x0, y0 = placement.x, placement.y
        x1, y1 = x0 + placement.orientation[0], y0 + placement.orientation[1]
        x_edges.extend([x0, x1])
        rects.append((x0, x1, y0, y1))

    if not rects:
        return 0.0

    x_edges = sorted(set(x_edges))
    area = 0.0
    for x_start, x_end in zip(x_edges, x_edges[1:]):
        intervals = sorted(
            (y0, y1) for x0, x1, y0, y1 in rects if x0 <= x_start and x1 >= x_end
        )
        if not intervals:
            continue

        covered = 0.0
        cur_start, cur_end = intervals[0]
        for start, end in intervals[1:]:
            if start <= cur_end:
                cur_end = max(cur_end, end)
            else:
                covered += cur_end - cur_start
                cur_start, cur_end = start, end
        covered += cur_end - cur_start
        area += (x_end - x_start) * covered

    return min(area, container_area) / container_area * 100.0
