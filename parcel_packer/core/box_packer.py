"""
Packing engine for the items of a single destination.

Bins are filled one at a time with an anchor-point search: every placed item
offers its three far corners as anchors for the next items. Each finished bin
is trimmed to the bounding box of its placements before it is emitted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from parcel_packer.core.errors import ConstraintViolationError
from parcel_packer.core.utils_geometry import (
    EPSILON,
    AxisPermutation,
    Orientation,
    Placement,
    Point,
    boxes_overlap,
    bounding_dimensions,
    fits_within,
    generate_axis_orientations,
    length_locked_orientations,
)
from parcel_packer.logger import logger
from parcel_packer.models.cardboard import CardboardSpec
from parcel_packer.models.destination import DestinationProfile
from parcel_packer.models.item import Item
from parcel_packer.models.solution import PackedBox


SIZE_TOLERANCE = 1e-6  # cm, absorbs float error of interior + 2 * thickness

OrientationOption = Tuple[AxisPermutation, Orientation]


@dataclass
class GroupPackingResult:
    destination: str
    boxes: List[PackedBox] = field(default_factory=list)
    unpacked_items: List[Item] = field(default_factory=list)

    @property
    def packed_item_count(self) -> int:
        return sum(len(packed_box.placements) for packed_box in self.boxes)


def legal_orientations(item: Item, profile: DestinationProfile) -> List[OrientationOption]:
    """
    Orientations allowed by the destination's size rule.

    A symmetric limit accepts any rotation. An asymmetric limit is bound to
    the box length axis, so the item length must stay on it.
    """
    if profile.is_symmetric:
        return generate_axis_orientations(item.dimensions)
    return length_locked_orientations(item.dimensions)


def packing_order(items: Sequence[Item]) -> List[Item]:
    """Decreasing volume, then decreasing longest edge, then input order."""
    ranked = sorted(
        enumerate(items),
        key=lambda entry: (-entry[1].volume, -entry[1].longest_edge, entry[0]),
    )
    return [item for _, item in ranked]


def _grow(extent: Orientation, origin: Point, dims: Orientation) -> Orientation:
    return (
        max(extent[0], origin[0] + dims[0]),
        max(extent[1], origin[1] + dims[1]),
        max(extent[2], origin[2] + dims[2]),
    )


class _Bin:
    """Working bin of one outer-loop iteration: placements, anchors, extent."""

    def __init__(
        self,
        bounds: Orientation,
        max_weight: float,
        cardboard: CardboardSpec,
    ) -> None:
        self.bounds = bounds
        self.max_weight = max_weight
        self.cardboard = cardboard
        self.placements: List[Placement] = []
        self.weights: List[float] = []
        self.extent: Orientation = (0.0, 0.0, 0.0)
        self.anchors: set[Point] = {(0.0, 0.0, 0.0)}

    def weight_with(self, extent: Orientation, item_weight: float) -> float:
        return self.cardboard.box_weight(extent, [*self.weights, item_weight])

    def try_place(self, item: Item, orientations: Sequence[OrientationOption]) -> Optional[Placement]:
        # Cardboard mass only grows with the box, so this bounds every anchor.
        if self.weight_with(self.extent, item.weight) > self.max_weight:
            return None

        anchors = sorted(self.anchors, key=lambda point: (point[2], point[1], point[0]))
        for axes, dims in orientations:
            for anchor in anchors:
                if not fits_within(anchor, dims, self.bounds):
                    continue
                if any(
                    boxes_overlap(anchor, dims, placed.position, placed.orientation)
                    for placed in self.placements
                ):
                    continue
                extent = _grow(self.extent, anchor, dims)
                if self.weight_with(extent, item.weight) > self.max_weight:
                    continue
                placement = Placement(item, anchor[0], anchor[1], anchor[2], dims, axes)
                self._commit(placement, extent)
                return placement
        return None

    def _commit(self, placement: Placement, extent: Orientation) -> None:
        self.placements.append(placement)
        self.weights.append(placement.item.weight)
        self.extent = extent

        x, y, z = placement.position
        length, width, height = placement.orientation
        self.anchors.discard(placement.position)
        for corner in ((x + length, y, z), (x, y + width, z), (x, y, z + height)):
            if all(corner[axis] < self.bounds[axis] - EPSILON for axis in range(3)):
                self.anchors.add(corner)


def _fits_empty_bin(
    item: Item,
    orientations: Sequence[OrientationOption],
    bounds: Orientation,
    max_weight: float,
    cardboard: CardboardSpec,
) -> bool:
    """Whether the item alone fits a fresh maximum-size bin."""
    return any(
        fits_within((0.0, 0.0, 0.0), dims, bounds)
        and cardboard.box_weight(dims, [item.weight]) <= max_weight
        for _, dims in orientations
    )


def _finish_box(
    working: _Bin,
    profile: DestinationProfile,
    cardboard: CardboardSpec,
) -> PackedBox:
    interior = bounding_dimensions(working.placements)
    outer = cardboard.outer_dims(interior)
    weight = cardboard.box_weight(interior, working.weights)

    if not profile.admits_outer(outer, tolerance=SIZE_TOLERANCE):
        raise ConstraintViolationError(
            f"{profile.destination}: outer size {outer} exceeds limits {profile.outer_limits()}"
        )
    if weight > profile.max_weight:
        raise ConstraintViolationError(
            f"{profile.destination}: box weight {weight:.3f} kg exceeds {profile.max_weight} kg"
        )

    return PackedBox(
        destination=profile.destination,
        length=interior[0],
        width=interior[1],
        height=interior[2],
        placements=tuple(working.placements),
        weight=weight,
        outer_dimensions=outer,
        cardboard_weight=cardboard.cardboard_weight(outer),
    )


def pack_destination_group(
    items: Sequence[Item],
    profile: DestinationProfile,
    cardboard: CardboardSpec,
) -> GroupPackingResult:
    """
    Pack every item of one destination into as few trimmed boxes as possible.

    Items that cannot fit even an empty maximum-size box are returned as
    unpacked (in input order) and never block the rest of the group.
    """
    bounds = profile.max_interior(cardboard.thickness_cm)
    result = GroupPackingResult(destination=profile.destination)

    candidates: List[Item] = []
    for item in items:
        if _fits_empty_bin(item, legal_orientations(item, profile), bounds, profile.max_weight, cardboard):
            candidates.append(item)
        else:
            logger.warning(
                "Item %s (%s x %s x %s cm, %s kg) cannot ship to %s and is left unpacked",
                item.id,
                item.length,
                item.width,
                item.height,
                item.weight,
                profile.destination,
            )
            result.unpacked_items.append(item)

    remaining = [(item, legal_orientations(item, profile)) for item in packing_order(candidates)]
    while remaining:
        working = _Bin(bounds, profile.max_weight, cardboard)
        deferred = []
        for item, orientations in remaining:
            if working.try_place(item, orientations) is None:
                deferred.append((item, orientations))

        if not working.placements:
            # Every remaining item passed the empty-bin check, so this means a bug.
            raise ConstraintViolationError(
                f"{profile.destination}: no item could be placed into an empty bin"
            )

        packed_box = _finish_box(working, profile, cardboard)
        logger.debug(
            "%s box %d: %d items, interior %.1f x %.1f x %.1f cm, %.3f kg",
            profile.destination,
            len(result.boxes) + 1,
            len(packed_box.placements),
            packed_box.length,
            packed_box.width,
            packed_box.height,
            packed_box.weight,
        )
        result.boxes.append(packed_box)
        remaining = deferred

    return result
