"""
Result model returned by the packing command.

Boxes and solutions are read-only values; the presentation layer renders them
and re-runs the engine when inputs change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from parcel_packer.core.utils_geometry import Placement, volume_utilization
from parcel_packer.models.item import Item


@dataclass(frozen=True)
class PackedBox:
    """One outer box: its trimmed interior size, contents and shipped weight."""

    destination: str
    length: float
    width: float
    height: float
    placements: Tuple[Placement, ...]
    weight: float
    outer_dimensions: Tuple[float, float, float]
    cardboard_weight: float = field(default=0.0)

    @property
    def dimensions(self) -> Tuple[float, float, float]:
        """Return interior dimensions (length, width, height)."""
        return self.length, self.width, self.height

    @property
    def volume(self) -> float:
        """Return interior volume in cm^3."""
        return self.length * self.width * self.height

    @property
    def outer_volume(self) -> float:
        length, width, height = self.outer_dimensions
        return length * width * height

    @property
    def items(self) -> List[Item]:
        return [placement.item for placement in self.placements]

    @property
    def item_weight(self) -> float:
        return sum(placement.item.weight for placement in self.placements)

    @property
    def item_volume(self) -> float:
        return sum(placement.item.volume for placement in self.placements)

    @property
    def volume_utilisation_pct(self) -> float:
        return volume_utilization(self.item_volume, self.volume)

    def to_dict(self, box_index: int = 0) -> Dict[str, Any]:
        """Serialise with every item annotated by its position and box index."""
        items = []
        for placement in self.placements:
            entry: Dict[str, Any] = placement.item.to_dict()
            entry["position"] = list(placement.position)
            entry["orientation"] = list(placement.orientation)
            entry["box_index"] = box_index
            items.append(entry)
        return {
            "items": items,
            "length": self.length,
            "width": self.width,
            "height": self.height,
            "weight": self.weight,
            "destination": self.destination,
            "outer_dimensions": list(self.outer_dimensions),
        }


@dataclass(frozen=True)
class PackingSolution:
    boxes: Tuple[PackedBox, ...]
    total_volume: float
    unpacked_items: Tuple[Item, ...]

    @property
    def packed_item_count(self) -> int:
        return sum(len(packed_box.placements) for packed_box in self.boxes)

    @property
    def total_weight(self) -> float:
        return sum(packed_box.weight for packed_box in self.boxes)

    def boxes_for(self, destination: str) -> List[PackedBox]:
        return [packed_box for packed_box in self.boxes if packed_box.destination == destination]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "boxes": [packed_box.to_dict(index) for index, packed_box in enumerate(self.boxes)],
            "total_volume": self.total_volume,
            "unpacked_items": [item.to_dict() for item in self.unpacked_items],
        }
