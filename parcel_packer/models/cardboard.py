"""
Cardboard model converting interior box sizes into shipped sizes and mass.

Thickness is in centimetres and applies to both faces of every axis. Unit
weight is in kilograms per square metre of outer surface.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Sequence, Tuple

Dimensions = Tuple[float, float, float]

CM2_PER_M2 = 10_000.0


def _require_non_negative(name: str, value: float) -> float:
    if value < 0:
        raise ValueError(f"{name} cannot be negative, got {value!r}")
    return value


@dataclass(frozen=True)
class CardboardSpec:
    """Wall thickness and areal weight of the outer box material."""

    thickness_cm: float = 0.6
    unit_weight_kg_per_m2: float = 0.54

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "thickness_cm", float(_require_non_negative("thickness_cm", self.thickness_cm))
        )
        object.__setattr__(
            self,
            "unit_weight_kg_per_m2",
            float(_require_non_negative("unit_weight_kg_per_m2", self.unit_weight_kg_per_m2)),
        )

    def outer_dims(self, interior: Sequence[float]) -> Dimensions:
        """Return outer dimensions (wall thickness added once per face)."""
        wall = 2 * self.thickness_cm
        return (interior[0] + wall, interior[1] + wall, interior[2] + wall)

    @staticmethod
    def surface_area_m2(outer: Sequence[float]) -> float:
        length, width, height = outer
        return 2 * (length * width + length * height + width * height) / CM2_PER_M2

    def cardboard_weight(self, outer: Sequence[float]) -> float:
        """Mass of the cardboard shell for the given outer dimensions, in kg."""
        return self.surface_area_m2(outer) * self.unit_weight_kg_per_m2

    def box_weight(self, interior: Sequence[float], item_weights: Iterable[float]) -> float:
        """
        Total shipped weight: item weights plus the cardboard of the outer box.

        Weights are summed in the order given so repeated calls over the same
        sequence produce identical floats.
        """
        return sum(item_weights) + self.cardboard_weight(self.outer_dims(interior))

    def to_dict(self) -> Dict[str, float]:
        return {
            "thickness_cm": self.thickness_cm,
            "unit_weight_kg_per_m2": self.unit_weight_kg_per_m2,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "CardboardSpec":
        return cls(
            thickness_cm=float(payload["thickness_cm"]),
            unit_weight_kg_per_m2=float(payload["unit_weight_kg_per_m2"]),
        )
