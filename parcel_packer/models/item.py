"""
Data model representing a standard item submitted for packing.

Dimensions are in centimetres (cm) and weight in kilograms (kg). Validation is
strict so malformed rows are rejected before they reach the packing engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import isfinite
from typing import Any, Dict, Iterable, List, Mapping, Tuple


def _require_positive(name: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc
    if not isfinite(number) or number <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")
    return number


def _require_text(name: str, value: Any) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValueError(f"{name} cannot be empty")
    return text


@dataclass(frozen=True)
class Item:
    """Immutable standard item tagged with its shipping destination."""

    id: str
    destination: str
    length: float
    width: float
    height: float
    weight: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", _require_text("id", self.id))
        object.__setattr__(self, "destination", _require_text("destination", self.destination))
        object.__setattr__(self, "length", _require_positive("length", self.length))
        object.__setattr__(self, "width", _require_positive("width", self.width))
        object.__setattr__(self, "height", _require_positive("height", self.height))
        object.__setattr__(self, "weight", _require_positive("weight", self.weight))

    @property
    def volume(self) -> float:
        """Return the item volume in cm^3."""
        return self.length * self.width * self.height

    @property
    def dimensions(self) -> Tuple[float, float, float]:
        """Expose dimensions as an (L, W, H) tuple."""
        return self.length, self.width, self.height

    @property
    def longest_edge(self) -> float:
        return max(self.dimensions)

    def to_dict(self) -> Dict[str, float | str]:
        return {
            "id": self.id,
            "destination": self.destination,
            "length": self.length,
            "width": self.width,
            "height": self.height,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Item":
        """Instantiate from a raw command payload entry."""
        missing = [
            key
            for key in ("id", "destination", "length", "width", "height", "weight")
            if key not in payload
        ]
        if missing:
            raise ValueError(f"item payload is missing field(s): {', '.join(missing)}")
        return cls(
            id=payload["id"],
            destination=payload["destination"],
            length=payload["length"],
            width=payload["width"],
            height=payload["height"],
            weight=payload["weight"],
        )


def items_from_payload(payload: Iterable[Mapping[str, Any]]) -> List[Item]:
    """Convert an ordered list of item dicts, keeping input order."""
    items: List[Item] = []
    for index, entry in enumerate(payload):
        try:
            items.append(Item.from_dict(entry))
        except ValueError as exc:
            raise ValueError(f"item #{index + 1}: {exc}") from exc
    return items
