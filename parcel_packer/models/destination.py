"""
Per-destination shipping limits for outer boxes.

A profile is either symmetric (every outer edge <= ``max_side``) or
asymmetric, where box axis 0 ("length") has its own limit and the two cross
axes share ``max_cross_side``. ``max_weight`` includes the cardboard.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple


def _require_positive(name: str, value: float) -> float:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")
    return value


def _optional_positive(name: str, value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return float(_require_positive(name, value))


@dataclass(frozen=True)
class DestinationProfile:
    """Immutable size and weight rule for one shipping destination."""

    destination: str
    max_weight: float
    max_side: Optional[float] = None
    max_length: Optional[float] = None
    max_cross_side: Optional[float] = None

    def __post_init__(self) -> None:
        if not str(self.destination).strip():
            raise ValueError("destination cannot be empty")
        object.__setattr__(self, "max_weight", float(_require_positive("max_weight", self.max_weight)))
        object.__setattr__(self, "max_side", _optional_positive("max_side", self.max_side))
        object.__setattr__(self, "max_length", _optional_positive("max_length", self.max_length))
        object.__setattr__(
            self, "max_cross_side", _optional_positive("max_cross_side", self.max_cross_side)
        )

        symmetric = self.max_side is not None
        asymmetric = self.max_length is not None or self.max_cross_side is not None
        if symmetric == asymmetric:
            raise ValueError(
                f"{self.destination}: give either max_side or (max_length, max_cross_side)"
            )
        if asymmetric and (self.max_length is None or self.max_cross_side is None):
            raise ValueError(
                f"{self.destination}: max_length and max_cross_side must be given together"
            )

    @property
    def is_symmetric(self) -> bool:
        return self.max_side is not None

    def outer_limits(self) -> Tuple[float, float, float]:
        """Return the outer edge limit per box axis (length, width, height)."""
        if self.max_side is not None:
            return self.max_side, self.max_side, self.max_side
        return self.max_length, self.max_cross_side, self.max_cross_side

    def max_interior(self, thickness_cm: float) -> Tuple[float, float, float]:
        """Largest interior size that keeps the outer box inside the limits."""
        wall = 2 * thickness_cm
        return tuple(limit - wall for limit in self.outer_limits())

    def admits_outer(self, outer: Sequence[float], tolerance: float = 0.0) -> bool:
        return all(
            edge <= limit + tolerance for edge, limit in zip(outer, self.outer_limits())
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"max_weight": self.max_weight}
        if self.is_symmetric:
            payload["max_side"] = self.max_side
        else:
            payload["max_length"] = self.max_length
            payload["max_cross_side"] = self.max_cross_side
        return payload

    @classmethod
    def from_dict(cls, destination: str, payload: Mapping[str, Any]) -> "DestinationProfile":
        """Instantiate from one entry of the destinations configuration."""
        return cls(
            destination=destination,
            max_weight=float(payload["max_weight"]),
            max_side=payload.get("max_side"),
            max_length=payload.get("max_length"),
            max_cross_side=payload.get("max_cross_side"),
        )
