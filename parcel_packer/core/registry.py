"""
Destination constraint registry and configuration loading.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from parcel_packer.core.errors import UnknownDestinationError
from parcel_packer.models.cardboard import CardboardSpec
from parcel_packer.models.destination import DestinationProfile

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "destinations.json"


@dataclass(frozen=True)
class DestinationRegistry:
    """Read-only lookup of destination profiles, built once and injected."""

    profiles: Mapping[str, DestinationProfile] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for key, profile in self.profiles.items():
            if key != profile.destination:
                raise ValueError(
                    f"registry key {key!r} does not match profile {profile.destination!r}"
                )
        object.__setattr__(self, "profiles", MappingProxyType(dict(self.profiles)))

    def profile_of(self, destination: str) -> DestinationProfile:
        try:
            return self.profiles[destination]
        except KeyError:
            raise UnknownDestinationError(destination, known=self.destinations) from None

    @property
    def destinations(self) -> Tuple[str, ...]:
        return tuple(self.profiles)

    def __contains__(self, destination: object) -> bool:
        return destination in self.profiles

    def __iter__(self) -> Iterator[DestinationProfile]:
        return iter(self.profiles.values())

    def __len__(self) -> int:
        return len(self.profiles)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {key: profile.to_dict() for key, profile in self.profiles.items()}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Mapping[str, Any]]) -> "DestinationRegistry":
        return cls(
            {
                destination: DestinationProfile.from_dict(destination, entry)
                for destination, entry in payload.items()
            }
        )

    @classmethod
    def from_profiles(cls, *profiles: DestinationProfile) -> "DestinationRegistry":
        return cls({profile.destination: profile for profile in profiles})


def load_config(path: Optional[str | Path] = None) -> dict:
    with open(path or DEFAULT_CONFIG_PATH, "r", encoding="utf-8") as file:
        return json.load(file)


def load_registry(path: Optional[str | Path] = None) -> DestinationRegistry:
    """Build the registry from the ``destinations`` table of a config file."""
    return DestinationRegistry.from_dict(load_config(path)["destinations"])


def load_cardboard(path: Optional[str | Path] = None) -> CardboardSpec:
    """Build the cardboard spec from the ``cardboard`` entry of a config file."""
    return CardboardSpec.from_dict(load_config(path)["cardboard"])
