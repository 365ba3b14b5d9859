"""
Shared fixtures for the parcel packer test-suite.

Run with:
    python -m pytest tests -v
"""

import pytest

from parcel_packer.core.registry import DestinationRegistry
from parcel_packer.models.cardboard import CardboardSpec
from parcel_packer.models.destination import DestinationProfile
from parcel_packer.models.item import Item


TOLERANCE = 1e-6


# ---------------------------------------------------------------------------
# Constraint sets
# ---------------------------------------------------------------------------

@pytest.fixture
def cardboard():
    return CardboardSpec(thickness_cm=0.6, unit_weight_kg_per_m2=0.54)


@pytest.fixture
def usa_profile():
    return DestinationProfile(destination="USA", max_side=63.0, max_weight=22.0)


@pytest.fixture
def japan_profile():
    return DestinationProfile(
        destination="Japan", max_length=60.0, max_cross_side=50.0, max_weight=40.0
    )


@pytest.fixture
def registry(usa_profile, japan_profile):
    """Small substitute registry, independent of the shipped config file."""
    return DestinationRegistry.from_profiles(
        usa_profile,
        japan_profile,
        DestinationProfile(destination="UK", max_side=63.0, max_weight=15.0),
    )


def make_items(count, destination="USA", dims=(30.0, 20.0, 8.0), weight=0.68, prefix=None):
    prefix = prefix or destination
    return [
        Item(id=f"{prefix}-{index + 1}", destination=destination,
             length=dims[0], width=dims[1], height=dims[2], weight=weight)
        for index in range(count)
    ]


# ---------------------------------------------------------------------------
# Solution checks
# ---------------------------------------------------------------------------

def _strict_overlap(a, b):
    for axis in range(3):
        a_start, a_end = a.position[axis], a.position[axis] + a.orientation[axis]
        b_start, b_end = b.position[axis], b.position[axis] + b.orientation[axis]
        if a_end <= b_start + 1e-9 or b_end <= a_start + 1e-9:
            return False
    return True


def check_packed_box(packed_box, profile, cardboard):
    bounds = packed_box.dimensions
    for placement in packed_box.placements:
        assert placement.item.destination == packed_box.destination
        assert sorted(placement.orientation) == sorted(placement.item.dimensions)
        if not profile.is_symmetric:
            assert placement.orientation[0] == placement.item.length
        for axis in range(3):
            assert placement.position[axis] >= -1e-9
            assert placement.position[axis] + placement.orientation[axis] <= bounds[axis] + 1e-9

    placements = packed_box.placements
    for i in range(len(placements)):
        for j in range(i + 1, len(placements)):
            assert not _strict_overlap(placements[i], placements[j]), (
                f"{placements[i].item.id} overlaps {placements[j].item.id}"
            )

    outer = cardboard.outer_dims(bounds)
    assert tuple(packed_box.outer_dimensions) == pytest.approx(outer)
    for edge, limit in zip(outer, profile.outer_limits()):
        assert edge <= limit + TOLERANCE

    expected_weight = sum(item.weight for item in packed_box.items) + cardboard.cardboard_weight(outer)
    assert packed_box.weight == pytest.approx(expected_weight, abs=TOLERANCE)
    assert packed_box.weight <= profile.max_weight


def check_solution(solution, items, registry, cardboard):
    placed_ids = [item.id for packed_box in solution.boxes for item in packed_box.items]
    unpacked_ids = [item.id for item in solution.unpacked_items]
    assert sorted(placed_ids + unpacked_ids) == sorted(item.id for item in items)
    assert not set(placed_ids) & set(unpacked_ids)

    for packed_box in solution.boxes:
        check_packed_box(packed_box, registry.profile_of(packed_box.destination), cardboard)

    assert solution.total_volume == pytest.approx(
        sum(b.length * b.width * b.height for b in solution.boxes), abs=TOLERANCE
    )
