"""
Tests for orientation generation and cuboid geometry helpers.
"""

import pytest

from parcel_packer.core.utils_geometry import (
    Placement,
    bounding_dimensions,
    boxes_overlap,
    fits_within,
    footprint_coverage,
    generate_axis_orientations,
    length_locked_orientations,
    volume_utilization,
)
from parcel_packer.models.item import Item


def _item(length, width, height, item_id="A"):
    return Item(id=item_id, destination="USA", length=length, width=width, height=height, weight=1)


def test_distinct_item_has_six_orientations():
    orientations = generate_axis_orientations((30, 20, 8))
    assert len(orientations) == 6
    assert orientations[0] == ((0, 1, 2), (30.0, 20.0, 8.0))
    assert {dims for _, dims in orientations} == {
        (30.0, 20.0, 8.0), (30.0, 8.0, 20.0), (20.0, 30.0, 8.0),
        (20.0, 8.0, 30.0), (8.0, 30.0, 20.0), (8.0, 20.0, 30.0),
    }


@pytest.mark.parametrize("dims, expected", [((10, 10, 10), 1), ((10, 10, 5), 3)])
def test_equal_edges_collapse_duplicate_orientations(dims, expected):
    assert len(generate_axis_orientations(dims)) == expected


def test_length_locked_orientations_keep_length_on_first_axis():
    orientations = length_locked_orientations((55, 45, 61))
    assert orientations == [
        ((0, 1, 2), (55.0, 45.0, 61.0)),
        ((0, 2, 1), (55.0, 61.0, 45.0)),
    ]


def test_touching_faces_do_not_overlap():
    assert not boxes_overlap((0, 0, 0), (10, 10, 10), (10, 0, 0), (10, 10, 10))
    assert not boxes_overlap((0, 0, 0), (10, 10, 10), (0, 0, 10), (5, 5, 5))


def test_intersecting_cuboids_overlap():
    assert boxes_overlap((0, 0, 0), (10, 10, 10), (9, 9, 9), (5, 5, 5))
    assert boxes_overlap((0, 0, 0), (10, 10, 10), (2, 2, 2), (1, 1, 1))


def test_fits_within_bounds():
    assert fits_within((0, 0, 0), (61.8, 10, 10), (61.8, 61.8, 61.8))
    assert not fits_within((1, 0, 0), (61.8, 10, 10), (61.8, 61.8, 61.8))


def test_bounding_dimensions_cover_all_placements():
    placements = [
        Placement(_item(30, 20, 8, "A"), 0.0, 0.0, 0.0, (30.0, 20.0, 8.0)),
        Placement(_item(30, 20, 8, "B"), 0.0, 20.0, 0.0, (30.0, 20.0, 8.0)),
        Placement(_item(10, 10, 10, "C"), 0.0, 0.0, 8.0, (10.0, 10.0, 10.0)),
    ]
    assert bounding_dimensions(placements) == (30.0, 40.0, 18.0)
    assert bounding_dimensions([]) == (0.0, 0.0, 0.0)


def test_footprint_coverage_counts_floor_items_only():
    placements = [
        Placement(_item(10, 10, 5, "A"), 0.0, 0.0, 0.0, (10.0, 10.0, 5.0)),
        Placement(_item(10, 10, 5, "B"), 10.0, 0.0, 0.0, (10.0, 10.0, 5.0)),
        Placement(_item(10, 10, 5, "C"), 0.0, 0.0, 5.0, (10.0, 10.0, 5.0)),
    ]
    assert footprint_coverage(placements, 20, 20) == pytest.approx(50.0)
    assert footprint_coverage([], 20, 20) == 0.0


def test_volume_utilization_handles_empty_container():
    assert volume_utilization(50, 200) == pytest.approx(25.0)
    assert volume_utilization(50, 0) == 0.0
