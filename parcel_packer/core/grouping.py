"""
Partition of submitted items by shipping destination.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from parcel_packer.models.item import Item


def group_by_destination(items: Iterable[Item]) -> Dict[str, List[Item]]:
    """
    Group items per destination.

    Groups follow the first appearance of each destination in the input and
    keep the input order of items inside a group.
    """
    groups: Dict[str, List[Item]] = {}
    for item in items:
        groups.setdefault(item.destination, []).append(item)
    return groups
