"""
The ``pack_items`` command: validation, per-destination packing and assembly.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from parcel_packer.core.box_packer import GroupPackingResult, pack_destination_group
from parcel_packer.core.errors import EmptyInputError, UnknownDestinationError
from parcel_packer.core.grouping import group_by_destination
from parcel_packer.core.registry import DestinationRegistry, load_cardboard, load_registry
from parcel_packer.logger import logger
from parcel_packer.models.cardboard import CardboardSpec
from parcel_packer.models.item import Item, items_from_payload
from parcel_packer.models.solution import PackingSolution


def _validate_request(items: Sequence[Item], registry: DestinationRegistry) -> None:
    if not items:
        raise EmptyInputError()

    unknown: Dict[str, List[str]] = {}
    for item in items:
        if item.destination not in registry:
            unknown.setdefault(item.destination, []).append(item.id)
    if unknown:
        destination, item_ids = next(iter(unknown.items()))
        raise UnknownDestinationError(destination, known=registry.destinations, item_ids=item_ids)


def assemble_solution(group_results: Iterable[GroupPackingResult]) -> PackingSolution:
    """
    Concatenate group results in the order given.

    Boxes keep their creation order inside a group; ``total_volume`` is the
    sum of interior volumes.
    """
    boxes = []
    unpacked = []
    for group_result in group_results:
        boxes.extend(group_result.boxes)
        unpacked.extend(group_result.unpacked_items)
    return PackingSolution(
        boxes=tuple(boxes),
        total_volume=sum(packed_box.volume for packed_box in boxes),
        unpacked_items=tuple(unpacked),
    )


def pack_items(
    items: Sequence[Item],
    registry: Optional[DestinationRegistry] = None,
    cardboard: Optional[CardboardSpec] = None,
    max_workers: Optional[int] = None,
) -> PackingSolution:
    """
    Pack items into destination-compliant boxes.

    Raises ``EmptyInputError`` for an empty request and
    ``UnknownDestinationError`` when any item names a destination missing from
    the registry; both are checked before any packing work starts. Items that
    cannot be packed are returned in ``unpacked_items``.

    Destinations are packed independently and, when ``max_workers`` allows,
    on a thread pool. The result does not depend on scheduling.
    """
    items = list(items)
    registry = registry if registry is not None else load_registry()
    cardboard = cardboard if cardboard is not None else load_cardboard()
    _validate_request(items, registry)

    groups = group_by_destination(items)
    profiles = {destination: registry.profile_of(destination) for destination in groups}

    def run(destination: str) -> GroupPackingResult:
        return pack_destination_group(groups[destination], profiles[destination], cardboard)

    if len(groups) > 1 and (max_workers is None or max_workers > 1):
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            group_results = list(executor.map(run, groups))
    else:
        group_results = [run(destination) for destination in groups]

    solution = assemble_solution(group_results)
    logger.info(
        "Packed %d of %d items into %d boxes across %d destinations (%.0f cm^3, %d unpacked)",
        solution.packed_item_count,
        len(items),
        len(solution.boxes),
        len(groups),
        solution.total_volume,
        len(solution.unpacked_items),
    )
    return solution


def pack_payload(
    payload: Iterable[Mapping[str, Any]],
    registry: Optional[DestinationRegistry] = None,
    cardboard: Optional[CardboardSpec] = None,
) -> Dict[str, Any]:
    """Run ``pack_items`` on the raw list-of-dicts input and serialise the result."""
    return pack_items(items_from_payload(payload), registry=registry, cardboard=cardboard).to_dict()


def calculate_cost(solution: PackingSolution) -> float:
    """Shipping cost proxy: boxes are billed by interior volume."""
    return solution.total_volume
