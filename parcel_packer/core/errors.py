"""
Errors raised by the packing command.

Items that cannot be packed are not errors; they are reported in
``PackingSolution.unpacked_items``.
"""

from __future__ import annotations

from typing import Iterable, Sequence


class PackingError(Exception):
    """Base class for failures that abort a packing request."""


class EmptyInputError(PackingError, ValueError):
    def __init__(self) -> None:
        super().__init__("No items were submitted for packing.")


class UnknownDestinationError(PackingError, KeyError):
    """An item references a destination absent from the registry."""

    def __init__(
        self,
        destination: str,
        known: Iterable[str] = (),
        item_ids: Sequence[str] = (),
    ) -> None:
        self.destination = destination
        self.known = tuple(known)
        self.item_ids = tuple(item_ids)
        message = f"Unknown destination {destination!r}"
        if self.item_ids:
            message += f" (items: {', '.join(self.item_ids)})"
        if self.known:
            message += f"; known destinations: {', '.join(self.known)}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class ConstraintViolationError(PackingError):
    """A finished box failed its size or weight re-verification."""
