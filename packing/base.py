"""Base packing types and shared errors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Protocol
from collections.abc import Sequence


class PackingError(ValueError):
    """Base class for packing precondition violations."""


class InvalidCapacityError(PackingError):
    """Raised when a bin capacity is not a positive integer."""


class InvalidItemError(PackingError):
    """Raised when an item size is not a positive integer."""


class ItemTooLargeError(PackingError):
    """Raised when an item can never fit into an empty bin."""

    def __init__(self, item: int, capacity: int) -> None:
        super().__init__(f"Item of size {item} exceeds bin capacity {capacity}")
        self.item: int = item
        self.capacity: int = capacity


class ItemParseError(PackingError):
    """Raised when a raw item string cannot be decoded."""


def format_items(items: Sequence[int]) -> str:
    """Render bin contents: digits run together, larger sizes comma-joined."""
    separator = "" if all(item < 10 for item in items) else ","
    return separator.join(str(item) for item in items)


@dataclass(frozen=True)
class Bin:
    """A bin with the items it holds and the room it has left.

    ``id`` is the bin's position in the bin list; it is assigned once at
    creation and never changes.
    """

    items: tuple[int, ...]
    remaining_capacity: int
    id: int

    @classmethod
    def open(cls, item: int, capacity: int, bin_id: int) -> "Bin":
        return cls(items=(item,), remaining_capacity=capacity - item, id=bin_id)

    def fits(self, item: int) -> bool:
        return self.remaining_capacity >= item

    def with_item(self, item: int) -> "Bin":
        if not self.fits(item):
            raise ValueError("Item does not fit in bin")
        return Bin(
            items=self.items + (item,),
            remaining_capacity=self.remaining_capacity - item,
            id=self.id,
        )

    @property
    def load(self) -> int:
        return sum(self.items)

    def __str__(self) -> str:
        return format_items(self.items)


class Candidate(NamedTuple):
    """A bin able to receive an item, with the room it would have left."""

    bin_id: int
    remaining_after: int


class CandidateEvaluator(Protocol):
    def __call__(self, item: int, bins: Sequence[Bin]) -> list[Candidate]:
        """Return the bins that may receive ``item``, in creation order."""
        ...


class CandidateOrdering(Protocol):
    def __call__(self, candidates: list[Candidate]) -> list[Candidate]:
        """Return candidates with the preferred one first."""
        ...


def validate_capacity(capacity: int) -> None:
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise InvalidCapacityError(f"Capacity must be a positive integer, got {capacity!r}")


def validate_items(items: Sequence[int], capacity: int) -> None:
    """Reject items that are not positive integers or never fit a bin."""

    for item in items:
        if isinstance(item, bool) or not isinstance(item, int) or item <= 0:
            raise InvalidItemError(f"Item size must be a positive integer, got {item!r}")
        if item > capacity:
            raise ItemTooLargeError(item, capacity)
