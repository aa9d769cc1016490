"""Greedy packing engine and the named packing strategies."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, TypeAlias
from collections.abc import Iterable, Sequence

from .base import Bin, validate_capacity, validate_items
from .items import keep_item_order, sort_items_by_decreasing_size
from .selectors import BinSelector, bf_select, ff_select, naive_select, wf_select

logger = logging.getLogger(__name__)

ItemOrder: TypeAlias = Callable[[Sequence[int]], list[int]]


def greedy(selector: BinSelector, items: Sequence[int], capacity: int) -> list[Bin]:
    """Pack items in order, one pass, never revisiting a decision.

    A new bin is opened only when ``selector`` finds no existing bin for the
    item. Raises ``ItemTooLargeError`` before packing anything if some item
    can never fit a bin.
    """

    validate_capacity(capacity)
    validate_items(items, capacity)

    bins: list[Bin] = []
    for item_size in items:
        bin_id = selector(item_size, bins)
        if bin_id is None:
            bins.append(Bin.open(item_size, capacity, len(bins)))
            logger.debug(
                "%s: opened bin %d for item %d", selector.name, len(bins) - 1, item_size
            )
        else:
            bins[bin_id] = bins[bin_id].with_item(item_size)

    return bins


def lower_bound(items: Iterable[int], capacity: int) -> int:
    """L1 lower bound: ceil(sum of items / capacity)."""

    validate_capacity(capacity)
    total = sum(items)
    return (total + capacity - 1) // capacity


def num_bins(bins: Sequence[Bin]) -> int:
    return len(bins)


def total_waste(bins: Sequence[Bin]) -> int:
    """Unused room summed over all bins."""

    return sum(bin_info.remaining_capacity for bin_info in bins)


def naive(items: Sequence[int], capacity: int) -> list[Bin]:
    """Only ever try the last bin; once left behind, a bin is never reused."""

    return greedy(naive_select, keep_item_order(items), capacity)


def ff(items: Sequence[int], capacity: int) -> list[Bin]:
    """First fit: the lowest-numbered bin with enough room."""

    return greedy(ff_select, keep_item_order(items), capacity)


def ffd(items: Sequence[int], capacity: int) -> list[Bin]:
    """First fit on items sorted by decreasing size."""

    return greedy(ff_select, sort_items_by_decreasing_size(items), capacity)


def bf(items: Sequence[int], capacity: int) -> list[Bin]:
    """Best fit: the bin left with the least room after placement."""

    return greedy(bf_select, keep_item_order(items), capacity)


def bfd(items: Sequence[int], capacity: int) -> list[Bin]:
    return greedy(bf_select, sort_items_by_decreasing_size(items), capacity)


def wf(items: Sequence[int], capacity: int) -> list[Bin]:
    """Worst fit: the bin left with the most room after placement."""

    return greedy(wf_select, keep_item_order(items), capacity)


def wfd(items: Sequence[int], capacity: int) -> list[Bin]:
    return greedy(wf_select, sort_items_by_decreasing_size(items), capacity)


@dataclass(frozen=True)
class Strategy:
    """A selector together with the order in which items are fed to it."""

    key: str
    label: str
    selector: BinSelector
    item_order: ItemOrder

    def pack(self, items: Sequence[int], capacity: int) -> list[Bin]:
        return greedy(self.selector, self.item_order(items), capacity)


STRATEGIES: dict[str, Strategy] = {
    strategy.key: strategy
    for strategy in (
        Strategy("naive", "Naive", naive_select, keep_item_order),
        Strategy("ff", "First Fit", ff_select, keep_item_order),
        Strategy("ffd", "First Fit Decreasing", ff_select, sort_items_by_decreasing_size),
        Strategy("bf", "Best Fit", bf_select, keep_item_order),
        Strategy("bfd", "Best Fit Decreasing", bf_select, sort_items_by_decreasing_size),
        Strategy("wf", "Worst Fit", wf_select, keep_item_order),
        Strategy("wfd", "Worst Fit Decreasing", wf_select, sort_items_by_decreasing_size),
    )
}


def get_strategy(key: str) -> Strategy:
    try:
        return STRATEGIES[key.lower()]
    except KeyError:
        known = ", ".join(STRATEGIES)
        raise KeyError(f"Unknown strategy {key!r}; expected one of: {known}") from None


def pack_all(
    items: Sequence[int],
    capacity: int,
    strategies: Sequence[str] | None = None,
) -> dict[str, list[Bin]]:
    """Run several strategies on the same items, in registry order by default."""

    keys = list(strategies) if strategies is not None else list(STRATEGIES)
    return {key: get_strategy(key).pack(items, capacity) for key in keys}
