"""Bin selectors.

A selector picks the bin that should receive an item. It is built from two
steps:

- an evaluator, which keeps the bins that can hold the item (all of them, or
  only the most recently created one)
- an ordering, which puts the preferred candidate first

Orderings are stable sorts over creation order, so equal keys always resolve
to the lowest bin id.
"""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Sequence

from .base import Bin, Candidate, CandidateEvaluator, CandidateOrdering


def evaluate_last_bin(item: int, bins: Sequence[Bin]) -> list[Candidate]:
    """Consider only the most recently created bin."""

    if not bins:
        return []
    last = bins[-1]
    if not last.fits(item):
        return []
    return [Candidate(last.id, last.remaining_capacity - item)]


def evaluate_all_bins(item: int, bins: Sequence[Bin]) -> list[Candidate]:
    """Consider every bin with enough room left, in creation order."""

    return [
        Candidate(bin_info.id, bin_info.remaining_capacity - item)
        for bin_info in bins
        if bin_info.fits(item)
    ]


def keep_order(candidates: list[Candidate]) -> list[Candidate]:
    return list(candidates)


def by_increasing_remaining(candidates: list[Candidate]) -> list[Candidate]:
    """Best-fit style: tightest bin after placement first."""

    return sorted(candidates, key=lambda c: c.remaining_after)


def by_decreasing_remaining(candidates: list[Candidate]) -> list[Candidate]:
    """Worst-fit style: roomiest bin after placement first."""

    return sorted(candidates, key=lambda c: -c.remaining_after)


def select(
    evaluate: CandidateEvaluator,
    order: CandidateOrdering,
    item: int,
    bins: Sequence[Bin],
) -> int | None:
    """Return the id of the chosen bin, or None when a new bin is needed."""

    ranked = order(evaluate(item, bins))
    if not ranked:
        return None
    return ranked[0].bin_id


@dataclass(frozen=True)
class BinSelector:
    """A fixed pairing of a candidate evaluator and a candidate ordering."""

    name: str
    evaluate: CandidateEvaluator
    order: CandidateOrdering

    def __call__(self, item: int, bins: Sequence[Bin]) -> int | None:
        return select(self.evaluate, self.order, item, bins)


naive_select = BinSelector("naive", evaluate_last_bin, keep_order)
ff_select = BinSelector("first_fit", evaluate_all_bins, keep_order)
bf_select = BinSelector("best_fit", evaluate_all_bins, by_increasing_remaining)
wf_select = BinSelector("worst_fit", evaluate_all_bins, by_decreasing_remaining)

SELECTORS: dict[str, BinSelector] = {
    selector.name: selector
    for selector in (naive_select, ff_select, bf_select, wf_select)
}
