"""Strategy evaluation over benchmark datasets."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any
from collections.abc import Sequence

from tqdm import tqdm

from .datasets import PackingDataset
from .engine import STRATEGIES, get_strategy, num_bins

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvalResult:
    """Evaluation result for one strategy across instances."""

    strategy: str
    n_instances: int
    instance_bins: Sequence[int]
    lower_bounds: Sequence[int]
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def avg_bins(self) -> float:
        if not self.instance_bins:
            return 0.0
        return sum(self.instance_bins) / len(self.instance_bins)


class StrategyEvaluator:
    """Runs packing strategies over every instance of a dataset.

    Example:
        >>> from packing.datasets import generate_uniform_dataset
        >>> evaluator = StrategyEvaluator(["ff", "bfd"])
        >>> results = evaluator.evaluate(generate_uniform_dataset(num_instances=3))
        >>> results["bfd"].metadata["total_gap_to_lower_bound"]
    """

    def __init__(self, strategies: Sequence[str] | None = None) -> None:
        keys = list(strategies) if strategies is not None else list(STRATEGIES)
        # resolve up front so an unknown key fails before any packing
        self.strategies = [get_strategy(key) for key in keys]

    def evaluate(
        self,
        dataset: PackingDataset,
        show_progress: bool = False,
    ) -> dict[str, EvalResult]:
        bins_by_strategy: dict[str, list[int]] = {s.key: [] for s in self.strategies}
        lower_bounds: list[int] = []
        best_known: list[int | None] = []

        for inst in tqdm(dataset, desc=dataset.name, unit="inst", disable=not show_progress):
            lower_bounds.append(inst.lower_bound)
            best_known.append(inst.best_known)
            for strategy in self.strategies:
                bins_by_strategy[strategy.key].append(
                    num_bins(strategy.pack(inst.items, inst.capacity))
                )
            logger.debug(f"Evaluated {inst.name} ({inst.num_items} items)")

        return {
            key: self._summarize(key, bins, lower_bounds, best_known)
            for key, bins in bins_by_strategy.items()
        }

    @staticmethod
    def _summarize(
        key: str,
        instance_bins: list[int],
        lower_bounds: list[int],
        best_known: list[int | None],
    ) -> EvalResult:
        n = len(instance_bins)
        metadata: dict[str, Any] = {
            "avg_bins": sum(instance_bins) / n if n else 0.0,
            "total_gap_to_lower_bound": sum(
                b - lb for b, lb in zip(instance_bins, lower_bounds)
            ),
            "instances_at_lower_bound": sum(
                1 for b, lb in zip(instance_bins, lower_bounds) if b == lb
            ),
        }

        known = [(b, k) for b, k in zip(instance_bins, best_known) if k is not None]
        if known:
            metadata["total_gap_to_best"] = sum(b - k for b, k in known)
            metadata["instances_matching_best"] = sum(1 for b, k in known if b == k)

        return EvalResult(
            strategy=key,
            n_instances=n,
            instance_bins=instance_bins,
            lower_bounds=list(lower_bounds),
            metadata=metadata,
        )
