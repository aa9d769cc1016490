"""Packing run orchestration."""

from __future__ import annotations

import logging
from typing import Any

from packing.datasets import load_dataset
from packing.engine import get_strategy, lower_bound
from packing.evaluation import StrategyEvaluator
from packing.items import parse_items

from experiments.artifacts import ArtifactManager
from experiments.schemas import PackingRunConfig, StrategyBenchmark, StrategyOutcome

logger = logging.getLogger(__name__)


class PackingRunner:
    """Runs the configured strategies on a single item string or a dataset."""

    def __init__(self, config: PackingRunConfig, show_progress: bool = True):
        self.config = config
        self.show_progress = show_progress
        self.artifacts: ArtifactManager | None = None
        if config.save_artifacts:
            self.artifacts = ArtifactManager(config)

    def run(self) -> dict[str, Any]:
        if self.artifacts is not None:
            self.artifacts.snapshot_config()

        if self.config.items is not None and self.config.capacity is not None:
            summary = self._run_items(self.config.items, self.config.capacity)
        elif self.config.dataset_path is not None:
            summary = self._run_dataset(self.config.dataset_path)
        else:
            raise ValueError("run needs either items with a capacity or a dataset_path")

        if self.artifacts is not None:
            report_path = self.artifacts.write_report(summary)
            logger.info(f"Report written to {report_path}")

        return summary

    def _run_items(self, raw_items: str, capacity: int) -> dict[str, Any]:
        items = parse_items(raw_items)

        outcomes: list[dict[str, Any]] = []
        for key in self.config.strategies:
            strategy = get_strategy(key)
            bins = strategy.pack(items, capacity)
            outcome = StrategyOutcome.from_bins(strategy.key, strategy.label, bins)
            logger.info(f"{strategy.label}: {outcome.num_bins} bins")
            outcomes.append(outcome.to_dict())
            if self.artifacts is not None:
                self.artifacts.save_result(outcome.to_dict())

        return {
            "run_id": self.config.run_id,
            "mode": "items",
            "items": raw_items,
            "capacity": capacity,
            "lower_bound": lower_bound(items, capacity),
            "outcomes": outcomes,
        }

    def _run_dataset(self, dataset_path: str) -> dict[str, Any]:
        dataset = load_dataset(dataset_path)
        evaluator = StrategyEvaluator(self.config.strategies)
        results = evaluator.evaluate(dataset, show_progress=self.show_progress)

        benchmarks: list[dict[str, Any]] = []
        for key, result in results.items():
            row = StrategyBenchmark(
                strategy=key,
                label=get_strategy(key).label,
                n_instances=result.n_instances,
                avg_bins=result.avg_bins,
                total_gap_to_lower_bound=result.metadata["total_gap_to_lower_bound"],
                instances_at_lower_bound=result.metadata["instances_at_lower_bound"],
                total_gap_to_best=result.metadata.get("total_gap_to_best"),
                instances_matching_best=result.metadata.get("instances_matching_best"),
            )
            benchmarks.append(row.to_dict())
            if self.artifacts is not None:
                self.artifacts.save_result(row.to_dict())

        capacities = sorted({inst.capacity for inst in dataset})
        return {
            "run_id": self.config.run_id,
            "mode": "dataset",
            "dataset": dataset.name,
            "capacity": ", ".join(str(c) for c in capacities) or "N/A",
            "n_instances": len(dataset),
            "benchmarks": benchmarks,
        }
