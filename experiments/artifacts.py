"""Artifact management for packing runs."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from experiments.config import save_config
from experiments.report import write_markdown
from experiments.schemas import PackingRunConfig


class ArtifactManager:
    """Manages run artifacts: config snapshot, results, and report."""

    def __init__(self, config: PackingRunConfig):
        self.config = config
        self.run_dir = Path(config.artifact_dir) / config.run_id
        self.run_dir.mkdir(parents=True, exist_ok=True)

    @property
    def config_path(self) -> Path:
        return self.run_dir / "config.yaml"

    @property
    def results_path(self) -> Path:
        return self.run_dir / "results.jsonl"

    @property
    def report_path(self) -> Path:
        return self.run_dir / "report.md"

    def snapshot_config(self) -> None:
        """Save a snapshot of the configuration for reproducibility."""
        save_config(self.config, self.config_path)

    def save_result(self, entry: dict[str, Any]) -> None:
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **entry,
        }
        with open(self.results_path, "a") as f:
            f.write(json.dumps(record) + "\n")

    def load_results(self) -> list[dict[str, Any]]:
        """Load all result records from the JSONL file."""
        if not self.results_path.exists():
            return []

        results = []
        with open(self.results_path, "r") as f:
            for line in f:
                if line.strip():
                    results.append(json.loads(line))
        return results

    def write_report(self, summary: dict[str, Any]) -> Path:
        write_markdown(summary, self.report_path)
        return self.report_path
