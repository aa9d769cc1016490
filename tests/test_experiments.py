"""Tests for run configuration, artifacts, runner, and reports."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from experiments.artifacts import ArtifactManager
from experiments.config import load_config, save_config
from experiments.report import format_bins, format_outcome, format_solution, render_markdown
from experiments.runner import PackingRunner
from experiments.schemas import PackingRunConfig, StrategyOutcome
from packing.engine import STRATEGIES, ff, naive


def _write_yaml(path: Path, data: object) -> Path:
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


class TestPackingRunConfig:
    def test_load_config_from_yaml(self, tmp_path: Path) -> None:
        config_path = _write_yaml(
            tmp_path / "run.yaml",
            {
                "run_id": "run_001",
                "capacity": 10,
                "items": "163841689525773",
                "strategies": ["ff", "BFD"],
                "artifact_dir": str(tmp_path / "artifacts"),
            },
        )

        config = load_config(config_path)

        assert config.run_id == "run_001"
        assert config.capacity == 10
        assert config.items == "163841689525773"
        assert config.strategies == ["ff", "bfd"]
        assert config.save_artifacts is True

    def test_unquoted_digit_items_are_read_as_text(self, tmp_path: Path) -> None:
        config_path = tmp_path / "run.yaml"
        config_path.write_text("run_id: r\ncapacity: 10\nitems: 683\n")
        assert load_config(config_path).items == "683"

    def test_defaults_to_every_strategy(self) -> None:
        config = PackingRunConfig(run_id="r", capacity=10, items="683")
        assert config.strategies == list(STRATEGIES)

    def test_load_config_missing_file(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_config("nonexistent.yaml")

    def test_load_config_empty_file(self, tmp_path: Path) -> None:
        config_path = tmp_path / "empty.yaml"
        config_path.write_text("")
        with pytest.raises(ValueError):
            load_config(config_path)

    @pytest.mark.parametrize(
        "data",
        [
            {"run_id": "r", "capacity": 0, "items": "63"},
            {"run_id": "r", "capacity": 10, "items": "63", "strategies": ["next_fit"]},
            {"run_id": "r", "capacity": 10, "items": "63", "strategies": []},
            {"run_id": "r", "capacity": 10, "items": "63", "dataset_path": "x.yaml"},
            {"run_id": "r", "capacity": 10},
            {"run_id": "r", "items": "63"},
        ],
    )
    def test_invalid_config_rejected(self, tmp_path: Path, data: dict) -> None:
        config_path = _write_yaml(tmp_path / "bad.yaml", data)
        with pytest.raises(ValueError):
            load_config(config_path)

    def test_save_and_reload(self, tmp_path: Path) -> None:
        config = PackingRunConfig(run_id="r", capacity=10, items="683", strategies=["wf"])
        path = tmp_path / "nested" / "config.yaml"
        save_config(config, path)
        assert load_config(path) == config


class TestReport:
    def test_format_bins(self) -> None:
        assert format_bins(naive([6, 8, 3], 10)) == "6/8/3"
        assert format_bins([]) == ""

    def test_format_solution(self) -> None:
        line = format_solution("First Fit", ff([6, 8, 3], 10))
        assert line == "First Fit : 63/8 => 2 bins used"

    def test_format_outcome_matches_format_solution(self) -> None:
        bins = ff([12, 7, 3], 20)
        outcome = StrategyOutcome.from_bins("ff", "First Fit", bins).to_dict()
        assert format_outcome(outcome) == format_solution("First Fit", bins)

    def test_render_markdown_items(self) -> None:
        outcome = StrategyOutcome.from_bins("ff", "First Fit", ff([6, 8, 3], 10))
        text = render_markdown(
            {
                "run_id": "r",
                "mode": "items",
                "items": "683",
                "capacity": 10,
                "lower_bound": 2,
                "outcomes": [outcome.to_dict()],
            }
        )
        assert "# Packing Report: r" in text
        assert "| First Fit | 2 | `63/8` |" in text


class TestPackingRunner:
    def test_items_run_writes_artifacts(self, tmp_path: Path) -> None:
        config = PackingRunConfig(
            run_id="items_run",
            capacity=10,
            items="683",
            artifact_dir=str(tmp_path),
        )

        summary = PackingRunner(config, show_progress=False).run()

        assert summary["mode"] == "items"
        assert summary["lower_bound"] == 2
        by_key = {o["strategy"]: o for o in summary["outcomes"]}
        assert list(by_key) == list(STRATEGIES)
        assert by_key["naive"]["bins"] == [[6], [8], [3]]
        assert by_key["ff"]["remaining"] == [1, 2]

        manager = ArtifactManager(config)
        assert manager.config_path.exists()
        assert manager.report_path.exists()
        results = manager.load_results()
        assert len(results) == 7
        assert "timestamp" in results[0]

        with open(manager.results_path) as f:
            first = json.loads(f.readline())
        assert first["strategy"] == "naive"

    def test_dataset_run_without_artifacts(self, tmp_path: Path) -> None:
        dataset_path = _write_yaml(
            tmp_path / "bench.yaml",
            [
                {"name": "a", "capacity": 10, "items": "683", "best_known": 2},
                {"name": "b", "capacity": 10, "items": "64"},
            ],
        )
        config = PackingRunConfig(
            run_id="dataset_run",
            dataset_path=str(dataset_path),
            strategies=["naive", "ffd"],
            artifact_dir=str(tmp_path / "artifacts"),
            save_artifacts=False,
        )

        summary = PackingRunner(config, show_progress=False).run()

        assert summary["mode"] == "dataset"
        assert summary["n_instances"] == 2
        rows = {row["strategy"]: row for row in summary["benchmarks"]}
        assert rows["naive"]["avg_bins"] == 2.0
        assert rows["ffd"]["total_gap_to_lower_bound"] == 0
        assert rows["ffd"]["instances_matching_best"] == 1
        assert not (tmp_path / "artifacts").exists()

    def test_oversize_item_propagates(self, tmp_path: Path) -> None:
        config = PackingRunConfig(
            run_id="bad", capacity=10, items="6, 12", save_artifacts=False
        )
        with pytest.raises(ValueError):
            PackingRunner(config, show_progress=False).run()

    def test_runner_without_input_source_raises(self) -> None:
        config = PackingRunConfig.model_construct(
            run_id="empty",
            capacity=None,
            items=None,
            dataset_path=None,
            strategies=["ff"],
            artifact_dir="artifacts",
            save_artifacts=False,
        )
        with pytest.raises(ValueError, match="either items"):
            PackingRunner(config, show_progress=False).run()
