from pathlib import Path

import yaml
from typer.testing import CliRunner

from experiments.cli import app

runner = CliRunner()


def test_pack_runs_every_strategy():
    result = runner.invoke(app, ["pack", "683", "10"])
    assert result.exit_code == 0
    assert "Lower bound on bins: 2" in result.output
    assert "Naive : 6/8/3 => 3 bins used" in result.output
    assert "First Fit : 63/8 => 2 bins used" in result.output
    assert "First Fit Decreasing : 8/63 => 2 bins used" in result.output
    assert len([line for line in result.output.splitlines() if "bins used" in line]) == 7


def test_pack_single_strategy():
    result = runner.invoke(app, ["pack", "681", "10", "--strategy", "bf"])
    assert result.exit_code == 0
    assert "Best Fit : 6/81 => 2 bins used" in result.output
    assert "Worst Fit" not in result.output
    assert "Decreasing" not in result.output


def test_pack_separated_items():
    result = runner.invoke(app, ["pack", "12, 7, 3", "20", "-s", "ff"])
    assert result.exit_code == 0
    assert "First Fit : 12,7/3 => 2 bins used" in result.output


def test_pack_rejects_bad_input():
    assert runner.invoke(app, ["pack", "6x3", "10"]).exit_code == 1
    assert runner.invoke(app, ["pack", "6,12", "10"]).exit_code == 1
    assert runner.invoke(app, ["pack", "63", "0"]).exit_code == 1
    assert runner.invoke(app, ["pack", "63", "10", "-s", "nope"]).exit_code == 1


def test_strategies_lists_registry():
    result = runner.invoke(app, ["strategies"])
    assert result.exit_code == 0
    assert "wfd" in result.output
    assert "Worst Fit Decreasing" in result.output


def test_run_from_config(tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    with open(config_file, "w") as f:
        yaml.dump(
            {
                "run_id": "cli_run",
                "capacity": 10,
                "items": "683",
                "strategies": ["naive", "ff"],
                "artifact_dir": str(tmp_path / "artifacts"),
            },
            f,
        )

    result = runner.invoke(app, ["run", str(config_file), "--no-progress"])

    assert result.exit_code == 0
    assert "Naive : 6/8/3 => 3 bins used" in result.output
    assert (tmp_path / "artifacts" / "cli_run" / "report.md").exists()


def test_run_missing_config(tmp_path: Path):
    result = runner.invoke(app, ["run", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 1


def test_benchmark_yaml_dataset(tmp_path: Path):
    dataset_file = tmp_path / "bench.yaml"
    with open(dataset_file, "w") as f:
        yaml.dump([{"name": "a", "capacity": 10, "items": "683"}], f)

    result = runner.invoke(app, ["benchmark", str(dataset_file), "-s", "ff"])

    assert result.exit_code == 0
    assert "Instances: 1" in result.output
    assert "First Fit: avg=2.00, gap_to_lb=0, at_lb=1/1" in result.output


def test_benchmark_unsupported_file(tmp_path: Path):
    other = tmp_path / "bench.json"
    other.write_text("[]")
    assert runner.invoke(app, ["benchmark", str(other)]).exit_code == 1


def test_pack_rejects_non_ascii_digits():
    result = runner.invoke(app, ["pack", "1,\u00b2", "10"])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)


def test_benchmark_accepts_unquoted_digit_items(tmp_path: Path):
    dataset_file = tmp_path / "bench.yaml"
    dataset_file.write_text("- name: a\n  capacity: 10\n  items: 683\n")

    result = runner.invoke(app, ["benchmark", str(dataset_file), "-s", "ff"])

    assert result.exit_code == 0
    assert "First Fit: avg=2.00" in result.output


def test_benchmark_rejects_non_mapping_entry(tmp_path: Path):
    dataset_file = tmp_path / "bench.yaml"
    dataset_file.write_text("- 683\n")

    result = runner.invoke(app, ["benchmark", str(dataset_file)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
