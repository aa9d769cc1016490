"""Packing run configuration with YAML support."""

from __future__ import annotations

from pathlib import Path

import yaml

from experiments.schemas import PackingRunConfig


def load_config(yaml_path: str | Path) -> PackingRunConfig:
    """Load a packing run configuration from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        PackingRunConfig instance

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is invalid or missing required fields
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data or not isinstance(data, dict):
        raise ValueError(f"Empty or invalid YAML file: {yaml_path}")

    # A bare digit string such as 683 is read by YAML as an int
    if isinstance(data.get("items"), int):
        data["items"] = str(data["items"])

    try:
        return PackingRunConfig.from_dict(data)
    except Exception as e:
        raise ValueError(f"Invalid configuration in {yaml_path}: {e}") from e


def save_config(config: PackingRunConfig, yaml_path: str | Path) -> None:
    """Save a run configuration to YAML file for reproducibility."""
    yaml_path = Path(yaml_path)
    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.to_dict()

    with open(yaml_path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
