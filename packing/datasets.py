"""Benchmark dataset loaders for one-dimensional bin packing.

Two on-disk formats are supported.

OR-Library format (Falkenauer instances, ``binpack*.txt``):
- Line 1: Number of test problems (P)
- For each problem:
    - Problem identifier
    - Bin capacity, Number of items (n), Best known solution
    - For each item: size of the item

YAML format: a list of mappings ``{name, capacity, items, best_known}`` where
``items`` is either a list of sizes or a raw item string such as ``"683"``.
``best_known`` is optional.

References:
- OR-Library: http://people.brunel.ac.uk/~mastjjb/jeb/orlib/binpackinfo.html
- Falkenauer (1994): "A Hybrid Grouping Genetic Algorithm for Bin Packing"
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

import yaml

from .engine import lower_bound
from .items import parse_items

logger = logging.getLogger(__name__)


@dataclass
class PackingInstance:
    """A single bin packing problem instance."""

    name: str                       # Problem identifier (e.g., "u120_00")
    capacity: int                   # Bin capacity
    items: list[int]                # Item sizes
    best_known: int | None = None   # Best known number of bins, if published

    @property
    def num_items(self) -> int:
        return len(self.items)

    @property
    def total_size(self) -> int:
        return sum(self.items)

    @property
    def lower_bound(self) -> int:
        return lower_bound(self.items, self.capacity)

    def __repr__(self) -> str:
        return (
            f"PackingInstance(name='{self.name}', "
            f"capacity={self.capacity}, items={self.num_items}, "
            f"best_known={self.best_known})"
        )


@dataclass
class PackingDataset:
    """A collection of bin packing instances."""

    name: str
    instances: list[PackingInstance]

    def __len__(self) -> int:
        return len(self.instances)

    def __iter__(self) -> Iterator[PackingInstance]:
        return iter(self.instances)

    def __getitem__(self, index: int) -> PackingInstance:
        return self.instances[index]

    def filter_by_size(
        self,
        min_items: int = 0,
        max_items: int | None = None,
    ) -> "PackingDataset":
        """Filter instances by number of items."""
        filtered = [
            inst for inst in self.instances
            if inst.num_items >= min_items
            and (max_items is None or inst.num_items <= max_items)
        ]
        return PackingDataset(name=f"{self.name}_filtered", instances=filtered)


def parse_orlib_file(filepath: Path) -> list[PackingInstance]:
    """Parse an OR-Library bin packing file."""
    instances: list[PackingInstance] = []

    with open(filepath, "r") as f:
        lines = [line.strip() for line in f if line.strip()]

    if not lines:
        raise ValueError(f"Empty OR-Library file: {filepath}")

    idx = 0
    num_problems = int(lines[idx])
    idx += 1

    try:
        for _ in range(num_problems):
            name = lines[idx]
            idx += 1

            # Capacity, num_items, best_known (may be float format like "100.0")
            parts = lines[idx].split()
            capacity = int(float(parts[0]))
            num_items = int(float(parts[1]))
            best_known = int(float(parts[2]))
            idx += 1

            items: list[int] = []
            while len(items) < num_items:
                items.extend(int(float(x)) for x in lines[idx].split())
                idx += 1

            if len(items) > num_items:
                logger.warning(
                    f"{name}: expected {num_items} items, read {len(items)}; truncating"
                )

            instances.append(PackingInstance(
                name=name,
                capacity=capacity,
                items=items[:num_items],
                best_known=best_known,
            ))
    except (IndexError, ValueError) as e:
        raise ValueError(f"Malformed OR-Library file {filepath}: {e}") from e

    return instances


def _instance_from_mapping(entry: Any, position: int) -> PackingInstance:
    if not isinstance(entry, dict):
        raise ValueError(f"Instance #{position} must be a mapping")
    if "capacity" not in entry or "items" not in entry:
        raise ValueError(f"Instance #{position} must define 'capacity' and 'items'")

    raw_items = entry["items"]
    # A bare digit string such as 683 is read by YAML as an int
    if isinstance(raw_items, int) and not isinstance(raw_items, bool):
        raw_items = str(raw_items)

    if isinstance(raw_items, str):
        items = parse_items(raw_items)
    elif isinstance(raw_items, list):
        try:
            items = [int(x) for x in raw_items]
        except (TypeError, ValueError) as e:
            raise ValueError(f"Instance #{position} has invalid item sizes: {e}") from e
    else:
        raise ValueError(
            f"Instance #{position} 'items' must be a list or an item string, "
            f"got {type(raw_items).__name__}"
        )

    best_known = entry.get("best_known")
    try:
        capacity = int(entry["capacity"])
        best = int(best_known) if best_known is not None else None
    except (TypeError, ValueError) as e:
        raise ValueError(f"Instance #{position} has an invalid number: {e}") from e

    return PackingInstance(
        name=str(entry.get("name", f"instance_{position}")),
        capacity=capacity,
        items=items,
        best_known=best,
    )


def load_yaml_dataset(filepath: Path) -> PackingDataset:
    """Load instances from a YAML list (or a mapping with an ``instances`` key)."""
    filepath = Path(filepath)

    with open(filepath, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if isinstance(data, dict):
        name = str(data.get("name", filepath.stem))
        entries = data.get("instances")
    else:
        name = filepath.stem
        entries = data

    if not isinstance(entries, list):
        raise ValueError(f"No instance list found in {filepath}")

    instances = [_instance_from_mapping(entry, i) for i, entry in enumerate(entries)]
    return PackingDataset(name=name, instances=instances)


def load_dataset(path: str | Path) -> PackingDataset:
    """Load a dataset, choosing the format from the file suffix."""
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".txt":
        dataset = PackingDataset(name=path.stem, instances=parse_orlib_file(path))
    elif suffix in (".yaml", ".yml"):
        dataset = load_yaml_dataset(path)
    else:
        raise ValueError(f"Unsupported dataset format: {path.suffix or path.name}")

    logger.info(f"Loaded {len(dataset)} instances from {path}")
    return dataset


def generate_uniform_instance(
    seed: int,
    n_items: int,
    capacity: int,
    name: str | None = None,
) -> PackingInstance:
    """Generate a deterministic instance with sizes uniform in [1, capacity]."""

    rng = random.Random(seed)
    items = [rng.randint(1, capacity) for _ in range(n_items)]
    return PackingInstance(
        name=name or f"uniform_n{n_items}_s{seed}",
        capacity=capacity,
        items=items,
    )


def generate_uniform_dataset(
    num_instances: int = 10,
    items_per_instance: int = 50,
    capacity: int = 100,
    base_seed: int = 42,
) -> PackingDataset:
    instances = [
        generate_uniform_instance(base_seed + i, items_per_instance, capacity)
        for i in range(num_instances)
    ]
    return PackingDataset(name="uniform", instances=instances)


def dataset_summary(dataset: PackingDataset) -> str:
    """Generate a summary of a dataset."""
    if not dataset.instances:
        return f"Dataset '{dataset.name}': empty"

    total_items = sum(inst.num_items for inst in dataset)
    avg_items = total_items / len(dataset)
    min_items = min(inst.num_items for inst in dataset)
    max_items = max(inst.num_items for inst in dataset)

    capacities = set(inst.capacity for inst in dataset)

    lines = [
        f"Dataset: {dataset.name}",
        f"  Instances: {len(dataset)}",
        f"  Items per instance: min={min_items}, max={max_items}, avg={avg_items:.1f}",
        f"  Capacities: {sorted(capacities)}",
    ]
    return "\n".join(lines)
