from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

from pydantic import BaseModel, Field, field_validator, model_validator

from packing.base import Bin
from packing.engine import STRATEGIES, get_strategy


TBaseSchema = TypeVar("TBaseSchema", bound="BaseSchema")


class BaseSchema(BaseModel):
    def to_json(self) -> str:
        return self.model_dump_json()

    def to_dict(self) -> dict[str, object]:
        return self.model_dump()

    @classmethod
    def from_json(cls: type[TBaseSchema], data: str) -> TBaseSchema:
        return cls.model_validate_json(data)

    @classmethod
    def from_dict(cls: type[TBaseSchema], data: Mapping[str, object]) -> TBaseSchema:
        return cls.model_validate(data)


class PackingRunConfig(BaseSchema):
    run_id: str
    capacity: int | None = Field(default=None, gt=0)
    items: str | None = None
    dataset_path: str | None = None
    strategies: list[str] = Field(default_factory=lambda: list(STRATEGIES))
    artifact_dir: str = "artifacts"
    save_artifacts: bool = True

    @field_validator("strategies")
    @classmethod
    def known_strategies(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("at least one strategy is required")
        keys: list[str] = []
        for key in value:
            try:
                keys.append(get_strategy(key).key)
            except KeyError as e:
                raise ValueError(str(e.args[0])) from e
        return keys

    @model_validator(mode="after")
    def one_input_source(self) -> "PackingRunConfig":
        if (self.items is None) == (self.dataset_path is None):
            raise ValueError("exactly one of 'items' or 'dataset_path' must be set")
        if self.items is not None and self.capacity is None:
            raise ValueError("'capacity' is required when packing 'items'")
        return self


class StrategyOutcome(BaseSchema):
    strategy: str
    label: str
    bins: list[list[int]]
    remaining: list[int]
    num_bins: int = Field(ge=0)

    @classmethod
    def from_bins(cls, strategy: str, label: str, bins: list[Bin]) -> "StrategyOutcome":
        return cls(
            strategy=strategy,
            label=label,
            bins=[list(b.items) for b in bins],
            remaining=[b.remaining_capacity for b in bins],
            num_bins=len(bins),
        )


class StrategyBenchmark(BaseSchema):
    strategy: str
    label: str
    n_instances: int = Field(ge=0)
    avg_bins: float
    total_gap_to_lower_bound: int
    instances_at_lower_bound: int
    total_gap_to_best: int | None = None
    instances_matching_best: int | None = None
