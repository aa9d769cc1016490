"""CLI interface for packing runs."""

from __future__ import annotations

import logging
from typing import NoReturn, Optional

import typer

from packing.base import PackingError
from packing.datasets import dataset_summary, load_dataset
from packing.engine import STRATEGIES, get_strategy, lower_bound, pack_all
from packing.evaluation import StrategyEvaluator
from packing.items import parse_items

from experiments.config import load_config
from experiments.report import format_outcome, format_solution
from experiments.runner import PackingRunner

app = typer.Typer(help="One-dimensional bin packing heuristics")


def _fail(message: str) -> NoReturn:
    typer.secho(f"❌ {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


def _resolve_strategies(strategy: Optional[list[str]]) -> list[str]:
    if not strategy:
        return list(STRATEGIES)
    try:
        return [get_strategy(key).key for key in strategy]
    except KeyError as e:
        _fail(str(e.args[0]))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Pack items into bins with greedy heuristics."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def pack(
    items: str = typer.Argument(..., help="Item sizes, e.g. 163841689525773 or '12,7,30'"),
    capacity: int = typer.Argument(..., help="Capacity of a single bin"),
    strategy: Optional[list[str]] = typer.Option(
        None, "--strategy", "-s", help="Strategy key (repeatable); all by default"
    ),
) -> None:
    """Pack an item string with one or more strategies."""
    keys = _resolve_strategies(strategy)

    try:
        item_list = parse_items(items)
        bound = lower_bound(item_list, capacity)
        results = pack_all(item_list, capacity, keys)
    except PackingError as e:
        _fail(str(e))

    typer.echo(f"Items: {items}")
    typer.echo(f"Capacity: {capacity}")
    typer.echo(f"Lower bound on bins: {bound}")
    for key, bins in results.items():
        typer.echo(format_solution(STRATEGIES[key].label, bins))


@app.command()
def run(
    config_path: str = typer.Argument(..., help="Path to run YAML config"),
    progress: bool = typer.Option(True, help="Show a progress bar for datasets"),
) -> None:
    """Run strategies as described by a config file."""
    try:
        config = load_config(config_path)
        summary = PackingRunner(config, show_progress=progress).run()
    except FileNotFoundError as e:
        _fail(f"File not found: {e}")
    except ValueError as e:
        _fail(f"Run failed: {e}")

    if summary["mode"] == "items":
        typer.echo(f"Lower bound on bins: {summary['lower_bound']}")
        for outcome in summary["outcomes"]:
            typer.echo(format_outcome(outcome))
    else:
        for row in summary["benchmarks"]:
            typer.echo(
                f"{row['label']}: avg={row['avg_bins']:.2f}, "
                f"gap_to_lb={row['total_gap_to_lower_bound']}"
            )

    if config.save_artifacts:
        typer.secho(f"✅ Artifacts saved under {config.artifact_dir}/{config.run_id}", fg=typer.colors.GREEN)


@app.command()
def benchmark(
    dataset_path: str = typer.Argument(..., help="OR-Library .txt or YAML dataset"),
    strategy: Optional[list[str]] = typer.Option(
        None, "--strategy", "-s", help="Strategy key (repeatable); all by default"
    ),
) -> None:
    """Evaluate strategies over every instance of a dataset."""
    keys = _resolve_strategies(strategy)

    try:
        dataset = load_dataset(dataset_path)
        results = StrategyEvaluator(keys).evaluate(dataset)
    except FileNotFoundError as e:
        _fail(str(e))
    except ValueError as e:
        _fail(f"Benchmark failed: {e}")

    typer.echo(dataset_summary(dataset))
    typer.echo("")
    for key, result in results.items():
        typer.echo(
            f"{STRATEGIES[key].label}: avg={result.avg_bins:.2f}, "
            f"gap_to_lb={result.metadata['total_gap_to_lower_bound']}, "
            f"at_lb={result.metadata['instances_at_lower_bound']}/{result.n_instances}"
        )


@app.command()
def strategies() -> None:
    """List the available strategies."""
    for key, strategy in STRATEGIES.items():
        typer.echo(f"{key:6} {strategy.label}")


if __name__ == "__main__":
    app()
