"""Text and Markdown rendering of packing results."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any
from collections.abc import Sequence

from packing.base import Bin, format_items


def format_bins(bins: Sequence[Bin]) -> str:
    """Render bins as ``/``-joined contents, e.g. ``63/8``."""
    return "/".join(str(b) for b in bins)


def format_solution(label: str, bins: Sequence[Bin]) -> str:
    return f"{label} : {format_bins(bins)} => {len(bins)} bins used"


def _format_bin_lists(bins: list[list[int]]) -> str:
    return "/".join(format_items(items) for items in bins)


def format_outcome(outcome: dict[str, Any]) -> str:
    """Same line as ``format_solution``, from a serialized ``StrategyOutcome``."""
    return (
        f"{outcome['label']} : {_format_bin_lists(outcome['bins'])} "
        f"=> {outcome['num_bins']} bins used"
    )


def render_markdown(summary: dict[str, Any]) -> str:
    """Render a runner summary as a Markdown report."""
    date = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    lines = [
        f"# Packing Report: {summary.get('run_id', 'N/A')}",
        "",
        f"- **Date**: {date}",
        f"- **Capacity**: {summary.get('capacity', 'N/A')}",
    ]

    if summary.get("mode") == "dataset":
        lines += [
            f"- **Dataset**: {summary.get('dataset', 'N/A')}",
            f"- **Instances**: {summary.get('n_instances', 0)}",
            "",
            "| Strategy | Avg Bins | Gap to LB | At LB | Gap to Best |",
            "|---|---|---|---|---|",
        ]
        for row in summary.get("benchmarks", []):
            gap_best = row.get("total_gap_to_best")
            lines.append(
                f"| {row['label']} | {row['avg_bins']:.2f} | "
                f"{row['total_gap_to_lower_bound']} | {row['instances_at_lower_bound']} | "
                f"{gap_best if gap_best is not None else 'N/A'} |"
            )
    else:
        lines += [
            f"- **Items**: {summary.get('items', '')}",
            f"- **Lower bound**: {summary.get('lower_bound', 'N/A')}",
            "",
            "| Strategy | Bins | Packing |",
            "|---|---|---|",
        ]
        for row in summary.get("outcomes", []):
            lines.append(
                f"| {row['label']} | {row['num_bins']} | `{_format_bin_lists(row['bins'])}` |"
            )

    return "\n".join(lines) + "\n"


def write_markdown(summary: dict[str, Any], output_path: Path) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(render_markdown(summary))
