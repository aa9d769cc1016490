"""
Packing Module

Greedy heuristics for the one-dimensional bin packing problem.

This module provides:
- Bin and candidate types with capacity bookkeeping
- Bin selectors (naive, first fit, best fit, worst fit)
- The single-pass packing engine and the seven named strategies
- The L1 lower bound on the number of bins
- Item string decoding
- OR-Library and YAML benchmark dataset loaders
- Strategy evaluation over datasets
"""

__version__ = "0.1.0"

from .base import (
    Bin,
    Candidate,
    InvalidCapacityError,
    InvalidItemError,
    ItemParseError,
    ItemTooLargeError,
    PackingError,
)
from .engine import (
    STRATEGIES,
    Strategy,
    bf,
    bfd,
    ff,
    ffd,
    get_strategy,
    greedy,
    lower_bound,
    naive,
    num_bins,
    pack_all,
    total_waste,
    wf,
    wfd,
)
from .items import parse_items
from .selectors import SELECTORS, BinSelector

__all__ = [
    "Bin",
    "Candidate",
    "InvalidCapacityError",
    "InvalidItemError",
    "ItemParseError",
    "ItemTooLargeError",
    "PackingError",
    "STRATEGIES",
    "Strategy",
    "bf",
    "bfd",
    "ff",
    "ffd",
    "get_strategy",
    "greedy",
    "lower_bound",
    "naive",
    "num_bins",
    "pack_all",
    "total_waste",
    "wf",
    "wfd",
    "parse_items",
    "SELECTORS",
    "BinSelector",
]
