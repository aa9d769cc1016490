"""
Experiments Module

Configuration, orchestration and CLI around the packing core.

This module provides:
- YAML-based run configuration (pydantic schemas)
- A runner for single item strings and benchmark datasets
- Artifact storage (config snapshot, results, Markdown report)
- Text and Markdown result formatting
- The typer command-line interface
"""

__version__ = "0.1.0"
