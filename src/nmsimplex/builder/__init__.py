"""
Builder module for optimization setup.

Provides:
- axis_simplex: Start points from an origin and per-axis steps
- YAML configuration loading and optimizer/evaluator construction
"""

from .config_loader import (
    build_evaluator_from_config,
    build_optimizer_from_config,
    load_and_run,
    load_yaml,
)
from .simplex_builder import axis_simplex

__all__ = [
    "axis_simplex",
    "load_yaml",
    "build_optimizer_from_config",
    "build_evaluator_from_config",
    "load_and_run",
]
