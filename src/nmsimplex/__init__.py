"""
nmsimplex - Derivative-free minimization with the Nelder-Mead simplex method.

A small optimization framework built around a step-wise Nelder-Mead
optimizer. The optimizer never calls the objective itself: it proposes a
candidate, the caller evaluates it (possibly by running an external
simulation), and the value is handed back before the next step.

Main features:
- Lazy simplex analysis (sorted vertices, centroid, reflected point)
- Pull-based step protocol plus ask/tell and a run() driving loop
- Observers for progress output and optimization history
- Template-file scanner and external-process evaluator
- YAML configuration and an optional REST API
"""

__version__ = "0.1.0"
__author__ = "nmsimplex Team"

from .core import (
    ArityMismatch,
    ConfigurationError,
    DimensionMismatch,
    InsufficientVertices,
    InvalidDimension,
    InvalidKey,
    NelderMeadError,
    Simplex,
    SimplexKey,
    TypeMismatch,
    Vertex,
    as_vector,
)
from .optimizer import (
    OptimizationResult,
    Optimizer,
    OptimizerConfig,
    Status,
    StepRequest,
)

__all__ = [
    "__version__",
    # Core
    "Simplex",
    "SimplexKey",
    "Vertex",
    "as_vector",
    # Optimizer
    "Optimizer",
    "OptimizerConfig",
    "OptimizationResult",
    "Status",
    "StepRequest",
    # Errors
    "NelderMeadError",
    "ConfigurationError",
    "InvalidDimension",
    "ArityMismatch",
    "DimensionMismatch",
    "TypeMismatch",
    "InvalidKey",
    "InsufficientVertices",
]
