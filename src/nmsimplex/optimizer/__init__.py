"""
Optimizer module for Nelder-Mead minimization.

Provides:
- Optimizer: Step-wise Nelder-Mead state machine with ask/tell and run()
- OptimizerConfig: Validated, immutable configuration
- StepRequest: Candidate returned by each step
- OptimizationResult: Outcome of run()
- Status: State machine states
"""

from .optimizer import (
    OptimizationResult,
    Optimizer,
    OptimizerConfig,
    Status,
    StepRequest,
    TraceEntry,
)

__all__ = [
    "Optimizer",
    "OptimizerConfig",
    "OptimizationResult",
    "Status",
    "StepRequest",
    "TraceEntry",
]
