"""Transport-agnostic optimization workflow.

Wraps :class:`OptimizationService` so that callers (API routes, scripts)
pass plain Python primitives and receive plain dicts; no schema objects
cross the boundary.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from nmsimplex.core.schemas import OptimizerParams
from nmsimplex.core.service import OptimizationService


class OptimizationWorkflow:
    """Stateful orchestrator, one instance per session."""

    def __init__(self, service: Optional[OptimizationService] = None):
        self._svc = service or OptimizationService()

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def has_optimizer(self) -> bool:
        return self._svc.has_optimizer

    # ------------------------------------------------------------------ #
    #  Session
    # ------------------------------------------------------------------ #

    def create_optimizer(
        self,
        *,
        start_points: Sequence[Sequence[float]],
        dimension: Optional[int] = None,
        expansion_factor: float = 1.5,
        contraction_factor: float = 0.5,
        tolerance: float = 1e-3,
    ) -> dict:
        params = OptimizerParams(
            start_points=[list(p) for p in start_points],
            dimension=dimension,
            expansion_factor=expansion_factor,
            contraction_factor=contraction_factor,
            tolerance=tolerance,
        )
        return self._svc.create(params).to_dict()

    def ask(self) -> dict:
        return self._svc.ask().to_dict()

    def tell(self, value: float) -> dict:
        return self._svc.tell(value).to_dict()

    def get_state(self) -> dict:
        return self._svc.snapshot().to_dict()

    def get_history(self) -> dict:
        return self._svc.get_history().to_dict()

    # ------------------------------------------------------------------ #
    #  Local driving loop
    # ------------------------------------------------------------------ #

    def minimize(
        self,
        objective: Callable[[List[float]], float],
        *,
        max_steps: int = 10000,
    ) -> dict:
        """Drive the session with a local objective until converged or capped."""
        state = self.get_state()
        n_steps = 0
        while not state["converged"] and n_steps < max_steps:
            request = self.ask()
            if request["needs_evaluation"]:
                state = self.tell(objective(request["candidate"]))
            else:
                state = self.get_state()
            n_steps += 1
        return state
