"""
Backend service layer for nmsimplex.

Framework-independent session logic consumed by the application workflow
and the FastAPI transport layer. No references to FastAPI or any
transport concern belong here.
"""
from __future__ import annotations

from typing import Optional

from nmsimplex.core.schemas import (
    CandidateRequest,
    OptimizationHistory,
    OptimizerParams,
    SimplexSnapshot,
    VertexPayload,
)
from nmsimplex.observer import HistoryObserver
from nmsimplex.optimizer import Optimizer, OptimizerConfig


class OptimizationService:
    """Stateful ask/tell backend.  One instance per session."""

    def __init__(self):
        self._optimizer: Optional[Optimizer] = None
        self._history: Optional[HistoryObserver] = None

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def has_optimizer(self) -> bool:
        return self._optimizer is not None

    # ------------------------------------------------------------------ #
    #  Session
    # ------------------------------------------------------------------ #

    def create(self, params: OptimizerParams) -> SimplexSnapshot:
        """Start a new optimization session, discarding any previous one."""
        dimension = params.dimension
        if dimension is None:
            dimension = len(params.start_points)
        config = OptimizerConfig(
            dimension=dimension,
            expansion_factor=params.expansion_factor,
            contraction_factor=params.contraction_factor,
            tolerance=params.tolerance,
        )
        history = HistoryObserver()
        optimizer = Optimizer.from_config(config, observers=[history])
        optimizer.start_points = params.start_points

        self._optimizer = optimizer
        self._history = history
        return self.snapshot()

    def ask(self) -> CandidateRequest:
        """Hand out the next candidate."""
        optimizer = self._require_optimizer()
        request = optimizer.ask()
        return CandidateRequest(
            step=optimizer.n_steps,
            status=request.status.value,
            candidate=[float(x) for x in request.candidate],
            needs_evaluation=request.needs_evaluation,
            value=request.value,
        )

    def tell(self, value: float) -> SimplexSnapshot:
        """Report the objective value of the pending candidate."""
        self._require_optimizer().tell(value)
        return self.snapshot()

    def snapshot(self) -> SimplexSnapshot:
        optimizer = self._require_optimizer()
        pending = optimizer.pending
        return SimplexSnapshot(
            dimension=optimizer.config.dimension,
            status=optimizer.status.value,
            vertices=[
                VertexPayload(point=[float(x) for x in v.coordinates], value=v.value)
                for v in optimizer.simplex.vertices
            ],
            norm=optimizer.simplex.norm(),
            converged=optimizer.converged(),
            n_steps=optimizer.n_steps,
            n_evaluations=optimizer.n_evaluations,
            pending=[float(x) for x in pending.candidate] if pending else None,
        )

    def get_history(self) -> OptimizationHistory:
        self._require_optimizer()
        obs = self._history
        return OptimizationHistory(
            steps=list(obs.steps),
            points=[[float(x) for x in p] for p in obs.points],
            values=[float(v) for v in obs.values],
            norms=list(obs.norms),
            statuses=[s.value for s in obs.statuses],
        )

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    def _require_optimizer(self) -> Optimizer:
        if self._optimizer is None:
            raise RuntimeError("No optimizer created. Use create first.")
        return self._optimizer
