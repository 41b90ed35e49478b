"""
Shared payload schemas for the service layer and the API.

Defines the data structures that both the direct workflow and the FastAPI
transport layer consume and produce. Keeping them in one place prevents
drift between the two call paths.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# ------------------------------------------------------------------ #
#  Input schemas
# ------------------------------------------------------------------ #


@dataclass
class OptimizerParams:
    """Everything needed to create an Optimizer and fill its simplex."""

    start_points: List[List[float]] = field(default_factory=list)
    dimension: Optional[int] = None
    expansion_factor: float = 1.5
    contraction_factor: float = 0.5
    tolerance: float = 1e-3

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "OptimizerParams":
        return cls(
            start_points=d.get("start_points", []),
            dimension=d.get("dimension"),
            expansion_factor=d.get("expansion_factor", 1.5),
            contraction_factor=d.get("contraction_factor", 0.5),
            tolerance=d.get("tolerance", 1e-3),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_points": self.start_points,
            "dimension": self.dimension,
            "expansion_factor": self.expansion_factor,
            "contraction_factor": self.contraction_factor,
            "tolerance": self.tolerance,
        }


# ------------------------------------------------------------------ #
#  Output schemas
# ------------------------------------------------------------------ #


@dataclass
class CandidateRequest:
    """A candidate handed out by ask()."""

    step: int
    status: str
    candidate: List[float]
    needs_evaluation: bool
    value: Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "status": self.status,
            "candidate": self.candidate,
            "needs_evaluation": self.needs_evaluation,
            "value": self.value,
        }


@dataclass
class VertexPayload:
    """One simplex vertex."""

    point: List[float]
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"point": self.point, "value": self.value}


@dataclass
class SimplexSnapshot:
    """State of an optimization session."""

    dimension: int
    status: str
    vertices: List[VertexPayload]
    norm: Optional[float]
    converged: bool
    n_steps: int
    n_evaluations: int
    pending: Optional[List[float]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dimension": self.dimension,
            "status": self.status,
            "vertices": [v.to_dict() for v in self.vertices],
            "norm": self.norm,
            "converged": self.converged,
            "n_steps": self.n_steps,
            "n_evaluations": self.n_evaluations,
            "pending": self.pending,
        }


@dataclass
class OptimizationHistory:
    """Accepted vertices of a session, in order."""

    steps: List[int]
    points: List[List[float]]
    values: List[float]
    norms: List[Optional[float]]
    statuses: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "steps": self.steps,
            "points": self.points,
            "values": self.values,
            "norms": self.norms,
            "statuses": self.statuses,
        }
