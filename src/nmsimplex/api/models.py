"""
Pydantic request / response models for the nmsimplex REST API.

All validation, field constraints, and serialisation logic lives here.
Routes import these models and never define their own.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# ------------------------------------------------------------------ #
#  Request models
# ------------------------------------------------------------------ #


class CreateOptimizerRequest(BaseModel):
    """Payload for ``POST /optimizer``."""

    start_points: List[List[float]] = Field(
        ..., min_length=2, description="D start points of D - 1 coordinates each"
    )
    dimension: Optional[int] = Field(
        None, ge=2, description="Number of simplex vertices (default: len(start_points))"
    )
    expansion_factor: float = Field(1.5, gt=0, description="Expansion coefficient")
    contraction_factor: float = Field(
        0.5, gt=0, lt=1, description="Contraction coefficient"
    )
    tolerance: float = Field(1e-3, gt=0, description="Convergence tolerance on the norm")

    @field_validator("start_points")
    @classmethod
    def points_same_size(cls, v: List[List[float]]) -> List[List[float]]:
        sizes = {len(p) for p in v}
        if len(sizes) > 1:
            raise ValueError("all start points must have the same number of coordinates")
        return v


class TellRequest(BaseModel):
    """Payload for ``POST /tell``."""

    value: float = Field(..., description="Objective value at the pending candidate")


# ------------------------------------------------------------------ #
#  Response models
# ------------------------------------------------------------------ #


class VertexResponse(BaseModel):
    point: List[float]
    value: float


class SimplexStateResponse(BaseModel):
    """Session state snapshot."""

    dimension: int
    status: str
    vertices: List[VertexResponse]
    norm: Optional[float]
    converged: bool
    n_steps: int
    n_evaluations: int
    pending: Optional[List[float]] = None


class StateResponse(BaseModel):
    """Response for ``POST /optimizer``, ``POST /tell`` and ``GET /state``."""

    ok: bool = True
    state: SimplexStateResponse


class CandidateResponse(BaseModel):
    """Candidate returned by ``POST /ask``."""

    step: int
    status: str
    candidate: List[float]
    needs_evaluation: bool
    value: Optional[float]


class AskResponse(BaseModel):
    """Response for ``POST /ask``."""

    ok: bool = True
    request: CandidateResponse


class HistoryPayload(BaseModel):
    steps: List[int]
    points: List[List[float]]
    values: List[float]
    norms: List[Optional[float]]
    statuses: List[str]


class HistoryResponse(BaseModel):
    """Response for ``GET /history``."""

    ok: bool = True
    history: HistoryPayload


class HealthResponse(BaseModel):
    """Response for ``GET /health``."""

    status: str = "ok"
    version: str
