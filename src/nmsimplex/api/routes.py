"""
API routes: thin adapters that delegate to :class:`OptimizationService`.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException

from nmsimplex.api.models import (
    AskResponse,
    CreateOptimizerRequest,
    HistoryResponse,
    StateResponse,
    TellRequest,
)
from nmsimplex.core import NelderMeadError
from nmsimplex.core.schemas import OptimizerParams
from nmsimplex.core.service import OptimizationService

router = APIRouter()

# One service instance per process (single-session model).
_service = OptimizationService()


def get_service() -> OptimizationService:
    return _service


def reset_service(service: Optional[OptimizationService] = None) -> OptimizationService:
    """Replace the process-wide session (used by create_app)."""
    global _service
    _service = service or OptimizationService()
    return _service


# ------------------------------------------------------------------ #
#  Endpoints
# ------------------------------------------------------------------ #


@router.post("/optimizer", response_model=StateResponse)
def create_optimizer(req: CreateOptimizerRequest):
    try:
        params = OptimizerParams(
            start_points=req.start_points,
            dimension=req.dimension,
            expansion_factor=req.expansion_factor,
            contraction_factor=req.contraction_factor,
            tolerance=req.tolerance,
        )
        state = get_service().create(params)
        return {"ok": True, "state": state.to_dict()}
    except NelderMeadError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/ask", response_model=AskResponse)
def ask():
    try:
        request = get_service().ask()
        return {"ok": True, "request": request.to_dict()}
    except (NelderMeadError, RuntimeError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/tell", response_model=StateResponse)
def tell(req: TellRequest):
    try:
        state = get_service().tell(req.value)
        return {"ok": True, "state": state.to_dict()}
    except (NelderMeadError, RuntimeError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/state", response_model=StateResponse)
def get_state():
    try:
        state = get_service().snapshot()
        return {"ok": True, "state": state.to_dict()}
    except RuntimeError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/history", response_model=HistoryResponse)
def get_history():
    try:
        history = get_service().get_history()
        return {"ok": True, "history": history.to_dict()}
    except RuntimeError as e:
        raise HTTPException(status_code=400, detail=str(e))
