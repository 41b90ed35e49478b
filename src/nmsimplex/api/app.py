"""
FastAPI application factory.

Usage::

    uvicorn nmsimplex.api.app:app --reload
    python -m nmsimplex.api

Every call to create_app() starts from a fresh optimization session.
"""
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import nmsimplex
from nmsimplex.api.models import HealthResponse
from nmsimplex.api.routes import reset_service, router
from nmsimplex.core.service import OptimizationService


def create_app(service: Optional[OptimizationService] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        service: Session backend to serve; a new OptimizationService if None.
    """
    reset_service(service)

    application = FastAPI(
        title="nmsimplex API",
        version=nmsimplex.__version__,
        description=(
            "Ask/tell REST API for step-wise Nelder-Mead optimization. "
            "POST /api/optimizer starts a session, /api/ask hands out the next "
            "candidate and /api/tell reports its objective value."
        ),
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @application.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(version=nmsimplex.__version__)

    application.include_router(router, prefix="/api", tags=["optimizer"])
    return application


app = create_app()
