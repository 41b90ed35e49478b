"""Transport-agnostic orchestration layer.

Provides stable entry points consumed by API adapters and scripts.
All functions accept plain Python primitives; no Pydantic, no HTTP
types leak in.
"""
from .workflow import OptimizationWorkflow

__all__ = ["OptimizationWorkflow"]
