"""
Core module for Nelder-Mead simplex optimization.

This module provides the fundamental building blocks:
- as_vector: Conversion to read-only coordinate vectors
- Vertex: Evaluated point of a simplex
- Simplex: Lazily analysed container of D = n + 1 vertices
- SimplexKey: Named points of an analysed simplex
- Error hierarchy rooted at NelderMeadError
"""

from .errors import (
    ArityMismatch,
    ConfigurationError,
    DimensionMismatch,
    InsufficientVertices,
    InvalidDimension,
    InvalidKey,
    NelderMeadError,
    OutputParseError,
    TemplateError,
    TypeMismatch,
)
from .simplex import Simplex, SimplexKey, Vertex
from .vector import Vector, VectorLike, as_vector, format_vector, is_real

__all__ = [
    # Classes
    "Simplex",
    "SimplexKey",
    "Vertex",
    # Vectors
    "Vector",
    "VectorLike",
    "as_vector",
    "format_vector",
    "is_real",
    # Errors
    "NelderMeadError",
    "ConfigurationError",
    "InvalidDimension",
    "ArityMismatch",
    "DimensionMismatch",
    "TypeMismatch",
    "InvalidKey",
    "InsufficientVertices",
    "TemplateError",
    "OutputParseError",
]
