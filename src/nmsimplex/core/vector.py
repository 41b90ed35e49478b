"""
Vector helpers for simplex coordinates.

Coordinates are plain 1-D float64 numpy arrays. ``as_vector`` returns a
write-protected copy so a vertex cannot be changed behind the simplex's
back; arithmetic on such arrays always yields new arrays.
"""
import numbers
from typing import Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from .errors import DimensionMismatch, TypeMismatch

Vector = NDArray[np.float64]
VectorLike = Union[Sequence[float], NDArray[np.floating]]


def as_vector(values: VectorLike, size: Optional[int] = None) -> Vector:
    """
    Convert a sequence of reals into a read-only coordinate vector.

    Args:
        values: Sequence or array of real numbers.
        size: Expected number of coordinates (None = any).

    Returns:
        New (n,) float64 array with the writeable flag cleared.

    Raises:
        TypeMismatch: If values is not a 1-D sequence of real numbers.
        DimensionMismatch: If size is given and does not match.
    """
    if isinstance(values, (str, bytes)) or np.isscalar(values):
        raise TypeMismatch(f"Expected a sequence of numbers, got {values!r}")
    try:
        vector = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise TypeMismatch(f"Expected a sequence of numbers, got {values!r}") from exc
    if vector.ndim != 1:
        raise TypeMismatch(f"Expected a 1-D vector, got shape {vector.shape}")
    if size is not None and vector.shape[0] != size:
        raise DimensionMismatch(
            f"Expected a vector of size {size}, got size {vector.shape[0]}"
        )
    vector.flags.writeable = False
    return vector


def is_real(value: object) -> bool:
    """Return True for real scalars (``numbers.Real``, bool excluded)."""
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, numbers.Real)


def format_vector(vector: Vector, fmt: str = "9.3f") -> str:
    """Format a vector as ``[   x,   y]`` for console output."""
    return "[" + ",".join(f"{x:{fmt}}" for x in vector) + "]"
