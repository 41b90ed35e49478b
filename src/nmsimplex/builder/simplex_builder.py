"""
Start-point generation for the initial simplex.
"""
from typing import List, Union

import numpy as np

from nmsimplex.core import ConfigurationError, DimensionMismatch, Vector, VectorLike, as_vector


def axis_simplex(origin: VectorLike, step: Union[float, VectorLike]) -> List[Vector]:
    """
    Build D = n + 1 start points around an origin.

    The first point is the origin itself; point i + 1 is the origin moved
    by step[i] along axis i.

    Args:
        origin: (n,) initial guess.
        step: Offset per axis, or a single offset used for every axis.

    Returns:
        List of n + 1 read-only vectors.

    Raises:
        DimensionMismatch: If step has a different size than origin.
        ConfigurationError: If any step is zero.

    Example:
        >>> axis_simplex([1.0, 2.0], 0.5)
        [array([1., 2.]), array([1.5, 2. ]), array([1. , 2.5])]
    """
    origin = as_vector(origin)
    if np.ndim(step) == 0:
        steps = np.full(origin.shape, float(step))
    else:
        steps = as_vector(step)
        if steps.shape != origin.shape:
            raise DimensionMismatch(
                f"Step has {steps.shape[0]} components, origin has {origin.shape[0]}"
            )
    if np.any(steps == 0):
        raise ConfigurationError(f"Steps must be non-zero, got {steps.tolist()}")

    points = [origin]
    for i in range(origin.shape[0]):
        point = origin.copy()
        point[i] += steps[i]
        points.append(as_vector(point))
    return points
