"""
Simplex container for the Nelder-Mead method.

This module provides the Vertex dataclass and the Simplex class, a set of
at most D = n + 1 evaluated points for an n-parameter objective. Note that
``dimension`` is the number of vertices, not the number of coordinates.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

import numpy as np

from .errors import InsufficientVertices, InvalidDimension, InvalidKey, TypeMismatch
from .vector import Vector, VectorLike, as_vector, format_vector, is_real


class SimplexKey(str, Enum):
    """Named points of an analysed simplex."""

    LOWEST = "lowest"
    HIGHEST = "highest"
    SECOND_HIGHEST = "second_highest"
    CENTROID = "centroid"
    REFLECTED = "reflected"


@dataclass(frozen=True, eq=False)
class Vertex:
    """
    A simplex vertex: coordinates and the objective value there.

    Attributes:
        coordinates: (n,) read-only coordinate vector.
        value: Objective function value at coordinates.
    """
    coordinates: Vector
    value: float

    def __iter__(self):
        yield self.coordinates
        yield self.value

    def __repr__(self) -> str:
        coords = ",".join(repr(float(x)) for x in self.coordinates)
        return f"Vertex([{coords}], {self.value!r})"


class Simplex:
    """
    General n-dimensional simplex of (coordinates, value) vertices.

    Vertices are appended until the simplex holds ``dimension`` of them;
    from then on every insertion replaces the current worst vertex.
    Sorting, centroid and reflection are computed lazily: any insertion
    marks the simplex dirty and the next read re-analyses it once.

    Attributes:
        dimension: Number of vertices D of the full simplex.

    Example:
        >>> simplex = Simplex(3)
        >>> for point, value in [([10, 37], 100), ([7, 2], 200), ([51, 32], 300)]:
        ...     _ = simplex.insert(point, value)
        >>> simplex[SimplexKey.REFLECTED]
        array([-34.,   7.])
    """

    def __init__(self, dimension: int) -> None:
        """
        Initialize an empty simplex.

        Args:
            dimension: Number of vertices (parameters + 1).

        Raises:
            InvalidDimension: If dimension is not an integer >= 2.
        """
        if isinstance(dimension, bool) or not isinstance(dimension, (int, np.integer)):
            raise InvalidDimension(f"Dimension must be an integer, got {dimension!r}")
        if dimension < 2:
            raise InvalidDimension(f"Dimension must be >= 2, got {dimension}")

        self.dimension = int(dimension)
        self._vertices: List[Vertex] = []
        self._centroid: Optional[Vector] = None
        self._reflected: Optional[Vector] = None
        self._dirty = False

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def n_parameters(self) -> int:
        """Number of coordinates per vertex (D - 1)."""
        return self.dimension - 1

    @property
    def is_full(self) -> bool:
        return len(self._vertices) == self.dimension

    @property
    def is_dirty(self) -> bool:
        """True when derived state must be recomputed before the next read."""
        return self._dirty

    @property
    def vertices(self) -> Tuple[Vertex, ...]:
        """Vertices sorted ascending by value."""
        self.analyse()
        return tuple(self._vertices)

    @property
    def values(self) -> List[float]:
        """Objective values sorted ascending."""
        return [v.value for v in self.vertices]

    def __len__(self) -> int:
        return len(self._vertices)

    # ------------------------------------------------------------------ #
    #  Mutation
    # ------------------------------------------------------------------ #

    def insert(self, point: VectorLike, value: float) -> Vertex:
        """
        Add a vertex, or replace the worst one if the simplex is full.

        Args:
            point: Coordinates, n = dimension - 1 components.
            value: Objective function value at point.

        Returns:
            The stored Vertex.

        Raises:
            DimensionMismatch: If point does not have n components.
            TypeMismatch: If point is not a vector or value is not real.
        """
        coordinates = as_vector(point, size=self.n_parameters)
        if not is_real(value):
            raise TypeMismatch(f"Vertex value must be a real number, got {value!r}")

        vertex = Vertex(coordinates=coordinates, value=float(value))
        if len(self._vertices) < self.dimension:
            self._vertices.append(vertex)
        else:
            # The worst slot is only known after analysis
            self.analyse()
            self._vertices[-1] = vertex
        self._dirty = True
        return vertex

    # ------------------------------------------------------------------ #
    #  Analysis
    # ------------------------------------------------------------------ #

    def analyse(self) -> None:
        """
        Sort vertices and compute centroid and reflected point.

        Does nothing unless the simplex changed since the last call. The
        sort is stable, so equal values keep their insertion order. The
        centroid is the mean of all vertices but the worst; the reflected
        point mirrors the worst vertex through it. Both are only defined
        for a full simplex.
        """
        if not self._dirty:
            return

        self._vertices = sorted(self._vertices, key=lambda v: v.value)

        if self.is_full:
            best = np.array([v.coordinates for v in self._vertices[:-1]])
            centroid = best.sum(axis=0) / (self.dimension - 1.0)
            reflected = centroid * 2.0 - self._vertices[-1].coordinates
            centroid.flags.writeable = False
            reflected.flags.writeable = False
            self._centroid = centroid
            self._reflected = reflected
        else:
            self._centroid = None
            self._reflected = None

        self._dirty = False

    def at(self, key: Union[SimplexKey, str]) -> Union[Vertex, Vector]:
        """
        Get a named point of the analysed simplex.

        Args:
            key: LOWEST, HIGHEST or SECOND_HIGHEST (returns a Vertex),
                CENTROID or REFLECTED (returns coordinates).

        Raises:
            InvalidKey: For any other key.
            InsufficientVertices: If the simplex is too small for key.
        """
        try:
            key = SimplexKey(key)
        except ValueError:
            raise InvalidKey(f"Unsupported key {key!r}") from None

        self.analyse()
        size = len(self._vertices)

        if key is SimplexKey.LOWEST or key is SimplexKey.HIGHEST:
            if size == 0:
                raise InsufficientVertices("Simplex is empty")
            return self._vertices[0] if key is SimplexKey.LOWEST else self._vertices[-1]
        if key is SimplexKey.SECOND_HIGHEST:
            if size < 2:
                raise InsufficientVertices(
                    f"Second highest vertex needs 2 vertices, have {size}"
                )
            return self._vertices[-2]

        if not self.is_full:
            raise InsufficientVertices(
                f"{key.value} needs a full simplex ({self.dimension} vertices), "
                f"have {size}"
            )
        return self._centroid if key is SimplexKey.CENTROID else self._reflected

    __getitem__ = at

    def norm(self) -> Optional[float]:
        """
        Spread of the objective values over the full simplex.

        Quadratic sum over all pairs of vertex values, divided by the
        dimension: sqrt(sum_{i<j} (v_i - v_j)^2 / D).

        Returns:
            The spread, or None unless the simplex is full.
        """
        if not self.is_full:
            return None
        values = np.array([v.value for v in self._vertices])
        i, j = np.triu_indices(self.dimension, k=1)
        return float(np.sqrt(np.sum((values[i] - values[j]) ** 2) / self.dimension))

    def __repr__(self) -> str:
        if not self.is_full:
            return f"Simplex(dimension={self.dimension}, size={len(self)})"
        parts = [
            f"l: {self.at(SimplexKey.LOWEST)!r}",
            f"h: {self.at(SimplexKey.HIGHEST)!r}",
            f"g: {self.at(SimplexKey.SECOND_HIGHEST)!r}",
            f"c: {format_vector(self.at(SimplexKey.CENTROID), '.6g')}",
            f"r: {format_vector(self.at(SimplexKey.REFLECTED), '.6g')}",
        ]
        return "Simplex(" + " ".join(parts) + ")"
