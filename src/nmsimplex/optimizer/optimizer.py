"""
Nelder-Mead optimizer driven step by step by its caller.

The optimizer never evaluates the objective itself. Each call to step()
returns a StepRequest; the caller evaluates the candidate (which may mean
running an external program) and feeds the value back. ask()/tell() wrap
that protocol for remote drivers and run() implements the complete loop
on top of them.
"""
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Deque, Dict, Iterable, List, Optional, Tuple

import numpy as np

from nmsimplex.core import (
    ArityMismatch,
    ConfigurationError,
    DimensionMismatch,
    InsufficientVertices,
    InvalidDimension,
    Simplex,
    SimplexKey,
    TypeMismatch,
    Vector,
    VectorLike,
    Vertex,
    as_vector,
    is_real,
)
from nmsimplex.observer import CompositeObserver, Observer, PrintObserver


class Status(str, Enum):
    """State of the optimizer's step state machine."""

    FILLING = "filling"
    REFLECTING = "reflecting"
    EXPANSION = "expansion"
    CONTRACTION_OUTSIDE = "contraction_outside"
    CONTRACTION_INSIDE = "contraction_inside"


@dataclass(frozen=True)
class OptimizerConfig:
    """
    Immutable optimizer configuration.

    Attributes:
        dimension: Number of simplex vertices (parameters + 1).
        expansion_factor: Expansion coefficient, > 0.
        contraction_factor: Contraction coefficient, in (0, 1).
        tolerance: Convergence threshold on the simplex norm, > 0.
    """
    dimension: int = 2
    expansion_factor: float = 1.5
    contraction_factor: float = 0.5
    tolerance: float = 1e-3

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if isinstance(self.dimension, bool) or not isinstance(
            self.dimension, (int, np.integer)
        ):
            raise InvalidDimension(
                f"dimension must be an integer, got {self.dimension!r}"
            )
        if self.dimension < 2:
            raise InvalidDimension(f"dimension must be >= 2, got {self.dimension}")

        for name in ("expansion_factor", "contraction_factor", "tolerance"):
            value = getattr(self, name)
            if not is_real(value):
                raise ConfigurationError(f"{name} must be a real number, got {value!r}")
            object.__setattr__(self, name, float(value))
        object.__setattr__(self, "dimension", int(self.dimension))

        if self.expansion_factor <= 0:
            raise ConfigurationError(
                f"expansion_factor must be positive, got {self.expansion_factor}"
            )
        if not 0 < self.contraction_factor < 1:
            raise ConfigurationError(
                f"contraction_factor must be in (0, 1), got {self.contraction_factor}"
            )
        if self.tolerance <= 0:
            raise ConfigurationError(f"tolerance must be positive, got {self.tolerance}")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "OptimizerConfig":
        unknown = set(d) - {"dimension", "expansion_factor", "contraction_factor", "tolerance"}
        if unknown:
            raise ConfigurationError(
                f"Unknown optimizer options: {', '.join(sorted(unknown))}"
            )
        return cls(
            dimension=d.get("dimension", 2),
            expansion_factor=d.get("expansion_factor", 1.5),
            contraction_factor=d.get("contraction_factor", 0.5),
            tolerance=d.get("tolerance", 1e-3),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dimension": self.dimension,
            "expansion_factor": self.expansion_factor,
            "contraction_factor": self.contraction_factor,
            "tolerance": self.tolerance,
        }


@dataclass(frozen=True, eq=False)
class StepRequest:
    """
    Candidate proposed by Optimizer.step().

    Attributes:
        candidate: Point proposed by the optimizer.
        status: Optimizer status that produced the candidate.
        value: Known objective value, or None if the caller must evaluate.
    """
    candidate: Vector
    status: Status
    value: Optional[float] = None

    @property
    def needs_evaluation(self) -> bool:
        return self.value is None


@dataclass
class OptimizationResult:
    """
    Result of an optimization run.

    Attributes:
        converged: Whether the simplex norm dropped below tolerance.
        n_steps: Number of optimizer steps taken.
        n_evaluations: Number of objective evaluations.
        best_point: Coordinates of the lowest vertex.
        best_value: Objective value at best_point.
        final_norm: Simplex norm at the end (None if never full).
        value_history: Values of the accepted vertices, in order.
        message: Human-readable description of the outcome.
    """
    converged: bool
    n_steps: int
    n_evaluations: int
    best_point: Optional[Vector]
    best_value: Optional[float]
    final_norm: Optional[float]
    value_history: List[float] = field(default_factory=list)
    message: str = ""


TraceEntry = Tuple[Vector, Status]


class Optimizer:
    """
    General n-dimensional Nelder-Mead simplex optimizer.

    The optimizer first hands out the D start points for evaluation, then
    reflects the worst vertex through the centroid of the others and, from
    the reflected value, decides between expansion, outside contraction,
    inside contraction or plain acceptance of the reflected point.

    Attributes:
        config: Immutable OptimizerConfig.
        simplex: The Simplex owned by this optimizer.
        status: Current Status of the state machine.

    Example:
        >>> opt = Optimizer(dimension=3, tolerance=1e-5, observers=[])
        >>> opt.start_points = [[10, 37], [7, 2], [51, 32]]
        >>> result = opt.run(lambda p: p[0] ** 2 + p[1] ** 2)
        >>> result.converged
        True
    """

    def __init__(
        self,
        dimension: int = 2,
        expansion_factor: float = 1.5,
        contraction_factor: float = 0.5,
        tolerance: float = 1e-3,
        observers: Optional[List[Observer]] = None,
    ) -> None:
        """
        Initialize optimizer.

        Args:
            dimension: Number of simplex vertices (parameters + 1).
            expansion_factor: Expansion coefficient.
            contraction_factor: Contraction coefficient.
            tolerance: Convergence threshold on the simplex norm.
            observers: Progress observers. None installs a PrintObserver;
                pass an empty list for silent operation.

        Raises:
            InvalidDimension: If dimension is not an integer >= 2.
            ConfigurationError: If a factor or the tolerance is out of range.
        """
        self.config = OptimizerConfig(
            dimension=dimension,
            expansion_factor=expansion_factor,
            contraction_factor=contraction_factor,
            tolerance=tolerance,
        )
        self.simplex = Simplex(self.config.dimension)
        self.observers: List[Observer] = (
            [PrintObserver()] if observers is None else list(observers)
        )
        self._observer = CompositeObserver(self.observers)

        self._start_points: Deque[Vector] = deque()
        self._status = Status.FILLING
        self._pending: Optional[StepRequest] = None
        self._reflected_value: Optional[float] = None
        self._n_steps = 0
        self._n_accepted = 0
        self._n_evaluations = 0
        self._value_history: List[float] = []

    @classmethod
    def from_config(
        cls,
        config: OptimizerConfig,
        observers: Optional[List[Observer]] = None,
    ) -> "Optimizer":
        """Create an optimizer from an existing OptimizerConfig."""
        return cls(observers=observers, **config.to_dict())

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def status(self) -> Status:
        return self._status

    @property
    def n_parameters(self) -> int:
        return self.config.dimension - 1

    @property
    def n_steps(self) -> int:
        return self._n_steps

    @property
    def n_evaluations(self) -> int:
        return self._n_evaluations

    @property
    def pending(self) -> Optional[StepRequest]:
        """Request handed out by ask() and still waiting for tell()."""
        return self._pending

    @property
    def start_points(self) -> List[Vector]:
        """Start points not yet handed out for evaluation."""
        return list(self._start_points)

    @start_points.setter
    def start_points(self, points: Iterable[VectorLike]) -> None:
        """
        Set the D start points of the simplex.

        Raises:
            TypeMismatch: If points is not a sequence of vectors of
                D - 1 coordinates each.
            ArityMismatch: If the number of points is not D.
        """
        if isinstance(points, (str, bytes)):
            raise TypeMismatch(f"Start points must be a sequence of vectors, got {points!r}")
        try:
            points = list(points)
        except TypeError as exc:
            raise TypeMismatch(
                f"Start points must be a sequence of vectors, got {points!r}"
            ) from exc
        if len(points) != self.config.dimension:
            raise ArityMismatch(
                f"Expected {self.config.dimension} start points, got {len(points)}"
            )

        vectors = []
        for i, point in enumerate(points):
            try:
                vectors.append(as_vector(point, size=self.n_parameters))
            except DimensionMismatch as exc:
                raise TypeMismatch(f"Start point {i}: {exc}") from exc
        self._start_points = deque(vectors)

    # ------------------------------------------------------------------ #
    #  Step protocol
    # ------------------------------------------------------------------ #

    def step(self, previous_value: Optional[float] = None) -> StepRequest:
        """
        Decide the next candidate point.

        While start points remain they are handed out one by one (FILLING);
        the caller evaluates each and inserts it. Afterwards a call without
        previous_value returns the reflected point (REFLECTING), and the
        caller passes its value to the next call, which picks the move:

        - value below the lowest vertex: EXPANSION
        - value at or above the highest vertex: CONTRACTION_OUTSIDE
        - value between second highest and highest: CONTRACTION_INSIDE
        - otherwise the reflected point is accepted with its known value

        Args:
            previous_value: Objective value of the last reflected point.

        Returns:
            StepRequest with the candidate; value is set only when the
            reflected point is accepted as-is.

        Raises:
            InsufficientVertices: If the simplex is not full and no start
                points remain.
            TypeMismatch: If previous_value is not a real number.
        """
        request = self._next_request(previous_value)
        self._n_steps += 1
        return request

    def _next_request(self, previous_value: Optional[float]) -> StepRequest:
        if self._start_points:
            self._status = Status.FILLING
            return StepRequest(self._start_points.popleft(), Status.FILLING)

        if not self.simplex.is_full:
            raise InsufficientVertices(
                f"Simplex holds {len(self.simplex)} of {self.config.dimension} "
                "vertices and no start points remain"
            )

        if previous_value is None:
            self._status = Status.REFLECTING
            return StepRequest(self.simplex[SimplexKey.REFLECTED], Status.REFLECTING)

        if not is_real(previous_value):
            raise TypeMismatch(f"Reflected value must be a real number, got {previous_value!r}")
        vr = float(previous_value)

        centroid = self.simplex[SimplexKey.CENTROID]
        highest = self.simplex[SimplexKey.HIGHEST]
        exp_f = self.config.expansion_factor
        cnt_f = self.config.contraction_factor

        if vr < self.simplex[SimplexKey.LOWEST].value:
            self._status = Status.EXPANSION
            candidate = centroid * (1 + exp_f) - highest.coordinates
        elif vr >= highest.value:
            self._status = Status.CONTRACTION_OUTSIDE
            candidate = centroid * (1 - cnt_f) + highest.coordinates * cnt_f
        elif vr > self.simplex[SimplexKey.SECOND_HIGHEST].value:
            self._status = Status.CONTRACTION_INSIDE
            candidate = centroid * (1 + cnt_f) - highest.coordinates
        else:
            self._status = Status.REFLECTING
            return StepRequest(self.simplex[SimplexKey.REFLECTED], Status.REFLECTING, vr)

        return StepRequest(as_vector(candidate), self._status)

    def insert(self, point: VectorLike, value: float) -> Vertex:
        """
        Insert an evaluated point into the simplex and notify observers.

        Raises:
            DimensionMismatch: If point does not have D - 1 coordinates.
            TypeMismatch: If point is not a vector or value is not real.
        """
        vertex = self.simplex.insert(point, value)
        self._n_accepted += 1
        self._value_history.append(vertex.value)
        self._observer.observe(vertex, self.simplex.norm(), self._status, self._n_accepted)
        return vertex

    def converged(self) -> bool:
        """True once the simplex is full and its norm is below tolerance."""
        norm = self.simplex.norm()
        if norm is None:
            return False
        return norm < self.config.tolerance

    # ------------------------------------------------------------------ #
    #  Ask / tell
    # ------------------------------------------------------------------ #

    def ask(self) -> StepRequest:
        """
        Take the next step, feeding back any pending reflected value.

        A request that already carries its value (accepted reflection) is
        inserted right away; otherwise it stays pending until tell().

        Raises:
            RuntimeError: If the previous request still awaits its value.
        """
        if self._pending is not None:
            raise RuntimeError(
                f"Candidate {self._pending.candidate} ({self._pending.status.value}) "
                "is still awaiting its value; call tell() first"
            )
        request = self.step(self._reflected_value)
        self._reflected_value = None
        if request.needs_evaluation:
            self._pending = request
        else:
            self.insert(request.candidate, request.value)
        return request

    def tell(self, value: float) -> Optional[Vertex]:
        """
        Report the objective value of the pending request.

        Returns:
            The inserted Vertex, or None for a reflected point whose value
            is kept for the next ask().

        Raises:
            RuntimeError: If no request is pending.
            TypeMismatch: If value is not a real number.
        """
        if self._pending is None:
            raise RuntimeError("No candidate is awaiting a value; call ask() first")
        if not is_real(value):
            raise TypeMismatch(f"Objective value must be a real number, got {value!r}")

        request, self._pending = self._pending, None
        self._n_evaluations += 1
        if request.status is Status.REFLECTING:
            self._reflected_value = float(value)
            return None
        return self.insert(request.candidate, value)

    # ------------------------------------------------------------------ #
    #  Driving loop
    # ------------------------------------------------------------------ #

    def run(
        self,
        evaluate: Callable[[Vector], float],
        trace: Optional[List[TraceEntry]] = None,
        max_steps: Optional[int] = None,
    ) -> OptimizationResult:
        """
        Minimize until converged (template loop over ask/tell).

        Args:
            evaluate: Objective function, called with the candidate vector.
                Any exception it raises propagates unchanged and leaves the
                candidate pending; the next run() evaluates it again.
            trace: If given, receives (candidate, status) for every step.
            max_steps: Optional cap on the number of steps of this call.

        Returns:
            OptimizationResult with convergence info and value history.
        """
        if max_steps is not None and max_steps < 1:
            raise ConfigurationError(f"max_steps must be positive, got {max_steps}")

        n_steps = 0
        while not self.converged():
            if max_steps is not None and n_steps >= max_steps:
                break
            # A candidate left pending by a failed evaluation is retried first
            request = self._pending if self._pending is not None else self.ask()
            if request.needs_evaluation:
                self.tell(evaluate(request.candidate))
            n_steps += 1
            if trace is not None:
                trace.append((request.candidate, request.status))

        self._observer.finalize()
        return self._make_result(n_steps)

    def _make_result(self, n_steps: int) -> OptimizationResult:
        converged = self.converged()
        norm = self.simplex.norm()
        best = self.simplex[SimplexKey.LOWEST] if len(self.simplex) else None

        if converged:
            message = f"Converged after {n_steps} steps"
        else:
            norm_text = f"{norm:.2e}" if norm is not None else "undefined"
            message = f"Did not converge after {n_steps} steps (norm={norm_text})"

        return OptimizationResult(
            converged=converged,
            n_steps=n_steps,
            n_evaluations=self._n_evaluations,
            best_point=best.coordinates if best is not None else None,
            best_value=best.value if best is not None else None,
            final_norm=norm,
            value_history=list(self._value_history),
            message=message,
        )

    def __repr__(self) -> str:
        return (
            f"Optimizer(dimension={self.config.dimension}, "
            f"status={self._status.value}, simplex={self.simplex!r})"
        )
