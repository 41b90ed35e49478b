"""
Abstract base class for objective evaluators.

An evaluator turns a candidate point into a scalar objective value. The
optimizer never calls one directly; Optimizer.run() (or any caller-owned
loop) does. Evaluation may be slow and may fail: exceptions are never
caught here.
"""
from abc import ABC, abstractmethod
from typing import Callable

import numpy as np

from nmsimplex.core import TypeMismatch, Vector, is_real


class Evaluator(ABC):
    """
    Abstract base for objective evaluators (Strategy Pattern).

    Subclasses implement _evaluate(); __call__ makes every evaluator usable
    wherever a plain ``Vector -> float`` callable is expected.

    Attributes:
        n_evaluations: Number of completed evaluations.
    """

    def __init__(self) -> None:
        self.n_evaluations = 0

    def evaluate(self, point: Vector) -> float:
        """
        Evaluate the objective at point.

        Raises:
            TypeMismatch: If the objective does not return a real number.
        """
        value = self._evaluate(np.asarray(point, dtype=np.float64))
        if not is_real(value):
            raise TypeMismatch(
                f"{self.get_name()} returned {value!r}, expected a real number"
            )
        self.n_evaluations += 1
        return float(value)

    def __call__(self, point: Vector) -> float:
        return self.evaluate(point)

    @abstractmethod
    def _evaluate(self, point: Vector) -> float:
        """Compute the objective value (algorithm-specific)."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this evaluator."""
        pass


class FunctionEvaluator(Evaluator):
    """
    Evaluator wrapping a plain Python callable.

    Example:
        >>> f = FunctionEvaluator(lambda p: p[0] ** 2 + p[1] ** 2)
        >>> f([3.0, 4.0])
        25.0
    """

    def __init__(self, func: Callable[[Vector], float]) -> None:
        super().__init__()
        if not callable(func):
            raise TypeMismatch(f"Objective must be callable, got {func!r}")
        self.func = func

    def _evaluate(self, point: Vector) -> float:
        return self.func(point)

    def get_name(self) -> str:
        name = getattr(self.func, "__name__", type(self.func).__name__)
        return f"FunctionEvaluator({name})"
