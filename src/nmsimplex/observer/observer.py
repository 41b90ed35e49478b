"""
Observer module for monitoring optimization progress.

Provides the Observer pattern for console output, history recording and
user callbacks. Observers are notified once per vertex accepted into the
simplex, not for reflected points that are only evaluated.
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, List, Optional

import numpy as np

from nmsimplex.core import format_vector

if TYPE_CHECKING:
    from nmsimplex.core import Vertex
    from nmsimplex.optimizer import Status


class Observer(ABC):
    """
    Abstract base for optimization observers (Observer Pattern).

    Attributes:
        interval: How often to call observe() (in accepted vertices).

    Example:
        >>> observer = HistoryObserver()
        >>> optimizer = Optimizer(dimension=3, observers=[observer])
    """

    def __init__(self, interval: int = 1) -> None:
        """
        Initialize observer.

        Args:
            interval: Observation interval. Default=1 (every vertex).
        """
        if interval < 1:
            raise ValueError(f"Interval must be >= 1, got {interval}")
        self.interval = interval

    @abstractmethod
    def observe(
        self,
        vertex: "Vertex",
        norm: Optional[float],
        status: "Status",
        step: int,
    ) -> None:
        """
        Record an accepted vertex.

        Args:
            vertex: The vertex just inserted into the simplex.
            norm: Simplex spread after insertion, None while filling.
            status: Optimizer status that produced the vertex.
            step: Number of vertices accepted so far (1-based).
        """
        pass

    def finalize(self) -> None:
        """Called at the end of a run for cleanup."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get observer name."""
        pass


class CompositeObserver(Observer):
    """
    Composite observer that wraps multiple observers.

    Delegates to child observers based on their individual intervals.
    """

    def __init__(self, observers: List[Observer]) -> None:
        super().__init__(interval=1)
        self.observers = observers

    def observe(
        self,
        vertex: "Vertex",
        norm: Optional[float],
        status: "Status",
        step: int,
    ) -> None:
        """Delegate to child observers based on their intervals."""
        for obs in self.observers:
            if step % obs.interval == 0:
                obs.observe(vertex, norm, status, step)

    def finalize(self) -> None:
        for obs in self.observers:
            obs.finalize()

    def get_name(self) -> str:
        names = [o.get_name() for o in self.observers]
        return f"Composite[{', '.join(names)}]"


class HistoryObserver(Observer):
    """
    Records every accepted vertex.

    Tracks points, values, spread norms and statuses over the run.
    """

    def __init__(self, interval: int = 1) -> None:
        super().__init__(interval)
        self.steps: List[int] = []
        self.points: List[np.ndarray] = []
        self.values: List[float] = []
        self.norms: List[Optional[float]] = []
        self.statuses: List["Status"] = []

    def observe(
        self,
        vertex: "Vertex",
        norm: Optional[float],
        status: "Status",
        step: int,
    ) -> None:
        """Record vertex data."""
        self.steps.append(step)
        self.points.append(vertex.coordinates)
        self.values.append(vertex.value)
        self.norms.append(norm)
        self.statuses.append(status)

    def get_name(self) -> str:
        return f"HistoryObserver(interval={self.interval})"

    def get_best_value(self) -> Optional[float]:
        """Lowest value seen so far, None before the first vertex."""
        if not self.values:
            return None
        return min(self.values)


class CallbackObserver(Observer):
    """
    Forwards (coordinates, value, norm, status) to a plain callable.
    """

    def __init__(
        self,
        callback: Callable[[np.ndarray, float, Optional[float], "Status"], None],
        interval: int = 1,
    ) -> None:
        super().__init__(interval)
        self.callback = callback

    def observe(
        self,
        vertex: "Vertex",
        norm: Optional[float],
        status: "Status",
        step: int,
    ) -> None:
        self.callback(vertex.coordinates, vertex.value, norm, status)

    def get_name(self) -> str:
        name = getattr(self.callback, "__name__", type(self.callback).__name__)
        return f"CallbackObserver({name}, interval={self.interval})"


class PrintObserver(Observer):
    """
    Prints each accepted vertex to the console.

    Output format::

        New point at: [    7.000,    2.000] ->  53.00000 ||      n/a|| (filling)
    """

    def __init__(self, interval: int = 1) -> None:
        super().__init__(interval)

    def observe(
        self,
        vertex: "Vertex",
        norm: Optional[float],
        status: "Status",
        step: int,
    ) -> None:
        """Print vertex info."""
        norm_text = f"{norm:9.5f}" if norm is not None else f"{'n/a':>9}"
        print(
            f"New point at: {format_vector(vertex.coordinates)} -> "
            f"{vertex.value:9.5f} ||{norm_text}|| ({status.value})"
        )

    def get_name(self) -> str:
        return f"PrintObserver(interval={self.interval})"
