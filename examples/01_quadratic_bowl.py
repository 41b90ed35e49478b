#!/usr/bin/env python3
"""
Example 1: Quadratic Bowl

Minimize f(x, y) = x² + y² starting from the simplex
[10, 37], [7, 2], [51, 32] and compare the result with the known
minimum at the origin.

The optimizer only proposes points; Optimizer.run() evaluates them with
the given function and feeds the values back until the spread of the
vertex values drops below the tolerance.

Usage:
    python examples/01_quadratic_bowl.py
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
from nmsimplex import Optimizer
from nmsimplex.evaluator import FunctionEvaluator
from nmsimplex.observer import HistoryObserver, PrintObserver


def paraboloid(p):
    return p[0] ** 2 + p[1] ** 2


def main():
    print("=" * 60)
    print("  Example 1: QUADRATIC BOWL")
    print("  Minimizing x^2 + y^2 from a 3-vertex simplex")
    print("=" * 60)

    history = HistoryObserver()
    optimizer = Optimizer(
        dimension=3,
        expansion_factor=1.5,
        contraction_factor=0.5,
        tolerance=1e-5,
        observers=[PrintObserver(interval=10), history],
    )
    optimizer.start_points = [[10, 37], [7, 2], [51, 32]]

    objective = FunctionEvaluator(paraboloid)
    result = optimizer.run(objective, max_steps=1000)

    print(f"\n{result.message}")
    print(f"Evaluations:   {objective.n_evaluations}")
    print(f"Best point:    {result.best_point}")
    print(f"Best value:    {result.best_value:.3e}")
    print(f"Final norm:    {result.final_norm:.3e}")

    counts = {}
    for status in history.statuses:
        counts[status.value] = counts.get(status.value, 0) + 1
    print("\nAccepted vertices by move:")
    for name, count in counts.items():
        print(f"  {name:<20} {count:>4}")

    distance = np.linalg.norm(result.best_point)
    if result.converged and distance < 1e-2:
        print(f"\n[PASS] Minimum found within {distance:.2e} of the origin")
    else:
        print(f"\n[FAIL] Best point is {distance:.2e} away from the origin")

    print("=" * 60)


if __name__ == "__main__":
    main()
