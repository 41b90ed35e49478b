#!/usr/bin/env python3
"""
Example 2: Ask/Tell Session

Drive the optimizer by hand, the way a remote client does through the
REST API: ask() hands out a candidate, the caller evaluates it wherever
it likes and reports the value with tell().

Reflected points are not inserted right away. Their value is kept and decides the
next move (expansion, contraction, or accepting the reflection) on the
following ask().

Usage:
    python examples/02_ask_tell_session.py
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from nmsimplex import Optimizer
from nmsimplex.core import format_vector


def elliptic_bowl(p):
    """Elongated bowl x² + 4y², minimum 0 at the origin."""
    return p[0] ** 2 + 4.0 * p[1] ** 2


def main():
    print("=" * 60)
    print("  Example 2: ASK/TELL SESSION")
    print("=" * 60)

    optimizer = Optimizer(dimension=3, tolerance=1e-5, observers=[])
    optimizer.start_points = [[10, 37], [7, 2], [51, 32]]

    print(f"\n{'Step':>5} {'Status':<20} {'Candidate':<24} {'Value':>12}")
    print("-" * 64)
    while not optimizer.converged() and optimizer.n_steps < 1000:
        request = optimizer.ask()
        if request.needs_evaluation:
            value = elliptic_bowl(request.candidate)
            optimizer.tell(value)
        else:
            value = request.value
        print(f"{optimizer.n_steps:>5} {request.status.value:<20} "
              f"{format_vector(request.candidate, '10.4f'):<24} {value:>12.5g}")

    print("-" * 64)
    print(optimizer.simplex)
    print(f"\nSteps: {optimizer.n_steps}, evaluations: {optimizer.n_evaluations}")
    print(f"Converged: {optimizer.converged()}")
    print("=" * 60)


if __name__ == "__main__":
    main()
