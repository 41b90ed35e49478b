#!/usr/bin/env python3
"""
Example 3: External Program

Optimize the parameters of an external simulation. For every candidate
the parameter file ``external/input.txt`` is written from the template
``external/input.tpl``, the program ``external/simulate.py`` is run on it
and the objective value is read from the last line of its output.

The whole setup lives in ``external/config.yaml``; the same run is
available from the command line:

    python -m nmsimplex examples/external/config.yaml

Usage:
    python examples/03_external_program.py
"""
import os
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from nmsimplex.builder import load_and_run


def main():
    print("=" * 60)
    print("  Example 3: EXTERNAL PROGRAM")
    print("  Fitting three parameters of a simulated deformation")
    print("=" * 60)

    # Paths in the config are relative to the example directory
    os.chdir(Path(__file__).parent / "external")
    result = load_and_run("config.yaml")

    print(f"\n{result.message}")
    print(f"Evaluations:   {result.n_evaluations}")
    print(f"Best point:    {result.best_point}")
    print(f"Best value:    {result.best_value:.6g}")
    print("=" * 60)


if __name__ == "__main__":
    main()
