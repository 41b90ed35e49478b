"""Allow running with: python -m nmsimplex [config.yaml]

Without arguments prints version info and available commands; with a
YAML configuration file runs the optimization it describes.
"""
import argparse
import subprocess
import sys

import nmsimplex


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m nmsimplex",
        description="Run a Nelder-Mead optimization from a YAML configuration.",
    )
    parser.add_argument("config", nargs="?", help="YAML configuration file")
    parser.add_argument("--max-steps", type=int, default=None, help="Step cap")
    return parser


def print_usage() -> None:
    print(f"nmsimplex {nmsimplex.__version__} - Step-wise Nelder-Mead Simplex Optimizer")
    print()
    print("Usage:")
    print("  python -m nmsimplex config.yaml   Run an optimization")
    print("  python -m nmsimplex.api           Launch the REST API")
    print("  python -m pytest tests/           Run tests")
    print()
    print("Quick start:")
    print("  from nmsimplex import Optimizer")
    print("  opt = Optimizer(dimension=3, tolerance=1e-5)")
    print("  opt.start_points = [[10, 37], [7, 2], [51, 32]]")
    print("  result = opt.run(lambda p: p[0]**2 + p[1]**2)")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.config is None:
        print_usage()
        return 0

    from nmsimplex.builder import load_and_run

    try:
        result = load_and_run(args.config, max_steps=args.max_steps)
    except (nmsimplex.NelderMeadError, OSError, subprocess.SubprocessError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    print(result.message)
    if result.best_point is not None:
        print(f"Best point: {result.best_point.tolist()} -> {result.best_value:.6g}")
    return 0 if result.converged else 1


if __name__ == "__main__":
    raise SystemExit(main())
