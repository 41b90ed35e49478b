"""
Launch the nmsimplex REST API server.

Usage::

    python -m nmsimplex.api
    python -m nmsimplex.api --port 9000 --reload

Host and port default to ``NMSIMPLEX_API_HOST`` / ``NMSIMPLEX_API_PORT``
when set.
"""
import argparse
import os
import sys

import nmsimplex


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m nmsimplex.api",
        description="Ask/tell REST API for step-wise Nelder-Mead optimization.",
    )
    parser.add_argument(
        "--host",
        default=os.environ.get("NMSIMPLEX_API_HOST", "127.0.0.1"),
        help="Host to bind (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("NMSIMPLEX_API_PORT", "8000")),
        help="Port (default: 8000)",
    )
    parser.add_argument("--log-level", default="info", help="uvicorn log level")
    parser.add_argument("--reload", action="store_true", help="Auto-reload on changes")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        import uvicorn
        import fastapi  # noqa: F401
    except ImportError as exc:
        print(
            f"Error: {exc.name} is missing. Install with: pip install -e '.[api]'",
            file=sys.stderr,
        )
        return 2

    base = f"http://{args.host}:{args.port}"
    print("=" * 60)
    print(f"nmsimplex {nmsimplex.__version__} API")
    print("=" * 60)
    print(f"Server:  {base}")
    print(f"Docs:    {base}/docs")
    print(f"Health:  {base}/health")
    print("=" * 60)

    uvicorn.run(
        "nmsimplex.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        reload=args.reload,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
