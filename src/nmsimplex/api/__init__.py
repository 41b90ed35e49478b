"""FastAPI transport layer for nmsimplex.

Models, service adapters and routes. No domain logic.

The ``create_app()`` factory is lazily imported so that
``import nmsimplex.api`` never forces a FastAPI dependency.
"""


def create_app():
    """Deferred import of the FastAPI application factory."""
    from nmsimplex.api.app import create_app as _create_app

    return _create_app()
