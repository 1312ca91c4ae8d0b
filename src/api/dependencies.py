"""FastAPI dependencies for shared resources."""

from fastapi import Request

from core.meevo_client import MeevoClient


def get_meevo_client(request: Request) -> MeevoClient:
    """Return the Meevo client created in the application lifespan."""
    return request.app.state.meevo
