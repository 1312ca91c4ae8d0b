"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.logging import configure_logging
from api.models import MarkLateResult
from api.routes import health_router, mark_late_router
from core.config import API_DEBUG, API_VERSION, GENERIC_FAILURE_MESSAGE, MEEVO_CLIENT_ID
from core.meevo_client import create_http_client, create_meevo_client

logger = logging.getLogger(__name__)

INVALID_BODY_MESSAGE = "Invalid request body"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the Meevo client on startup and close its HTTP pool on shutdown."""
    configure_logging()
    if not MEEVO_CLIENT_ID:
        logger.warning("MEEVO_CLIENT_ID is not set; upstream calls will fail")

    http_client = create_http_client()
    app.state.meevo = create_meevo_client(http_client)

    yield

    await http_client.aclose()


app = FastAPI(
    title="Mark Running Late API",
    description="Marks a client's upcoming Meevo appointment as running late for the voice agent",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)


# Callers always get 200 with the failure shape, even for unreadable bodies
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed JSON bodies in the standard failure format."""
    logger.warning("Rejected %s body: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=200,
        content=MarkLateResult(success=False, error=INVALID_BODY_MESSAGE).model_dump(
            exclude_none=True
        ),
    )


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with the standard failure format."""
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=200,
        content=MarkLateResult(success=False, error=GENERIC_FAILURE_MESSAGE).model_dump(
            exclude_none=True
        ),
    )


# Include routers
app.include_router(health_router)
app.include_router(mark_late_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
