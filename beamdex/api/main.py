"""FastAPI application for the BeamDEX client core.

Every recognised core error is turned into a JSON ``ErrorResponse`` with a
4xx status (5xx only for upstream node failures), so the presentation layer
never sees a bare 500 for something the core understands.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from beamdex.api.endpoints import router
from beamdex.errors import BeamDexError
from beamdex.log_config import configure_logging
from beamdex.messages import DisplayMessage, MessageKind, to_display_message
from beamdex.models.api import ErrorResponse

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("BEAMDEX_API_HOST", "127.0.0.1")
PORT = int(os.environ.get("BEAMDEX_API_PORT", "8000"))
DEBUG = os.environ.get("BEAMDEX_API_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (1 MB)
MAX_REQUEST_SIZE = 1024 * 1024

_STATUS_BY_KIND = {
    MessageKind.VALIDATION: 400,
    MessageKind.WALLET: 401,
    MessageKind.REJECTED: 409,
    MessageKind.ERROR: 400,
    MessageKind.NETWORK: 502,
    MessageKind.TIMEOUT: 504,
}

app = FastAPI(
    title="BeamDEX client core",
    description="Quotes, tick hints and order status for the BeamDEX concentrated-liquidity DEX",
    version="0.1.0",
)


def status_for(message: DisplayMessage) -> int:
    """HTTP status for a display message; missing on-chain records map to 404."""
    reason = message.reason or ""
    if message.kind is MessageKind.REJECTED and reason.endswith("NOT_FOUND"):
        return 404
    return _STATUS_BY_KIND[message.kind]


@app.exception_handler(BeamDexError)
async def handle_core_error(request: Request, exc: BeamDexError) -> JSONResponse:
    message = to_display_message(exc)
    status_code = status_for(message)
    logger.info(
        "request_failed",
        path=request.url.path,
        kind=message.kind.value,
        status_code=status_code,
        reason=message.reason,
    )
    body = ErrorResponse(
        kind=message.kind.value,
        message=message.text,
        field=message.field,
        reason=message.reason,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - BEAMDEX_API_HOST: Host to bind to (default: 127.0.0.1)
    - BEAMDEX_API_PORT: Port to bind to (default: 8000)
    - BEAMDEX_API_DEBUG: Enable debug/reload mode (default: false)
    """
    configure_logging()
    uvicorn.run(
        "beamdex.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
