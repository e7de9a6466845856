# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
FastAPI application.

Responsibilities
----------------
* Instantiate the FastAPI app.
* Register CORS middleware and the request-logging middleware.
* Register the exception handlers that render the response envelope.
* Mount the three feature routers (auth, vacations, followers).
* Serve uploaded vacation images from ``settings.image_url_path``.
* Expose a /health endpoint for container liveness checks.

Run with:
    uvicorn main:app --app-dir backend
"""

import time

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from fastapi.staticfiles import StaticFiles

from auth.router import router as auth_router
from vacations.router import router as vacations_router
from followers.router import router as followers_router
from core.config import settings
from core.exceptions import register_exception_handlers
from core.logger import logger
from core.media import image_store

app = FastAPI(title="Vacation Backend", version="1.0.0")

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
# Origins come from CORS_ORIGINS; the default only allows the local frontend.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
)


# ---------------------------------------------------------------------------
# Request-logging middleware
# ---------------------------------------------------------------------------
# Only the URL and metadata are recorded, never the body (it may carry a
# password).


class _RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, client IP, response status and latency (ms)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        client_ip = request.client.host if request.client else "unknown"

        logger.info(
            "%s %s | client=%s status=%d latency=%.1fms",
            request.method,
            request.url.path,
            client_ip,
            response.status_code,
            elapsed_ms,
        )
        return response


app.add_middleware(_RequestLogMiddleware)

# ---------------------------------------------------------------------------
# Errors & routers
# ---------------------------------------------------------------------------
register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(vacations_router)
app.include_router(followers_router)


@app.on_event("startup")
async def _on_startup():
    logger.info("Vacation service starting up (images in %s)", image_store.directory)


@app.on_event("shutdown")
async def _on_shutdown():
    logger.info("Vacation service shutting down")


@app.get("/health")
def health():
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Static files – uploaded images
# ---------------------------------------------------------------------------
# Files appear here only after their vacation row is committed.
app.mount(
    settings.image_url_path,
    StaticFiles(directory=str(image_store.directory)),
    name="images",
)
