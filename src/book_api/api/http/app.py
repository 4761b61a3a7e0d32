"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger
from starlette.responses import JSONResponse

from src.book_api.api.http.app_data import build_dependencies
from src.book_api.api.http.routers.book import router as book_router
from src.book_api.api.http.routers.health import router as health_router
from src.book_api.api.utils.app_startup import configure_logging
from src.book_api.core.errors import BadRequestError, ValidationError
from src.book_api.runtime.context import get_config

configure_logging()


# --- FastAPI app setup ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


app = FastAPI(
    title=get_config().app.title,
    lifespan=lifespan,
    docs_url=None if get_config().app.environment == "production" else "/docs",
    redoc_url=None if get_config().app.environment == "production" else "/redoc",
)

# expose startup for tests
__all__ = ["app", "startup", "shutdown"]


# --- Error handling ---
@app.exception_handler(BadRequestError)
async def bad_request_handler(request: Request, exc: BadRequestError) -> JSONResponse:
    """Render client errors as 400 responses with the violation list when present."""
    request_id = getattr(request.state, "request_id", None)
    content: dict = {"detail": exc.message, "request_id": request_id}
    if isinstance(exc, ValidationError):
        content["errors"] = exc.to_list()

    logger.bind(
        status_code=exc.status_code,
        error_type=type(exc).__name__,
    ).warning("request.client_error: {}", exc)
    return JSONResponse(status_code=exc.status_code, content=content)


# --- Request logging middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


# --- Router registration ---
app.include_router(health_router)
app.include_router(book_router, prefix="/book", tags=["book"])


# --- Lifecycle hooks ---
async def startup() -> None:
    config = get_config()
    app.state.app_dependencies = build_dependencies()
    logger.info(
        "Starting up application in {} environment (stop_at_first_error={}, forbid_unknown_fields={})",
        config.app.environment,
        config.validation.stop_at_first_error,
        config.validation.forbid_unknown_fields,
    )


async def shutdown() -> None:
    logger.info("Shutting down application")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # access logging is done by the middleware
    )
