"""FastAPI application factory."""

import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from niblet.api.routes import router
from niblet.app_logging import configure_logging
from niblet.containers import AppContainer
from niblet.errors import InvalidInputError

REQUEST_ID_HEADER = "X-Request-ID"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Niblet API starting (environment=%s)", container.settings.environment
        )
        yield
        await app.state.container.close_resources()
        logger.info("Niblet API shut down")

    app = FastAPI(title="Niblet API", lifespan=lifespan)
    app.state.container = container

    app.include_router(router)

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or f"req-{uuid4().hex}"
        started = time.perf_counter()
        logged = request.url.path.startswith("/api")
        if logged:
            logger.info(
                "API request: %s %s",
                request.method,
                request.url.path,
                extra={"request_id": request_id},
            )
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        if logged:
            logger.info(
                "API response: %s %s %s (%.2fms)",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - started) * 1000,
                extra={"request_id": request_id},
            )
        return response

    @app.exception_handler(InvalidInputError)
    async def invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
        logger.info("Rejected input on %s: %s", request.url.path, exc)
        return _error_response(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def invalid_request(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = [
            f"{'.'.join(str(part) for part in error['loc'][1:])}: {error['msg']}"
            for error in exc.errors()
        ]
        return _error_response(400, "; ".join(messages) or "Invalid request")

    @app.exception_handler(StarletteHTTPException)
    async def http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail))

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )
