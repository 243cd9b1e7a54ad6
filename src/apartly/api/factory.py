"""FastAPI application factory."""

from fastapi import FastAPI, Request, Response

from apartly.infra.settings import Settings, get_settings
from apartly.observability.correlation import (
    CORRELATION_ID_HEADER,
    reset_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)

from .routers import public
from .routes import bookings, pricing


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI app with correlation-ID middleware and all routes.

    Args:
        settings: Explicit settings override. If None, reads the environment.
                  API docs are served only in the "local" environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="Apartly",
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url=None,
    )

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        cid = resolve_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
        token = set_correlation_id(cid)
        try:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response
        finally:
            reset_correlation_id(token)

    app.include_router(public.router)
    app.include_router(pricing.router)
    app.include_router(bookings.router)

    return app
