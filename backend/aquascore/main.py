import logging

from fastapi import FastAPI

from aquascore.api.health import router as health_router
from aquascore.api.metrics import router as metrics_router
from aquascore.api.observability import router as observability_router
from aquascore.api.profiles import router as profiles_router
from aquascore.api.scan import router as scan_router
from aquascore.core.config import settings
from aquascore.core.request_logging import RequestLoggingMiddleware


def create_app() -> FastAPI:
    logging.getLogger("aquascore").setLevel(settings.log_level.upper())

    app = FastAPI(title=settings.app_name)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(scan_router, prefix=settings.api_prefix)
    app.include_router(profiles_router, prefix=settings.api_prefix)
    app.include_router(metrics_router, prefix=settings.api_prefix)
    app.include_router(observability_router, prefix=settings.api_prefix)
    return app


app = create_app()
