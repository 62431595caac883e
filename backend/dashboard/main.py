# dashboard/main.py
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dashboard import __version__
from dashboard.config import Settings, get_settings
from dashboard.errors import DashboardError, dashboard_error_handler
from dashboard.observability.logging import configure_logging
from dashboard.observability.metrics import router as observability_router
from dashboard.observability.middleware import register_request_middleware, unhandled_exception_handler
from dashboard.routers.demand import router as demand_router
from dashboard.routers.explain import router as explain_router
from dashboard.routers.health import router as health_router
from dashboard.routers.regions import router as regions_router
from dashboard.services.repository import DemandRepository


def create_app(settings: Settings | None = None, repository: DemandRepository | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, env=settings.ENV)

    app = FastAPI(title="Demand Forecast Dashboard", version=__version__)
    app.state.settings = settings
    # Lazy: files are parsed on the first query, not at startup.
    app.state.repository = repository or DemandRepository.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=86400,
    )

    register_request_middleware(app)
    app.add_exception_handler(DashboardError, dashboard_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health_router)
    app.include_router(observability_router)
    app.include_router(regions_router)
    app.include_router(demand_router)
    app.include_router(explain_router)

    return app


app = create_app()
