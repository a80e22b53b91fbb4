from fastapi import FastAPI

from contribution_heatmap.api.routes.heatmap import router
from contribution_heatmap.core.observability import configure_logging
from contribution_heatmap.core.observability import init_sentry
from contribution_heatmap.settings import Settings


def create_app() -> FastAPI:
    """Build the FastAPI application with logging and Sentry configured."""

    settings = Settings()
    configure_logging(settings)
    init_sentry(settings)

    app = FastAPI(title="Contribution Heatmap")
    app.include_router(router)
    return app


app = create_app()
