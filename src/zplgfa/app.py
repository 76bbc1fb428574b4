"""FastAPI application factory for zplgfa."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from zplgfa import __version__
from zplgfa.api import routes as api_routes
from zplgfa.config import AppConfig, load_config, settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    config: AppConfig | None = getattr(app.state, "config", None)
    if config is None:
        logger.info(f"Loading configuration from {settings.config_file}")
        config = load_config(settings.config_file)

    api_routes.set_app_state(config)
    logger.info(f"zplgfa startup complete (default graphic type: {config.default_graphic_type})")

    yield

    logger.info("zplgfa shutting down")


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Configuration to use instead of loading the config file.
    """
    app = FastAPI(
        title="zplgfa",
        description="Convert images to ZPL Graphic Fields",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config

    app.include_router(
        api_routes.router,
        dependencies=[Depends(api_routes.verify_api_key)],
    )

    return app


# Default app instance for uvicorn
app = create_app()
