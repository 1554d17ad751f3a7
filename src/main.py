"""
Main FastAPI application with logging, dependency injection and middleware setup.
"""
from contextlib import asynccontextmanager

import httpx
from dishka import make_async_container
from dishka.integrations import fastapi as fastapi_integration
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.exceptions.exception_handlers import register_exception_handlers
from src.api.middlewares.request_context_middleware import RequestContextMiddleware
from src.api.v1.controllers.detection import legacy_router, router as detection_router
from src.core.config import config, Config
from src.core.logging import get_logger, set_service_context, setup_logging
from src.ioc import AppProvider

APP_VERSION = "0.1.0"

setup_logging(
    level="DEBUG" if config.debug else "INFO",
    json_logs=not config.debug,
)
set_service_context(
    name=config.app_name,
    version=APP_VERSION,
    environment="development" if config.debug else "production",
)

logger = get_logger(__name__)


def create_app(
    app_config: Config = config,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Create and configure FastAPI application with Dishka DI container.
    """
    # Create Dishka container with AppProvider and inject config context
    container = make_async_container(AppProvider(transport), context={Config: app_config})

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "application_startup",
            app_name=app_config.app_name,
            classifier_base_url=app_config.classifier.base_url,
        )
        yield
        logger.info("application_shutdown", app_name=app_config.app_name)
        await container.close()

    app = FastAPI(
        title=app_config.app_name,
        description="Aggregates an external classifier into AI-vs-human text verdicts",
        version=APP_VERSION,
        lifespan=lifespan,
    )
    app.state.config = app_config

    fastapi_integration.setup_dishka(container, app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    app.include_router(detection_router)
    app.include_router(legacy_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("src.main:app", host=config.host, port=config.port, reload=config.debug)
