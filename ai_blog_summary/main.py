"""
Application entry point for AI Blog Summary.

Wires settings, storage, the summary core and the REST API into a FastAPI
application, and runs it under uvicorn.
"""

import logging
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__
from .api.router import create_api_router
from .api import routes
from .config import ConfigValidator, EnvironmentLoader, PluginSettings
from .data.repositories import RepositoryFactory
from .exceptions import BlogSummaryError, PostNotFoundError
from .logging_config import mask_api_key, setup_logging
from .services import AutoGenerator, SummaryManager
from .summarization.factory import create_orchestrator
from .summarization.provider import SummaryProvider

logger = logging.getLogger(__name__)


def create_app(settings: Optional[PluginSettings] = None,
               factory: Optional[RepositoryFactory] = None,
               provider: Optional[SummaryProvider] = None,
               sleep: Optional[Callable[[float], Awaitable[None]]] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Plugin settings, loaded from the environment when omitted
        factory: Repository factory, built from ``settings.database_path`` when omitted
        provider: Model provider override (tests pass one with a mock transport)
        sleep: Awaitable used for inter-call delays

    Returns:
        Configured FastAPI application
    """
    settings = settings or EnvironmentLoader.load_settings()
    factory = factory or RepositoryFactory(db_path=settings.database_path)
    orchestrator = create_orchestrator(settings, provider=provider)

    for problem in ConfigValidator.validate(settings):
        logger.warning(f"Configuration problem: {problem}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info(
            f"AI Blog Summary starting: provider={settings.provider}, model={settings.model}, "
            f"api_key={mask_api_key(settings.api_key)}"
        )
        post_repository = await factory.get_post_repository()
        summary_manager = SummaryManager(await factory.get_post_meta_repository())
        auto_generator = AutoGenerator(
            settings,
            orchestrator,
            summary_manager,
            post_repository=post_repository,
            sleep=sleep,
        )
        routes.set_services(
            settings=settings,
            orchestrator=orchestrator,
            summary_manager=summary_manager,
            post_repository=post_repository,
            auto_generator=auto_generator,
            sleep=sleep,
        )
        app.state.summary_manager = summary_manager
        app.state.auto_generator = auto_generator

        yield

        # Shutdown
        await factory.close()
        logger.info("AI Blog Summary shut down")

    app = FastAPI(
        title="AI Blog Summary API",
        description="AI-generated post summaries and the Thunderbolt card feed",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    _setup_error_handlers(app)

    # Storage-backed services are attached in lifespan
    app.include_router(create_api_router(settings=settings, orchestrator=orchestrator, sleep=sleep))
    app.state.settings = settings
    app.state.orchestrator = orchestrator

    return app


def _setup_error_handlers(app: FastAPI) -> None:
    """Configure global error handlers.

    Error bodies share the ``{"detail": {"code", "message"}}`` shape of the
    route-level HTTPExceptions.
    """

    @app.exception_handler(PostNotFoundError)
    async def post_not_found_handler(request: Request, exc: PostNotFoundError):
        return JSONResponse(
            status_code=400,
            content={"detail": {"code": "invalid_post", "message": exc.message}},
        )

    @app.exception_handler(BlogSummaryError)
    async def blog_summary_error_handler(request: Request, exc: BlogSummaryError):
        logger.warning(f"Request failed: {exc.error_code}: {exc.message}")
        return JSONResponse(
            status_code=400,
            content={"detail": {"code": exc.error_code.lower(), "message": exc.message}},
        )

    @app.exception_handler(Exception)
    async def general_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error in API endpoint: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": {"code": "internal_error", "message": "An unexpected error occurred"}},
        )


async def main() -> None:
    """Load settings from the environment and serve the API."""
    settings = EnvironmentLoader.load_settings()
    setup_logging(settings.log_level, settings.log_file or None)

    app = create_app(settings)
    server_config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.value.lower(),
        access_log=False,
    )
    server = uvicorn.Server(server_config)
    logger.info(f"Serving on {settings.host}:{settings.port}")
    await server.serve()
