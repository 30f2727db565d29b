"""
Endzone Trades API - Main Application

FastAPI application for fantasy football trade recommendations.
"""

import logging
from contextlib import AsyncExitStack, asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from endzone_trades import __version__
from endzone_trades.api.routes import leagues, session, trade_suggestions
from endzone_trades.clients.projections import ProjectionClient
from endzone_trades.clients.sleeper import SleeperClient
from endzone_trades.config import Settings, get_settings
from endzone_trades.exceptions import EndzoneError
from endzone_trades.logging_config import setup_logging
from endzone_trades.services.valuation_tables import ValuationTables, load_valuation_tables
from endzone_trades.store import LeagueStore

logger = logging.getLogger(__name__)


async def endzone_error_handler(request: Request, exc: EndzoneError) -> JSONResponse:
    content = {"success": False, "error": exc.message}
    if exc.hint:
        content["hint"] = exc.hint
    return JSONResponse(status_code=exc.status_code, content=content)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": str(exc) or "Internal server error"},
    )


def create_app(
    settings: Settings | None = None,
    *,
    sleeper_client: SleeperClient | None = None,
    projection_client: ProjectionClient | None = None,
    store: LeagueStore | None = None,
    valuation_tables: ValuationTables | None = None,
) -> FastAPI:
    """
    Application factory to create the FastAPI app.

    Collaborators passed in are used as-is; the rest are built (and the
    HTTP clients opened and closed) by the lifespan.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown."""
        setup_logging(settings.log_level)
        logger.info("Starting Endzone Trades API v%s (debug=%s)", __version__, settings.debug)

        async with AsyncExitStack() as stack:
            app.state.sleeper_client = sleeper_client or await stack.enter_async_context(
                SleeperClient(settings)
            )
            app.state.projection_client = (
                projection_client
                or await stack.enter_async_context(ProjectionClient(settings))
            )
            app.state.store = store or LeagueStore(settings.database_path)
            app.state.valuation_tables = valuation_tables or load_valuation_tables(
                settings.valuation_tables_path
            )

            yield

            logger.info("Shutting down Endzone Trades API")

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(EndzoneError, endzone_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    # Root endpoint
    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.api_title,
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "endpoints": {
                "leagues": "/api/leagues",
                "session": "/api/session",
                "trade_suggestions": "/api/league/{league_id}/trade-suggestions",
            },
        }

    # Register API routes
    app.include_router(leagues.router, prefix="/api/leagues", tags=["Leagues"])
    app.include_router(session.router, prefix="/api/session", tags=["Session"])
    app.include_router(trade_suggestions.router, prefix="/api/league", tags=["Trade Suggestions"])

    return app


def run():
    """Run the application (used by the CLI entry point)."""
    settings = get_settings()
    uvicorn.run(
        "endzone_trades.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    run()
