"""
TraduciAMO backend — application entry point.
"""

from __future__ import annotations

import logging
import pathlib
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from api.health import router as health_router, service_status
from api.history import router as history_router
from api.middleware import register_middleware
from api.translate import router as translate_router
from auth.routes import router as auth_router
from config.settings import config
from database.session import Database
from utils.llm_providers import AnthropicProvider

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("httpcore", "httpx", "sqlalchemy.engine", "aiosqlite"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def _log_configuration() -> None:
    logger.info("ANTHROPIC_API_KEY: %s", "set" if config.anthropic_api_key else "MISSING")
    if config.jwt_secret_is_default:
        logger.warning(
            "JWT_SECRET is not set, using the built-in default. "
            "Anyone who knows it can forge tokens; set JWT_SECRET in production!"
        )
    else:
        logger.info("JWT_SECRET: set")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    _log_configuration()
    # Raises StoreUnavailable; uvicorn aborts startup and the process exits.
    await app.state.database.connect()
    logger.info("Application ready to accept requests.")
    try:
        yield
    finally:
        await app.state.database.dispose()


def create_app(
    database: Optional[Database] = None,
    translator: Optional[AnthropicProvider] = None,
) -> FastAPI:
    app = FastAPI(
        title="TraduciAMO Backend",
        version="2.0.0",
        description="Translation proxy with user accounts and per-user history.",
        lifespan=lifespan,
    )
    app.state.database = database or Database(config.database_url)
    app.state.translator = translator or AnthropicProvider()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)

    # Routes
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(history_router, prefix="/api/history")
    app.include_router(translate_router, prefix="/api")
    app.include_router(health_router)

    static_dir = pathlib.Path(config.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="frontend")
    else:
        app.add_api_route("/", service_status, methods=["GET"], tags=["health"])

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
