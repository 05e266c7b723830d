import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sportscast.api.routes.forecast import router as forecast_router
from sportscast.core.config import Settings, get_settings
from sportscast.core.context import AppContext
from sportscast.core.errors import ConfigurationError, register_exception_handlers
from sportscast.core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, context: Optional[AppContext] = None) -> FastAPI:
    settings = settings or (context.settings if context else get_settings())
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        if getattr(app.state, "context", None) is None:
            # raises ConfigurationError without an API key, so startup aborts
            owned = AppContext.from_settings(settings)
            app.state.context = owned
        logger.info("Server is running on http://localhost:%s", settings.port)
        yield
        if owned is not None:
            await owned.aclose()
            app.state.context = None

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/healthz")
    async def healthz():
        return {"ok": True}

    app.include_router(forecast_router, tags=["forecast"])

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        settings.require_api_key()
    except ConfigurationError as e:
        logger.error("%s Exiting...", e)
        sys.exit(1)

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
