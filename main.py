import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from projtrack.config import get_settings
from projtrack.infrastructure.database import engine, initialize_database
from projtrack.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on start-up and release pooled connections on shutdown."""

    initialize_database()
    if not get_settings().github_webhook_secret:
        logger.warning("GITHUB_WEBHOOK_SECRET is not set; webhook signatures are not verified")
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""

    app = FastAPI(title="projtrack", lifespan=lifespan)

    # Lets the browser front-end call the API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
