"""
Room Vote — FastAPI application entry-point.

Run with:
    uvicorn roomvote.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from roomvote import __version__
from roomvote.config import Settings, settings as default_settings
from roomvote.database import build_engine, build_session_factory, create_tables
from roomvote.errors import register_exception_handlers
from roomvote.logging_config import setup_logging

# ── Import routers ──
from roomvote.routers import rooms, suggestions, votes

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app around its own engine and session factory.

    Nothing is shared between two apps built here, which is what the
    tests rely on.
    """
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    engine = build_engine(settings)

    # ── Lifespan: create tables on startup, release the pool on shutdown ──
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await create_tables(engine)
        logger.info(f"{settings.APP_NAME} ready (voter identity: {settings.VOTER_IDENTITY})")
        yield
        await engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Group voting rooms: suggest names, vote once each, watch the tally.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    register_exception_handlers(app)

    # ── Register API routers ──
    app.include_router(rooms.router)
    app.include_router(suggestions.router)
    app.include_router(votes.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("roomvote.main:app", host="0.0.0.0", port=8000)
