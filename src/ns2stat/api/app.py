"""FastAPI application factory.

Routes read games from the game store and hand them to the
aggregation and balance modules.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Generator

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware

from ns2stat.aggregation.continuous import check_range
from ns2stat.core.errors import InvalidRange
from ns2stat.core.settings import Settings
from ns2stat.db.repo import DbSession
from ns2stat.db.session import get_session, init_db, session_scope
from ns2stat.worker.ingest import ingest_directory

logger = logging.getLogger(__name__)


def get_db_session(request: Request) -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    session = get_session(request.app.state.db_path)
    try:
        yield session
    finally:
        session.close()


def date_range(
    from_date: int | None = Query(None, alias="from", description="Inclusive lower bound"),
    to_date: int | None = Query(None, alias="to", description="Inclusive upper bound"),
) -> tuple[int | None, int | None]:
    """Dependency parsing the inclusive from/to range (epoch seconds).

    Raises:
        HTTPException: 400 if from is after to.
    """
    try:
        check_range(from_date, to_date)
    except InvalidRange as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return from_date, to_date


def create_app(
    db_path: Path | None = None,
    data_dir: Path | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        db_path: Optional path to database file; overrides settings.
        data_dir: Optional directory ingested on start-up; overrides settings.
        settings: Runtime settings; read from the environment by default.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or Settings.from_env()
    db_path = db_path or settings.db_path
    data_dir = data_dir or settings.data_dir

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        init_db(db_path)
        if data_dir is not None:
            logger.info(f"Ingesting {data_dir} into {db_path}")
            with session_scope(db_path) as session:
                ingest_directory(session, data_dir)
        yield

    app = FastAPI(
        title="ns2stat API",
        description="Natural Selection 2 round statistics and team suggestions",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.db_path = db_path

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Include routes
    from ns2stat.api.routes import games, stats, teams

    app.include_router(games.router)
    app.include_router(stats.router)
    app.include_router(teams.router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app
