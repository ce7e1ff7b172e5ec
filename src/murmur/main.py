# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from murmur.api.router import v1_router
from murmur.config import get_settings
from murmur.db.session import get_engine
from murmur.errors import AuthorizationError, MurmurError, NotFoundError, ValidationError
from murmur.models.base import Base
from murmur.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[MurmurError], int] = {
    ValidationError: 422,
    NotFoundError: 404,
    AuthorizationError: 403,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: startup and shutdown hooks."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    engine = get_engine()

    # Startup: create tables in development mode
    if settings.environment == "development":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Created database tables")

    yield

    # Shutdown: cleanup
    await engine.dispose()


async def murmur_error_handler(request: Request, exc: MurmurError) -> JSONResponse:
    status_code = next(
        (code for cls, code in _STATUS_BY_ERROR.items() if isinstance(exc, cls)),
        400,
    )
    body = ErrorResponse(detail=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app() -> FastAPI:
    app = FastAPI(
        title="Murmur Notification Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_exception_handler(MurmurError, murmur_error_handler)  # type: ignore[arg-type]
    app.include_router(v1_router, prefix="/v1")

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe. Returns 200 if the process is running."""
        return {"status": "healthy"}

    return app


app = create_app()
