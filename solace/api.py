"""FastAPI app with health, advocate search and seed endpoints.

Implements the directory's query contract: GET /api/advocates pages through
advocates matching a free-text term; POST /api/seed loads the sample rows.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from .config import settings
from .db import DatabaseUnavailableError, dispose_engine, get_session
from .logging_config import setup_logging
from .pipelines.search import search_advocates
from .pipelines.seed import SeedError, seed_advocates
from .schemas import AdvocateDTO, AdvocatePage, ErrorResponse, HealthResponse, SeedResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def coerce_positive_int(value: str | None, default: int) -> int:
    """Parse a paging parameter; missing, non-numeric or non-positive values give ``default``."""
    try:
        number = int(value) if value is not None else 0
    except ValueError:
        return default
    return number if number > 0 else default


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown logic."""
    # Startup
    setup_logging()
    logger.info("Application starting up")

    yield

    # Shutdown
    await dispose_engine()
    logger.info("Application shutting down")


app = FastAPI(
    title="Solace Advocates",
    version=settings.version,
    description="Search, filter and paginate the advocates directory",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(DatabaseUnavailableError)
async def database_unavailable_handler(request, exc: DatabaseUnavailableError):
    """Handle a missing or unreachable backing store."""
    logger.error(f"Database unavailable: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="database_unavailable",
            detail=str(exc),
        ).model_dump(),
    )


@app.exception_handler(SeedError)
async def seed_error_handler(request, exc: SeedError):
    """Handle seeding failures without echoing database details."""
    logger.error(f"Seed error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="seed_error",
            detail=INTERNAL_ERROR_MESSAGE,
        ).model_dump(),
    )


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        version=settings.version,
    )


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.version,
        "endpoints": {
            "health": "/health",
            "advocates": "/api/advocates?search=&page=1&pageSize=20",
            "seed": "/api/seed",
            "docs": "/docs",
        },
    }


@app.get(
    "/api/advocates",
    response_model=AdvocatePage,
    status_code=status.HTTP_200_OK,
)
async def list_advocates(
    search: str = Query(default="", max_length=200, description="Free-text term"),
    page: str | None = Query(default=None, description="1-based page number"),
    page_size: str | None = Query(default=None, alias="pageSize", description="Rows per page"),
    session: AsyncSession = Depends(get_session),
) -> AdvocatePage:
    """Return one page of advocates matching ``search``.

    An empty term returns the unfiltered directory. Matching is a
    case-insensitive substring test over first name, last name, city,
    degree and every specialty tag. Unusable paging values fall back to
    the defaults rather than failing the request.

    Args:
        search: Free-text term (trimmed)
        page: 1-based page number (default 1)
        page_size: Rows per page (default from config, capped at max_page_size)
        session: Database session (injected)

    Returns:
        AdvocatePage with the requested slice
    """
    try:
        rows = await search_advocates(
            session=session,
            term=search,
            page=coerce_positive_int(page, 1),
            page_size=min(
                coerce_positive_int(page_size, settings.search.default_page_size),
                settings.search.max_page_size,
            ),
        )
        return AdvocatePage(data=[AdvocateDTO.model_validate(row) for row in rows])

    except DatabaseUnavailableError:
        # Re-raise to be caught by exception handlers
        raise
    except Exception as e:
        logger.error(f"Unexpected error fetching advocates: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        )


@app.post(
    "/api/seed",
    response_model=SeedResponse,
    status_code=status.HTTP_200_OK,
)
async def seed(
    session: AsyncSession = Depends(get_session),
) -> SeedResponse:
    """Insert the sample advocates; rows that already exist are skipped.

    Returns:
        SeedResponse listing only the rows inserted by this call
    """
    logger.info("Seeding advocates")

    try:
        inserted = await seed_advocates(session)
        return SeedResponse(advocates=[AdvocateDTO.model_validate(row) for row in inserted])

    except (DatabaseUnavailableError, SeedError):
        raise
    except Exception as e:
        logger.error(f"Unexpected error seeding advocates: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        )
