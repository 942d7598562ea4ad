"""EliteRank competition lifecycle FastAPI application."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eliterank.config import get_settings
from eliterank.database import close_db, init_db
from eliterank.logging_config import configure_logging, get_logger
from eliterank.routes.competitions import router as competitions_router
from eliterank.services.reconciliation_service import reconciliation_loop

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: init DB and the reconciliation loop, clean up on shutdown."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_format == "json")

    logger.info("starting_database_init")
    await init_db()

    stop_event = asyncio.Event()
    reconcile_task = None
    if settings.reconcile_enabled:
        reconcile_task = asyncio.create_task(
            reconciliation_loop(stop_event, settings.reconcile_interval_seconds)
        )

    logger.info("application_started")
    yield

    # Shutdown
    logger.info("shutting_down")
    stop_event.set()
    if reconcile_task is not None:
        await reconcile_task
    await close_db()
    logger.info("shutdown_complete")


app = FastAPI(
    title="EliteRank Lifecycle",
    description="Competition status, phase and transition engine",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(competitions_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "eliterank-lifecycle"}
