from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

import squadplan.models  # noqa: F401  (registers all models with Base.metadata)
from squadplan.api.routes.availability import router as availability_router
from squadplan.api.routes.preferences import router as preferences_router
from squadplan.api.routes.schedule import router as schedule_router
from squadplan.config import get_settings
from squadplan.database import engine, init_db
from squadplan.logging_config import setup_logging
from squadplan.schemas.system import StatusResponse


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Create tables on startup (dev convenience)
    await init_db()
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level.upper())
    app = FastAPI(
        title="SquadPlan",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.include_router(availability_router)
    app.include_router(preferences_router)
    app.include_router(schedule_router)

    @app.get("/api/system/status", response_model=StatusResponse)
    async def system_status() -> StatusResponse:
        return StatusResponse(status="ok")

    return app


app = create_app()
