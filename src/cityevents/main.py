from contextlib import asynccontextmanager

from fastapi import FastAPI

from cityevents.api.v1 import city_routes, event_routes
from cityevents.api.v1.error_handlers import register_exception_handlers
from cityevents.config import Settings, get_settings
from cityevents.core.logging import setup_logging, RequestIDMiddleware
from cityevents.database.seed import create_schema, seed_reference_data
from cityevents.database.session import engine, AsyncSessionMaker
from cityevents.utils.logging import get_project_version


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.SEED_ON_STARTUP:
            await create_schema(engine)
            async with AsyncSessionMaker() as session:
                await seed_reference_data(session)
        yield
        await engine.dispose()

    setup_logging(settings)

    app = FastAPI(title="City Events API", version=get_project_version(), lifespan=lifespan)

    # ─── MIDDLEWARE ───────────────────────────────────────────────────
    app.add_middleware(RequestIDMiddleware)

    # ─── REST API ROUTERS ─────────────────────────────────────────────
    app.include_router(city_routes.router)
    app.include_router(event_routes.router)

    # ─── ERROR MAPPING ────────────────────────────────────────────────
    register_exception_handlers(app)

    return app


app = create_app()
