from contextlib import asynccontextmanager

from fastapi import FastAPI

from rfp_analyzer.config.settings import Settings
from rfp_analyzer.database.connection import close_pool, init_pool
from rfp_analyzer.logging.logger import Log
from rfp_analyzer.server.errors import register_exception_handlers
from rfp_analyzer.server.routes import analysis, chat, health
from rfp_analyzer.server.services import ServiceContainer, build_services


def create_app(settings: Settings, services: ServiceContainer | None = None) -> FastAPI:
    """Build the API application.

    When ``services`` is given the database pool is left alone, which is what
    tests want.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if services is None:
            init_pool(settings)
            Log.info("Database pool initialized", host=settings.db_host)
        try:
            yield
        finally:
            if services is None:
                close_pool()
                Log.info("Database pool closed")

    app = FastAPI(title="RFP Analysis Server", lifespan=lifespan)
    app.state.services = services if services is not None else build_services(settings)
    register_exception_handlers(app, settings)

    app.include_router(health.router)
    app.include_router(analysis.router)
    app.include_router(chat.router)
    return app
