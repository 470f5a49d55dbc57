from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mealplan.api.v1.grocery import router as grocery_router
from mealplan.api.v1.metrics import router as metrics_router
from mealplan.api.v1.suggest import router as suggest_router
from mealplan.config import Settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Ensure data dir exists so repos and metrics can write
    settings = Settings()
    os.makedirs(settings.data_dir, exist_ok=True)
    logger.info("Serving recipes from %s", settings.recipes_file)
    yield

def create_app() -> FastAPI:
    settings = Settings()
    configure_logging(settings)
    app = FastAPI(title="Meal Plan Suggest API", version="1.0", lifespan=lifespan)

    # CORS (narrow it down in .env via CORS_ALLOW_ORIGINS if you want)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(suggest_router)
    app.include_router(grocery_router)
    app.include_router(metrics_router)

    if settings.tracing_enabled:
        from mealplan.telemetry import setup_telemetry
        setup_telemetry(app, settings)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/readyz")
    def readyz():
        return {"status": "ready"}

    return app

app = create_app()
