# backend/app/main.py

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.api.routes import routers
from app.core.exception_handlers import register_exception_handlers
from app.core.logging_config import get_loggers
from app.core.middleware import AccessLogMiddleware, MaxBodySizeMiddleware
from app.core.settings import Settings, get_settings
from app.db.mongodb import MongoDocumentStore, create_client


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- startup ---
    settings: Settings = app.state.settings
    client = create_client(settings)
    app.state.store = MongoDocumentStore(client[settings.mongodb_db])
    get_loggers().generic.info("Server started (env=%s, db=%s)", settings.environment, settings.mongodb_db)

    yield  # l'app tourne ici

    # --- shutdown ---
    client.close()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title=settings.app_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings

    # Ordre des middlewares : le dernier ajouté est le plus externe.
    app.add_middleware(MaxBodySizeMiddleware, max_body_size=settings.max_body_bytes)
    app.add_middleware(AccessLogMiddleware)

    register_exception_handlers(app)

    for r in routers:
        app.include_router(r)

    # Fichiers statiques en dernier : les routes API restent prioritaires.
    if Path(settings.static_dir).is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app


app = create_app()
