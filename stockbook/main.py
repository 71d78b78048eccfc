from __future__ import annotations

import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

if __name__ == "__main__" and __package__ is None:
    sys.path.append(str(Path(__file__).resolve().parents[1]))

from stockbook.db import Base, engine
from stockbook.logging_config import setup_logging
from stockbook.routers.health import router as health_router
from stockbook.routers.insights import router as insights_router
from stockbook.routers.inventory import router as inventory_router
from stockbook.routers.products import router as products_router
from stockbook.shop_config import load_shop_config

logger = structlog.get_logger(__name__)


def _run_startup_tasks() -> None:
    """Crea las tablas y valida la configuración de la tienda."""
    import stockbook.models  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        raise RuntimeError("No se pudo inicializar la base de datos.") from e

    config = load_shop_config()
    logger.info(
        "Stockbook ready",
        shop=config.shop.name,
        default_language=config.shop.default_language,
        database=engine.url.render_as_string(hide_password=True),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifecycle manager para FastAPI."""
    setup_logging()
    _run_startup_tasks()
    yield
    logger.info("Stockbook shutting down")


app = FastAPI(title="Stockbook", lifespan=lifespan)

app.include_router(health_router)
app.include_router(products_router)
app.include_router(inventory_router)
app.include_router(insights_router)


def run() -> None:
    import uvicorn

    uvicorn.run(
        "stockbook.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", os.getenv("APP_PORT", "8000"))),
        reload=os.getenv("RELOAD", "0") == "1",
    )


if __name__ == "__main__":
    run()
